"""Explicit S3 credentials.

When no credentials are given, s3fs falls back to botocore's default chain
(environment, shared config, instance profile). ``S3Credentials`` exists for
callers that hold temporary keys and want them checked before use.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

__all__ = ["S3Credentials"]


@dataclass(frozen=True)
class S3Credentials:
    """Immutable S3 credentials with expiration checking.

    Attributes:
        access_key: AWS access key ID
        secret_key: AWS secret access key
        session_token: Temporary session token (optional)
        expiration_time: When credentials expire (optional, no expiration if None)
        region: AWS region name (optional)
    """

    access_key: str
    secret_key: str
    session_token: Optional[str] = None
    expiration_time: Optional[datetime] = None
    region: Optional[str] = None

    def is_expired(self) -> bool:
        """Check if credentials have expired.

        Returns:
            True if expiration_time is in the past, False otherwise
        """
        if self.expiration_time is None:
            return False
        now = datetime.now(timezone.utc)
        exp_time = self.expiration_time
        if exp_time.tzinfo is None:
            # Assume naive datetime is UTC
            exp_time = exp_time.replace(tzinfo=timezone.utc)
        return now >= exp_time

    def to_dict(self) -> Dict[str, Any]:
        """Convert credentials to s3fs.S3FileSystem kwargs.

        Returns:
            Dictionary suitable for s3fs.S3FileSystem(**dict)
        """
        result: Dict[str, Any] = {
            "key": self.access_key,
            "secret": self.secret_key,
        }
        if self.session_token:
            result["token"] = self.session_token
        if self.region:
            result["client_kwargs"] = {"region_name": self.region}
        return result

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None
    ) -> Optional[S3Credentials]:
        """Read static credentials from the standard AWS variables.

        Parameters:
            environ: Mapping to read from, defaults to ``os.environ``.

        Returns:
            S3Credentials, or None when ``AWS_ACCESS_KEY_ID`` or
            ``AWS_SECRET_ACCESS_KEY`` is not set.
        """
        env = os.environ if environ is None else environ
        access_key = env.get("AWS_ACCESS_KEY_ID")
        secret_key = env.get("AWS_SECRET_ACCESS_KEY")
        if not access_key or not secret_key:
            return None
        return cls(
            access_key=access_key,
            secret_key=secret_key,
            session_token=env.get("AWS_SESSION_TOKEN") or None,
            region=env.get("AWS_REGION") or env.get("AWS_DEFAULT_REGION") or None,
        )

"""Client configuration read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

__all__ = ["S3Config"]

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _flag(value: Optional[str]) -> bool:
    return value is not None and value.strip().lower() in _TRUTHY


@dataclass(frozen=True)
class S3Config:
    """Settings used when s3seek builds its own ``s3fs.S3FileSystem``.

    Attributes:
        endpoint_url: Custom S3 endpoint (MinIO, LocalStack, ...). None for AWS.
        region: AWS region name. None lets botocore decide.
        anon: Use unsigned requests (public buckets).
        requester_pays: Send ``RequestPayer=requester`` with every request.
    """

    endpoint_url: Optional[str] = None
    region: Optional[str] = None
    anon: bool = False
    requester_pays: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> S3Config:
        """Read configuration from environment variables.

        Recognized variables are ``AWS_ENDPOINT_URL``, ``AWS_REGION`` (falling
        back to ``AWS_DEFAULT_REGION``), ``S3SEEK_ANON`` and
        ``S3SEEK_REQUESTER_PAYS``.

        Parameters:
            environ: Mapping to read from, defaults to ``os.environ``.

        Returns:
            S3Config built from the environment.
        """
        env = os.environ if environ is None else environ
        return cls(
            endpoint_url=env.get("AWS_ENDPOINT_URL") or None,
            region=env.get("AWS_REGION") or env.get("AWS_DEFAULT_REGION") or None,
            anon=_flag(env.get("S3SEEK_ANON")),
            requester_pays=_flag(env.get("S3SEEK_REQUESTER_PAYS")),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to ``s3fs.S3FileSystem`` keyword arguments.

        Returns:
            Dictionary suitable for s3fs.S3FileSystem(**dict)
        """
        result: Dict[str, Any] = {}
        if self.anon:
            result["anon"] = True
        if self.requester_pays:
            result["requester_pays"] = True
        client_kwargs: Dict[str, Any] = {}
        if self.endpoint_url:
            client_kwargs["endpoint_url"] = self.endpoint_url
        if self.region:
            client_kwargs["region_name"] = self.region
        if client_kwargs:
            result["client_kwargs"] = client_kwargs
        return result

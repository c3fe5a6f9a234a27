"""Filesystem factory for creating the S3 client shared by readers.

Every ``S3Reader`` holds a reference to an ``s3fs.S3FileSystem`` but never
owns it. The factory pattern here keeps client creation in one place so
that tests can inject a fake filesystem.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import s3fs

from .config import S3Config
from .credentials import S3Credentials

logger = logging.getLogger(__name__)

__all__ = ["FileSystemFactory", "DefaultFileSystemFactory", "MockFileSystemFactory"]


def _merge_kwargs(*parts: Dict[str, Any]) -> Dict[str, Any]:
    """Merge s3fs kwargs, combining nested ``client_kwargs`` dicts."""
    merged: Dict[str, Any] = {}
    client_kwargs: Dict[str, Any] = {}
    for part in parts:
        for name, value in part.items():
            if name == "client_kwargs":
                client_kwargs.update(value)
            else:
                merged[name] = value
    if client_kwargs:
        merged["client_kwargs"] = client_kwargs
    return merged


class FileSystemFactory(ABC):
    """Abstract base class for creating S3 filesystems."""

    @abstractmethod
    def create_s3_filesystem(
        self, credentials: S3Credentials, config: Optional[S3Config] = None
    ) -> s3fs.S3FileSystem:
        """Create an s3fs.S3FileSystem instance with provided credentials.

        Parameters:
            credentials: S3 credentials containing access key, secret key, and session token.
            config: Endpoint and request settings, defaults to the environment.

        Returns:
            An authenticated s3fs.S3FileSystem instance.

        Raises:
            ValueError: If credentials are expired.
        """
        ...

    @abstractmethod
    def create_default_filesystem(
        self, config: Optional[S3Config] = None
    ) -> s3fs.S3FileSystem:
        """Create a filesystem that resolves credentials through botocore.

        Parameters:
            config: Endpoint and request settings, defaults to the environment.

        Returns:
            An s3fs.S3FileSystem instance.
        """
        ...


class DefaultFileSystemFactory(FileSystemFactory):
    """Builds real ``s3fs.S3FileSystem`` instances.

    s3fs caches instances by constructor arguments, so asking twice with the
    same settings returns the same client.
    """

    def create_s3_filesystem(
        self, credentials: S3Credentials, config: Optional[S3Config] = None
    ) -> s3fs.S3FileSystem:
        if credentials.is_expired():
            raise ValueError(
                f"S3 credentials expired at {credentials.expiration_time}. "
                "Please refresh your credentials."
            )
        config = config or S3Config.from_env()
        s3_kwargs = _merge_kwargs(config.to_dict(), credentials.to_dict())
        s3_kwargs.pop("anon", None)
        logger.debug("Creating S3 filesystem with explicit credentials")
        return s3fs.S3FileSystem(**s3_kwargs)

    def create_default_filesystem(
        self, config: Optional[S3Config] = None
    ) -> s3fs.S3FileSystem:
        config = config or S3Config.from_env()
        credentials = None if config.anon else S3Credentials.from_env()
        if credentials is not None:
            return self.create_s3_filesystem(credentials, config)
        logger.debug(f"Creating S3 filesystem from environment: {config}")
        return s3fs.S3FileSystem(**config.to_dict())


class MockFileSystemFactory(FileSystemFactory):
    """Factory that hands out a pre-built filesystem, for tests."""

    def __init__(self, filesystem: Optional[Any] = None) -> None:
        self._filesystem = filesystem
        self.calls: list = []

    def create_s3_filesystem(
        self, credentials: S3Credentials, config: Optional[S3Config] = None
    ) -> Any:
        self.calls.append(("create_s3_filesystem", credentials, config))
        return self._get()

    def create_default_filesystem(self, config: Optional[S3Config] = None) -> Any:
        self.calls.append(("create_default_filesystem", config))
        return self._get()

    def _get(self) -> Any:
        if self._filesystem is None:
            raise RuntimeError("Mock S3FileSystem not configured")
        return self._filesystem

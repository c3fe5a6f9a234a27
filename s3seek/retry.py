"""Opt-in retries for transient read failures.

``S3Reader`` never retries. Because a failed read leaves its position where
it was, repeating the same call is safe, and ``RetryingReader`` does exactly
that with exponential back-off.
"""

import io
import logging
import os
from typing import Any, Optional

from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from .exceptions import TransportError
from .metadata import ObjectMetadata
from .reader import S3Reader

logger = logging.getLogger(__name__)

__all__ = ["RetryingReader"]


class RetryingReader(io.RawIOBase):
    """Wrap an ``S3Reader`` and retry reads that fail with ``TransportError``.

    Seeks and length queries are forwarded unchanged. After the last attempt
    the final ``TransportError`` is re-raised as is.

    Parameters:
        reader: The reader to wrap. It stays owned by the caller.
        attempts: Total number of attempts per read, including the first.
        wait_min: Minimum back-off in seconds.
        wait_max: Maximum back-off in seconds.
    """

    def __init__(
        self,
        reader: S3Reader,
        attempts: int = 3,
        wait_min: float = 0.5,
        wait_max: float = 8.0,
    ) -> None:
        super().__init__()
        self.reader = reader
        self._retrying = Retrying(
            retry=retry_if_exception_type(TransportError),
            stop=stop_after_attempt(attempts),
            wait=wait_exponential(multiplier=wait_min, min=wait_min, max=wait_max),
            before_sleep=before_sleep_log(logger, logging.DEBUG),
            reraise=True,
        )

    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return True

    def length(self) -> int:
        return self.reader.length()

    def metadata(self) -> ObjectMetadata:
        return self.reader.metadata()

    @property
    def name(self) -> str:
        return self.reader.name

    def tell(self) -> int:
        return self.reader.tell()

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        return self.reader.seek(offset, whence)

    def readinto(self, buffer: Any) -> int:
        return self._retrying(self.reader.readinto, buffer)

    def read(self, size: Optional[int] = -1) -> bytes:
        if size is None or size < 0:
            return self.readall()
        return super().read(size)

    def readall(self) -> bytes:
        return self._retrying(self.reader.readall)

    def read_range(self, start: int, end: int) -> bytes:
        return self._retrying(self.reader.read_range, start, end)

    def close(self) -> None:
        try:
            self.reader.close()
        finally:
            super().close()

    def __repr__(self) -> str:
        return f"<RetryingReader {self.reader!r}>"

"""Exceptions raised by s3seek.

Transport failures are ``OSError`` subclasses and caller mistakes are
``ValueError`` subclasses, so code written against plain file objects sees
the error types it already handles.
"""

from typing import Optional

__all__ = [
    "S3SeekError",
    "ParseError",
    "MalformedUri",
    "OpenError",
    "ObjectNotFound",
    "AccessDenied",
    "TransportError",
    "OpenTransportError",
    "ReadError",
    "ReadTransportError",
    "SeekError",
    "InvalidSeek",
    "InvalidRange",
]


class S3SeekError(Exception):
    """Base class for every error raised by s3seek."""


class ParseError(S3SeekError, ValueError):
    """Raised when an object address cannot be parsed."""

    def __init__(self, message: str, address: Optional[str] = None):
        super().__init__(message)
        self.address = address


class MalformedUri(ParseError):
    """The address is not of the form ``s3://bucket/key``."""


class OpenError(S3SeekError, OSError):
    """Raised when an object cannot be opened for reading."""

    def __init__(
        self,
        message: str,
        uri: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.uri = uri
        self.cause = cause


class ObjectNotFound(OpenError, FileNotFoundError):
    """The store reports that the object does not exist."""


class AccessDenied(OpenError, PermissionError):
    """The store refused the request for lack of authorization."""


class TransportError(S3SeekError, OSError):
    """A network or service failure while talking to the store."""

    def __init__(
        self,
        message: str,
        uri: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.uri = uri
        self.cause = cause


class OpenTransportError(OpenError, TransportError):
    """The metadata request failed for a reason other than not-found or access."""


class ReadError(S3SeekError, OSError):
    """Raised when a read against an open object fails."""

    def __init__(
        self,
        message: str,
        uri: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.uri = uri
        self.cause = cause


class ReadTransportError(ReadError, TransportError):
    """The ranged fetch failed; the reader position is unchanged."""


class SeekError(S3SeekError, ValueError):
    """Raised when a seek target is not a valid position."""


class InvalidSeek(SeekError):
    """The seek target is negative, unrepresentable or uses an unknown whence."""


class InvalidRange(S3SeekError, ValueError):
    """A byte range with ``end < start`` or ``start`` past the object end."""

    def __init__(self, start: int, end: int):
        super().__init__(f"invalid read range {start}-{end}")
        self.start = start
        self.end = end

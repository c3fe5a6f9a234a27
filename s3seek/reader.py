"""Seekable, read-only file objects over remote S3 objects.

``S3Reader`` turns ``read``/``seek``/``tell`` calls into ranged GET requests
against S3. s3fs only exposes coroutines for the raw S3 calls, so each
blocking operation runs its coroutine on fsspec's IO loop and waits for it.
Only ``open`` and the read methods touch the network; ``seek``, ``tell`` and
``length`` are pure bookkeeping.
"""

import io
import logging
import operator
import os
from typing import Any, Optional, Union

import s3fs
from fsspec.asyn import sync
from typing_extensions import Self

from .exceptions import (
    AccessDenied,
    InvalidRange,
    InvalidSeek,
    ObjectNotFound,
    OpenError,
    OpenTransportError,
    ReadTransportError,
)
from .metadata import ObjectMetadata
from .uri import S3ObjectUri

logger = logging.getLogger(__name__)

__all__ = ["S3Reader", "resolve_seek", "MAX_POSITION"]

# Positions are unsigned 64-bit offsets.
MAX_POSITION = 2**64 - 1

NOT_FOUND_CODES = frozenset({"404", "NoSuchKey", "NoSuchBucket", "NotFound"})
ACCESS_DENIED_CODES = frozenset(
    {
        "403",
        "AccessDenied",
        "AllAccessDisabled",
        "InvalidAccessKeyId",
        "SignatureDoesNotMatch",
    }
)


def resolve_seek(
    length: int, cursor: int, offset: int, whence: int = os.SEEK_SET
) -> int:
    """Compute the absolute position a seek would move to.

    Performs no I/O. Positions past ``length`` are valid, as they are for
    local files.

    Parameters:
        length: Object length in bytes.
        cursor: Current position.
        offset: Seek offset; must be non-negative for ``SEEK_SET``.
        whence: ``os.SEEK_SET``, ``os.SEEK_CUR`` or ``os.SEEK_END``.

    Returns:
        The new absolute position.

    Raises:
        InvalidSeek: If the target is negative or above ``MAX_POSITION``, or
            whence is not one of the three seek modes.
        TypeError: If offset is not an integer.
    """
    offset = operator.index(offset)
    if whence == os.SEEK_SET:
        if offset < 0:
            raise InvalidSeek(f"negative seek position {offset}")
        target = offset
    elif whence == os.SEEK_CUR:
        target = cursor + offset
    elif whence == os.SEEK_END:
        target = length + offset
    else:
        raise InvalidSeek(f"invalid whence ({whence!r}, should be 0, 1 or 2)")

    if target < 0:
        raise InvalidSeek(f"position cannot be negative (got {target})")
    if target > MAX_POSITION:
        raise InvalidSeek(f"position {target} is out of range")
    return target


def _error_code(err: BaseException) -> Optional[str]:
    """Return the S3 error code attached to err or to its direct cause."""
    for candidate in (err, err.__cause__):
        response = getattr(candidate, "response", None)
        if isinstance(response, dict):
            code = response.get("Error", {}).get("Code")
            if code:
                return str(code)
    return None


def _open_error(uri: S3ObjectUri, err: Exception) -> OpenError:
    # s3fs already translates most botocore errors into builtin OSErrors;
    # bare HEAD responses only carry the HTTP status as the code.
    code = _error_code(err)
    if isinstance(err, FileNotFoundError) or code in NOT_FOUND_CODES:
        return ObjectNotFound(f"object not found: {uri}", str(uri), err)
    if isinstance(err, PermissionError) or code in ACCESS_DENIED_CODES:
        return AccessDenied(f"access denied to {uri}", str(uri), err)
    return OpenTransportError(
        f"object header could not be fetched for {uri}: {err}", str(uri), err
    )


class S3Reader(io.RawIOBase):
    """A read-only, seekable file object for a single S3 object.

    The object length is fetched once by :meth:`open` and never refreshed;
    the object is assumed not to change while the reader is in use. Every
    read issues exactly one ranged GET and nothing is cached between calls,
    so wrap the reader in ``io.BufferedReader`` when many small reads are
    expected.

    The filesystem is shared, not owned: closing the reader leaves it open
    for other readers. A single reader must not be used from several threads
    at once.

    Example:
        ```python
        import s3fs
        from s3seek import S3Reader

        fs = s3fs.S3FileSystem()
        reader = S3Reader.open("s3://my-bucket/path/to/huge/file", fs)
        reader.seek(100)
        header = reader.read(1024)
        ```
    """

    def __init__(
        self,
        uri: S3ObjectUri,
        fs: s3fs.S3FileSystem,
        metadata: ObjectMetadata,
    ) -> None:
        """Create a reader from an already fetched object header.

        Most callers want :meth:`open`, which fetches the header first.

        Parameters:
            uri: The object to read.
            fs: The shared S3 filesystem used for requests.
            metadata: The object's HEAD snapshot; its size becomes the length.
        """
        super().__init__()
        self._uri = uri
        self._fs = fs
        self._metadata = metadata
        self._length = metadata.size
        self._pos = 0

    @classmethod
    def open(cls, uri: Union[S3ObjectUri, str], fs: s3fs.S3FileSystem) -> Self:
        """Open an S3 object for reading.

        Issues one HEAD request and blocks until it completes.

        Parameters:
            uri: An S3ObjectUri or an ``s3://bucket/key`` address.
            fs: The shared S3 filesystem used for requests.

        Returns:
            A reader positioned at offset 0.

        Raises:
            MalformedUri: If ``uri`` is a string that cannot be parsed.
            ObjectNotFound: If the object does not exist.
            AccessDenied: If the credentials are not allowed to read it.
            OpenTransportError: For any other failure of the HEAD request.
        """
        if not isinstance(uri, S3ObjectUri):
            uri = S3ObjectUri.parse(uri)

        logger.debug(f"Fetching header of {uri}")
        try:
            response = sync(
                fs.loop,
                fs._call_s3,
                "head_object",
                Bucket=uri.bucket,
                Key=uri.key,
                **fs.req_kw,
            )
            metadata = ObjectMetadata.from_head(response)
        except Exception as err:
            raise _open_error(uri, err) from err
        return cls(uri, fs, metadata)

    # -- identification ----------------------------------------------------

    @property
    def uri(self) -> S3ObjectUri:
        return self._uri

    @property
    def bucket(self) -> str:
        return self._uri.bucket

    @property
    def key(self) -> str:
        return self._uri.key

    @property
    def name(self) -> str:
        return str(self._uri)

    @property
    def fs(self) -> s3fs.S3FileSystem:
        return self._fs

    def length(self) -> int:
        """Return the object length cached at open time."""
        return self._length

    def metadata(self) -> ObjectMetadata:
        """Return the HEAD snapshot cached at open time."""
        return self._metadata

    # -- io.RawIOBase ------------------------------------------------------

    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return True

    def tell(self) -> int:
        self._check_open()
        return self._pos

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        """Move the position; see :func:`resolve_seek` for the rules.

        Seeking past the end is allowed and makes the next read return no
        bytes. On error the position is left unchanged.
        """
        self._check_open()
        self._pos = resolve_seek(self._length, self._pos, offset, whence)
        return self._pos

    def readinto(self, buffer: Any) -> int:
        """Read up to ``len(buffer)`` bytes into ``buffer`` with one ranged GET.

        Returns fewer bytes than requested only when the object ends first,
        and 0 at or past the end of the object.

        Raises:
            ReadTransportError: If the request fails. The position is not
                moved, so the same call can simply be retried.
        """
        self._check_open()
        view = memoryview(buffer).cast("B")
        requested = len(view)
        if requested == 0 or self._pos >= self._length:
            return 0

        start = self._pos
        end = min(start + requested, self._length)
        data = self._fetch(start, end)
        count = min(len(data), end - start)
        view[:count] = data[:count]
        self._pos = start + count
        return count

    def read(self, size: Optional[int] = -1) -> bytes:
        """Read up to ``size`` bytes; ``None`` or a negative size reads to the end."""
        if size is None or size < 0:
            return self.readall()
        return super().read(size)

    def readall(self) -> bytes:
        """Read from the position to the end of the object in a single request."""
        self._check_open()
        if self._pos >= self._length:
            return b""
        data = self._fetch(self._pos, self._length)
        self._pos += len(data)
        return data

    def read_range(self, start: int, end: int) -> bytes:
        """Return bytes ``[start, end)`` without moving the position.

        ``end`` is clamped to the object length.

        Raises:
            InvalidRange: If ``end < start`` or ``start`` is past the end.
            ReadTransportError: If the request fails.
        """
        self._check_open()
        if end < start or start > self._length:
            raise InvalidRange(start, end)
        end = min(end, self._length)
        if start == end:
            return b""
        return self._fetch(start, end)

    # -- internals ---------------------------------------------------------

    def _check_open(self) -> None:
        if self.closed:
            raise ValueError("I/O operation on closed file.")

    def _fetch(self, start: int, end: int) -> bytes:
        logger.debug(f"Reading range {start}-{end} of {self._uri}")
        try:
            return sync(self._fs.loop, self._get_range, start, end)
        except Exception as err:
            raise ReadTransportError(
                f"could not read bytes {start}-{end} of {self._uri}: {err}",
                str(self._uri),
                err,
            ) from err

    async def _get_range(self, start: int, end: int) -> bytes:
        # HTTP ranges are inclusive on both ends.
        response = await self._fs._call_s3(
            "get_object",
            Bucket=self._uri.bucket,
            Key=self._uri.key,
            Range=f"bytes={start}-{end - 1}",
            **self._fs.req_kw,
        )
        body = response["Body"]
        try:
            return await body.read()
        finally:
            body.close()

    def __repr__(self) -> str:
        return f"<S3Reader {self._uri} pos={self._pos} length={self._length}>"

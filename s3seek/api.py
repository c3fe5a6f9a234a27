import logging
from typing import Optional, Union

import s3fs

from .config import S3Config
from .credentials import S3Credentials
from .filesystems import DefaultFileSystemFactory, FileSystemFactory
from .reader import S3Reader
from .retry import RetryingReader
from .uri import S3ObjectUri

logger = logging.getLogger(__name__)


def get_s3_filesystem(
    credentials: Optional[S3Credentials] = None,
    config: Optional[S3Config] = None,
    factory: Optional[FileSystemFactory] = None,
) -> s3fs.S3FileSystem:
    """Return an `s3fs.S3FileSystem` suitable for sharing between readers.

    Parameters:
        credentials: Explicit credentials. When omitted, credentials come from
            `AWS_ACCESS_KEY_ID`/`AWS_SECRET_ACCESS_KEY` or botocore's default chain.
        config: Endpoint and request settings, read from the environment by default.
        factory: Filesystem factory, `DefaultFileSystemFactory` by default.

    Returns:
        An s3fs filesystem. Equal settings return the same cached instance.

    Examples:
        ```python
        import s3seek

        fs = s3seek.get_s3_filesystem()
        first = s3seek.open("s3://bucket/a.bin", fs=fs)
        second = s3seek.open("s3://bucket/b.bin", fs=fs)
        ```
    """
    factory = factory or DefaultFileSystemFactory()
    if credentials is not None:
        return factory.create_s3_filesystem(credentials, config)
    return factory.create_default_filesystem(config)


def open(
    address: str,
    fs: Optional[s3fs.S3FileSystem] = None,
    *,
    retries: int = 0,
    factory: Optional[FileSystemFactory] = None,
) -> Union[S3Reader, RetryingReader]:
    """Open an S3 object as a seekable, read-only binary file.

    Parameters:
        address: Object address of the form `s3://bucket/key`.
        fs: Filesystem to issue requests with. Pass the same one to every call
            to reuse connections and credentials.
        retries: Extra attempts for reads that fail with a transport error.
            With the default of 0 failures reach the caller directly.
        factory: Used to build a filesystem when `fs` is not given.

    Returns:
        An `S3Reader`, or a `RetryingReader` around it when `retries > 0`.

    Raises:
        MalformedUri: If the address is not of the form `s3://bucket/key`.
        ObjectNotFound: If the object does not exist.
        AccessDenied: If the object cannot be read with the current credentials.
        OpenTransportError: If the object header cannot be fetched otherwise.

    Examples:
        ```python
        import s3seek

        with s3seek.open("s3://my-bucket/huge.bin") as f:
            f.seek(-1024, 2)
            trailer = f.read()
        ```
    """
    uri = S3ObjectUri.parse(address)
    if fs is None:
        fs = get_s3_filesystem(factory=factory)
    reader = S3Reader.open(uri, fs)
    logger.debug(f"Opened {uri} ({reader.length()} bytes)")
    if retries > 0:
        return RetryingReader(reader, attempts=retries + 1)
    return reader

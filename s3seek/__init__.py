"""s3seek: seekable, read-only file objects for S3 objects.

s3seek lets code written against local binary files read huge S3 objects
without downloading them. Each read becomes a single ranged GET request.

Quick Start:
    ```python
    import s3seek

    with s3seek.open("s3://my-bucket/path/to/huge/file") as f:
        f.seek(100)
        chunk = f.read(1024)
        print(f.length())
    ```

Main Functions:
    - `open()`: Open an `s3://bucket/key` address as a file object
    - `get_s3_filesystem()`: Build an s3fs filesystem to share between readers
"""

import logging
from importlib.metadata import version

from .api import get_s3_filesystem, open
from .config import S3Config
from .credentials import S3Credentials
from .exceptions import (
    AccessDenied,
    InvalidRange,
    InvalidSeek,
    MalformedUri,
    ObjectNotFound,
    OpenError,
    OpenTransportError,
    ParseError,
    ReadError,
    ReadTransportError,
    S3SeekError,
    SeekError,
    TransportError,
)
from .filesystems import (
    DefaultFileSystemFactory,
    FileSystemFactory,
    MockFileSystemFactory,
)
from .metadata import ObjectMetadata
from .reader import S3Reader, resolve_seek
from .retry import RetryingReader
from .uri import S3ObjectUri

logger = logging.getLogger(__name__)

__all__ = [
    # api.py
    "open",
    "get_s3_filesystem",
    # uri.py
    "S3ObjectUri",
    # reader.py
    "S3Reader",
    "resolve_seek",
    # retry.py
    "RetryingReader",
    # metadata.py
    "ObjectMetadata",
    # config.py / credentials.py
    "S3Config",
    "S3Credentials",
    # filesystems.py
    "FileSystemFactory",
    "DefaultFileSystemFactory",
    "MockFileSystemFactory",
    # exceptions.py
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

__version__ = version("s3seek")

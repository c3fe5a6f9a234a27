"""Parsing of ``s3://bucket/key`` object addresses."""

from __future__ import annotations

from dataclasses import dataclass

from typing_extensions import Self

from .exceptions import MalformedUri

__all__ = ["S3_SCHEME", "S3ObjectUri"]

S3_SCHEME = "s3://"


@dataclass(frozen=True)
class S3ObjectUri:
    """The bucket and key of a single S3 object.

    Frozen so it can be shared between readers and used as a dict key.

    Attributes:
        bucket: Bucket name, exactly as it appeared in the address.
        key: Object key, exactly as it appeared in the address. May contain ``/``.

    Example:
        >>> uri = S3ObjectUri.parse("s3://mybucket/path/to/file.xls")
        >>> uri.bucket
        'mybucket'
        >>> uri.key
        'path/to/file.xls'
    """

    bucket: str
    key: str

    @classmethod
    def parse(cls, address: str) -> Self:
        """Parse an ``s3://bucket/key`` address.

        The key is everything after the first ``/`` following the bucket.
        Nothing is normalized or percent-decoded.

        Parameters:
            address: The object address.

        Returns:
            The parsed S3ObjectUri.

        Raises:
            MalformedUri: If the scheme is missing, there is no ``/`` between
                bucket and key, or the bucket or key is empty.
        """
        if not isinstance(address, str) or not address.startswith(S3_SCHEME):
            raise MalformedUri(f"missing {S3_SCHEME} scheme in {address!r}", address)

        bucket, sep, key = address[len(S3_SCHEME) :].partition("/")
        if not sep:
            raise MalformedUri(f"missing key in {address!r}", address)
        if not bucket:
            raise MalformedUri(f"missing bucket in {address!r}", address)
        if not key:
            raise MalformedUri(f"empty key in {address!r}", address)

        return cls(bucket=bucket, key=key)

    def __str__(self) -> str:
        return f"{S3_SCHEME}{self.bucket}/{self.key}"

"""Pytest configuration and shared fixtures for unit tests."""

import pytest
from s3seek import S3Reader

from .fakes import ADDRESS, BUCKET, CONTENT, KEY, FakeS3FileSystem


@pytest.fixture
def fake_fs() -> FakeS3FileSystem:
    """A fake filesystem holding CONTENT at ADDRESS."""
    return FakeS3FileSystem({(BUCKET, KEY): CONTENT})


@pytest.fixture
def reader(fake_fs):
    """An S3Reader opened on CONTENT."""
    r = S3Reader.open(ADDRESS, fake_fs)
    yield r
    r.close()

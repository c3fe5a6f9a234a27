"""Fixtures that run s3seek against a local moto S3 server."""

import socket

import pytest
from moto.server import ThreadedMotoServer
from s3seek import DefaultFileSystemFactory, S3Config, S3Credentials

# =============================================================================
# Moto server
# =============================================================================

BUCKET = "s3seek-integration"
KEY = "data/object.bin"
ADDRESS = f"s3://{BUCKET}/{KEY}"
CONTENT = bytes(range(256)) * 40


def _free_port() -> int:
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@pytest.fixture(scope="module")
def moto_endpoint():
    """URL of a moto S3 server that lives for the whole module."""
    port = _free_port()
    server = ThreadedMotoServer(ip_address="127.0.0.1", port=port)
    server.start()
    yield f"http://127.0.0.1:{port}"
    server.stop()


@pytest.fixture(scope="module")
def s3_fs(moto_endpoint):
    """A real s3fs filesystem, built by the default factory, holding CONTENT."""
    credentials = S3Credentials("testing", "testing", region="us-east-1")
    config = S3Config(endpoint_url=moto_endpoint)
    fs = DefaultFileSystemFactory().create_s3_filesystem(credentials, config)
    fs.mkdir(BUCKET)
    fs.pipe(f"{BUCKET}/{KEY}", CONTENT)
    return fs

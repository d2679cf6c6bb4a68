"""
Shared fixtures for the trio_loader test suite.

Network traffic never leaves the process: loaders get an httpx.AsyncClient
backed by httpx.MockTransport.
"""

import io

import httpx
import pytest
from PIL import Image

IMAGE_URL = "https://images.example.test/200"


@pytest.fixture
def image_url():
    return IMAGE_URL


@pytest.fixture
def png_bytes():
    """A tiny 2x3 PNG."""
    buffer = io.BytesIO()
    Image.new("RGB", (2, 3), color=(255, 0, 0)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def make_client():
    """Return a factory building an AsyncClient that answers with `handler`."""

    def factory(handler):
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return factory


@pytest.fixture
def truncated_png_bytes(png_bytes):
    """The same PNG with its IHDR length field claiming 7 bytes instead of 13."""
    # signature (8 bytes), then the IHDR chunk's 4-byte big-endian length
    return png_bytes[:8] + (7).to_bytes(4, "big") + png_bytes[12:]

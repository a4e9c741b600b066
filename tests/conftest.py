"""
Pytest configuration and fixtures for pixelflow tests
"""

import os

import cv2
import numpy as np
import pytest

from pixelflow.core.buffer import PixelBuffer
from pixelflow.core.config import get_settings


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Isolate tests from PIXELFLOW_* variables and cached settings"""
    for key in list(os.environ):
        if key.startswith("PIXELFLOW_"):
            monkeypatch.delenv(key)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def test_image():
    """Create a 64x48 RGBA test image with shapes and a horizontal alpha ramp"""
    image = np.zeros((48, 64, 4), dtype=np.uint8)
    cv2.rectangle(image, (10, 10), (30, 30), (255, 255, 255, 255), -1)
    cv2.circle(image, (45, 30), 8, (200, 80, 40, 255), -1)
    # Alpha varies per column so that any filter touching it is caught
    image[..., 3] = np.tile((np.arange(64) * 4).astype(np.uint8), (48, 1))
    return image


@pytest.fixture
def noise_image():
    """Create a deterministic random RGBA image with odd dimensions"""
    rng = np.random.default_rng(42)
    return rng.integers(0, 256, size=(17, 23, 4), dtype=np.uint8)


@pytest.fixture
def buffer(test_image):
    """PixelBuffer over the shapes test image"""
    return PixelBuffer(test_image, 64, 48)


@pytest.fixture
def noise_buffer(noise_image):
    """PixelBuffer over the random test image"""
    return PixelBuffer(noise_image, 23, 17)


@pytest.fixture
def primaries_buffer():
    """2x2 buffer: red, green, blue, white"""
    data = [
        255, 0, 0, 255,
        0, 255, 0, 255,
        0, 0, 255, 255,
        255, 255, 255, 255,
    ]
    return PixelBuffer(data, 2, 2)


def solid_buffer(width, height, rgb, alpha=255):
    """Create a buffer filled with one color"""
    pixels = np.empty((height, width, 4), dtype=np.uint8)
    pixels[..., :3] = rgb
    pixels[..., 3] = alpha
    return PixelBuffer(pixels, width, height)


@pytest.fixture
def make_solid():
    """Factory fixture for single-color buffers"""
    return solid_buffer

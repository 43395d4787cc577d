"""Shared fixtures for the StyleScan test suite."""

from __future__ import annotations

import base64
from io import BytesIO

import numpy as np
import pytest
from PIL import Image

from stylescan.models.raster import RasterImage


def solid_image(width: int, height: int, rgb, alpha: int = 255) -> RasterImage:
    pixels = np.zeros((height, width, 4), dtype=np.uint8)
    pixels[:, :, :3] = rgb
    pixels[:, :, 3] = alpha
    return RasterImage.from_array(pixels)


def stacked_image(width: int, top_rows: int, top_rgb, bottom_rows: int, bottom_rgb) -> RasterImage:
    pixels = np.zeros((top_rows + bottom_rows, width, 3), dtype=np.uint8)
    pixels[:top_rows] = top_rgb
    pixels[top_rows:] = bottom_rgb
    return RasterImage.from_array(pixels)


def encode_png(pixels: np.ndarray) -> bytes:
    buffer = BytesIO()
    Image.fromarray(pixels).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def outfit_png() -> bytes:
    """8x12 photo: red top half, navy bottom half."""
    pixels = np.zeros((12, 8, 3), dtype=np.uint8)
    pixels[:6] = (200, 30, 30)
    pixels[6:] = (20, 30, 90)
    return encode_png(pixels)


@pytest.fixture
def outfit_data_url(outfit_png: bytes) -> str:
    return "data:image/png;base64," + base64.b64encode(outfit_png).decode("ascii")

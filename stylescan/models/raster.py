"""
Raster image and region mask containers used by the analysis engine
"""

from dataclasses import dataclass

import numpy as np


class InvalidImageData(ValueError):
    """Raised when a pixel buffer or mask does not match its declared shape"""


def _as_samples(values) -> np.ndarray:
    """Integer samples in [0, 255] as uint8; anything else is rejected, never wrapped"""
    try:
        raw = np.asarray(values)
    except (OverflowError, ValueError) as e:
        raise InvalidImageData(f"Unreadable pixel samples: {e}") from e

    if raw.size == 0:
        return raw.astype(np.uint8)

    if raw.dtype.kind not in ("i", "u"):
        raise InvalidImageData(f"Pixel samples must be integers, got {raw.dtype}")

    if raw.min() < 0 or raw.max() > 255:
        raise InvalidImageData(
            f"Pixel samples must be in [0, 255], got range [{raw.min()}, {raw.max()}]"
        )

    return raw.astype(np.uint8)


@dataclass(frozen=True)
class RasterImage:
    """Row-major RGBA pixels, 4 bytes per pixel"""

    width: int
    height: int
    data: np.ndarray

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise InvalidImageData(f"Invalid dimensions {self.width}x{self.height}")

        data = _as_samples(self.data).reshape(-1)
        if data.size % 4 != 0:
            raise InvalidImageData(f"Buffer length {data.size} is not a multiple of 4")

        expected = self.width * self.height * 4
        if data.size != expected:
            raise InvalidImageData(
                f"Buffer length {data.size} does not match {self.width}x{self.height} RGBA ({expected})"
            )

        data = data.copy()
        data.flags.writeable = False
        object.__setattr__(self, 'data', data)

    @classmethod
    def from_bytes(cls, width: int, height: int, buffer: bytes) -> "RasterImage":
        """Wrap a raw RGBA byte buffer"""
        return cls(width, height, np.frombuffer(bytes(buffer), dtype=np.uint8))

    @classmethod
    def from_array(cls, pixels: np.ndarray) -> "RasterImage":
        """Build from an HxWx3 (RGB) or HxWx4 (RGBA) array"""
        pixels = _as_samples(pixels)
        if pixels.ndim != 3 or pixels.shape[2] not in (3, 4):
            raise InvalidImageData(f"Expected HxWx3 or HxWx4 array, got shape {pixels.shape}")

        height, width = pixels.shape[:2]
        if pixels.shape[2] == 3:
            alpha = np.full((height, width, 1), 255, dtype=np.uint8)
            pixels = np.concatenate([pixels, alpha], axis=2)

        return cls(width, height, pixels.reshape(-1))

    def pixels(self) -> np.ndarray:
        """Pixels as a (width*height, 4) view"""
        return self.data.reshape(-1, 4)

    def rgb_array(self) -> np.ndarray:
        """HxWx3 RGB copy, the layout the vision models expect"""
        return self.data.reshape(self.height, self.width, 4)[:, :, :3].copy()


@dataclass(frozen=True)
class RegionMask:
    """Per-pixel inclusion flags, same size as the image they select from"""

    width: int
    height: int
    included: np.ndarray

    def __post_init__(self):
        included = np.asarray(self.included).astype(bool)
        if included.size != self.width * self.height:
            raise InvalidImageData(
                f"Mask has {included.size} flags, expected {self.width}x{self.height}"
            )

        included = included.reshape(self.height, self.width).copy()
        included.flags.writeable = False
        object.__setattr__(self, 'included', included)

    @classmethod
    def from_alpha(cls, image: RasterImage) -> "RegionMask":
        """Include pixels whose alpha channel is non-zero"""
        return cls(image.width, image.height, image.pixels()[:, 3] != 0)

    @property
    def count(self) -> int:
        return int(self.included.sum())

    def is_empty(self) -> bool:
        return not self.included.any()

"""
Region statistics: color, contrast and exposure profile of one image region
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

import numpy as np

from stylescan.config import (
    EXPOSURE_FRACTION_THRESHOLD, FALLBACK_SWATCH_RGB, MAX_SWATCHES,
    QUANTIZATION_SHIFT, VERY_DARK_LUMA, VERY_LIGHT_LUMA
)
from stylescan.models.color_math import (
    RGB, analogous, complementary, rgb_to_hsl, round_half_up, to_hex
)
from stylescan.models.raster import InvalidImageData, RasterImage, RegionMask

logger = logging.getLogger(__name__)

LUMA_WEIGHTS = np.array([0.2126, 0.7152, 0.0722])

# Ordered (predicate, label) tables, first match wins
ExposureRule = Tuple[Callable[[float, float], bool], str]
VibeRule = Tuple[Callable[[float, float, int], bool], str]

EXPOSURE_RULES: List[ExposureRule] = [
    (lambda dark, light: light > EXPOSURE_FRACTION_THRESHOLD, "over-exposed"),
    (lambda dark, light: dark > EXPOSURE_FRACTION_THRESHOLD, "under-exposed"),
]
DEFAULT_EXPOSURE = "balanced"

VIBE_RULES: List[VibeRule] = [
    (lambda sat, light, contrast: sat > 45 and light > 60, "vibrant & playful"),
    (lambda sat, light, contrast: sat < 20 and contrast > 140, "classic & sharp"),
    (lambda sat, light, contrast: light < 35, "moody & bold"),
]
DEFAULT_VIBE = "clean & minimal"


def classify_exposure(very_dark_fraction: float, very_light_fraction: float) -> str:
    """Exposure label from the share of very dark and very light pixels"""
    for predicate, label in EXPOSURE_RULES:
        if predicate(very_dark_fraction, very_light_fraction):
            return label
    return DEFAULT_EXPOSURE


def classify_vibe(saturation: float, lightness: float, contrast: int) -> str:
    """Vibe label from the average color's HSL saturation/lightness and the contrast"""
    for predicate, label in VIBE_RULES:
        if predicate(saturation, lightness, contrast):
            return label
    return DEFAULT_VIBE


@dataclass(frozen=True)
class Swatch:
    """A dominant color bucket"""
    rgb: RGB
    hex: str
    fraction: float

    def to_dict(self) -> Dict:
        return {'rgb': list(self.rgb), 'hex': self.hex, 'fraction': self.fraction}


@dataclass(frozen=True)
class RegionProfile:
    """Color/contrast/exposure summary of the pixels in one region"""
    pixel_count: int
    average_rgb: RGB
    average_hex: str
    average_hsl: Tuple[float, float, float]
    swatches: Tuple[Swatch, ...]
    contrast: int
    brightness: int
    very_dark_fraction: float
    very_light_fraction: float
    exposure: str
    vibe: str
    complementary: str
    analogous: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def dominant(self) -> Optional[Swatch]:
        return self.swatches[0] if self.swatches else None

    def to_dict(self) -> Dict:
        return {
            'pixel_count': self.pixel_count,
            'average_rgb': list(self.average_rgb),
            'average_hex': self.average_hex,
            'average_hsl': [round(v, 2) for v in self.average_hsl],
            'swatches': [s.to_dict() for s in self.swatches],
            'contrast': self.contrast,
            'brightness': self.brightness,
            'very_dark_fraction': self.very_dark_fraction,
            'very_light_fraction': self.very_light_fraction,
            'exposure': self.exposure,
            'vibe': self.vibe,
            'complementary': self.complementary,
            'analogous': list(self.analogous),
        }


def _bucket_center(bucket: int) -> int:
    step = 1 << QUANTIZATION_SHIFT
    return bucket * step + step // 2


def _dominant_swatches(rgb: np.ndarray, total: int) -> Tuple[Swatch, ...]:
    """Top buckets by count; equal counts keep first-seen order"""
    quantized = (rgb >> QUANTIZATION_SHIFT).astype(np.int64)
    bits = 8 - QUANTIZATION_SHIFT
    keys = (quantized[:, 0] << (2 * bits)) | (quantized[:, 1] << bits) | quantized[:, 2]

    unique_keys, first_seen, counts = np.unique(keys, return_index=True, return_counts=True)
    order = np.lexsort((first_seen, -counts))[:MAX_SWATCHES]

    bucket_mask = (1 << bits) - 1
    swatches = []
    for idx in order:
        key = int(unique_keys[idx])
        center = (
            _bucket_center((key >> (2 * bits)) & bucket_mask),
            _bucket_center((key >> bits) & bucket_mask),
            _bucket_center(key & bucket_mask),
        )
        swatches.append(Swatch(center, to_hex(center), int(counts[idx]) / total))

    return tuple(swatches)


def compute_region_profile(image: RasterImage, mask: Optional[RegionMask] = None) -> Optional[RegionProfile]:
    """
    Aggregate the pixels of a region into a RegionProfile

    Args:
        image: Source raster
        mask: Pixels to include; None means the whole image

    Returns:
        RegionProfile, or None when the region has no pixels
    """
    pixels = image.pixels()

    if mask is not None:
        if (mask.width, mask.height) != (image.width, image.height):
            raise InvalidImageData(
                f"Mask {mask.width}x{mask.height} does not match image {image.width}x{image.height}"
            )
        if mask.is_empty():
            return None
        pixels = pixels[mask.included.reshape(-1)]

    count = pixels.shape[0]
    if count == 0:
        return None

    rgb = pixels[:, :3]
    luma = rgb.astype(np.float64) @ LUMA_WEIGHTS

    sums = rgb.astype(np.int64).sum(axis=0)
    average = tuple(round_half_up(int(s) / count) for s in sums)

    contrast = round_half_up(float(luma.max() - luma.min()))
    brightness = round_half_up(float(luma.mean()))
    very_dark_fraction = int((luma < VERY_DARK_LUMA).sum()) / count
    very_light_fraction = int((luma > VERY_LIGHT_LUMA).sum()) / count

    swatches = _dominant_swatches(rgb, count)
    base = swatches[0].rgb if swatches else FALLBACK_SWATCH_RGB

    hsl = rgb_to_hsl(*average)
    _, avg_s, avg_l = hsl

    profile = RegionProfile(
        pixel_count=count,
        average_rgb=average,
        average_hex=to_hex(average),
        average_hsl=hsl,
        swatches=swatches,
        contrast=contrast,
        brightness=brightness,
        very_dark_fraction=very_dark_fraction,
        very_light_fraction=very_light_fraction,
        exposure=classify_exposure(very_dark_fraction, very_light_fraction),
        vibe=classify_vibe(avg_s, avg_l, contrast),
        complementary=complementary(base),
        analogous=tuple(analogous(base)),
    )

    logger.debug("Region profile: %d px, avg %s, contrast %d, %s, %s",
                 count, profile.average_hex, contrast, profile.exposure, profile.vibe)

    return profile

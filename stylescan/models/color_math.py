"""
Color math helpers: RGB/HSL conversion and color-wheel suggestions
"""

import colorsys
import math
from typing import List, Tuple

RGB = Tuple[int, int, int]
HSL = Tuple[float, float, float]


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 rounding up"""
    return int(math.floor(value + 0.5))


def rgb_to_hsl(r: int, g: int, b: int) -> HSL:
    """
    Convert an RGB color to HSL

    Returns:
        Tuple of (hue in [0, 360), saturation in [0, 100], lightness in [0, 100])
    """
    # colorsys returns hue 0 and saturation 0 for achromatic colors
    h, l, s = colorsys.rgb_to_hls(r / 255.0, g / 255.0, b / 255.0)
    return (h * 360.0) % 360.0, s * 100.0, l * 100.0


def hsl_to_rgb(h: float, s: float, l: float) -> RGB:
    """Convert HSL back to an RGB triple of ints in [0, 255]"""
    r, g, b = colorsys.hls_to_rgb((h % 360.0) / 360.0, l / 100.0, s / 100.0)
    return tuple(min(255, max(0, round_half_up(c * 255.0))) for c in (r, g, b))


def to_hex(rgb: RGB) -> str:
    """Format an RGB triple as lowercase #rrggbb"""
    r, g, b = rgb
    return f"#{r:02x}{g:02x}{b:02x}"


def rotate_hue(rgb: RGB, degrees: float) -> str:
    """Rotate the hue of a color, keeping saturation and lightness"""
    h, s, l = rgb_to_hsl(*rgb)
    return to_hex(hsl_to_rgb((h + degrees) % 360.0, s, l))


def complementary(rgb: RGB) -> str:
    """Opposite hue on the color wheel"""
    return rotate_hue(rgb, 180)


def analogous(rgb: RGB) -> List[str]:
    """Neighbouring hues at +30 and -30 degrees"""
    return [rotate_hue(rgb, 30), rotate_hue(rgb, 330)]

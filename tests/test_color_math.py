"""Tests for RGB/HSL conversion and color-wheel suggestions."""

from __future__ import annotations

import pytest

from stylescan.models.color_math import (
    analogous, complementary, hsl_to_rgb, rgb_to_hsl, round_half_up, to_hex
)


def _hex_to_rgb(value: str) -> tuple[int, int, int]:
    return int(value[1:3], 16), int(value[3:5], 16), int(value[5:7], 16)


def _hue_distance(a: float, b: float) -> float:
    diff = abs(a - b) % 360
    return min(diff, 360 - diff)


def test_primary_red_to_hsl() -> None:
    assert rgb_to_hsl(255, 0, 0) == pytest.approx((0.0, 100.0, 50.0))


def test_achromatic_has_zero_hue_and_saturation() -> None:
    h, s, l = rgb_to_hsl(128, 128, 128)

    assert h == 0
    assert s == 0
    assert l == pytest.approx(50.196, abs=0.01)


@pytest.mark.parametrize(
    "rgb",
    [(0, 0, 0), (255, 255, 255), (12, 200, 77), (250, 128, 114), (17, 34, 51), (99, 0, 180)],
)
def test_hsl_round_trip_within_rounding(rgb) -> None:
    back = hsl_to_rgb(*rgb_to_hsl(*rgb))

    assert all(abs(a - b) <= 1 for a, b in zip(rgb, back))
    assert all(isinstance(c, int) for c in back)


def test_round_half_up() -> None:
    assert round_half_up(2.5) == 3
    assert round_half_up(127.5) == 128
    assert round_half_up(0.49) == 0


def test_to_hex_is_lowercase() -> None:
    assert to_hex((171, 205, 239)) == "#abcdef"


def test_complementary_of_red_is_cyan() -> None:
    assert complementary((255, 0, 0)) == "#00ffff"


def test_gray_suggestions_stay_gray() -> None:
    assert complementary((120, 120, 120)) == "#787878"
    assert analogous((120, 120, 120)) == ["#787878", "#787878"]


def test_analogous_rotates_plus_and_minus_thirty_degrees() -> None:
    base = (30, 60, 200)
    base_h, base_s, base_l = rgb_to_hsl(*base)

    plus, minus = analogous(base)
    plus_h, plus_s, plus_l = rgb_to_hsl(*_hex_to_rgb(plus))
    minus_h, _, _ = rgb_to_hsl(*_hex_to_rgb(minus))

    assert _hue_distance(plus_h, (base_h + 30) % 360) < 1.5
    assert _hue_distance(minus_h, (base_h + 330) % 360) < 1.5
    assert plus_s == pytest.approx(base_s, abs=1.5)
    assert plus_l == pytest.approx(base_l, abs=1.0)

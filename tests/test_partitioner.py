"""Tests for splitting a person mask into upper/lower regions."""

from __future__ import annotations

import numpy as np
import pytest

from stylescan.models.partitioner import partition_person
from stylescan.models.raster import InvalidImageData


def _person(height: int = 60, width: int = 20, rows=(10, 50), cols=(5, 15)) -> np.ndarray:
    flags = np.zeros((height, width), dtype=np.uint8)
    flags[rows[0]:rows[1] + 1, cols[0]:cols[1] + 1] = 1
    return flags


def test_midline_split() -> None:
    partition = partition_person(_person())

    assert partition.found
    assert partition.bbox == (5, 10, 15, 50)
    assert partition.mid_y == 30
    assert partition.upper.included[30, 8]
    assert not partition.lower.included[30, 8]
    assert partition.lower.included[31, 8]
    assert not partition.upper.included[31, 8]


def test_halves_cover_the_person_without_overlap() -> None:
    partition = partition_person(_person())

    upper = partition.upper.included
    lower = partition.lower.included

    assert not (upper & lower).any()
    assert ((upper | lower) == partition.person.included).all()
    assert partition.upper.count == 21 * 11
    assert partition.lower.count == 20 * 11


def test_background_pixels_stay_out() -> None:
    partition = partition_person(_person())

    assert not partition.upper.included[20, 0]
    assert not partition.lower.included[40, 19]


def test_no_foreground_gives_absent_masks() -> None:
    partition = partition_person(np.zeros((8, 8), dtype=np.uint8))

    assert not partition.found
    assert partition.upper is None
    assert partition.lower is None
    assert partition.bbox is None


def test_only_value_one_is_foreground() -> None:
    flags = np.full((4, 4), 2, dtype=np.uint8)

    assert not partition_person(flags).found


def test_flat_flags_with_dimensions() -> None:
    flags = [0, 1, 0,
             0, 1, 0,
             0, 1, 0]

    partition = partition_person(flags, width=3, height=3)

    assert partition.mid_y == 1
    assert partition.upper.included[:, 1].tolist() == [True, True, False]
    assert partition.lower.included[:, 1].tolist() == [False, False, True]


def test_flat_flags_need_dimensions() -> None:
    with pytest.raises(InvalidImageData):
        partition_person([1, 0, 1, 0])


def test_size_mismatch_is_rejected() -> None:
    with pytest.raises(InvalidImageData):
        partition_person(np.ones((3, 3)), width=4, height=3)

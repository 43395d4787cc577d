"""
Splits a person segmentation mask into upper and lower body regions
"""

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from stylescan.models.raster import InvalidImageData, RegionMask

FOREGROUND = 1


@dataclass(frozen=True)
class Partition:
    """Person mask plus its upper/lower halves; masks are None when no person was found"""
    person: Optional[RegionMask]
    upper: Optional[RegionMask]
    lower: Optional[RegionMask]
    bbox: Optional[Tuple[int, int, int, int]] = None  # min_x, min_y, max_x, max_y
    mid_y: Optional[int] = None

    @property
    def found(self) -> bool:
        return self.person is not None


def _as_grid(flags, width: Optional[int], height: Optional[int]) -> np.ndarray:
    flags = np.asarray(flags)

    if flags.ndim == 2 and width is None and height is None:
        return flags

    if width is None or height is None:
        raise InvalidImageData("Flat segmentation flags need an explicit width and height")
    if flags.ndim == 2 and flags.shape != (height, width):
        raise InvalidImageData(f"Segmentation is {flags.shape[1]}x{flags.shape[0]}, expected {width}x{height}")
    if flags.size != width * height:
        raise InvalidImageData(f"Segmentation has {flags.size} flags, expected {width}x{height}")

    return flags.reshape(height, width)


def partition_person(flags, width: Optional[int] = None, height: Optional[int] = None) -> Partition:
    """
    Build person/upper/lower masks from segmentation flags

    The split is at the vertical midline of the person's bounding box, which is
    only a rough stand-in for top vs. bottom garments. Sitting, cropped or
    unusual poses will land garments in the wrong half.

    Args:
        flags: Per-pixel segmentation output, 2D or flat; 1 marks a person pixel
        width: Image width, required for flat input
        height: Image height, required for flat input

    Returns:
        Partition with absent masks when no foreground pixel exists
    """
    grid = _as_grid(flags, width, height)
    rows, cols = grid.shape
    foreground = grid == FOREGROUND

    if not foreground.any():
        return Partition(person=None, upper=None, lower=None)

    ys, xs = np.nonzero(foreground)
    min_y, max_y = int(ys.min()), int(ys.max())
    min_x, max_x = int(xs.min()), int(xs.max())
    mid_y = (min_y + max_y) // 2

    row_index = np.arange(rows).reshape(-1, 1)
    upper = foreground & (row_index <= mid_y)
    lower = foreground & (row_index > mid_y)

    return Partition(
        person=RegionMask(cols, rows, foreground),
        upper=RegionMask(cols, rows, upper),
        lower=RegionMask(cols, rows, lower),
        bbox=(min_x, min_y, max_x, max_y),
        mid_y=mid_y,
    )

import logging
import math
from typing import NamedTuple, Tuple

import numpy as np

logger = logging.getLogger(__name__)


class Color(NamedTuple):
    red: int
    green: int
    blue: int


def as_rgb_grid(grid) -> np.ndarray:
    """
    Returns the grid as a height x width x 3 uint8 array.

    Accepts a numpy array or nested sequences of integers in 0..255. Wider
    integer types are range-checked before the cast so out-of-range values
    raise ValueError instead of wrapping.
    """
    arr = np.asarray(grid)
    if arr.size == 0:
        return arr.astype(np.uint8)
    if arr.ndim != 3 or arr.shape[2] != 3:
        raise ValueError(f"expected a height x width x 3 grid, got shape {arr.shape}")
    if arr.dtype == np.uint8:
        return arr
    if arr.dtype.kind not in "iu":
        raise ValueError(f"expected integer color components, got dtype {arr.dtype}")
    lo, hi = int(arr.min()), int(arr.max())
    if lo < 0 or hi > 255:
        raise ValueError(f"color components must lie in 0..255, got range {lo}..{hi}")
    return arr.astype(np.uint8)


def as_pixel_array(grid) -> np.ndarray:
    """Flat (H*W, 3) uint8 view of the grid in row-major order; (0, 3) when empty."""
    return as_rgb_grid(grid).reshape(-1, 3)


def extract_colors_with_inverse(grid) -> Tuple[Tuple[Color, ...], np.ndarray]:
    """
    Distinct colors of the grid plus, for every pixel, the index of its color.

    Colors come back in ascending (red, green, blue) order; that order is the
    dense index used by the graph and the forest.
    """
    flat = as_pixel_array(grid)
    if len(flat) == 0:
        return (), np.zeros(0, dtype=np.intp)
    unique_cols, inverse = np.unique(flat, axis=0, return_inverse=True)
    colors = tuple(Color(int(r), int(g), int(b)) for r, g, b in unique_cols)
    logger.debug(f"Extracted {len(colors)} distinct colors from {len(flat)} pixels")
    return colors, inverse.reshape(-1)


def extract_colors(grid) -> Tuple[Color, ...]:
    colors, _ = extract_colors_with_inverse(grid)
    return colors


def color_distance(a: Color, b: Color) -> float:
    """Euclidean distance in RGB space."""
    dr = int(a.red) - int(b.red)
    dg = int(a.green) - int(b.green)
    db = int(a.blue) - int(b.blue)
    return math.sqrt(dr * dr + dg * dg + db * db)

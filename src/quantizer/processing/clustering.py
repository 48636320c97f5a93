import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from .colors import Color, as_rgb_grid, extract_colors_with_inverse
from .disjoint_set import DisjointSetForest
from .mst import MSTResult, kruskal

logger = logging.getLogger(__name__)

REPRESENTATIVES = ("mean", "median")


@dataclass
class QuantizeResult:
    image: np.ndarray
    palette: np.ndarray
    labels: List[int]
    colors: Tuple[Color, ...]
    mst: MSTResult


def cut_clusters(mst: MSTResult, colors: Sequence[Color], k: int) -> List[int]:
    """
    Splits the spanning tree into at most `k` clusters.

    The k - 1 heaviest tree edges are dropped; since `mst.edges` is in
    acceptance order, those are the last k - 1 of them. Returns one label per
    color, numbered in order of each cluster's first color.
    """
    if k < 1:
        raise ValueError(f"k must be at least 1, got {k}")
    keep = mst.edges[: max(len(mst.edges) - (k - 1), 0)]

    forest = DisjointSetForest(colors)
    for edge in keep:
        forest.union(forest.find(edge.u), forest.find(edge.v))

    groups = forest.groups()
    index = {color: i for i, color in enumerate(colors)}
    labels = [0] * len(colors)
    for label, members in enumerate(groups):
        for color in members:
            labels[index[color]] = label
    logger.debug(f"Cut {len(mst.edges) - len(keep)} edges into {len(groups)} clusters")
    return labels


def cluster_palette(
    colors: Sequence[Color], labels: Sequence[int], representative: str = "mean"
) -> np.ndarray:
    """
    Representative color of every cluster.

    Returns
    -------
    palette : np.ndarray[K,3] uint8   # row i is the color of cluster i
    """
    if representative not in REPRESENTATIVES:
        raise ValueError(
            f"unknown representative '{representative}', expected one of {REPRESENTATIVES}"
        )
    if not colors:
        return np.zeros((0, 3), dtype=np.uint8)

    cols = np.array(colors, dtype=np.float64).reshape(-1, 3)
    lab = np.asarray(labels)
    reduce = np.mean if representative == "mean" else np.median
    palette = np.array(
        [reduce(cols[lab == c], axis=0) for c in range(int(lab.max()) + 1)]
    )
    return np.clip(np.floor(palette + 0.5), 0, 255).astype(np.uint8)


def recolor(
    arr: np.ndarray, inverse: np.ndarray, labels: Sequence[int], palette: np.ndarray
) -> np.ndarray:
    """Replaces every pixel of `arr` with the palette entry of its color's cluster."""
    if len(inverse) == 0:
        return arr.copy()
    pixel_labels = np.asarray(labels, dtype=np.intp)[inverse]
    return palette[pixel_labels].reshape(arr.shape)


def quantize(grid, k: int, representative: str = "mean") -> QuantizeResult:
    """
    Reduces the grid to at most `k` colors.

    Builds the MST over the distinct colors, cuts it into clusters and
    replaces every pixel with its cluster's representative.
    """
    if k < 1:
        raise ValueError(f"k must be at least 1, got {k}")
    arr = as_rgb_grid(grid)
    colors, inverse = extract_colors_with_inverse(arr)
    mst = kruskal(colors)
    labels = cut_clusters(mst, colors, k)
    palette = cluster_palette(colors, labels, representative)

    image = recolor(arr, inverse, labels, palette)
    logger.info(f"Quantized {len(colors)} colors down to {len(palette)}")
    return QuantizeResult(image, palette, labels, colors, mst)

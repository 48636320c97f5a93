import logging
from typing import Iterable, Iterator, List, NamedTuple, Sequence, Tuple

import numpy as np

from .colors import Color, color_distance

logger = logging.getLogger(__name__)


class Edge(NamedTuple):
    u: Color
    v: Color
    weight: float


def edge_count(n_colors: int) -> int:
    return n_colors * (n_colors - 1) // 2 if n_colors > 1 else 0


def iter_edges(colors: Sequence[Color]) -> Iterator[Edge]:
    """
    Lazily yields every unordered pair of the complete graph exactly once.

    Pairs come out as (colors[i], colors[j]) with i < j, in row-major order.
    """
    n = len(colors)
    for i in range(n):
        a = colors[i]
        for j in range(i + 1, n):
            b = colors[j]
            yield Edge(a, b, color_distance(a, b))


def edge_arrays(colors: Sequence[Color]) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Vectorised complete graph over the colors.

    Returns
    -------
    rows, cols : np.ndarray[M]   # dense endpoint indices, rows < cols
    weights    : np.ndarray[M]   # float64 Euclidean distances
    """
    n = len(colors)
    if n < 2:
        empty = np.zeros(0, dtype=np.intp)
        return empty, empty.copy(), np.zeros(0, dtype=np.float64)

    palette = np.array(colors, dtype=np.int32).reshape(-1, 3)
    rows, cols = np.triu_indices(n, k=1)
    diff = palette[rows] - palette[cols]
    # squared sums fit easily in int32 (max 3 * 255**2), sqrt in float64
    weights = np.sqrt(np.sum(diff * diff, axis=1).astype(np.float64))
    return rows, cols, weights


def order_edges(colors: Sequence[Color]) -> Iterator[Edge]:
    """
    Yields all edges of the complete graph by ascending weight.

    Equal weights are ordered by the dense indices of their endpoints, which
    for an extracted color set is the (red, green, blue) order of the colors,
    so the sequence is identical from run to run.
    """
    rows, cols, weights = edge_arrays(colors)
    order = np.lexsort((cols, rows, weights))
    logger.debug(f"Sorted {len(order)} edges over {len(colors)} colors")
    for idx in order:
        i, j = int(rows[idx]), int(cols[idx])
        yield Edge(colors[i], colors[j], float(weights[idx]))


def sort_edges(edges: Iterable[Edge]) -> List[Edge]:
    """Orders arbitrary edges by (weight, u, v)."""
    return sorted(edges, key=lambda e: (e.weight, e.u, e.v))

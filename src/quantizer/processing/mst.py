import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from .colors import Color, extract_colors
from .disjoint_set import DisjointSetForest
from .graph import Edge, order_edges

logger = logging.getLogger(__name__)


@dataclass
class MSTResult:
    edges: List[Edge] = field(default_factory=list)
    total_weight: float = 0.0
    color_count: int = 0


def kruskal(
    colors: Sequence[Color], edges: Optional[Iterable[Edge]] = None
) -> MSTResult:
    """
    Minimum spanning tree of the complete graph over `colors`.

    Args:
        colors: The distinct colors; every edge endpoint must be one of them.
        edges: Edges in ascending weight order. Defaults to the complete graph
            as produced by `order_edges`.

    Returns:
        MSTResult with exactly len(colors) - 1 edges (none for 0 or 1 colors),
        listed in the order they were accepted.
    """
    n = len(colors)
    if n <= 1:
        return MSTResult(color_count=n)

    if edges is None:
        edges = order_edges(colors)

    forest = DisjointSetForest(colors)
    accepted: List[Edge] = []
    total = 0.0
    needed = n - 1
    for edge in edges:
        ru = forest.find(edge.u)
        rv = forest.find(edge.v)
        if ru == rv:
            continue
        accepted.append(edge)
        total += edge.weight
        forest.union(ru, rv)
        if len(accepted) == needed:
            break

    if len(accepted) != needed:
        raise RuntimeError(
            f"edge sequence left {forest.group_count} groups; "
            f"accepted {len(accepted)} of {needed} edges"
        )

    logger.debug(f"MST over {n} colors: {len(accepted)} edges, weight {total:.4f}")
    return MSTResult(edges=accepted, total_weight=total, color_count=n)


def minimum_spanning_tree(grid) -> MSTResult:
    return kruskal(extract_colors(grid))


def mst_total_weight(grid) -> float:
    return minimum_spanning_tree(grid).total_weight

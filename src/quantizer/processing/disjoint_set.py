from typing import Dict, Iterable, List

from .colors import Color


class DisjointSetForest:
    """
    Union-find over a fixed set of colors.

    Colors are mapped to dense indices once; parent and rank live in plain
    lists indexed by those. `find` is iterative with full path compression and
    `union` merges by rank. Looking up a color that was never registered
    raises KeyError.
    """

    def __init__(self, colors: Iterable[Color]):
        self._colors: List[Color] = []
        self._index: Dict[Color, int] = {}
        for color in colors:
            if color in self._index:
                continue
            self._index[color] = len(self._colors)
            self._colors.append(color)
        self._parent: List[int] = list(range(len(self._colors)))
        self._rank: List[int] = [0] * len(self._colors)
        self._groups = len(self._colors)

    def __len__(self) -> int:
        return len(self._colors)

    def __contains__(self, color) -> bool:
        return color in self._index

    @property
    def group_count(self) -> int:
        return self._groups

    def _find_index(self, i: int) -> int:
        parent = self._parent
        root = i
        while parent[root] != root:
            root = parent[root]
        # point every node on the path straight at the root
        while parent[i] != root:
            parent[i], i = root, parent[i]
        return root

    def find(self, color: Color) -> Color:
        return self._colors[self._find_index(self._index[color])]

    def union(self, a: Color, b: Color) -> None:
        """
        Merges the groups whose representatives are `a` and `b`.

        Both arguments must be roots, as returned by `find`. With equal ranks
        `a` becomes the new root.
        """
        ra, rb = self._index[a], self._index[b]
        if self._parent[ra] != ra or self._parent[rb] != rb:
            raise ValueError(f"union expects representatives, got {a} and {b}")
        if ra == rb:
            return
        if self._rank[ra] < self._rank[rb]:
            self._parent[ra] = rb
        elif self._rank[ra] > self._rank[rb]:
            self._parent[rb] = ra
        else:
            self._parent[rb] = ra
            self._rank[ra] += 1
        self._groups -= 1

    def rank(self, color: Color) -> int:
        return self._rank[self._index[color]]

    def groups(self) -> List[List[Color]]:
        """Groups in order of their first member's index."""
        by_root: Dict[int, List[Color]] = {}
        for i, color in enumerate(self._colors):
            by_root.setdefault(self._find_index(i), []).append(color)
        return list(by_root.values())

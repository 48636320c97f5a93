"""Tests for the Kruskal MST over an image's distinct colors."""

import itertools
import math

import numpy as np
import pytest

from quantizer.processing.colors import Color, color_distance, extract_colors
from quantizer.processing.disjoint_set import DisjointSetForest
from quantizer.processing.graph import Edge, iter_edges, sort_edges
from quantizer.processing.mst import (
    MSTResult,
    kruskal,
    minimum_spanning_tree,
    mst_total_weight,
)


def random_colors(n: int, seed: int) -> tuple:
    rng = np.random.default_rng(seed)
    colors = set()
    while len(colors) < n:
        colors.add(Color(*(int(c) for c in rng.integers(0, 256, 3))))
    return tuple(sorted(colors))


def grid_of(colors, height=3, width=4, seed=0) -> np.ndarray:
    """Grid that uses every color at least once."""
    rng = np.random.default_rng(seed)
    palette = np.array(colors, dtype=np.uint8).reshape(-1, 3)
    picks = rng.integers(0, len(colors), height * width)
    picks[: len(colors)] = np.arange(len(colors))
    return palette[picks].reshape(height, width, 3)


def is_spanning_tree(colors, edges) -> bool:
    forest = DisjointSetForest(colors)
    for e in edges:
        ru, rv = forest.find(e.u), forest.find(e.v)
        if ru == rv:
            return False
        forest.union(ru, rv)
    return forest.group_count == 1


def brute_force_mst_weight(colors) -> float:
    edges = list(iter_edges(colors))
    best = math.inf
    for subset in itertools.combinations(edges, len(colors) - 1):
        if is_spanning_tree(colors, subset):
            best = min(best, sum(e.weight for e in subset))
    return best


class TestDegenerate:
    def test_no_colors(self):
        result = kruskal(())
        assert result == MSTResult(edges=[], total_weight=0.0, color_count=0)

    def test_empty_grid(self):
        assert mst_total_weight(np.zeros((0, 0, 3), dtype=np.uint8)) == 0.0

    def test_uniform_black_grid(self):
        result = minimum_spanning_tree(np.zeros((6, 6, 3), dtype=np.uint8))
        assert result.color_count == 1
        assert result.edges == []
        assert result.total_weight == 0.0


class TestScenarios:
    def test_black_and_white(self):
        grid = np.zeros((2, 2, 3), dtype=np.uint8)
        grid[0, 1] = grid[1, 0] = 255
        result = minimum_spanning_tree(grid)
        assert result.color_count == 2
        assert len(result.edges) == 1
        assert result.total_weight == math.sqrt(255**2 * 3)
        assert result.total_weight == pytest.approx(441.6729559)

    def test_two_colors_single_edge(self):
        a, b = Color(10, 20, 30), Color(200, 7, 99)
        result = kruskal((a, b))
        assert result.edges == [Edge(a, b, color_distance(a, b))]
        assert result.total_weight == color_distance(a, b)

    def test_right_triangle(self):
        a, b, c = Color(0, 0, 0), Color(3, 0, 0), Color(3, 4, 0)
        result = kruskal((a, b, c))
        assert [e.weight for e in result.edges] == [3.0, 4.0]
        assert result.total_weight == 7.0
        assert all({e.u, e.v} != {a, c} for e in result.edges)


class TestProperties:
    @pytest.mark.parametrize("n", range(0, 9))
    def test_edge_count(self, n):
        colors = random_colors(n, seed=n)
        assert len(kruskal(colors).edges) == max(n - 1, 0)

    @pytest.mark.parametrize("n", range(2, 7))
    @pytest.mark.parametrize("seed", [1, 2, 3])
    def test_minimal_against_brute_force(self, n, seed):
        colors = random_colors(n, seed=100 * seed + n)
        result = kruskal(colors)
        assert result.total_weight == pytest.approx(brute_force_mst_weight(colors))

    @pytest.mark.parametrize("seed", [4, 5, 6])
    def test_deterministic(self, seed):
        grid = grid_of(random_colors(12, seed), height=5, width=5, seed=seed)
        first = minimum_spanning_tree(grid)
        second = minimum_spanning_tree(grid.copy())
        assert first.total_weight == second.total_weight
        assert first.edges == second.edges

    def test_deterministic_with_ties(self):
        # every edge from black has weight 1, and so does every axis step
        colors = extract_colors(
            np.array(
                [[(0, 0, 0), (1, 0, 0), (0, 1, 0)], [(0, 0, 1), (1, 1, 0), (0, 1, 1)]],
                dtype=np.uint8,
            )
        )
        runs = [kruskal(colors).edges for _ in range(3)]
        assert runs[0] == runs[1] == runs[2]
        assert all(e.weight == 1.0 for e in runs[0])

    @pytest.mark.parametrize("n", [2, 5, 9])
    def test_cut_property(self, n):
        colors = random_colors(n, seed=n + 40)
        edges = kruskal(colors).edges
        assert is_spanning_tree(colors, edges)
        for removed in edges:
            forest = DisjointSetForest(colors)
            for e in edges:
                if e is removed:
                    continue
                forest.union(forest.find(e.u), forest.find(e.v))
            assert forest.group_count == 2

    def test_accepts_lazily_sorted_edges(self):
        colors = random_colors(7, seed=11)
        lazy = kruskal(colors, sort_edges(iter_edges(colors)))
        assert lazy == kruskal(colors)

    def test_tolerates_duplicate_edges(self):
        colors = random_colors(5, seed=12)
        doubled = [e for e in iter_edges(colors)] + [
            Edge(e.v, e.u, e.weight) for e in iter_edges(colors)
        ]
        result = kruskal(colors, sorted(doubled, key=lambda e: e.weight))
        assert len(result.edges) == 4
        assert result.total_weight == pytest.approx(kruskal(colors).total_weight)


def test_incomplete_edge_sequence_raises():
    a, b, c = Color(0, 0, 0), Color(1, 1, 1), Color(2, 2, 2)
    with pytest.raises(RuntimeError, match="groups"):
        kruskal((a, b, c), [Edge(a, b, color_distance(a, b))])

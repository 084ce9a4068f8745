"""Comprehensive tests for Conway's Game of Life rules.

Covers the cell rule for every neighbor count, neighbor counting on bounded
grids, and all 512 possible 3x3 neighborhoods through the full-grid step.
"""

import pytest
import numpy as np

from lifeboard.core.conway import ConwayEngine, default_engine
from lifeboard.core.conway_rules import (
    BIRTH_SET,
    SURVIVAL_SET,
    count_live_neighbors,
    neighbor_counts,
    neighborhood_pattern,
    next_cells,
    update_cell,
)
from lifeboard.core.grid import Grid


class TestCellRule:
    """B3/S23 for every (state, count) pair."""

    @pytest.mark.parametrize("neighbors", range(9))
    def test_live_cell(self, neighbors):
        assert update_cell(True, neighbors) is (neighbors in (2, 3))

    @pytest.mark.parametrize("neighbors", range(9))
    def test_dead_cell(self, neighbors):
        assert update_cell(False, neighbors) is (neighbors == 3)

    def test_rule_sets(self):
        assert SURVIVAL_SET == {2, 3}
        assert BIRTH_SET == {3}


class TestNeighborCounting:
    """Test neighborhood analysis functions."""

    def test_neighbor_count_center_cell(self):
        """Center cell is not counted as a neighbor."""
        grid = Grid.from_cells(3, 3, [(1, 1)])
        assert ConwayEngine().count_neighbors(grid, 1, 1) == 0

    def test_neighbor_count_all_around(self):
        """Count all 8 neighbors correctly."""
        cells = np.ones((3, 3), dtype=bool)
        cells[1, 1] = False
        assert count_live_neighbors(cells, 1, 1) == 8

    def test_neighbor_count_boundary_effects(self):
        """Boundary cells have fewer neighbors; nothing wraps around."""
        cells = np.ones((3, 3), dtype=bool)

        assert count_live_neighbors(cells, 0, 0) == 3   # corner
        assert count_live_neighbors(cells, 0, 1) == 5   # edge
        assert count_live_neighbors(cells, 1, 1) == 8   # center

    def test_no_wraparound(self):
        """A live cell on one edge is not a neighbor of the opposite edge."""
        cells = np.zeros((5, 5), dtype=bool)
        cells[0, 2] = True
        assert count_live_neighbors(cells, 4, 2) == 0
        assert neighbor_counts(cells)[4, 2] == 0

    def test_neighbor_count_empty_grid(self):
        """Empty grid has zero neighbors everywhere."""
        assert not neighbor_counts(np.zeros((5, 5), dtype=bool)).any()

    def test_vectorized_matches_per_cell(self):
        """Whole-grid counts agree with the per-cell count and stay in [0, 8]."""
        rng = np.random.default_rng(7)
        for shape in [(1, 1), (1, 6), (6, 1), (5, 7), (12, 12)]:
            cells = rng.random(shape) < 0.5
            counts = neighbor_counts(cells)

            assert counts.shape == shape
            assert counts.min() >= 0
            assert counts.max() <= 8
            for row in range(shape[0]):
                for col in range(shape[1]):
                    assert counts[row, col] == count_live_neighbors(cells, row, col)

    def test_degenerate_shape(self):
        assert neighbor_counts(np.zeros((0, 4), dtype=bool)).shape == (0, 4)


class TestAllNeighborhoods:
    """Exhaustive check over every 3x3 configuration."""

    def test_neighborhood_pattern_layout(self):
        pattern = neighborhood_pattern(True, 0b10000001)
        assert pattern[1, 1]
        assert pattern[0, 0]        # first bit: top-left
        assert pattern[1, 0]        # last bit: left
        assert pattern.sum() == 3

    @pytest.mark.parametrize("center_alive", [False, True])
    def test_all_512_neighborhoods(self, center_alive):
        """Full-grid step agrees with the cell rule for every neighborhood."""
        for mask in range(256):
            pattern = neighborhood_pattern(center_alive, mask)
            live_neighbors = bin(mask).count('1')

            assert count_live_neighbors(pattern, 1, 1) == live_neighbors

            expected = update_cell(center_alive, live_neighbors)
            assert bool(next_cells(pattern)[1, 1]) is expected
            assert default_engine.step(Grid(3, 3, pattern)).get(1, 1) is expected
            assert default_engine.update_cell(Grid(3, 3, pattern), 1, 1) is expected

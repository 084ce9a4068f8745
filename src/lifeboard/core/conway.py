"""Conway's Game of Life rules engine.

Computes single-generation transitions and drives multi-step evolution.
Two termination checks exist and are deliberately different:

* :meth:`ConwayEngine.advance` stops early only on a fixed point (a step
  that leaves the grid unchanged). Oscillators run the full step count.
* :meth:`ConwayEngine.find_final_state` also remembers every state it has
  produced and stops when one recurs, so periodic cycles are caught too.

The engine holds no state between calls and never mutates its inputs.
"""

from dataclasses import dataclass
from typing import Dict, Optional
import logging

from .codec import encode
from .conway_rules import count_live_neighbors, next_cells, update_cell
from .errors import NoFinalStateError
from .grid import Grid

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulationResult:
    """Outcome of a multi-step or final-state run.

    Attributes:
        grid: State reached
        generation: Absolute generation number of ``grid``
        is_final: True if ``grid`` is a fixed point or part of a detected cycle
        steps: Transitions actually executed by this call
        cycle_length: 1 for a fixed point, the period for a detected cycle,
            None when no terminal state was established
    """
    grid: Grid
    generation: int
    is_final: bool
    steps: int = 0
    cycle_length: Optional[int] = None


class ConwayEngine:
    """Conway's Game of Life rules engine.

    Implements the classic cellular automaton rules on bounded grids:
    - Live cell survives with 2-3 neighbors
    - Dead cell becomes alive with exactly 3 neighbors
    - All other cells die/become dead
    """

    def count_neighbors(self, grid: Grid, row: int, col: int) -> int:
        """Count living neighbors of a cell; off-grid neighbors count as dead.

        Returns:
            Number of living neighbors (0-8)
        """
        return count_live_neighbors(grid.cells, row, col)

    def update_cell(self, grid: Grid, row: int, col: int) -> bool:
        """Next state of a single cell."""
        return update_cell(grid.get(row, col), self.count_neighbors(grid, row, col))

    def step(self, grid: Grid) -> Grid:
        """Apply one generation of Conway's rules to the entire grid.

        Args:
            grid: Current grid state (not modified)

        Returns:
            New grid with next generation state. A degenerate grid (zero
            width or height) maps to an equal degenerate grid.

        Raises:
            InvalidGridError: If grid is not a rectangular boolean matrix
        """
        grid = Grid.coerce(grid)
        if grid.is_degenerate():
            return Grid(grid.width, grid.height)
        return Grid(grid.width, grid.height, next_cells(grid.cells))

    def advance(self, grid: Grid, n: int, start_generation: int = 0,
                is_final: bool = False) -> SimulationResult:
        """Apply up to ``n`` steps, stopping early at a fixed point.

        Only period-1 stability ends the run early; an oscillator keeps
        stepping until ``n`` is used up.

        Args:
            grid: Starting state
            n: Maximum number of steps (>= 0)
            start_generation: Generation number of ``grid``
            is_final: Whether ``grid`` is already known to be terminal. A
                terminal grid is returned as-is without recomputation.

        Returns:
            SimulationResult; ``generation`` may be less than
            ``start_generation + n`` when a fixed point is hit first.

        Raises:
            ValueError: If n is negative
        """
        if n < 0:
            raise ValueError(f"Number of iterations must be non-negative, got {n}")

        grid = Grid.coerce(grid)

        if is_final:
            return SimulationResult(grid, start_generation, True, 0, None)

        if n == 0:
            fixed = self.step(grid) == grid
            return SimulationResult(grid, start_generation, fixed, 0, 1 if fixed else None)

        current = grid
        for steps in range(1, n + 1):
            following = self.step(current)
            if following == current:
                logger.debug(f"Fixed point reached at generation {start_generation + steps}")
                return SimulationResult(following, start_generation + steps, True, steps, 1)
            current = following

        return SimulationResult(current, start_generation + n, False, n, None)

    def find_final_state(self, grid: Grid, max_iterations: int, start_generation: int = 0,
                         is_final: bool = False) -> SimulationResult:
        """Step until a fixed point or a repeated state appears.

        Every produced state is remembered by its packed encoding. States
        are compared by exact byte equality, so two different grids can
        never be mistaken for one another.

        Args:
            grid: Starting state
            max_iterations: Maximum number of steps to try (>= 0)
            start_generation: Generation number of ``grid``
            is_final: Whether ``grid`` is already known to be terminal

        Returns:
            SimulationResult with ``is_final=True``

        Raises:
            ValueError: If max_iterations is negative
            NoFinalStateError: If ``max_iterations`` steps pass without a
                fixed point or a recurring state
        """
        if max_iterations < 0:
            raise ValueError(f"max_iterations must be non-negative, got {max_iterations}")

        grid = Grid.coerce(grid)

        if is_final:
            return SimulationResult(grid, start_generation, True, 0, None)

        # encoding -> iteration at which that state was produced
        seen: Dict[bytes, int] = {encode(grid): 0}
        current = grid

        for iteration in range(1, max_iterations + 1):
            following = self.step(current)

            if following == current:
                logger.debug(f"Fixed point found after {iteration} iterations")
                return SimulationResult(following, start_generation + iteration, True, iteration, 1)

            key = encode(following)
            first_seen = seen.get(key)
            if first_seen is not None:
                period = iteration - first_seen
                logger.debug(f"Cycle of period {period} found after {iteration} iterations")
                return SimulationResult(following, start_generation + iteration, True, iteration, period)

            seen[key] = iteration
            current = following

        logger.warning(f"No final state within {max_iterations} iterations "
                       f"({len(seen)} distinct states seen)")
        raise NoFinalStateError(max_iterations, start_generation + max_iterations)


# Singleton instance for convenience
default_engine = ConwayEngine()


def step(grid: Grid) -> Grid:
    """Module-level shortcut for :meth:`ConwayEngine.step`."""
    return default_engine.step(grid)


def advance(grid: Grid, n: int, start_generation: int = 0, is_final: bool = False) -> SimulationResult:
    """Module-level shortcut for :meth:`ConwayEngine.advance`."""
    return default_engine.advance(grid, n, start_generation, is_final)


def find_final_state(grid: Grid, max_iterations: int, start_generation: int = 0,
                     is_final: bool = False) -> SimulationResult:
    """Module-level shortcut for :meth:`ConwayEngine.find_final_state`."""
    return default_engine.find_final_state(grid, max_iterations, start_generation, is_final)

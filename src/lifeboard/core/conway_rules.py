"""
Conway's Game of Life Rules (B3/S23)

Cell-level rule and neighbor counting on bounded grids. Cells outside the
grid are permanently dead; there is no wraparound.
"""

from typing import FrozenSet
import numpy as np


# Standard Conway rules
SURVIVAL_SET: FrozenSet[int] = frozenset({2, 3})  # Live cells survive with 2-3 neighbors
BIRTH_SET: FrozenSet[int] = frozenset({3})        # Dead cells born with exactly 3 neighbors

# Moore neighborhood offsets (row, col), clockwise from top-left
NEIGHBOR_OFFSETS = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, 1),
    (1, 1), (1, 0), (1, -1),
    (0, -1),
)


def update_cell(alive: bool, live_neighbors: int) -> bool:
    """Apply Conway's rules to determine next cell state.

    Args:
        alive: Current cell state (True=alive, False=dead)
        live_neighbors: Number of live neighbors (0-8)

    Returns:
        Next cell state (True=alive, False=dead)
    """
    if alive:
        return live_neighbors in SURVIVAL_SET
    else:
        return live_neighbors in BIRTH_SET


def count_live_neighbors(cells: np.ndarray, row: int, col: int) -> int:
    """Count live neighbors of cell at (row, col) using Moore neighborhood.

    Args:
        cells: 2D boolean numpy array
        row: Cell row index
        col: Cell column index

    Returns:
        Number of live neighbors (0-8)
    """
    height, width = cells.shape
    count = 0

    for dr, dc in NEIGHBOR_OFFSETS:
        nr, nc = row + dr, col + dc

        # Out-of-bounds neighbors are dead
        if 0 <= nr < height and 0 <= nc < width and cells[nr, nc]:
            count += 1

    return count


def neighbor_counts(cells: np.ndarray) -> np.ndarray:
    """Live-neighbor count for every cell at once.

    Pads the grid with a ring of dead cells and sums the eight shifted views.

    Args:
        cells: 2D boolean numpy array of shape (H, W)

    Returns:
        uint8 array of shape (H, W) with values in [0, 8]
    """
    height, width = cells.shape
    padded = np.pad(cells.astype(np.uint8), 1, mode='constant')

    counts = np.zeros((height, width), dtype=np.uint8)
    for dr, dc in NEIGHBOR_OFFSETS:
        counts += padded[1 + dr:1 + dr + height, 1 + dc:1 + dc + width]
    return counts


def next_cells(cells: np.ndarray) -> np.ndarray:
    """Apply B3/S23 to a whole boolean array, returning a new array."""
    counts = neighbor_counts(cells)
    survive = cells & ((counts == 2) | (counts == 3))
    born = ~cells & (counts == 3)
    return survive | born


def neighborhood_pattern(center_alive: bool, neighbors_mask: int) -> np.ndarray:
    """Build a 3x3 boolean neighborhood for a given configuration.

    Args:
        center_alive: Whether center cell is alive
        neighbors_mask: 8-bit integer, one bit per neighbor clockwise from
            top-left (most significant bit first)

    Returns:
        3x3 boolean numpy array
    """
    pattern = np.zeros((3, 3), dtype=bool)
    pattern[1, 1] = center_alive

    for i, (dr, dc) in enumerate(NEIGHBOR_OFFSETS):
        pattern[1 + dr, 1 + dc] = bool((neighbors_mask >> (7 - i)) & 1)

    return pattern

"""Immutable grid state for Conway's Game of Life.

A Grid wraps a read-only numpy boolean array of shape (height, width).
Cells are addressed as (row, col). Every engine operation produces a fresh
Grid; nothing in this package mutates a Grid after construction.
"""

import numpy as np
from typing import Iterable, Optional, Sequence, Tuple, List
import logging

from .errors import InvalidGridError

logger = logging.getLogger(__name__)


class Grid:
    """2D boolean grid representing one Game of Life state.

    Attributes:
        width: Grid width in cells (columns)
        height: Grid height in cells (rows)
        cells: Read-only 2D numpy boolean array (True=alive, False=dead)
    """

    __slots__ = ('width', 'height', '_cells')

    def __init__(self, width: int, height: int, initial_state: Optional[np.ndarray] = None):
        """Initialize grid with given dimensions.

        Zero-sized (degenerate) shapes are accepted; the engine maps them to
        themselves.

        Args:
            width: Grid width (cells)
            height: Grid height (cells)
            initial_state: Optional boolean array of shape (height, width)

        Raises:
            InvalidGridError: If dimensions are negative or initial_state
                has the wrong shape or dtype
        """
        if width < 0 or height < 0:
            raise InvalidGridError(f"Grid dimensions must be non-negative, got {width}x{height}")

        if initial_state is not None:
            initial_state = np.asarray(initial_state)
            if initial_state.shape != (height, width):
                raise InvalidGridError(
                    f"Initial state shape {initial_state.shape} doesn't match grid size {(height, width)}"
                )
            if initial_state.dtype != bool:
                raise InvalidGridError("Initial state must be boolean array")
            cells = initial_state.copy()
        else:
            cells = np.zeros((height, width), dtype=bool)

        cells.setflags(write=False)
        self.width = width
        self.height = height
        self._cells = cells

    @classmethod
    def from_array(cls, array: np.ndarray) -> 'Grid':
        """Create grid from a 2D array of truthy values.

        Raises:
            InvalidGridError: If the array is not two-dimensional
        """
        array = np.asarray(array)
        if array.ndim != 2:
            raise InvalidGridError(f"Grid must be two-dimensional, got {array.ndim} dimensions")
        height, width = array.shape
        return cls(width, height, array.astype(bool))

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[bool]]) -> 'Grid':
        """Create grid from nested row sequences.

        Args:
            rows: Sequence of rows, each a sequence of booleans

        Raises:
            InvalidGridError: If rows differ in length, a row is not a
                sequence, or a cell is not a scalar
        """
        checked = []
        for index, row in enumerate(rows):
            if isinstance(row, (str, bytes)) or not isinstance(row, (list, tuple, np.ndarray)):
                raise InvalidGridError(
                    f"Row {index} is {type(row).__name__}, expected a sequence of cells (grid must be 2D)"
                )
            if isinstance(row, np.ndarray) and row.ndim != 1:
                raise InvalidGridError(f"Row {index} has {row.ndim} dimensions (grid must be 2D)")
            for cell in row:
                if isinstance(cell, (list, tuple, np.ndarray, str, bytes)):
                    raise InvalidGridError(f"Row {index} contains a non-scalar cell (grid must be 2D)")
            checked.append(list(row))

        rows = checked
        height = len(rows)
        width = len(rows[0]) if rows else 0

        for index, row in enumerate(rows):
            if len(row) != width:
                raise InvalidGridError(
                    f"Row {index} has {len(row)} cells, expected {width} (grid must be rectangular)"
                )

        state = np.array([[bool(cell) for cell in row] for row in rows], dtype=bool)
        return cls(width, height, state.reshape(height, width))

    @classmethod
    def from_cells(cls, width: int, height: int, alive: Iterable[Tuple[int, int]]) -> 'Grid':
        """Create grid with the given (row, col) cells alive."""
        state = np.zeros((height, width), dtype=bool)
        for row, col in alive:
            if not (0 <= row < height and 0 <= col < width):
                raise InvalidGridError(f"Cell ({row}, {col}) out of bounds for {width}x{height} grid")
            state[row, col] = True
        return cls(width, height, state)

    @classmethod
    def empty(cls, width: int, height: int) -> 'Grid':
        """Create an all-dead grid."""
        return cls(width, height)

    @classmethod
    def coerce(cls, value) -> 'Grid':
        """Return value as a Grid, converting arrays and nested lists."""
        if isinstance(value, Grid):
            return value
        if isinstance(value, np.ndarray):
            return cls.from_array(value)
        if isinstance(value, (list, tuple)):
            return cls.from_rows(value)
        raise InvalidGridError(f"Cannot build a grid from {type(value).__name__}")

    @property
    def cells(self) -> np.ndarray:
        """Read-only view of the cell states."""
        return self._cells

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.height, self.width)

    def get(self, row: int, col: int) -> bool:
        """Get cell state at coordinates.

        Raises:
            IndexError: If coordinates are out of bounds
        """
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise IndexError(f"Cell ({row}, {col}) out of bounds for {self.width}x{self.height} grid")
        return bool(self._cells[row, col])

    def with_cell(self, row: int, col: int, alive: bool) -> 'Grid':
        """Return a copy of this grid with one cell changed."""
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise IndexError(f"Cell ({row}, {col}) out of bounds for {self.width}x{self.height} grid")
        state = self._cells.copy()
        state[row, col] = alive
        return Grid(self.width, self.height, state)

    def to_rows(self) -> List[List[bool]]:
        """Plain nested-list form, suitable for JSON."""
        return self._cells.tolist()

    def live_cells(self) -> List[Tuple[int, int]]:
        """Sorted (row, col) coordinates of alive cells."""
        rows, cols = np.nonzero(self._cells)
        return [(int(r), int(c)) for r, c in zip(rows, cols)]

    def count_alive(self) -> int:
        """Count total number of alive cells."""
        return int(np.count_nonzero(self._cells))

    def density(self) -> float:
        """Get fraction of cells that are alive."""
        total = self.width * self.height
        if total == 0:
            return 0.0
        return self.count_alive() / total

    def is_empty(self) -> bool:
        """Check if all cells are dead."""
        return not np.any(self._cells)

    def is_degenerate(self) -> bool:
        """True for a grid with no cells at all."""
        return self.width == 0 or self.height == 0

    def __getitem__(self, key: Tuple[int, int]) -> bool:
        """Access cell state using grid[row, col] syntax."""
        row, col = key
        return self.get(row, col)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (self.width == other.width and
                self.height == other.height and
                np.array_equal(self._cells, other._cells))

    def __hash__(self) -> int:
        return hash((self.width, self.height, self._cells.tobytes()))

    def __str__(self) -> str:
        """Rows of '#' (alive) and '.' (dead)."""
        return '\n'.join(
            ''.join('#' if cell else '.' for cell in row)
            for row in self._cells
        )

    def __repr__(self) -> str:
        return f"Grid({self.width}x{self.height}, alive={self.count_alive()})"

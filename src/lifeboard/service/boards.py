"""Board management on top of the simulation core.

Loads stored boards, asks the engine for the next, n-th or final state and
stores each result as a new record. A board already marked final is never
recomputed; it is returned as stored.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence
import logging

from ..config import Settings
from ..core.conway import ConwayEngine, default_engine
from ..core.errors import BoardNotFoundError, BoardProcessingError, InvalidGridError, NoFinalStateError
from ..core.grid import Grid
from .repository import BoardRecord, InMemoryBoardRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BoardView:
    """Decoded board state as presented to clients."""
    id: int
    state: List[List[bool]]
    width: int
    height: int
    generation: int
    created_at: Optional[datetime]
    updated_at: Optional[datetime]
    final_state: bool
    live_cell_count: int


class BoardService:
    """Create boards and compute their future states."""

    def __init__(self, repository: Optional[InMemoryBoardRepository] = None,
                 engine: Optional[ConwayEngine] = None,
                 settings: Optional[Settings] = None):
        self.repository = repository if repository is not None else InMemoryBoardRepository()
        self.engine = engine if engine is not None else default_engine
        self.settings = settings if settings is not None else Settings()

    def create_board(self, initial_state: Sequence[Sequence[bool]]) -> BoardView:
        """Store a new board at generation 0.

        Raises:
            InvalidGridError: If the state is empty, ragged or larger than
                the configured maximum dimension
        """
        grid = Grid.from_rows(initial_state)
        self._validate_new_grid(grid)

        saved = self.repository.save(BoardRecord.from_grid(grid, generation=0, final_state=False))
        logger.info(f"Created board {saved.id} ({grid.width}x{grid.height}, {grid.count_alive()} alive)")
        return self.to_response(saved)

    def get_board(self, board_id: int) -> BoardView:
        return self.to_response(self._find(board_id))

    def get_next_state(self, board_id: int) -> BoardView:
        """Compute and store the generation after the given board."""
        board = self._find(board_id)
        if board.final_state:
            return self.to_response(board)

        current = board.grid
        following = self.engine.step(current)

        saved = self.repository.save(BoardRecord.from_grid(
            following,
            generation=board.generation + 1,
            final_state=following == current,
        ))
        logger.info(f"Board {board_id} -> board {saved.id} at generation {saved.generation}")
        return self.to_response(saved)

    def get_state_after_iterations(self, board_id: int, iterations: int) -> BoardView:
        """Compute and store the state ``iterations`` generations ahead.

        Stops early if a fixed point is reached first; the stored generation
        then reflects the steps actually taken.

        Raises:
            ValueError: If iterations is negative or above the configured
                iteration cap
        """
        if iterations < 0:
            raise ValueError("Number of iterations must be non-negative")
        if iterations > self.settings.max_iterations:
            raise ValueError(
                f"Number of iterations must not exceed {self.settings.max_iterations}, got {iterations}"
            )

        board = self._find(board_id)
        if iterations == 0 or board.final_state:
            return self.to_response(board)

        result = self.engine.advance(board.grid, iterations, start_generation=board.generation)
        saved = self.repository.save(BoardRecord.from_grid(
            result.grid, generation=result.generation, final_state=result.is_final,
        ))
        logger.info(f"Board {board_id} advanced {result.steps} steps -> board {saved.id} "
                    f"(generation {saved.generation}, final={saved.final_state})")
        return self.to_response(saved)

    def get_final_state(self, board_id: int) -> BoardView:
        """Search for a fixed point or cycle and store the state found.

        Raises:
            BoardProcessingError: If no final state appears within the
                configured iteration cap
        """
        board = self._find(board_id)
        if board.final_state:
            return self.to_response(board)

        max_iterations = self.settings.max_iterations
        try:
            result = self.engine.find_final_state(
                board.grid, max_iterations, start_generation=board.generation,
            )
        except NoFinalStateError as e:
            logger.warning(f"Board {board_id}: {e}")
            raise BoardProcessingError(
                f"Could not determine final state within {max_iterations} iterations", cause=e
            ) from e

        saved = self.repository.save(BoardRecord.from_grid(
            result.grid, generation=result.generation, final_state=True,
        ))
        logger.info(f"Board {board_id} final state stored as board {saved.id} "
                    f"(generation {saved.generation}, period {result.cycle_length})")
        return self.to_response(saved)

    def to_response(self, record: BoardRecord) -> BoardView:
        grid = record.grid
        return BoardView(
            id=record.id,
            state=grid.to_rows(),
            width=record.width,
            height=record.height,
            generation=record.generation,
            created_at=record.created_at,
            updated_at=record.updated_at,
            final_state=record.final_state,
            live_cell_count=grid.count_alive(),
        )

    def _find(self, board_id: int) -> BoardRecord:
        record = self.repository.get(board_id)
        if record is None:
            raise BoardNotFoundError(board_id)
        return record

    def _validate_new_grid(self, grid: Grid) -> None:
        if grid.is_degenerate():
            raise InvalidGridError("Board must have at least one row and one column")

        limit = self.settings.max_dimension
        if grid.width > limit or grid.height > limit:
            raise InvalidGridError(
                f"Board {grid.width}x{grid.height} exceeds maximum dimension {limit}"
            )

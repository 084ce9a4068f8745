"""Board record storage.

Records are immutable once saved: every computed generation is stored as a
new record with its own id, leaving earlier states retrievable.
"""

import itertools
import threading
from collections import OrderedDict
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Dict, Optional
import logging

from ..core.codec import StateRecord, decode, encode
from ..core.grid import Grid

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BoardRecord:
    """A persisted board state.

    ``id`` and the timestamps are assigned by the repository on save.
    """
    width: int
    height: int
    state_data: bytes
    generation: int = 0
    final_state: bool = False
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_grid(cls, grid: Grid, generation: int = 0, final_state: bool = False) -> 'BoardRecord':
        return cls(grid.width, grid.height, encode(grid), generation, final_state)

    @property
    def grid(self) -> Grid:
        """Decoded cell state."""
        return decode(self.state_data, self.width, self.height)

    def to_state_record(self) -> StateRecord:
        return StateRecord(self.width, self.height, self.generation, self.final_state, self.state_data)


class InMemoryBoardRepository:
    """Thread-safe in-process board store with sequential integer ids."""

    def __init__(self):
        self._records: Dict[int, BoardRecord] = OrderedDict()
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def save(self, record: BoardRecord) -> BoardRecord:
        """Store a record, assigning an id and timestamps if absent.

        Returns:
            The stored record
        """
        now = datetime.now()
        with self._lock:
            board_id = record.id if record.id is not None else next(self._ids)
            stored = replace(
                record,
                id=board_id,
                created_at=record.created_at or now,
                updated_at=now,
            )
            self._records[board_id] = stored

        logger.debug(f"Saved board {board_id} (generation {stored.generation}, final={stored.final_state})")
        return stored

    def get(self, board_id: int) -> Optional[BoardRecord]:
        with self._lock:
            return self._records.get(board_id)

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __contains__(self, board_id: int) -> bool:
        with self._lock:
            return board_id in self._records

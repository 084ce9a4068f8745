"""Board storage and management."""

from .boards import BoardService, BoardView
from .repository import BoardRecord, InMemoryBoardRepository

__all__ = [
    'BoardService',
    'BoardView',
    'BoardRecord',
    'InMemoryBoardRepository',
]

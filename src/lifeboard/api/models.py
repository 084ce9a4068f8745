"""Request and response bodies for the HTTP API."""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..service.boards import BoardView


class BoardRequest(BaseModel):
    """Initial state for a new board (True = live cell)."""
    model_config = ConfigDict(populate_by_name=True)

    initial_state: List[List[bool]] = Field(alias='initialState')
    name: Optional[str] = None

    @field_validator('initial_state')
    @classmethod
    def check_rectangular(cls, rows: List[List[bool]]) -> List[List[bool]]:
        if len(rows) == 0:
            raise ValueError("Board must have at least one row")
        width = len(rows[0])
        if width == 0:
            raise ValueError("Board must have at least one column")
        for index, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(f"Row {index} has {len(row)} cells, expected {width}")
        return rows


class BoardResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    state: List[List[bool]]
    width: int
    height: int
    generation: int
    created_at: Optional[datetime] = Field(default=None, alias='createdAt')
    updated_at: Optional[datetime] = Field(default=None, alias='updatedAt')
    final_state: bool = Field(alias='finalState')
    live_cell_count: int = Field(alias='liveCellCount')

    @classmethod
    def from_view(cls, view: BoardView) -> 'BoardResponse':
        return cls(
            id=view.id,
            state=view.state,
            width=view.width,
            height=view.height,
            generation=view.generation,
            created_at=view.created_at,
            updated_at=view.updated_at,
            final_state=view.final_state,
            live_cell_count=view.live_cell_count,
        )


class ErrorResponse(BaseModel):
    status: int
    message: str
    timestamp: datetime
    errors: Optional[Dict[str, str]] = None

"""FastAPI application exposing board operations over HTTP.

Routes:
    POST /boards                              create a board
    GET  /boards/{id}                         fetch a stored board
    GET  /boards/{id}/next                    next generation
    GET  /boards/{id}/iterate/{iterations}    state n generations ahead
    GET  /boards/{id}/final                   fixed point or cycle state
"""

from datetime import datetime
from typing import Dict, Optional
import logging

from fastapi import APIRouter, Depends, FastAPI, Path, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..config import Settings
from ..core.errors import BoardNotFoundError, BoardProcessingError, InvalidGridError
from ..service.boards import BoardService
from .models import BoardRequest, BoardResponse, ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix='/boards', tags=['boards'])


def get_service(request: Request) -> BoardService:
    return request.app.state.board_service


def _error(status_code: int, message: str, errors: Optional[Dict[str, str]] = None) -> JSONResponse:
    body = ErrorResponse(status=status_code, message=message, timestamp=datetime.now(), errors=errors)
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body, exclude_none=True),
    )


@router.post('', status_code=status.HTTP_201_CREATED, response_model=BoardResponse)
def create_board(body: BoardRequest, service: BoardService = Depends(get_service)) -> BoardResponse:
    return BoardResponse.from_view(service.create_board(body.initial_state))


@router.get('/{board_id}', response_model=BoardResponse)
def get_board(board_id: int, service: BoardService = Depends(get_service)) -> BoardResponse:
    return BoardResponse.from_view(service.get_board(board_id))


@router.get('/{board_id}/next', response_model=BoardResponse)
def get_next_state(board_id: int, service: BoardService = Depends(get_service)) -> BoardResponse:
    return BoardResponse.from_view(service.get_next_state(board_id))


@router.get('/{board_id}/iterate/{iterations}', response_model=BoardResponse)
def get_state_after_iterations(board_id: int,
                               iterations: int = Path(..., ge=1),
                               service: BoardService = Depends(get_service)) -> BoardResponse:
    return BoardResponse.from_view(service.get_state_after_iterations(board_id, iterations))


@router.get('/{board_id}/final', response_model=BoardResponse)
def get_final_state(board_id: int, service: BoardService = Depends(get_service)) -> BoardResponse:
    return BoardResponse.from_view(service.get_final_state(board_id))


def _register_error_handlers(app: FastAPI) -> None:

    @app.exception_handler(BoardNotFoundError)
    async def handle_not_found(request: Request, exc: BoardNotFoundError) -> JSONResponse:
        return _error(status.HTTP_404_NOT_FOUND, str(exc))

    @app.exception_handler(BoardProcessingError)
    async def handle_processing(request: Request, exc: BoardProcessingError) -> JSONResponse:
        logger.error(f"Board processing failed: {exc}")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))

    @app.exception_handler(InvalidGridError)
    async def handle_invalid_grid(request: Request, exc: InvalidGridError) -> JSONResponse:
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(ValueError)
    async def handle_value_error(request: Request, exc: ValueError) -> JSONResponse:
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(RequestValidationError)
    async def handle_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = {}
        for error in exc.errors():
            field = '.'.join(str(part) for part in error.get('loc', ()) if part != 'body')
            errors[field or 'body'] = error.get('msg', 'invalid value')
        return _error(status.HTTP_400_BAD_REQUEST, "Validation error", errors)


def create_app(service: Optional[BoardService] = None, settings: Optional[Settings] = None) -> FastAPI:
    """Build the application.

    Args:
        service: Board service to use; a fresh in-memory one by default
        settings: Settings for a default service; read from the
            environment when omitted
    """
    if service is None:
        service = BoardService(settings=settings or Settings.from_env())

    app = FastAPI(title="lifeboard", description="Conway's Game of Life board service")
    app.state.board_service = service
    app.include_router(router)
    _register_error_handlers(app)
    return app

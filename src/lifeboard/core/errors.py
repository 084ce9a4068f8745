"""Exception hierarchy for the lifeboard simulation core and board service."""

from typing import Optional


class LifeboardError(Exception):
    """Base class for all lifeboard errors."""


class MalformedStateError(LifeboardError, ValueError):
    """Persisted state could not be decoded (bad dimensions or short header)."""


class InvalidGridError(LifeboardError, ValueError):
    """Grid input is not a rectangular 2D boolean matrix."""


class NoFinalStateError(LifeboardError):
    """Final-state search hit its iteration cap without a fixed point or cycle.

    Attributes:
        max_iterations: The iteration cap that was exhausted
        generation: Absolute generation reached when the search gave up
    """

    def __init__(self, max_iterations: int, generation: int):
        self.max_iterations = max_iterations
        self.generation = generation
        super().__init__(
            f"No fixed point or cycle found within {max_iterations} iterations "
            f"(stopped at generation {generation})"
        )


class BoardNotFoundError(LifeboardError, KeyError):
    """No stored board has the requested id."""

    def __init__(self, board_id: int):
        self.board_id = board_id
        super().__init__(f"Could not find board with id: {board_id}")

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return self.args[0]


class BoardProcessingError(LifeboardError):
    """A board operation failed to produce a result."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause

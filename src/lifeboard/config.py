"""Runtime configuration read from environment variables."""

import os
from dataclasses import dataclass
import logging

logger = logging.getLogger(__name__)

LOG_LEVELS = ('CRITICAL', 'ERROR', 'WARNING', 'INFO', 'DEBUG')


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    """Service settings.

    Attributes:
        max_iterations: Iteration cap for final-state searches
        max_dimension: Largest accepted board width or height
        host: HTTP bind address
        port: HTTP port
        log_level: Root logging level name
    """
    max_iterations: int = 1000
    max_dimension: int = 512
    host: str = '127.0.0.1'
    port: int = 8000
    log_level: str = 'INFO'

    def __post_init__(self):
        if self.max_iterations < 0:
            raise ValueError("max_iterations must be non-negative")
        if self.max_dimension < 1:
            raise ValueError("max_dimension must be at least 1")
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}")

    @classmethod
    def from_env(cls) -> 'Settings':
        """Build settings from LIFEBOARD_* environment variables."""
        settings = cls(
            max_iterations=_int_env('LIFEBOARD_MAX_ITERATIONS', 1000),
            max_dimension=_int_env('LIFEBOARD_MAX_DIMENSION', 512),
            host=os.getenv('LIFEBOARD_HOST', '127.0.0.1'),
            port=_int_env('LIFEBOARD_PORT', 8000),
            log_level=os.getenv('LIFEBOARD_LOG_LEVEL', 'INFO').upper(),
        )
        logger.debug(f"Loaded settings: {settings}")
        return settings

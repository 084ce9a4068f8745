#!/usr/bin/env python3
"""Run the lifeboard HTTP service under uvicorn."""

import argparse
import logging
import sys

import uvicorn

from .api.app import create_app
from .config import LOG_LEVELS, Settings
from .service.boards import BoardService

logger = logging.getLogger(__name__)


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Conway's Game of Life board service")
    parser.add_argument("--host", default=settings.host, help="Bind address")
    parser.add_argument("--port", type=int, default=settings.port, help="Bind port")
    parser.add_argument("--max-iterations", type=int, default=settings.max_iterations,
                        help="Iteration cap for final-state searches")
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, default=settings.log_level,
                        help="Logging level")
    return parser


def main(argv=None) -> int:
    try:
        env_settings = Settings.from_env()
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    args = build_parser(env_settings).parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format='%(asctime)s - %(levelname)s - %(message)s')

    settings = Settings(
        max_iterations=args.max_iterations,
        max_dimension=env_settings.max_dimension,
        host=args.host,
        port=args.port,
        log_level=args.log_level.upper(),
    )
    app = create_app(BoardService(settings=settings))

    logger.info(f"Serving on {settings.host}:{settings.port} (max_iterations={settings.max_iterations})")
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())

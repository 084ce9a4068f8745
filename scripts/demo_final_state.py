#!/usr/bin/env python3
"""
Final State Demonstration Script

Runs a few classic patterns through the final-state search and reports how
each one ends: fixed point, oscillator, or no verdict within the cap.
"""

import sys
import os
import json
import logging
from pathlib import Path

# Allow running from a source checkout without installing
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src'))

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

from lifeboard.core import Grid, NoFinalStateError, encode, find_final_state


PATTERNS = {
    "block": [(1, 1), (1, 2), (2, 1), (2, 2)],
    "blinker": [(2, 1), (2, 2), (2, 3)],
    "toad": [(2, 2), (2, 3), (2, 4), (3, 1), (3, 2), (3, 3)],
    "glider": [(0, 1), (1, 2), (2, 0), (2, 1), (2, 2)],
    "r_pentomino": [(0, 1), (0, 2), (1, 0), (1, 1), (2, 1)],
}


def run_pattern(name, cells, size, max_iterations):
    """Search one pattern and return a summary dict."""
    offset = size // 2 - 2 if name != "glider" else 1
    grid = Grid.from_cells(size, size, [(r + offset, c + offset) for r, c in cells])

    logger.info(f"--- {name}: {grid.count_alive()} live cells on {size}x{size} ---")
    try:
        result = find_final_state(grid, max_iterations)
    except NoFinalStateError as e:
        logger.info(f"{name}: no verdict ({e})")
        return {"pattern": name, "final": False, "generation": e.generation}

    kind = "fixed point" if result.cycle_length == 1 else f"period-{result.cycle_length} cycle"
    logger.info(f"{name}: {kind} at generation {result.generation}, "
                f"{result.grid.count_alive()} live cells")
    return {
        "pattern": name,
        "final": True,
        "generation": result.generation,
        "cycle_length": result.cycle_length,
        "live_cells": result.grid.count_alive(),
        "packed_bytes": len(encode(result.grid)),
    }


def run_demo(size=16, max_iterations=200):
    logger.info("=== FINAL STATE DEMONSTRATION ===")
    logger.info(f"Grid size: {size}x{size}, iteration cap: {max_iterations}")
    return [run_pattern(name, cells, size, max_iterations) for name, cells in PATTERNS.items()]


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser(description="Final state search demonstration")
    parser.add_argument("--grid-size", type=int, default=16, help="Grid size (square)")
    parser.add_argument("--max-iterations", type=int, default=200, help="Search iteration cap")
    parser.add_argument("--output", type=Path, help="Write the summary as JSON to this file")

    args = parser.parse_args()

    try:
        results = run_demo(size=args.grid_size, max_iterations=args.max_iterations)
    except Exception as e:
        logger.error(f"Demonstration failed: {e}")
        sys.exit(1)

    if args.output:
        args.output.write_text(json.dumps(results, indent=2))
        logger.info(f"Summary written to: {args.output}")

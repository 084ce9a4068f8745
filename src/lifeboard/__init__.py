"""
lifeboard: Conway's Game of Life boards

Bounded B3/S23 simulation with bit-packed state storage, fixed-point and
cycle detection, and a small HTTP service for managing boards.
"""

from .core import (
    ConwayEngine,
    Grid,
    SimulationResult,
    advance,
    decode,
    encode,
    find_final_state,
    step,
)

__version__ = "0.1.0"

__all__ = [
    'Grid',
    'ConwayEngine',
    'SimulationResult',
    'step',
    'advance',
    'find_final_state',
    'encode',
    'decode',
]

"""
lifeboard simulation core

Grid state, the bit-packed storage codec and the B3/S23 engine.
Everything here is synchronous and stateless between calls.
"""

from .codec import StateRecord, decode, encode, pack_record, packed_size, unpack_record
from .conway import ConwayEngine, SimulationResult, advance, default_engine, find_final_state, step
from .errors import (
    BoardNotFoundError,
    BoardProcessingError,
    InvalidGridError,
    LifeboardError,
    MalformedStateError,
    NoFinalStateError,
)
from .grid import Grid

__all__ = [
    'Grid',
    'StateRecord',
    'encode',
    'decode',
    'packed_size',
    'pack_record',
    'unpack_record',
    'ConwayEngine',
    'SimulationResult',
    'default_engine',
    'step',
    'advance',
    'find_final_state',
    'LifeboardError',
    'MalformedStateError',
    'InvalidGridError',
    'NoFinalStateError',
    'BoardNotFoundError',
    'BoardProcessingError',
]

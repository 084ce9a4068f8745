"""Bit-packed storage encoding for grids.

Cell (r, c) is stored at bit index ``r * width + c``: byte ``index // 8``,
bit ``index % 8`` (least significant bit first). A set bit means alive.
The simulation never works on this form directly; it exists for
persistence and transport.

A persisted board state prefixes the packed cells with a fixed header::

    <width:int32> <height:int32> <generation:int32> <is_final:bool> <data>

all little-endian.
"""

import struct
from dataclasses import dataclass
import logging

import numpy as np

from .errors import MalformedStateError
from .grid import Grid

logger = logging.getLogger(__name__)

RECORD_HEADER = struct.Struct('<iii?')


def packed_size(width: int, height: int) -> int:
    """Number of bytes needed to pack a width x height grid."""
    return (width * height + 7) // 8


def encode(grid: Grid) -> bytes:
    """Pack a grid into ceil(width*height/8) bytes, row-major, LSB first.

    Unused trailing bits of the last byte are zero.
    """
    flat = grid.cells.reshape(-1)
    return np.packbits(flat, bitorder='little').tobytes()


def decode(data: bytes, width: int, height: int) -> Grid:
    """Unpack bytes produced by :func:`encode` back into a Grid.

    Bits beyond the end of ``data`` are treated as dead cells, so truncated
    buffers decode without error. Extra trailing bytes are ignored.

    Args:
        data: Packed cell bytes
        width: Grid width (cells)
        height: Grid height (cells)

    Returns:
        Decoded grid

    Raises:
        MalformedStateError: If width or height is not positive
    """
    if width <= 0 or height <= 0:
        raise MalformedStateError(f"Cannot decode state with dimensions {width}x{height}")

    total = width * height
    needed = packed_size(width, height)
    raw = np.frombuffer(bytes(data[:needed]), dtype=np.uint8)

    if raw.size < needed:
        logger.debug(f"Decoding truncated state: {raw.size} of {needed} bytes present")
        raw = np.concatenate([raw, np.zeros(needed - raw.size, dtype=np.uint8)])

    bits = np.unpackbits(raw, bitorder='little')[:total]
    return Grid(width, height, bits.astype(bool).reshape(height, width))


@dataclass(frozen=True)
class StateRecord:
    """One persisted board state in its on-disk shape."""
    width: int
    height: int
    generation: int
    is_final: bool
    data: bytes

    @classmethod
    def from_grid(cls, grid: Grid, generation: int = 0, is_final: bool = False) -> 'StateRecord':
        return cls(grid.width, grid.height, generation, is_final, encode(grid))

    def to_grid(self) -> Grid:
        return decode(self.data, self.width, self.height)


def pack_record(record: StateRecord) -> bytes:
    """Serialize a state record: fixed header followed by packed cells."""
    header = RECORD_HEADER.pack(record.width, record.height, record.generation, record.is_final)
    return header + bytes(record.data)


def unpack_record(payload: bytes) -> StateRecord:
    """Parse bytes produced by :func:`pack_record`.

    A short cell section is accepted (missing cells decode as dead); a short
    header is not.

    Raises:
        MalformedStateError: On a short header, non-positive dimensions or a
            negative generation
    """
    if len(payload) < RECORD_HEADER.size:
        raise MalformedStateError(
            f"State record needs at least {RECORD_HEADER.size} header bytes, got {len(payload)}"
        )

    width, height, generation, is_final = RECORD_HEADER.unpack_from(payload)
    if width <= 0 or height <= 0:
        raise MalformedStateError(f"State record has invalid dimensions {width}x{height}")
    if generation < 0:
        raise MalformedStateError(f"State record has negative generation {generation}")

    data = bytes(payload[RECORD_HEADER.size:RECORD_HEADER.size + packed_size(width, height)])
    return StateRecord(width, height, generation, is_final, data)

# digipin/grid_systems/__init__.py
"""Hierarchical grid code: constants, encoder and decoder."""

from .exceptions import (
    ErrorKind,
    DigipinError,
    CoordinateOutOfRangeError,
    InvalidCodeLengthError,
    InvalidCodeSymbolError
)
from .symbol_grid import SymbolGrid
from .grid_specification import (
    GridSpecification,
    DIGIPIN,
    ROOT_BOUNDS,
    SYMBOL_GRID
)
from .codec import encode, decode, try_encode, try_decode

__all__ = [
    'ErrorKind',
    'DigipinError',
    'CoordinateOutOfRangeError',
    'InvalidCodeLengthError',
    'InvalidCodeSymbolError',
    'SymbolGrid',
    'GridSpecification',
    'DIGIPIN',
    'ROOT_BOUNDS',
    'SYMBOL_GRID',
    'encode',
    'decode',
    'try_encode',
    'try_decode'
]

"""DIGIPIN encoder and decoder.

Both directions are pure functions over the constants in
``grid_specification``: no I/O, no logging, no shared mutable state. Each
call runs a fixed number of subdivision steps, so they are safe to call
from any number of threads or event-loop tasks at once.
"""

import math

from ..abstractions.types import DecodedLocation, Outcome, Success, Failure
from .exceptions import (
    DigipinError, CoordinateOutOfRangeError,
    InvalidCodeLengthError, InvalidCodeSymbolError
)
from .grid_specification import DIGIPIN, GridSpecification


def _check_axis(axis: str, value: float, low: float, high: float):
    if not math.isfinite(value):
        raise CoordinateOutOfRangeError(axis, value)
    if value < low:
        raise CoordinateOutOfRangeError(axis, value, 'min', low)
    if value > high:
        raise CoordinateOutOfRangeError(axis, value, 'max', high)


def encode(latitude: float, longitude: float, spec: GridSpecification = DIGIPIN) -> str:
    """
    Encode a coordinate into a DIGIPIN code.

    Args:
        latitude: Latitude in decimal degrees
        longitude: Longitude in decimal degrees
        spec: Grid definition (the DIGIPIN constants unless overridden)

    Returns:
        Formatted code, e.g. ``"39J-438-TJC7"``

    Raises:
        CoordinateOutOfRangeError: If either value is non-finite or outside
            the root region. Latitude is checked first.
    """
    root = spec.root
    _check_axis('latitude', latitude, root.min_lat, root.max_lat)
    _check_axis('longitude', longitude, root.min_lon, root.max_lon)

    cell = root
    symbols = []
    for _ in range(spec.levels):
        row, col = cell.cell_index(latitude, longitude, spec.divisions)
        symbols.append(spec.symbols.symbol_at(row, col))
        cell = cell.narrow(row, col, spec.divisions)

    return spec.format_code(''.join(symbols))


def decode(code: str, spec: GridSpecification = DIGIPIN) -> DecodedLocation:
    """
    Decode a DIGIPIN code into its cell and center coordinate.

    Separators are ignored wherever they appear. Symbols are matched
    exactly as the grid defines them.

    Args:
        code: Code with or without separators
        spec: Grid definition

    Returns:
        DecodedLocation with the final cell bounds and its midpoint

    Raises:
        InvalidCodeLengthError: If the code does not hold exactly
            ``spec.levels`` symbols once separators are removed
        InvalidCodeSymbolError: If a character is not in the symbol grid
            (position is 1-based within the stripped code)
    """
    symbols = spec.strip_separators(code)
    if len(symbols) != spec.levels:
        raise InvalidCodeLengthError(code, len(symbols), spec.levels)

    cell = spec.root
    for position, symbol in enumerate(symbols, start=1):
        if symbol not in spec.symbols:
            raise InvalidCodeSymbolError(code, symbol, position)
        row, col = spec.symbols.locate(symbol)
        cell = cell.narrow(row, col, spec.divisions)

    return DecodedLocation(code=spec.format_code(symbols), bounds=cell)


def try_encode(latitude: float, longitude: float,
               spec: GridSpecification = DIGIPIN) -> Outcome[str]:
    """Like ``encode`` but returns ``Success`` or ``Failure`` instead of raising."""
    try:
        return Success(encode(latitude, longitude, spec))
    except DigipinError as e:
        return Failure(e)


def try_decode(code: str, spec: GridSpecification = DIGIPIN) -> Outcome[DecodedLocation]:
    """Like ``decode`` but returns ``Success`` or ``Failure`` instead of raising."""
    try:
        return Success(decode(code, spec))
    except DigipinError as e:
        return Failure(e)

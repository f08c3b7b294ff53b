"""Codec-specific exceptions for better error handling."""

from enum import Enum
from typing import Optional, Dict, Any


class ErrorKind(Enum):
    """Distinct failure kinds reported by the encoder and decoder."""
    COORDINATE_OUT_OF_RANGE = "coordinate_out_of_range"
    INVALID_CODE_LENGTH = "invalid_code_length"
    INVALID_CODE_SYMBOL = "invalid_code_symbol"


class DigipinError(ValueError):
    """Base codec error."""
    kind: ErrorKind

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.details = details or {}


class CoordinateOutOfRangeError(DigipinError):
    """Raised when a latitude or longitude lies outside the root region."""
    kind = ErrorKind.COORDINATE_OUT_OF_RANGE

    def __init__(self, axis: str, value: float, bound: Optional[str] = None,
                 limit: Optional[float] = None):
        if bound is None:
            message = f"{axis.capitalize()} must be a finite number, got {value}"
        else:
            comparison = 'below the minimum' if bound == 'min' else 'above the maximum'
            message = f"{axis.capitalize()} {value} is {comparison} of {limit} for DIGIPIN"
        super().__init__(message, {
            'axis': axis,
            'bound': bound,
            'value': value,
            'limit': limit
        })
        self.axis = axis
        self.bound = bound
        self.value = value
        self.limit = limit


class InvalidCodeLengthError(DigipinError):
    """Raised when a code does not have the expected number of symbols."""
    kind = ErrorKind.INVALID_CODE_LENGTH

    def __init__(self, code: str, length: int, expected: int):
        super().__init__(
            f"Invalid DIGIPIN: expected {expected} characters excluding separators, got {length}",
            {'code': code, 'length': length, 'expected': expected}
        )
        self.length = length
        self.expected = expected


class InvalidCodeSymbolError(DigipinError):
    """Raised when a code contains a character outside the symbol grid."""
    kind = ErrorKind.INVALID_CODE_SYMBOL

    def __init__(self, code: str, symbol: str, position: int):
        super().__init__(
            f"Invalid character '{symbol}' at position {position} in DIGIPIN",
            {'code': code, 'symbol': symbol, 'position': position}
        )
        self.symbol = symbol
        self.position = position

# digipin/abstractions/types/__init__.py
"""Type definitions for the abstractions layer."""

# Grid types
from .grid_types import Coordinate, BoundingBox, DecodedLocation

# Result types
from .result_types import Success, Failure, Outcome

__all__ = [
    'Coordinate',
    'BoundingBox',
    'DecodedLocation',
    'Success',
    'Failure',
    'Outcome'
]

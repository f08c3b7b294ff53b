"""Foundation layer - pure types with no other digipin dependencies."""

from .types import (
    Coordinate, BoundingBox, DecodedLocation,
    Success, Failure, Outcome
)

__all__ = [
    'Coordinate',
    'BoundingBox',
    'DecodedLocation',
    'Success',
    'Failure',
    'Outcome'
]

"""Shared fixtures for grid system tests."""

import pytest

from digipin.abstractions.types import BoundingBox
from digipin.grid_systems import DIGIPIN, ROOT_BOUNDS


@pytest.fixture
def spec():
    """The DIGIPIN grid definition."""
    return DIGIPIN


@pytest.fixture
def root_bounds():
    return ROOT_BOUNDS


@pytest.fixture
def unit_box():
    """A 4x4-degree box so every sub-cell is exactly one degree."""
    return BoundingBox(min_lat=0.0, max_lat=4.0, min_lon=10.0, max_lon=14.0)


@pytest.fixture
def interior_points():
    """Deterministic spread of points inside the root region."""
    points = []
    for i in range(12):
        for j in range(12):
            lat = 2.5 + 36.0 * (i + 0.37) / 12
            lon = 63.5 + 36.0 * (j + 0.61) / 12
            points.append((lat, lon))
    return points

# digipin/grid_systems/grid_specification.py
"""Fixed DIGIPIN grid definition: root region, symbol table, depth and layout."""

from dataclasses import dataclass
from typing import Dict, Any, Tuple

from ..abstractions.types import BoundingBox
from .symbol_grid import SymbolGrid


@dataclass(frozen=True)
class GridSpecification:
    """Specification for a hierarchical grid code."""
    name: str
    root: BoundingBox
    symbols: SymbolGrid
    levels: int
    separator: str = "-"
    separator_after: Tuple[int, ...] = (3, 6)

    def __post_init__(self):
        if self.levels <= 0:
            raise ValueError(f"Levels must be positive, got: {self.levels}")
        if self.separator in self.symbols:
            raise ValueError(f"Separator {self.separator!r} collides with a grid symbol")
        if any(not 0 < pos < self.levels for pos in self.separator_after):
            raise ValueError(f"Separator positions must fall inside the code: {self.separator_after}")

    @property
    def divisions(self) -> int:
        return self.symbols.size

    @property
    def code_length(self) -> int:
        """Formatted length, separators included."""
        return self.levels + len(self.separator_after)

    @property
    def cell_lat_span(self) -> float:
        """Latitude extent of a cell at the deepest level."""
        return self.root.lat_span / self.divisions ** self.levels

    @property
    def cell_lon_span(self) -> float:
        """Longitude extent of a cell at the deepest level."""
        return self.root.lon_span / self.divisions ** self.levels

    def format_code(self, symbols: str) -> str:
        """Insert separators after the configured symbol positions."""
        parts = []
        start = 0
        for position in self.separator_after:
            parts.append(symbols[start:position])
            start = position
        parts.append(symbols[start:])
        return self.separator.join(parts)

    def strip_separators(self, code: str) -> str:
        """Remove separators; they carry no information."""
        return code.replace(self.separator, "")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'name': self.name,
            'root': self.root.to_dict(),
            'symbols': [''.join(row) for row in self.symbols.rows],
            'levels': self.levels,
            'separator': self.separator,
            'separator_after': list(self.separator_after),
            'cell_lat_span': self.cell_lat_span,
            'cell_lon_span': self.cell_lon_span
        }


# Process-wide constants, built once at import and never mutated.
ROOT_BOUNDS = BoundingBox(min_lat=2.5, max_lat=38.5, min_lon=63.5, max_lon=99.5)

SYMBOL_GRID = SymbolGrid.from_strings([
    'FC98',
    'J327',
    'K456',
    'LMPT',
])

DIGIPIN = GridSpecification(
    name='digipin',
    root=ROOT_BOUNDS,
    symbols=SYMBOL_GRID,
    levels=10,
    separator='-',
    separator_after=(3, 6)
)

"""4x4 symbol table mapping subdivision cells to code characters."""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Sequence, Tuple


@dataclass(frozen=True)
class SymbolGrid:
    """
    Immutable 4x4 table of code symbols.

    Row 0 is the highest-latitude band, column 0 the lowest-longitude band.
    The inverse lookup is built once at construction so decoding never
    searches the table.
    """
    rows: Tuple[Tuple[str, ...], ...]
    _index: Dict[str, Tuple[int, int]] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        """Validate shape and uniqueness, build the inverse lookup."""
        size = len(self.rows)
        if size == 0 or any(len(row) != size for row in self.rows):
            raise ValueError(f"Symbol grid must be square, got row lengths {[len(r) for r in self.rows]}")

        index = {}
        for r, row in enumerate(self.rows):
            for c, symbol in enumerate(row):
                if len(symbol) != 1:
                    raise ValueError(f"Grid symbols must be single characters, got {symbol!r}")
                if symbol in index:
                    raise ValueError(f"Duplicate grid symbol: {symbol!r}")
                index[symbol] = (r, c)

        # frozen dataclass: bypass __setattr__ for the derived field
        object.__setattr__(self, '_index', index)

    @classmethod
    def from_strings(cls, rows: Sequence[str]) -> 'SymbolGrid':
        """Build a grid from one string per row, e.g. ``['FC98', ...]``."""
        return cls(rows=tuple(tuple(row) for row in rows))

    @property
    def size(self) -> int:
        return len(self.rows)

    @property
    def alphabet(self) -> FrozenSet[str]:
        return frozenset(self._index)

    def symbol_at(self, row: int, col: int) -> str:
        """Symbol for a cell."""
        return self.rows[row][col]

    def locate(self, symbol: str) -> Tuple[int, int]:
        """
        Inverse lookup: (row, col) of a symbol.

        Raises:
            KeyError: If the symbol is not part of the grid
        """
        return self._index[symbol]

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._index

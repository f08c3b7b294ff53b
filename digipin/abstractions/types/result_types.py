# digipin/abstractions/types/result_types.py
"""Tagged result variants returned by the non-raising codec entry points."""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union, TYPE_CHECKING

if TYPE_CHECKING:
    from ...grid_systems.exceptions import DigipinError, ErrorKind

T = TypeVar('T')


@dataclass(frozen=True)
class Success(Generic[T]):
    """Successful outcome carrying the computed value."""
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """Failed outcome carrying the error that stopped the computation."""
    error: 'DigipinError'

    @property
    def ok(self) -> bool:
        return False

    @property
    def kind(self) -> 'ErrorKind':
        """Failure kind, used by adapters to pick a response."""
        return self.error.kind

    @property
    def message(self) -> str:
        return str(self.error)


Outcome = Union[Success[T], Failure]

from dataclasses import dataclass
from enum import Enum


class CostKind(Enum):
    UNSET = "unset"
    INFINITE = "infinite"
    FINITE = "finite"


@dataclass(frozen=True)
class Cost:
    """
    Value of one distance table cell.

    - UNSET: no information, the via-neighbor is not a candidate (shown as '-')
    - INFINITE: candidate considered but no route is known (shown as 'INF')
    - FINITE: positive integer cost
    """
    kind: CostKind
    value: int = 0

    @property
    def is_unset(self):
        return self.kind is CostKind.UNSET

    @property
    def is_infinite(self):
        return self.kind is CostKind.INFINITE

    @property
    def is_finite(self):
        return self.kind is CostKind.FINITE

    def __add__(self, other):
        if self.is_finite and other.is_finite:
            return Cost(CostKind.FINITE, self.value + other.value)
        return INFINITE

    def __str__(self):
        if self.is_unset:
            return "-"
        if self.is_infinite:
            return "INF"
        return str(self.value)


UNSET = Cost(CostKind.UNSET)
INFINITE = Cost(CostKind.INFINITE)


def finite(value):
    """Wraps a positive integer link/path cost."""
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"cost must be a positive integer, got {value!r}")
    return Cost(CostKind.FINITE, value)

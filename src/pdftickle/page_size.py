"""Page dimensions expressed in PDF points (1/72 inch)."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict

from .errors import InvalidArgumentError

# Two sizes closer than this in both dimensions are the same size.
TOLERANCE = 0.01


@dataclass(frozen=True, eq=False)
class PageSize:
    """Immutable page size.

    Equality compares dimensions only, within :data:`TOLERANCE`, so a custom
    595.28 x 841.89 size is equal to :data:`A4` even though the names differ.
    """

    name: str
    width: float
    height: float

    def __post_init__(self) -> None:
        if not isinstance(self.name, str):
            raise InvalidArgumentError(f"Page size name must be a string, got {self.name!r}")
        for label in ("width", "height"):
            value = getattr(self, label)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidArgumentError(f"Page {label} must be a number, got {value!r}")
            if not math.isfinite(value) or value <= 0:
                raise InvalidArgumentError(f"Page {label} must be positive, got {value!r}")
            object.__setattr__(self, label, float(value))

    @classmethod
    def custom(cls, width: float, height: float) -> "PageSize":
        return cls("Custom", width, height)

    @classmethod
    def standard(cls, name: str) -> "PageSize":
        """Return the named standard size, ignoring case."""

        try:
            return STANDARD_SIZES[str(name).upper()]
        except KeyError:
            known = ", ".join(sorted(STANDARD_SIZES))
            raise InvalidArgumentError(f"Unknown page size {name!r}; expected one of {known}") from None

    def rotate(self) -> "PageSize":
        return PageSize(f"{self.name} (Rotated)", self.height, self.width)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PageSize):
            return NotImplemented
        return abs(self.width - other.width) < TOLERANCE and abs(self.height - other.height) < TOLERANCE

    def __hash__(self) -> int:
        # Tolerance equality is not transitive, so no dimension-based hash can agree with it.
        return hash(PageSize)

    def __str__(self) -> str:
        return f"{self.name} ({self.width:.0f} x {self.height:.0f} pts)"


A3 = PageSize("A3", 841.89, 1190.55)
A4 = PageSize("A4", 595.28, 841.89)
A5 = PageSize("A5", 419.53, 595.28)
LETTER = PageSize("Letter", 612, 792)
LEGAL = PageSize("Legal", 612, 1008)
TABLOID = PageSize("Tabloid", 792, 1224)

STANDARD_SIZES: Dict[str, PageSize] = {
    "A3": A3,
    "A4": A4,
    "A5": A5,
    "LETTER": LETTER,
    "LEGAL": LEGAL,
    "TABLOID": TABLOID,
}


__all__ = [
    "PageSize",
    "TOLERANCE",
    "A3",
    "A4",
    "A5",
    "LETTER",
    "LEGAL",
    "TABLOID",
    "STANDARD_SIZES",
]

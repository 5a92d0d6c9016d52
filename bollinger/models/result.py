"""Indicator output models.

Output rows are plain slotted dataclasses: a result series is rebuilt from
scratch on every call and can be long, so these stay cheap to create.
"""

import math
from dataclasses import dataclass

NAN = float("nan")


@dataclass(frozen=True, slots=True)
class IndicatorPoint:
    """One output row.

    Any of ``center``/``upper``/``lower`` may be NaN when there is not
    enough history at that position or the offset shifted in an empty slot.
    NaN never equals itself, so check emptiness with ``is_empty``.
    """

    timestamp: int
    center: float = NAN
    upper: float = NAN
    lower: float = NAN

    @property
    def is_empty(self) -> bool:
        """True when all three values are the NaN sentinel."""
        return math.isnan(self.center) and math.isnan(self.upper) and math.isnan(self.lower)

    def with_values_of(self, other: "IndicatorPoint") -> "IndicatorPoint":
        """Keep this row's timestamp, take the values of *other*."""
        return IndicatorPoint(
            timestamp=self.timestamp,
            center=other.center,
            upper=other.upper,
            lower=other.lower,
        )

    def emptied(self) -> "IndicatorPoint":
        """Same timestamp, all values NaN."""
        return IndicatorPoint(timestamp=self.timestamp)


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of parameter validation."""

    ok: bool
    reason: str | None = None

    @classmethod
    def success(cls) -> "ValidationResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, reason: str) -> "ValidationResult":
        return cls(ok=False, reason=reason)

    def __bool__(self) -> bool:
        return self.ok

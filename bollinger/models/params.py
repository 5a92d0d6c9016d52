"""Indicator parameter models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class AverageKind(str, Enum):
    """Moving average variant used for the center line."""

    SMA = "SMA"
    EMA = "EMA"
    WMA = "WMA"


class SourceField(str, Enum):
    """Price field the indicator is computed from."""

    OPEN = "open"
    HIGH = "high"
    LOW = "low"
    CLOSE = "close"
    HL2 = "hl2"
    HLC3 = "hlc3"
    OHLC4 = "ohlc4"


# Variants the engine can compute. Everything else is rejected by validate().
SUPPORTED_AVERAGE_KINDS: frozenset[AverageKind] = frozenset({AverageKind.SMA})
SUPPORTED_SOURCE_FIELDS: frozenset[SourceField] = frozenset({SourceField.CLOSE})


class IndicatorParameters(BaseModel):
    """Bollinger Bands parameter set.

    Fields carry no constraints here: range checks belong to
    ``bollinger.indicators.validate`` so every failure comes back with a
    readable reason instead of a pydantic error.
    """

    model_config = ConfigDict(frozen=True)

    window: int = 20
    average_kind: AverageKind = AverageKind.SMA
    source_field: SourceField = SourceField.CLOSE
    deviation_multiplier: float = 2.0
    offset: int = 0


DEFAULT_PARAMETERS = IndicatorParameters()

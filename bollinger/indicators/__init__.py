"""Bollinger Bands indicator engine (pure math, no I/O)."""

from bollinger.indicators.indicators import (
    BollingerCalculator,
    InvalidParametersError,
    apply_offset,
    compute,
    latest_value,
    validate,
    windowed_average,
    windowed_sample_deviation,
)

__all__ = [
    "validate",
    "compute",
    "apply_offset",
    "latest_value",
    "windowed_average",
    "windowed_sample_deviation",
    "BollingerCalculator",
    "InvalidParametersError",
]

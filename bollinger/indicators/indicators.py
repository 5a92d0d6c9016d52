"""Bollinger Bands calculation.

Formula:
- Center (basis) = SMA(close, window)
- Deviation = sample standard deviation (n - 1) of the same window
- Upper = center + multiplier * deviation
- Lower = center - multiplier * deviation
- Offset shifts all three series by ``offset`` bars.

Every call recomputes from the full series. Nothing is cached between
calls and inputs are never mutated.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

import numpy as np

from bollinger.models.params import (
    SUPPORTED_AVERAGE_KINDS,
    SUPPORTED_SOURCE_FIELDS,
    IndicatorParameters,
)
from bollinger.models.price import PricePoint
from bollinger.models.result import NAN, IndicatorPoint, ValidationResult

logger = logging.getLogger(__name__)


class InvalidParametersError(ValueError):
    """Raised when computation is requested with an invalid parameter set."""

    def __init__(self, result: ValidationResult):
        super().__init__(result.reason)
        self.result = result


# =============================================================================
# Window statistics
# =============================================================================

def windowed_average(values: Sequence[float], window: int) -> float:
    """
    Arithmetic mean of the last ``window`` values.

    Args:
        values: Source values up to and including the current position
        window: Number of trailing values to average

    Returns:
        The mean, or NaN if fewer than ``window`` values are available
    """
    if len(values) < window:
        return NAN
    tail = np.asarray(values[-window:], dtype=np.float64)
    return float(np.sum(tail)) / window


def windowed_sample_deviation(values: Sequence[float], window: int, mean: float) -> float:
    """
    Sample standard deviation of the last ``window`` values.

    Uses Bessel's correction (denominator ``window - 1``) around the
    already computed ``mean``.

    Args:
        values: Source values up to and including the current position
        window: Number of trailing values, at least 2
        mean: Mean of the same trailing window

    Returns:
        The deviation, or NaN if fewer than ``window`` values are available
    """
    if len(values) < window:
        return NAN
    tail = np.asarray(values[-window:], dtype=np.float64)
    squared = (tail - mean) ** 2
    return math.sqrt(float(np.sum(squared)) / (window - 1))


# =============================================================================
# Validation
# =============================================================================

def validate(params: IndicatorParameters) -> ValidationResult:
    """
    Check a parameter set before computation.

    Checks run in order and stop at the first failure.

    Args:
        params: Parameter set to check

    Returns:
        ValidationResult, with a reason on failure
    """
    if params.window < 2:
        return ValidationResult.failure("window too small")
    # `not >` so NaN is rejected too
    if not params.deviation_multiplier > 0:
        return ValidationResult.failure("multiplier must be positive")
    if params.average_kind not in SUPPORTED_AVERAGE_KINDS:
        return ValidationResult.failure("unsupported average kind")
    if params.source_field not in SUPPORTED_SOURCE_FIELDS:
        return ValidationResult.failure("unsupported source field")
    return ValidationResult.success()


def _require_valid(params: IndicatorParameters) -> None:
    result = validate(params)
    if not result:
        raise InvalidParametersError(result)


# =============================================================================
# Engine
# =============================================================================

def apply_offset(results: Sequence[IndicatorPoint], offset: int) -> list[IndicatorPoint]:
    """
    Shift indicator values by ``offset`` bars.

    Output position ``i`` takes its values from ``i - offset``, so a
    positive offset moves values forward in time. Timestamps never move;
    positions whose source falls outside the series become empty.

    Args:
        results: Indicator rows, aligned with the price series
        offset: Number of bars to shift (may be negative)

    Returns:
        New list of the same length
    """
    n = len(results)
    shifted = []
    for i, row in enumerate(results):
        source_index = i - offset
        if 0 <= source_index < n:
            shifted.append(row.with_values_of(results[source_index]))
        else:
            shifted.append(row.emptied())
    return shifted


def compute(series: Sequence[PricePoint], params: IndicatorParameters) -> list[IndicatorPoint]:
    """
    Calculate Bollinger Bands over a full price series.

    Args:
        series: Price bars, oldest first
        params: Indicator parameters

    Returns:
        One IndicatorPoint per input bar, same timestamps and order.
        Rows before the first full window are empty.

    Raises:
        InvalidParametersError: If ``params`` fails validation
    """
    _require_valid(params)

    window = params.window
    multiplier = params.deviation_multiplier
    closes = np.array([p.close for p in series], dtype=np.float64)

    results: list[IndicatorPoint] = []
    for i, point in enumerate(series):
        if i < window - 1:
            results.append(IndicatorPoint(timestamp=point.timestamp))
            continue

        history = closes[: i + 1]
        center = windowed_average(history, window)
        deviation = windowed_sample_deviation(history, window, center)
        results.append(
            IndicatorPoint(
                timestamp=point.timestamp,
                center=center,
                upper=center + multiplier * deviation,
                lower=center - multiplier * deviation,
            )
        )

    logger.debug("Computed %d rows (window=%d)", len(results), window)

    if params.offset != 0:
        results = apply_offset(results, params.offset)
        logger.debug("Applied offset %d", params.offset)

    return results


def latest_value(results: Sequence[IndicatorPoint]) -> IndicatorPoint | None:
    """Return the last row if it carries values, else None."""
    if not results or results[-1].is_empty:
        return None
    return results[-1]


# =============================================================================
# BollingerCalculator class
# =============================================================================

class BollingerCalculator:
    """Calculator bound to one validated parameter set."""

    def __init__(self, params: IndicatorParameters):
        _require_valid(params)
        self.params = params

    @property
    def window(self) -> int:
        return self.params.window

    def calculate_all(self, series: Sequence[PricePoint]) -> list[IndicatorPoint]:
        """
        Calculate the bands for every bar of the series.

        Args:
            series: Price bars, oldest first

        Returns:
            List of IndicatorPoint aligned with ``series``
        """
        return compute(series, self.params)

    def calculate_latest(self, series: Sequence[PricePoint]) -> IndicatorPoint | None:
        """
        Calculate the bands for the latest bar only.

        Args:
            series: Price bars (need at least ``window`` of them)

        Returns:
            IndicatorPoint for the latest bar, or None if not enough data
            or the offset leaves the latest slot empty
        """
        if len(series) < self.window:
            return None
        return latest_value(self.calculate_all(series))

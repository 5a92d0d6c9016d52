"""Tests for data models."""

import math
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from bollinger.models import (
    DEFAULT_PARAMETERS,
    NAN,
    AverageKind,
    IndicatorParameters,
    IndicatorPoint,
    PriceBuffer,
    PricePoint,
    SourceField,
    ValidationResult,
    timestamp_to_datetime,
)


def closes(buf: PriceBuffer) -> list[float]:
    return [p.close for p in buf.points]


def bar(ts: int, close: float = 100.0) -> PricePoint:
    return PricePoint(timestamp=ts, open=close - 1, high=close + 2, low=close - 2, close=close, volume=10.0)


class TestPricePoint:
    """Tests for PricePoint."""

    def test_frozen(self):
        p = bar(0)
        with pytest.raises(ValidationError):
            p.close = 5.0

    def test_volume_defaults_to_zero(self):
        p = PricePoint(timestamp=0, open=1, high=1, low=1, close=1)
        assert p.volume == 0.0


class TestPriceBuffer:
    """Tests for PriceBuffer."""

    def test_add_in_order(self):
        buf = PriceBuffer()
        for ts in (1, 2, 3):
            buf.add(bar(ts))
        assert len(buf) == 3

    def test_same_timestamp_replaces_last(self):
        buf = PriceBuffer()
        buf.add(bar(1, 100.0))
        buf.add(bar(1, 105.0))
        assert len(buf) == 1
        assert closes(buf) == [105.0]

    def test_older_bar_is_dropped(self):
        buf = PriceBuffer()
        for p in (bar(5, 1.0), bar(3, 2.0), bar(6, 3.0)):
            buf.add(p)
        assert closes(buf) == [1.0, 3.0]

    def test_max_size(self):
        buf = PriceBuffer(max_size=2)
        for i in range(5):
            buf.add(bar(i, float(i)))
        assert closes(buf) == [3.0, 4.0]


class TestIndicatorParameters:
    """Tests for IndicatorParameters."""

    def test_defaults(self):
        assert DEFAULT_PARAMETERS.window == 20
        assert DEFAULT_PARAMETERS.average_kind is AverageKind.SMA
        assert DEFAULT_PARAMETERS.source_field is SourceField.CLOSE
        assert DEFAULT_PARAMETERS.deviation_multiplier == 2.0
        assert DEFAULT_PARAMETERS.offset == 0

    def test_enum_values_from_strings(self):
        params = IndicatorParameters(average_kind="EMA", source_field="hl2")
        assert params.average_kind is AverageKind.EMA
        assert params.source_field is SourceField.HL2

    def test_unknown_enum_value_rejected(self):
        with pytest.raises(ValidationError):
            IndicatorParameters(average_kind="HMA")
        with pytest.raises(ValidationError):
            IndicatorParameters(source_field="vwap")

    def test_out_of_range_values_reach_validation(self):
        """Range checks are left to validate()."""
        params = IndicatorParameters(window=0, deviation_multiplier=-3)
        assert params.window == 0

    def test_immutable(self):
        with pytest.raises(ValidationError):
            DEFAULT_PARAMETERS.window = 10


class TestIndicatorPoint:
    """Tests for IndicatorPoint."""

    def test_defaults_to_empty(self):
        p = IndicatorPoint(timestamp=1)
        assert p.is_empty
        assert math.isnan(p.center)

    def test_sentinel_never_equals_itself(self):
        """Emptiness must be checked explicitly, not by equality."""
        assert NAN != NAN
        assert IndicatorPoint(timestamp=1).is_empty

    def test_partial_nan_is_not_empty(self):
        p = IndicatorPoint(timestamp=1, center=1.0)
        assert not p.is_empty

    def test_with_values_of(self):
        a = IndicatorPoint(timestamp=1)
        b = IndicatorPoint(timestamp=2, center=10.0, upper=12.0, lower=8.0)
        c = a.with_values_of(b)
        assert c.timestamp == 1
        assert (c.center, c.upper, c.lower) == (10.0, 12.0, 8.0)

    def test_emptied(self):
        p = IndicatorPoint(timestamp=3, center=1.0, upper=2.0, lower=0.0).emptied()
        assert p.timestamp == 3
        assert p.is_empty


class TestValidationResult:
    """Tests for ValidationResult."""

    def test_success(self):
        r = ValidationResult.success()
        assert r.ok and r.reason is None
        assert bool(r)

    def test_failure(self):
        r = ValidationResult.failure("window too small")
        assert not r
        assert r.reason == "window too small"


class TestConverters:
    """Tests for timestamp helpers."""

    def test_timestamp_to_datetime(self):
        dt = timestamp_to_datetime(1704110400000)
        assert dt == datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

"""Tests for the offset transform."""

import math

import pytest

from bollinger.indicators import apply_offset
from bollinger.models import IndicatorPoint


def make_results(n: int) -> list[IndicatorPoint]:
    """Rows with center = i, upper = i + 1, lower = i - 1."""
    return [
        IndicatorPoint(timestamp=1000 * i, center=float(i), upper=float(i + 1), lower=float(i - 1))
        for i in range(n)
    ]


class TestApplyOffset:
    """Tests for apply_offset()."""

    def test_zero_offset_is_noop(self):
        results = make_results(5)
        shifted = apply_offset(results, 0)

        assert shifted == results
        assert shifted is not results

    def test_positive_offset_moves_values_forward(self):
        """Position i reads from i - offset."""
        shifted = apply_offset(make_results(5), 2)

        assert shifted[0].is_empty
        assert shifted[1].is_empty
        assert shifted[2].center == 0.0
        assert shifted[4].center == 2.0
        assert shifted[4].upper == 3.0
        assert shifted[4].lower == 1.0

    def test_negative_offset_moves_values_backward(self):
        shifted = apply_offset(make_results(5), -2)

        assert shifted[0].center == 2.0
        assert shifted[2].center == 4.0
        assert shifted[3].is_empty
        assert shifted[4].is_empty

    def test_timestamps_never_move(self):
        results = make_results(6)
        for offset in (-3, 2, 10):
            shifted = apply_offset(results, offset)
            assert [r.timestamp for r in shifted] == [r.timestamp for r in results]

    def test_offset_beyond_length_empties_everything(self):
        shifted = apply_offset(make_results(4), 10)
        assert len(shifted) == 4
        assert all(r.is_empty for r in shifted)

    def test_empty_input(self):
        assert apply_offset([], 3) == []

    def test_source_not_mutated(self):
        results = make_results(4)
        apply_offset(results, 1)
        assert results[0].center == 0.0
        assert results[3].center == 3.0

    def test_empty_source_rows_stay_empty(self):
        results = [IndicatorPoint(timestamp=0), IndicatorPoint(timestamp=1, center=5.0, upper=6.0, lower=4.0)]
        shifted = apply_offset(results, 1)

        assert shifted[0].is_empty
        assert shifted[1].is_empty

    @pytest.mark.parametrize("k", [1, 2, 3])
    def test_round_trip_restores_in_bounds_rows(self, k):
        """+k then -k restores rows whose source stayed in bounds both times."""
        results = make_results(8)
        restored = apply_offset(apply_offset(results, k), -k)

        n = len(results)
        for i, row in enumerate(restored):
            if i + k < n:
                assert row.center == results[i].center
                assert row.upper == results[i].upper
                assert row.lower == results[i].lower
            else:
                assert math.isnan(row.center)
                assert row.is_empty

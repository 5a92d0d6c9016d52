"""Report formatting for indicator results.

Outputs results to console (formatted table) and JSON files. NaN cells
print as ``-`` and serialize as ``null``.
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import Sequence

import orjson

from bollinger.models.converters import timestamp_to_datetime
from bollinger.models.params import IndicatorParameters
from bollinger.models.price import PricePoint
from bollinger.models.result import IndicatorPoint


def _cell(value: float, width: int = 12) -> str:
    if math.isnan(value):
        return f"{'-':>{width}}"
    return f"{value:>{width}.4f}"


def _time_cell(ts: int) -> str:
    try:
        return f"{timestamp_to_datetime(ts):%Y-%m-%d %H:%M}"
    except (ValueError, OverflowError, OSError):
        return f"{ts:<16}"


def _nullable(value: float) -> float | None:
    return None if math.isnan(value) else value


class ReportFormatter:
    """Format indicator results for display and export."""

    @staticmethod
    def print_console(
        series: Sequence[PricePoint],
        results: Sequence[IndicatorPoint],
        params: IndicatorParameters,
        tail: int = 10,
    ) -> None:
        """Print formatted report to console."""
        print("\n" + "=" * 70)
        print(
            f"  BOLLINGER BANDS ({params.window}, {params.deviation_multiplier:g})"
            f" {params.average_kind.value} of {params.source_field.value}"
        )
        print("=" * 70)
        print(f"  Bars:      {len(series)}")
        print(f"  Offset:    {params.offset:+d}")
        if series:
            print(f"  Last close: {series[-1].close:.4f}")

        rows = list(zip(series, results))[-tail:] if tail > 0 else []
        if rows:
            print("\n" + "-" * 70)
            print(f"  {'Time (UTC)':<17} {'Close':>10} {'Lower':>12} {'Center':>12} {'Upper':>12}")
            for bar, row in rows:
                print(
                    f"  {_time_cell(row.timestamp)} {bar.close:>10.4f}"
                    f" {_cell(row.lower)} {_cell(row.center)} {_cell(row.upper)}"
                )

        print("\n" + "=" * 70)

    @staticmethod
    def to_dict(results: Sequence[IndicatorPoint], params: IndicatorParameters) -> dict:
        """Convert results to JSON-serializable dict."""
        return {
            "parameters": params.model_dump(mode="json"),
            "count": len(results),
            "points": [
                {
                    "timestamp": r.timestamp,
                    "center": _nullable(r.center),
                    "upper": _nullable(r.upper),
                    "lower": _nullable(r.lower),
                }
                for r in results
            ],
        }

    @staticmethod
    def save_json(
        results: Sequence[IndicatorPoint],
        params: IndicatorParameters,
        filepath: Path,
    ) -> None:
        """Save results to JSON file."""
        data = ReportFormatter.to_dict(results, params)
        filepath.write_bytes(orjson.dumps(data, option=orjson.OPT_INDENT_2))
        print(f"\nResults saved to {filepath}")

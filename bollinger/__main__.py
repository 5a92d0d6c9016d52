"""CLI entry point for computing Bollinger Bands over a local price file.

Parameter precedence: command line flags > YAML parameter file >
BOLLINGER_* environment settings.

Usage:
    python -m bollinger data/ohlcv.json
    python -m bollinger data/ohlcv.csv --window 20 --mult 2 --offset 3
    python -m bollinger data/ohlcv.json --config bands.yaml --output bands.json
"""

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

from bollinger.config import ParameterFileError, get_settings, load_parameters
from bollinger.indicators import BollingerCalculator, InvalidParametersError
from bollinger.loader import PriceDataError, load_price_series
from bollinger.models.params import AverageKind, IndicatorParameters, SourceField
from bollinger.report import ReportFormatter

logger = logging.getLogger("bollinger")

EXIT_DATA_ERROR = 1
EXIT_CONFIG_ERROR = 2


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="bollinger-bands",
        description="Compute Bollinger Bands over an OHLCV price file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m bollinger ohlcv.json
  python -m bollinger ohlcv.csv --window 50 --mult 2.5
  python -m bollinger ohlcv.json --offset -5 --output bands.json
        """,
    )
    parser.add_argument("prices", type=Path, help="OHLCV file (.json or .csv)")
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="YAML parameter file",
    )
    parser.add_argument("--window", type=int, default=None, help="Averaging window (bars)")
    parser.add_argument(
        "--ma-type",
        choices=[k.value for k in AverageKind],
        default=None,
        help="Moving average kind",
    )
    parser.add_argument(
        "--source",
        choices=[f.value for f in SourceField],
        default=None,
        help="Price field",
    )
    parser.add_argument("--mult", type=float, default=None, help="Deviation multiplier")
    parser.add_argument("--offset", type=int, default=None, help="Shift bands by N bars")
    parser.add_argument(
        "--tail",
        type=int,
        default=None,
        help="Rows to print (default from settings)",
    )
    parser.add_argument(
        "--output", "-o",
        type=Path,
        default=None,
        help="Output file path for JSON results",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose logging",
    )
    return parser.parse_args(argv)


def resolve_parameters(args: argparse.Namespace) -> IndicatorParameters:
    """Merge command line overrides onto file/settings parameters."""
    params = load_parameters(args.config)
    overrides = {
        "window": args.window,
        "average_kind": args.ma_type,
        "source_field": args.source,
        "deviation_multiplier": args.mult,
        "offset": args.offset,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}
    if not overrides:
        return params
    return IndicatorParameters.model_validate({**params.model_dump(), **overrides})


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    if args.config is not None:
        load_dotenv(args.config.parent / ".env", override=False)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        settings = get_settings()
    except ValidationError as e:
        logger.error("Invalid BOLLINGER_* settings: %s", e)
        return EXIT_CONFIG_ERROR
    if not args.verbose:
        logging.getLogger().setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))

    try:
        params = resolve_parameters(args)
        calculator = BollingerCalculator(params)
        series = load_price_series(args.prices)
        results = calculator.calculate_all(series)
    except (InvalidParametersError, ParameterFileError, ValidationError) as e:
        logger.error("Invalid parameters: %s", e)
        return EXIT_CONFIG_ERROR
    except (PriceDataError, FileNotFoundError) as e:
        logger.error("Cannot load prices: %s", e)
        return EXIT_DATA_ERROR

    tail = args.tail if args.tail is not None else settings.tail
    ReportFormatter.print_console(series, results, params, tail=tail)

    if args.output:
        ReportFormatter.save_json(results, params, args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())

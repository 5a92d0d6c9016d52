"""Data models for price bars, indicator parameters and results."""

from bollinger.models.converters import timestamp_to_datetime
from bollinger.models.params import (
    DEFAULT_PARAMETERS,
    SUPPORTED_AVERAGE_KINDS,
    SUPPORTED_SOURCE_FIELDS,
    AverageKind,
    IndicatorParameters,
    SourceField,
)
from bollinger.models.price import PriceBuffer, PricePoint
from bollinger.models.result import NAN, IndicatorPoint, ValidationResult

__all__ = [
    "PricePoint",
    "PriceBuffer",
    "AverageKind",
    "SourceField",
    "IndicatorParameters",
    "DEFAULT_PARAMETERS",
    "SUPPORTED_AVERAGE_KINDS",
    "SUPPORTED_SOURCE_FIELDS",
    "IndicatorPoint",
    "ValidationResult",
    "NAN",
    "timestamp_to_datetime",
]

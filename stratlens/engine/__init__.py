"""Engine layer: price-sample ingestion and indicator calculation."""

from stratlens.engine.errors import InvalidInputError, StratlensError
from stratlens.engine.indicators import (
    calculate_ema,
    calculate_macd,
    calculate_rsi,
    calculate_sma,
    sort_samples,
)
from stratlens.engine.ingest import parse_samples
from stratlens.engine.report import IndicatorReport, compute_indicators
from stratlens.engine.signals import Signal, generate_signals
from stratlens.engine.types import IndicatorKind, IndicatorSeries, PriceSample

__all__ = [
    "IndicatorKind",
    "IndicatorReport",
    "IndicatorSeries",
    "InvalidInputError",
    "PriceSample",
    "Signal",
    "StratlensError",
    "calculate_ema",
    "calculate_macd",
    "calculate_rsi",
    "calculate_sma",
    "compute_indicators",
    "generate_signals",
    "parse_samples",
    "sort_samples",
]

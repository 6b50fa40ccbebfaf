"""Engine domain types.

Frozen dataclasses for value objects. Prices are float: indicator math is
float arithmetic end to end.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum

IndicatorSeries = dict[date, float]
"""Date-indexed indicator values. Only dates where the indicator is defined."""


class IndicatorKind(str, Enum):
    """Indicators produced for the analysis report."""

    SMA = "sma"
    RSI = "rsi"
    MACD = "macd"


@dataclass(frozen=True)
class PriceSample:
    """One daily close (and optional volume) for an instrument."""

    date: date
    close: float
    volume: float | None = None

"""Indicator report assembly.

Builds the SMA / RSI / MACD series handed to the downstream scoring step and
converts them to the JSON shape consumers expect:
{"sma": {"2024-01-15": 63.2, ...}, "rsi": {...}, "macd": {...}}.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass, field

from stratlens.config import IndicatorConfig
from stratlens.engine.indicators import (
    calculate_macd,
    calculate_rsi,
    calculate_sma,
    sort_samples,
)
from stratlens.engine.types import IndicatorKind, IndicatorSeries, PriceSample
from stratlens.utils.logging import get_logger
from stratlens.utils.time import format_date

logger = get_logger(__name__)


def _json_value(value: float) -> float | None:
    # NaN and infinities have no JSON encoding; they serialize as null
    return value if math.isfinite(value) else None


def series_to_json(series: IndicatorSeries) -> dict[str, float | None]:
    """Re-key a series by ISO date string, oldest first.

    Non-finite values become None so the result is strict JSON.
    """
    return {format_date(d): _json_value(series[d]) for d in sorted(series)}


def latest_values(series: IndicatorSeries, count: int = 5) -> IndicatorSeries:
    """The `count` most recent entries of a series, newest first."""
    if count < 1:
        raise ValueError(f"count must be >= 1, got {count}")
    newest = sorted(series, reverse=True)[:count]
    return {d: series[d] for d in newest}


@dataclass(frozen=True)
class IndicatorReport:
    """One series per indicator kind.

    An empty series means "unavailable" (not enough history), not failure.
    """

    sma: IndicatorSeries = field(default_factory=dict)
    rsi: IndicatorSeries = field(default_factory=dict)
    macd: IndicatorSeries = field(default_factory=dict)

    def series(self, kind: IndicatorKind) -> IndicatorSeries:
        """Return the series for one indicator kind."""
        result: IndicatorSeries = getattr(self, kind.value)
        return result

    def unavailable(self) -> list[IndicatorKind]:
        """Kinds with no computed values."""
        return [kind for kind in IndicatorKind if not self.series(kind)]

    def to_dict(self) -> dict[str, dict[str, float | None]]:
        """Full report keyed by kind, then ISO date."""
        return {kind.value: series_to_json(self.series(kind)) for kind in IndicatorKind}

    def latest(self, count: int = 5) -> dict[str, dict[str, float | None]]:
        """Newest `count` values per kind, newest first, keyed by ISO date."""
        return {
            kind.value: {
                format_date(d): _json_value(v)
                for d, v in latest_values(self.series(kind), count).items()
            }
            for kind in IndicatorKind
        }


def compute_indicators(
    samples: Iterable[PriceSample],
    config: IndicatorConfig | None = None,
) -> IndicatorReport:
    """Compute every report indicator over one price history.

    Never raises for short histories: kinds without enough samples come back
    empty and are logged as unavailable.
    """
    cfg = config or IndicatorConfig()
    ordered = sort_samples(samples)

    report = IndicatorReport(
        sma=calculate_sma(ordered, cfg.sma_period),
        rsi=calculate_rsi(ordered, cfg.rsi_period),
        macd=calculate_macd(ordered, cfg.macd_fast, cfg.macd_slow),
    )

    for kind in report.unavailable():
        logger.warning(
            "indicator_unavailable",
            indicator=kind.value,
            samples=len(ordered),
        )
    logger.info(
        "indicators_computed",
        samples=len(ordered),
        first_date=format_date(ordered[0].date) if ordered else None,
        last_date=format_date(ordered[-1].date) if ordered else None,
        **{kind.value: len(report.series(kind)) for kind in IndicatorKind},
    )
    return report

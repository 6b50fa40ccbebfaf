"""Indicator calculation over daily price series.

Every function sorts its input by date once, then works on integer indices.
Insufficient history yields an empty series, never an exception, so a
report can show "unavailable" per indicator instead of failing.
Non-finite closes are not filtered: they propagate through the arithmetic.
"""

from __future__ import annotations

from collections.abc import Iterable

from stratlens.engine.types import IndicatorSeries, PriceSample

MACD_FAST_PERIOD = 12
MACD_SLOW_PERIOD = 26


def _check_period(name: str, period: int) -> None:
    if period < 1:
        raise ValueError(f"{name} period must be >= 1, got {period}")


def sort_samples(samples: Iterable[PriceSample]) -> list[PriceSample]:
    """Return samples in ascending date order (stable for equal dates)."""
    return sorted(samples, key=lambda s: s.date)


def calculate_sma(samples: Iterable[PriceSample], period: int) -> IndicatorSeries:
    """Simple Moving Average: mean close over each trailing window of `period`.

    The first value lands on the `period`-th sample. Each window is summed
    afresh, so there is no running-sum drift on long series.
    """
    _check_period("SMA", period)
    ordered = sort_samples(samples)
    closes = [s.close for s in ordered]

    sma: IndicatorSeries = {}
    for i in range(period - 1, len(ordered)):
        window = closes[i - period + 1 : i + 1]
        sma[ordered[i].date] = sum(window) / period
    return sma


def calculate_ema(samples: Iterable[PriceSample], period: int) -> IndicatorSeries:
    """Exponential Moving Average seeded with the SMA of the first `period` closes.

    ema[i] = (close[i] - ema[i-1]) * k + ema[i-1], with k = 2 / (period + 1).
    """
    _check_period("EMA", period)
    ordered = sort_samples(samples)
    if len(ordered) < period:
        return {}

    k = 2 / (period + 1)
    prev = sum(s.close for s in ordered[:period]) / period
    ema: IndicatorSeries = {ordered[period - 1].date: prev}
    for sample in ordered[period:]:
        prev = (sample.close - prev) * k + prev
        ema[sample.date] = prev
    return ema


def _rsi_value(avg_gain: float, avg_loss: float) -> float:
    """RSI from smoothed averages, saturating at 100 when there are no losses.

    A flat window (both averages zero) also gives 100.0 rather than the NaN
    that 0 / 0 produces in IEEE arithmetic, so every value stays in [0, 100].
    """
    if avg_loss == 0:
        return 100.0
    rs = avg_gain / avg_loss
    return 100 - 100 / (1 + rs)


def calculate_rsi(samples: Iterable[PriceSample], period: int) -> IndicatorSeries:
    """Relative Strength Index with Wilder smoothing.

    The first `period` day-over-day changes seed the average gain and loss
    and emit nothing. Values start at index `period + 1`.
    """
    _check_period("RSI", period)
    ordered = sort_samples(samples)
    closes = [s.close for s in ordered]
    if len(closes) <= period + 1:
        return {}

    gains = 0.0
    losses = 0.0
    for i in range(1, period + 1):
        delta = closes[i] - closes[i - 1]
        if delta >= 0:
            gains += delta
        else:
            losses -= delta
    avg_gain = gains / period
    avg_loss = losses / period

    rsi: IndicatorSeries = {}
    for i in range(period + 1, len(closes)):
        delta = closes[i] - closes[i - 1]
        if delta >= 0:
            avg_gain = (avg_gain * (period - 1) + delta) / period
            avg_loss = (avg_loss * (period - 1)) / period
        else:
            avg_gain = (avg_gain * (period - 1)) / period
            avg_loss = (avg_loss * (period - 1) - delta) / period
        rsi[ordered[i].date] = _rsi_value(avg_gain, avg_loss)
    return rsi


def calculate_macd(
    samples: Iterable[PriceSample],
    fast_period: int = MACD_FAST_PERIOD,
    slow_period: int = MACD_SLOW_PERIOD,
) -> IndicatorSeries:
    """MACD line: fast EMA minus slow EMA on every date the slow EMA covers.

    Signal line and histogram are not computed.
    """
    _check_period("MACD fast", fast_period)
    _check_period("MACD slow", slow_period)
    if fast_period >= slow_period:
        raise ValueError(
            f"MACD fast period must be < slow period, got {fast_period} >= {slow_period}"
        )

    ordered = sort_samples(samples)
    ema_fast = calculate_ema(ordered, fast_period)
    ema_slow = calculate_ema(ordered, slow_period)
    return {d: ema_fast[d] - slow for d, slow in ema_slow.items()}

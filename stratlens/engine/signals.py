"""Trading signal flags read off the most recent indicator values.

Two families, each describing the state on the latest sample:
- trend: the short SMA above the long EMA (golden cross) or below it
  (death cross)
- momentum: RSI above the overbought level or below the oversold level

A flag whose inputs are unavailable (short history) or non-finite is
simply not raised.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from stratlens.config import SignalConfig
from stratlens.engine.indicators import (
    calculate_ema,
    calculate_rsi,
    calculate_sma,
    sort_samples,
)
from stratlens.engine.types import IndicatorSeries, PriceSample
from stratlens.utils.logging import get_logger

logger = get_logger(__name__)


class Signal(str, Enum):
    GOLDEN_CROSS = "golden_cross"
    DEATH_CROSS = "death_cross"
    OVERBOUGHT = "overbought"
    OVERSOLD = "oversold"


def _latest(series: IndicatorSeries) -> float | None:
    return series[max(series)] if series else None


def trend_signal(sma: IndicatorSeries, ema: IndicatorSeries) -> Signal | None:
    """Golden cross when the latest SMA is above the latest EMA, death cross below."""
    sma_now = _latest(sma)
    ema_now = _latest(ema)
    if sma_now is None or ema_now is None:
        return None
    if sma_now > ema_now:
        return Signal.GOLDEN_CROSS
    if sma_now < ema_now:
        return Signal.DEATH_CROSS
    return None


def momentum_signal(
    rsi: IndicatorSeries, overbought: float = 70.0, oversold: float = 30.0
) -> Signal | None:
    rsi_now = _latest(rsi)
    if rsi_now is None:
        return None
    if rsi_now > overbought:
        return Signal.OVERBOUGHT
    if rsi_now < oversold:
        return Signal.OVERSOLD
    return None


def generate_signals(
    samples: Iterable[PriceSample],
    config: SignalConfig | None = None,
) -> list[Signal]:
    """Evaluate every signal flag over one price history.

    Returns the raised flags, trend first, then momentum. Never raises for
    short histories.
    """
    cfg = config or SignalConfig()
    ordered = sort_samples(samples)

    signals: list[Signal] = []
    trend = trend_signal(
        calculate_sma(ordered, cfg.sma_period),
        calculate_ema(ordered, cfg.ema_period),
    )
    if trend is not None:
        signals.append(trend)
    momentum = momentum_signal(
        calculate_rsi(ordered, cfg.rsi_period), cfg.overbought, cfg.oversold
    )
    if momentum is not None:
        signals.append(momentum)

    logger.info(
        "signals_generated",
        samples=len(ordered),
        signals=[s.value for s in signals],
    )
    return signals

"""Tests for configuration system."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from stratlens.config import AppConfig, ChunkingConfig, IndicatorConfig, SignalConfig

pytestmark = pytest.mark.usefixtures("clean_env")


class TestDefaultConfig:
    """Default configuration loads correctly."""

    def test_default_config_loads(self) -> None:
        config = AppConfig()
        assert config.log_level == "INFO"
        assert config.log_format == "console"
        assert config.indicators.sma_period == 40
        assert config.indicators.rsi_period == 28
        assert config.indicators.macd_fast == 12
        assert config.indicators.macd_slow == 26
        assert config.indicators.latest_window == 5

    def test_default_signal_config(self) -> None:
        config = AppConfig()
        assert config.signals.sma_period == 20
        assert config.signals.ema_period == 50
        assert config.signals.rsi_period == 14
        assert (config.signals.oversold, config.signals.overbought) == (30.0, 70.0)

    def test_default_chunk_budget(self) -> None:
        """30000 tokens at 4 characters per token."""
        config = AppConfig()
        assert config.chunking.max_chunk_size == 120_000


class TestEnvOverrides:
    """Environment variables override defaults."""

    def test_log_level_override(self) -> None:
        with patch.dict(os.environ, {"STRATLENS_LOG_LEVEL": "debug"}):
            assert AppConfig().log_level == "DEBUG"

    def test_nested_indicator_override(self) -> None:
        with patch.dict(os.environ, {"STRATLENS_INDICATORS__RSI_PERIOD": "14"}):
            config = AppConfig()
        assert config.indicators.rsi_period == 14
        assert config.indicators.sma_period == 40

    def test_nested_chunking_override(self) -> None:
        with patch.dict(os.environ, {"STRATLENS_CHUNKING__MAX_TOKENS": "1000"}):
            assert AppConfig().chunking.max_chunk_size == 4000

    def test_dotenv_file(self) -> None:
        with open(".env", "w", encoding="utf-8") as f:
            f.write("STRATLENS_LOG_FORMAT=json\n")
        assert AppConfig().log_format == "json"


class TestValidation:
    """Invalid values are rejected."""

    def test_invalid_log_level(self) -> None:
        with pytest.raises(ValidationError, match="log_level must be one of"):
            AppConfig(log_level="LOUD")

    def test_invalid_log_format(self) -> None:
        with pytest.raises(ValidationError, match="log_format must be one of"):
            AppConfig(log_format="xml")

    def test_macd_fast_must_be_below_slow(self) -> None:
        with pytest.raises(ValidationError, match="macd_fast must be < macd_slow"):
            IndicatorConfig(macd_fast=26, macd_slow=12)

    def test_sma_period_bounds(self) -> None:
        with pytest.raises(ValidationError):
            IndicatorConfig(sma_period=0)

    def test_rsi_period_bounds(self) -> None:
        with pytest.raises(ValidationError):
            IndicatorConfig(rsi_period=1)

    def test_chars_per_token_bounds(self) -> None:
        with pytest.raises(ValidationError):
            ChunkingConfig(chars_per_token=0)

    def test_oversold_must_be_below_overbought(self) -> None:
        with pytest.raises(ValidationError, match="oversold must be < overbought"):
            SignalConfig(oversold=80.0, overbought=70.0)

    def test_rsi_levels_inside_range(self) -> None:
        with pytest.raises(ValidationError):
            SignalConfig(overbought=100.0)

"""Pydantic Settings configuration models.

Config hierarchy (lowest to highest priority):
1. Pydantic defaults (in code below)
2. .env file (loaded by Pydantic Settings)
3. Environment variables (e.g., STRATLENS_INDICATORS__SMA_PERIOD=20)
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})
VALID_LOG_FORMATS = frozenset({"console", "json"})


class IndicatorConfig(BaseModel):
    """Periods used when building the indicator report."""

    sma_period: int = Field(default=40, ge=1, le=500)
    rsi_period: int = Field(default=28, ge=2, le=200)
    macd_fast: int = Field(default=12, ge=1, le=100)
    macd_slow: int = Field(default=26, ge=2, le=200)
    latest_window: int = Field(default=5, ge=1, le=100)

    @model_validator(mode="after")
    def validate_macd_periods(self) -> IndicatorConfig:
        if self.macd_fast >= self.macd_slow:
            raise ValueError(
                f"macd_fast must be < macd_slow, got {self.macd_fast} >= {self.macd_slow}"
            )
        return self


class SignalConfig(BaseModel):
    """Periods and RSI levels behind the trend and momentum signal flags."""

    sma_period: int = Field(default=20, ge=1, le=500)
    ema_period: int = Field(default=50, ge=1, le=500)
    rsi_period: int = Field(default=14, ge=2, le=200)
    overbought: float = Field(default=70.0, gt=0, lt=100)
    oversold: float = Field(default=30.0, gt=0, lt=100)

    @model_validator(mode="after")
    def validate_rsi_levels(self) -> SignalConfig:
        if self.oversold >= self.overbought:
            raise ValueError(
                f"oversold must be < overbought, got {self.oversold} >= {self.overbought}"
            )
        return self


class ChunkingConfig(BaseModel):
    """Text chunk budget for downstream per-chunk model calls.

    The character budget is derived from a token budget and a rough
    characters-per-token ratio.
    """

    max_tokens: int = Field(default=30000, ge=1)
    chars_per_token: int = Field(default=4, ge=1, le=16)

    @property
    def max_chunk_size(self) -> int:
        """Maximum characters per chunk."""
        return self.max_tokens * self.chars_per_token


class AppConfig(BaseSettings):
    """Top-level application configuration.

    Env var examples:
        STRATLENS_LOG_LEVEL=DEBUG
        STRATLENS_INDICATORS__RSI_PERIOD=14
        STRATLENS_CHUNKING__MAX_TOKENS=8000
    """

    model_config = SettingsConfigDict(
        env_prefix="STRATLENS_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"
    log_format: str = "console"
    indicators: IndicatorConfig = IndicatorConfig()
    signals: SignalConfig = SignalConfig()
    chunking: ChunkingConfig = ChunkingConfig()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.upper()
        if v not in VALID_LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {sorted(VALID_LOG_LEVELS)}, got {v}"
            )
        return v

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in VALID_LOG_FORMATS:
            raise ValueError(
                f"log_format must be one of {sorted(VALID_LOG_FORMATS)}, got {v}"
            )
        return v

"""
Indicator Engine Configuration

Every period, window and threshold used by the calculators.
Values are passed explicitly into each calculator; nothing is read from the environment.
"""

from functools import lru_cache
from pydantic import BaseModel, ConfigDict, Field


class IndicatorConfig(BaseModel):
    """Calculator periods and classification thresholds."""

    model_config = ConfigDict(frozen=True)

    # Momentum oscillators
    rsi_period: int = Field(default=14, ge=1)
    stochastic_k_period: int = Field(default=14, ge=1)
    stochastic_d_period: int = Field(default=3, ge=1)
    momentum_period: int = Field(default=10, ge=1)
    roc_period: int = Field(default=12, ge=1)

    # Trend
    macd_fast: int = Field(default=12, ge=1)
    macd_slow: int = Field(default=26, ge=1)
    macd_signal: int = Field(default=9, ge=1)
    adx_period: int = Field(default=14, ge=1)

    # Volatility
    atr_period: int = Field(default=14, ge=1)
    bollinger_period: int = Field(default=20, ge=1)
    bollinger_std_dev: float = Field(default=2.0, ge=0)

    # Volume
    volume_window: int = Field(default=5, ge=1)  # 5 recent vs 5 preceding

    # Support/resistance
    pivot_window: int = Field(default=5, ge=1)
    min_structure_candles: int = Field(default=20, ge=1)
    fallback_band_percent: float = 2.0  # synthetic levels on short history
    pivot_fallback_percent: float = 3.0  # when one side has no pivot

    # Composite classifier
    trend_strength_min_candles: int = Field(default=20, ge=1)
    trend_sma_period: int = Field(default=20, ge=1)
    momentum_lookback: int = Field(default=10, ge=1)
    strong_trend_adx: float = 40.0
    trend_adx: float = 25.0
    strong_trend_volatility: float = 0.5  # ATR as % of price


@lru_cache()
def get_indicator_config() -> IndicatorConfig:
    """Get cached default configuration."""
    return IndicatorConfig()


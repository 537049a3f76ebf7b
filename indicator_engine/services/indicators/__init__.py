"""
Indicator Engine Service

CONTRACT:
    Input:  IndicatorRequest (ordered OHLCV candles)
    Output: IndicatorOutput

RESPONSIBILITIES:
    - Momentum oscillators (RSI, Stochastic, Momentum, ROC)
    - Trend indicators (MACD, moving averages, ADX/DI)
    - Volatility (ATR, Bollinger Bands)
    - Volume (OBV, volume trend)
    - Pivot support/resistance
    - Trend strength and market regime
    - Per-indicator signal summary

Uses NumPy for calculations.
All math is deterministic and reproducible.
"""

from indicator_engine.services.indicators.interface import IndicatorServiceInterface
from indicator_engine.services.indicators.service import (
    IndicatorService,
    analyze_market,
    get_indicator_service,
)
from indicator_engine.services.indicators.signals import summarize_signals

__all__ = [
    "IndicatorServiceInterface",
    "IndicatorService",
    "analyze_market",
    "get_indicator_service",
    "summarize_signals",
]

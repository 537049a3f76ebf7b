"""
Indicator Engine

Deterministic technical indicators and market-regime classification
for an ordered sequence of OHLCV candles.
"""

from indicator_engine.schemas.market import Candle
from indicator_engine.schemas.indicators import IndicatorReport, MarketRegime
from indicator_engine.services.indicators import analyze_market, get_indicator_service

__version__ = "0.1.0"

__all__ = [
    "Candle",
    "IndicatorReport",
    "MarketRegime",
    "analyze_market",
    "get_indicator_service",
]

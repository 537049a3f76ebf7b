"""
Indicator Engine Schema Contracts

JSON contracts between the engine and its collaborators.
All modules must conform to these schemas.
"""

from indicator_engine.schemas.market import Candle
from indicator_engine.schemas.indicators import (
    IndicatorRequest,
    IndicatorOutput,
    IndicatorReport,
    MACDData,
    MovingAverages,
    BollingerBandsData,
    StochasticData,
    ADXData,
    SupportResistance,
    DataAvailability,
    MarketRegime,
    IndicatorSignal,
    SignalSummary,
    SignalDirection,
    SignalCategory,
)

__all__ = [
    # Market
    "Candle",
    # Indicators
    "IndicatorRequest",
    "IndicatorOutput",
    "IndicatorReport",
    "MACDData",
    "MovingAverages",
    "BollingerBandsData",
    "StochasticData",
    "ADXData",
    "SupportResistance",
    "DataAvailability",
    "MarketRegime",
    # Signals
    "IndicatorSignal",
    "SignalSummary",
    "SignalDirection",
    "SignalCategory",
]

"""
CONTRACT 2: Indicator Engine

Input: IndicatorRequest (ordered candles)
Output: IndicatorOutput

This module defines the report produced by the engine.
Every model is frozen - a report is a snapshot, never updated after creation.
Field aliases keep the camelCase names downstream consumers already read.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from indicator_engine.schemas.market import Candle


# =============================================================================
# ENUMS
# =============================================================================


class MarketRegime(str, Enum):
    STRONG_TRENDING = "STRONG_TRENDING"
    TRENDING = "TRENDING"
    RANGING = "RANGING"


class SignalDirection(str, Enum):
    UP = "UP"
    DOWN = "DOWN"
    NEUTRAL = "NEUTRAL"


class SignalCategory(str, Enum):
    MOMENTUM = "MOMENTUM"
    TREND = "TREND"
    VOLATILITY = "VOLATILITY"
    VOLUME = "VOLUME"


class _ReportModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


# =============================================================================
# INPUT: IndicatorRequest
# =============================================================================


class IndicatorRequest(_ReportModel):
    """
    Request for indicator calculation.
    Sent by: market-data collaborator
    Received by: Indicator Service
    """

    symbol: str = Field(..., description="Instrument the candles belong to")
    candles: list[Candle] = Field(..., description="Ordered candles, oldest first")
    current_price: Optional[float] = Field(
        default=None,
        alias="currentPrice",
        description="Live price; defaults to the latest close",
    )


# =============================================================================
# OUTPUT: Indicator Groups
# =============================================================================


class MACDData(_ReportModel):
    """MACD line, signal line and histogram."""

    value: float
    signal: float
    histogram: float


class MovingAverages(_ReportModel):
    sma20: float
    sma50: float
    sma100: float
    sma200: float
    ema12: float
    ema26: float
    ema50: float


class BollingerBandsData(_ReportModel):
    """Bollinger Bands values. Bandwidth is a percentage of the middle band."""

    upper: float
    middle: float
    lower: float
    bandwidth: float


class StochasticData(_ReportModel):
    k: float
    d: float


class ADXData(_ReportModel):
    """Average Directional Index with its directional indicators."""

    value: float
    plus_di: float = Field(..., alias="plusDI")
    minus_di: float = Field(..., alias="minusDI")


class SupportResistance(_ReportModel):
    """Nearest pivot levels and their % distance from the current price."""

    nearest_support: float = Field(..., alias="nearestSupport")
    nearest_resistance: float = Field(..., alias="nearestResistance")
    distance_to_support: float = Field(..., alias="distanceToSupport")
    distance_to_resistance: float = Field(..., alias="distanceToResistance")


class DataAvailability(_ReportModel):
    """
    Whether each indicator was computed from enough history.

    False means the documented neutral default was returned instead,
    so a 50 RSI here can be told apart from a genuine 50 RSI.
    """

    rsi: bool
    macd: bool
    stochastic: bool
    adx: bool
    atr: bool
    bollinger_bands: bool = Field(..., alias="bollingerBands")
    obv: bool
    momentum: bool
    roc: bool
    volume_indicator: bool = Field(..., alias="volumeIndicator")
    support_resistance: bool = Field(..., alias="supportResistance")
    trend_strength: bool = Field(..., alias="trendStrength")


# =============================================================================
# OUTPUT: IndicatorReport
# =============================================================================


class IndicatorReport(_ReportModel):
    """
    Complete indicator snapshot for one candle sequence.
    Returned by: analyze_market
    Consumed by: signal scoring, advisory layer
    """

    rsi: float = Field(..., ge=0, le=100)
    macd: MACDData
    moving_averages: MovingAverages = Field(..., alias="movingAverages")
    bollinger_bands: BollingerBandsData = Field(..., alias="bollingerBands")
    volume_indicator: float = Field(..., alias="volumeIndicator")
    stochastic: StochasticData
    adx: ADXData
    atr: float = Field(..., ge=0)
    obv: float
    momentum: float
    roc: float
    support_resistance: SupportResistance = Field(..., alias="supportResistance")
    trend_strength: float = Field(..., alias="trendStrength", ge=0, le=100)
    market_regime: MarketRegime = Field(..., alias="marketRegime")
    availability: DataAvailability


# =============================================================================
# OUTPUT: Signal Summary
# =============================================================================


class IndicatorSignal(_ReportModel):
    """Directional vote derived from a single indicator."""

    indicator: str
    value: str = Field(..., description="Display value, e.g. '62.5' or '81/77'")
    signal: SignalDirection
    strength: float = Field(..., ge=0, le=100)
    category: SignalCategory
    description: str


class SignalSummary(_ReportModel):
    """Aggregated indicator votes."""

    signals: list[IndicatorSignal]
    up_count: int = Field(..., alias="upSignalsCount", ge=0)
    down_count: int = Field(..., alias="downSignalsCount", ge=0)
    neutral_count: int = Field(..., alias="neutralSignalsCount", ge=0)
    up_score: float = Field(..., alias="upScore", ge=0)
    down_score: float = Field(..., alias="downScore", ge=0)
    signal_alignment: float = Field(..., alias="signalAlignment", ge=0, le=100)
    market_regime: MarketRegime = Field(..., alias="marketRegime")


# =============================================================================
# OUTPUT: IndicatorOutput (Complete Response)
# =============================================================================


class IndicatorOutput(_ReportModel):
    """
    Service response for one symbol.
    Returned by: Indicator Service
    """

    symbol: str
    timestamp: datetime = Field(..., description="Timestamp of the latest candle")
    candle_count: int = Field(..., alias="candleCount", ge=1)
    current_price: float = Field(..., alias="currentPrice")
    report: IndicatorReport
    summary: SignalSummary

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "symbol": "BTC/USD",
                "timestamp": "2024-02-04T10:30:00Z",
                "candleCount": 100,
                "currentPrice": 43250.5,
                "report": {
                    "rsi": 62.5,
                    "macd": {"value": 12.4, "signal": 9.8, "histogram": 2.6},
                    "marketRegime": "TRENDING",
                },
                "summary": {
                    "upSignalsCount": 5,
                    "downSignalsCount": 2,
                    "signalAlignment": 55.6,
                },
            }
        },
    )

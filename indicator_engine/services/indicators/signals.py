"""
Indicator Signal Summary

Turns an IndicatorReport into per-indicator UP/DOWN/NEUTRAL votes and
aggregates them. Thresholds are the classic oscillator bands
(RSI 30/70, Stochastic 20/80, ADX 25/40).
"""

from indicator_engine.schemas.indicators import (
    IndicatorReport,
    IndicatorSignal,
    SignalCategory,
    SignalDirection,
    SignalSummary,
)


def _rsi_signal(report: IndicatorReport) -> IndicatorSignal:
    value = report.rsi
    if value < 30:
        signal, strength, description = SignalDirection.UP, 85, "Oversold - Strong bullish signal"
    elif value > 70:
        signal, strength, description = SignalDirection.DOWN, 85, "Overbought - Strong bearish signal"
    else:
        signal, strength, description = SignalDirection.NEUTRAL, 50, "Neutral range"

    return IndicatorSignal(
        indicator="RSI",
        value=f"{value:.1f}",
        signal=signal,
        strength=strength,
        category=SignalCategory.MOMENTUM,
        description=description,
    )


def _stochastic_signal(report: IndicatorReport) -> IndicatorSignal:
    k, d = report.stochastic.k, report.stochastic.d
    if k < 20:
        signal, strength, description = SignalDirection.UP, 90, "Oversold conditions"
    elif k > 80:
        signal, strength, description = SignalDirection.DOWN, 90, "Overbought conditions"
    else:
        signal, strength, description = SignalDirection.NEUTRAL, 50, "Neutral momentum"

    return IndicatorSignal(
        indicator="Stochastic K/D",
        value=f"{k:.0f}/{d:.0f}",
        signal=signal,
        strength=strength,
        category=SignalCategory.MOMENTUM,
        description=description,
    )


def _macd_signal(report: IndicatorReport) -> IndicatorSignal:
    histogram = report.macd.histogram
    bullish = histogram > 0

    return IndicatorSignal(
        indicator="MACD",
        value=f"{histogram:.4f}",
        signal=SignalDirection.UP if bullish else SignalDirection.DOWN,
        strength=75 if abs(histogram) > 0.001 else 50,
        category=SignalCategory.TREND,
        description="Bullish crossover detected" if bullish else "Bearish trend",
    )


def _adx_signal(report: IndicatorReport) -> IndicatorSignal:
    adx = report.adx
    if adx.value > 40:
        strength, description = 85, "STRONG TREND confirmed"
    elif adx.value > 25:
        strength, description = 70, "Trending market"
    else:
        strength, description = 50, "Weak trend"

    return IndicatorSignal(
        indicator="ADX",
        value=f"{adx.value:.1f}",
        signal=SignalDirection.UP if adx.plus_di > adx.minus_di else SignalDirection.DOWN,
        strength=strength,
        category=SignalCategory.TREND,
        description=description,
    )


def _moving_average_signal(report: IndicatorReport, current_price: float) -> IndicatorSignal:
    averages = report.moving_averages
    above = current_price > averages.sma50

    return IndicatorSignal(
        indicator="SMA 20/50/200",
        value=f"{averages.sma20:.2f}",
        signal=SignalDirection.UP if above else SignalDirection.DOWN,
        strength=67,
        category=SignalCategory.TREND,
        description="Price above SMA50 - bullish" if above else "Price below SMA50 - bearish",
    )


def _bollinger_signal(report: IndicatorReport, current_price: float) -> IndicatorSignal:
    bands = report.bollinger_bands
    if current_price < bands.lower:
        signal, strength, description = SignalDirection.UP, 75, "At lower band - potential bounce"
    elif current_price > bands.upper:
        signal, strength, description = SignalDirection.DOWN, 75, "At upper band - potential reversal"
    else:
        signal, strength, description = SignalDirection.NEUTRAL, 50, "Mid-range"

    return IndicatorSignal(
        indicator="Bollinger Bands",
        value=f"Width: {bands.bandwidth:.2f}%",
        signal=signal,
        strength=strength,
        category=SignalCategory.VOLATILITY,
        description=description,
    )


def _volume_signal(report: IndicatorReport) -> IndicatorSignal:
    change = report.volume_indicator
    confirmed = change > 10

    return IndicatorSignal(
        indicator="Volume Trend",
        value=f"{'+' if change > 0 else ''}{change:.1f}%",
        signal=SignalDirection.UP if confirmed else SignalDirection.NEUTRAL,
        strength=80 if abs(change) > 15 else 60,
        category=SignalCategory.VOLUME,
        description="Strong volume confirmation" if confirmed else "Normal volume",
    )


def _momentum_signal(report: IndicatorReport) -> IndicatorSignal:
    value = report.momentum
    if value > 2:
        description = "Building upward pressure"
    elif value < -2:
        description = "Downward pressure"
    else:
        description = "Neutral momentum"

    return IndicatorSignal(
        indicator="Momentum",
        value=f"{value:.2f}",
        signal=SignalDirection.UP if value > 0 else SignalDirection.DOWN,
        strength=70 if abs(value) > 2 else 50,
        category=SignalCategory.MOMENTUM,
        description=description,
    )


def _roc_signal(report: IndicatorReport) -> IndicatorSignal:
    value = report.roc
    if value > 1.5:
        description = "Confirming upward momentum"
    elif value < -1.5:
        description = "Confirming downward momentum"
    else:
        description = "Neutral"

    return IndicatorSignal(
        indicator="ROC",
        value=f"{value:.2f}%",
        signal=SignalDirection.UP if value > 0 else SignalDirection.DOWN,
        strength=70 if abs(value) > 1.5 else 50,
        category=SignalCategory.MOMENTUM,
        description=description,
    )


def build_signals(report: IndicatorReport, current_price: float) -> list[IndicatorSignal]:
    """One directional vote per indicator, in display order."""
    return [
        _rsi_signal(report),
        _stochastic_signal(report),
        _macd_signal(report),
        _adx_signal(report),
        _moving_average_signal(report, current_price),
        _bollinger_signal(report, current_price),
        _volume_signal(report),
        _momentum_signal(report),
        _roc_signal(report),
    ]


def summarize_signals(report: IndicatorReport, current_price: float) -> SignalSummary:
    """
    Aggregate indicator votes.

    Alignment is the share of votes agreeing with the dominant direction,
    so 9 signals with 6 UP and 2 DOWN align at 66.7%.
    """
    signals = build_signals(report, current_price)

    up = [s for s in signals if s.signal == SignalDirection.UP]
    down = [s for s in signals if s.signal == SignalDirection.DOWN]
    neutral = [s for s in signals if s.signal == SignalDirection.NEUTRAL]

    return SignalSummary(
        signals=signals,
        up_count=len(up),
        down_count=len(down),
        neutral_count=len(neutral),
        up_score=sum(s.strength for s in up),
        down_score=sum(s.strength for s in down),
        signal_alignment=max(len(up), len(down)) / len(signals) * 100,
        market_regime=report.market_regime,
    )

"""Tests for the indicator signal summary."""

import pytest

from indicator_engine.schemas.indicators import (
    ADXData,
    MACDData,
    MarketRegime,
    SignalCategory,
    SignalDirection,
    StochasticData,
)
from indicator_engine.services.indicators import analyze_market, summarize_signals
from indicator_engine.services.indicators.signals import build_signals


@pytest.fixture
def flat_report(flat_candles):
    return analyze_market(flat_candles)


def _by_name(summary):
    return {s.indicator: s for s in summary.signals}


class TestBuildSignals:
    """Tests for per-indicator votes."""

    def test_signal_order_and_categories(self, flat_report):
        signals = build_signals(flat_report, 100.0)

        assert [s.indicator for s in signals] == [
            "RSI",
            "Stochastic K/D",
            "MACD",
            "ADX",
            "SMA 20/50/200",
            "Bollinger Bands",
            "Volume Trend",
            "Momentum",
            "ROC",
        ]
        assert signals[0].category == SignalCategory.MOMENTUM
        assert signals[3].category == SignalCategory.TREND
        assert signals[5].category == SignalCategory.VOLATILITY
        assert signals[6].category == SignalCategory.VOLUME

    def test_rsi_oversold(self, flat_report):
        report = flat_report.model_copy(update={"rsi": 20.0})
        rsi = _by_name(summarize_signals(report, 100.0))["RSI"]

        assert rsi.signal == SignalDirection.UP
        assert rsi.strength == 85
        assert rsi.value == "20.0"

    def test_rsi_overbought(self, flat_report):
        rsi = _by_name(summarize_signals(flat_report, 100.0))["RSI"]

        assert rsi.signal == SignalDirection.DOWN
        assert rsi.description == "Overbought - Strong bearish signal"

    def test_stochastic_oversold(self, flat_report):
        report = flat_report.model_copy(update={"stochastic": StochasticData(k=10.0, d=15.0)})
        stoch = _by_name(summarize_signals(report, 100.0))["Stochastic K/D"]

        assert stoch.signal == SignalDirection.UP
        assert stoch.strength == 90
        assert stoch.value == "10/15"

    def test_macd_strength_threshold(self, flat_report):
        weak = flat_report.model_copy(
            update={"macd": MACDData(value=0.0, signal=0.0, histogram=0.0005)}
        )
        strong = flat_report.model_copy(
            update={"macd": MACDData(value=1.0, signal=0.5, histogram=0.5)}
        )

        weak_signal = _by_name(summarize_signals(weak, 100.0))["MACD"]
        strong_signal = _by_name(summarize_signals(strong, 100.0))["MACD"]

        assert weak_signal.signal == SignalDirection.UP
        assert weak_signal.strength == 50
        assert strong_signal.strength == 75
        assert strong_signal.description == "Bullish crossover detected"

    def test_adx_direction_and_strength(self, flat_report):
        report = flat_report.model_copy(
            update={"adx": ADXData(value=45.0, plus_di=30.0, minus_di=10.0)}
        )
        signal = _by_name(summarize_signals(report, 100.0))["ADX"]

        assert signal.signal == SignalDirection.UP
        assert signal.strength == 85
        assert signal.description == "STRONG TREND confirmed"

    def test_bollinger_uses_current_price(self, flat_report):
        below = _by_name(summarize_signals(flat_report, 90.0))["Bollinger Bands"]
        above = _by_name(summarize_signals(flat_report, 110.0))["Bollinger Bands"]

        assert below.signal == SignalDirection.UP
        assert above.signal == SignalDirection.DOWN
        assert below.value == "Width: 0.00%"

    def test_volume_confirmation(self, flat_report):
        report = flat_report.model_copy(update={"volume_indicator": 20.0})
        volume = _by_name(summarize_signals(report, 100.0))["Volume Trend"]

        assert volume.signal == SignalDirection.UP
        assert volume.strength == 80
        assert volume.value == "+20.0%"


class TestSummarizeSignals:
    """Tests for vote aggregation."""

    def test_flat_market_summary(self, flat_report):
        """Flat bars: RSI overbought, everything else down-by-default or neutral."""
        summary = summarize_signals(flat_report, 100.0)

        assert (summary.up_count, summary.down_count, summary.neutral_count) == (0, 6, 3)
        assert summary.up_score == 0
        assert summary.down_score == 85 + 50 + 50 + 67 + 50 + 50
        assert summary.signal_alignment == pytest.approx(6 / 9 * 100)
        assert summary.market_regime == MarketRegime.RANGING

    def test_counts_match_signals(self, random_walk_candles):
        report = analyze_market(random_walk_candles)
        summary = summarize_signals(report, random_walk_candles[-1].close)

        assert summary.up_count + summary.down_count + summary.neutral_count == len(summary.signals)
        assert summary.up_score == sum(
            s.strength for s in summary.signals if s.signal == SignalDirection.UP
        )
        assert 0 <= summary.signal_alignment <= 100

    def test_uptrend_leans_up(self, uptrend_candles):
        report = analyze_market(uptrend_candles)
        summary = summarize_signals(report, uptrend_candles[-1].close)
        signals = _by_name(summary)

        assert signals["ADX"].signal == SignalDirection.UP
        assert signals["SMA 20/50/200"].signal == SignalDirection.UP
        assert signals["Momentum"].signal == SignalDirection.UP
        assert signals["ROC"].signal == SignalDirection.UP
        assert signals["Bollinger Bands"].signal == SignalDirection.NEUTRAL
        assert summary.neutral_count == 2

    def test_alias_serialization(self, flat_report):
        data = summarize_signals(flat_report, 100.0).model_dump(by_alias=True)

        assert data["downSignalsCount"] == 6
        assert "signalAlignment" in data

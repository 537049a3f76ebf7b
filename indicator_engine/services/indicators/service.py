"""
Indicator Engine Service Implementation

Runs every calculator over one candle sequence and assembles the report.
Pure NumPy calculations - no I/O, no shared state.
"""

import logging
from typing import Optional, Sequence

from indicator_engine.core.config import IndicatorConfig, get_indicator_config
from indicator_engine.schemas.market import Candle
from indicator_engine.schemas.indicators import (
    ADXData,
    BollingerBandsData,
    DataAvailability,
    IndicatorOutput,
    IndicatorReport,
    IndicatorRequest,
    MACDData,
    MovingAverages,
    StochasticData,
    SupportResistance,
)
from indicator_engine.services.base import ValidationError
from indicator_engine.services.indicators.interface import IndicatorServiceInterface
from indicator_engine.services.indicators.calculations import (
    OHLCVData,
    adx,
    atr,
    bollinger_bands,
    bollinger_bandwidth,
    determine_market_regime,
    find_support_resistance,
    macd,
    momentum,
    moving_averages,
    obv,
    roc,
    rsi,
    stochastic,
    trend_strength,
    volume_trend,
)
from indicator_engine.services.indicators.signals import summarize_signals

logger = logging.getLogger(__name__)

SERVICE_NAME = "IndicatorService"


def analyze_market(
    candles: Sequence[Candle],
    current_price: Optional[float] = None,
    config: Optional[IndicatorConfig] = None,
) -> IndicatorReport:
    """
    Calculate every indicator for a candle sequence.

    Args:
        candles: Ordered candles, oldest first. Never modified.
        current_price: Price used for levels and regime; defaults to the latest close
        config: Periods and thresholds; defaults to get_indicator_config()

    Raises:
        ValidationError: If `candles` is empty
    """
    if not candles:
        raise ValidationError(SERVICE_NAME, "No candles supplied")

    config = config or get_indicator_config()
    data = OHLCVData.from_candles(candles)
    price = float(data.closes[-1]) if current_price is None else float(current_price)

    # Momentum
    rsi_result = rsi(data.closes, config.rsi_period)
    stoch_result = stochastic(
        data.highs, data.lows, data.closes,
        config.stochastic_k_period, config.stochastic_d_period,
    )
    momentum_result = momentum(data.closes, config.momentum_period)
    roc_result = roc(data.closes, config.roc_period)

    # Trend
    macd_result = macd(data.closes, config.macd_fast, config.macd_slow, config.macd_signal)
    averages = moving_averages(data.closes)
    adx_result = adx(data.highs, data.lows, data.closes, config.adx_period)

    # Volatility
    atr_result = atr(data.highs, data.lows, data.closes, config.atr_period)
    bands_result = bollinger_bands(data.closes, config.bollinger_period, config.bollinger_std_dev)
    upper, middle, lower = bands_result.value

    # Volume
    obv_result = obv(data.closes, data.volumes)
    volume_result = volume_trend(data.volumes, config.volume_window)

    # Structure
    levels_result = find_support_resistance(
        data.highs,
        data.lows,
        price,
        window=config.pivot_window,
        min_candles=config.min_structure_candles,
        fallback_band_percent=config.fallback_band_percent,
        pivot_fallback_percent=config.pivot_fallback_percent,
    )
    support, resistance, to_support, to_resistance = levels_result.value

    # Composite
    adx_value, plus_di, minus_di = adx_result.value
    strength_result = trend_strength(
        data.closes,
        adx_value,
        min_candles=config.trend_strength_min_candles,
        sma_period=config.trend_sma_period,
        lookback=config.momentum_lookback,
    )
    regime = determine_market_regime(
        adx_value,
        atr_result.value,
        price,
        strong_trend_adx=config.strong_trend_adx,
        trend_adx=config.trend_adx,
        strong_trend_volatility=config.strong_trend_volatility,
    )

    availability = DataAvailability(
        rsi=rsi_result.available,
        macd=macd_result.available,
        stochastic=stoch_result.available,
        adx=adx_result.available,
        atr=atr_result.available,
        bollinger_bands=bands_result.available,
        obv=obv_result.available,
        momentum=momentum_result.available,
        roc=roc_result.available,
        volume_indicator=volume_result.available,
        support_resistance=levels_result.available,
        trend_strength=strength_result.available,
    )

    missing = [name for name, ok in availability.model_dump().items() if not ok]
    if missing:
        logger.debug(
            f"Insufficient history ({len(data)} candles), defaults used for: {', '.join(missing)}"
        )

    macd_line, signal_line, histogram = macd_result.value
    stoch_k, stoch_d = stoch_result.value

    report = IndicatorReport(
        rsi=rsi_result.value,
        macd=MACDData(value=macd_line, signal=signal_line, histogram=histogram),
        moving_averages=MovingAverages(**averages),
        bollinger_bands=BollingerBandsData(
            upper=upper,
            middle=middle,
            lower=lower,
            bandwidth=bollinger_bandwidth(upper, middle, lower),
        ),
        volume_indicator=volume_result.value,
        stochastic=StochasticData(k=stoch_k, d=stoch_d),
        adx=ADXData(value=adx_value, plus_di=plus_di, minus_di=minus_di),
        atr=atr_result.value,
        obv=obv_result.value,
        momentum=momentum_result.value,
        roc=roc_result.value,
        support_resistance=SupportResistance(
            nearest_support=support,
            nearest_resistance=resistance,
            distance_to_support=to_support,
            distance_to_resistance=to_resistance,
        ),
        trend_strength=strength_result.value,
        market_regime=regime,
        availability=availability,
    )

    logger.debug(
        f"Analyzed {len(data)} candles: regime={regime.value}, "
        f"adx={adx_value:.2f}, rsi={rsi_result.value:.2f}"
    )
    return report


class IndicatorService(IndicatorServiceInterface):
    """
    Indicator Engine Service.

    Calculates technical indicators for market analysis.
    All calculations are deterministic and reproducible.
    """

    def __init__(self, config: Optional[IndicatorConfig] = None):
        self._config = config or get_indicator_config()

    @property
    def name(self) -> str:
        return SERVICE_NAME

    @property
    def config(self) -> IndicatorConfig:
        return self._config

    async def validate_input(self, input_data: IndicatorRequest) -> IndicatorRequest:
        if not input_data.candles:
            raise ValidationError(
                self.name,
                f"No candles supplied for {input_data.symbol}",
                {"symbol": input_data.symbol},
            )
        return input_data

    async def execute(self, input_data: IndicatorRequest) -> IndicatorOutput:
        """Calculate the report and signal summary for one symbol."""
        request = await self.validate_input(input_data)
        candles = request.candles

        price = candles[-1].close if request.current_price is None else request.current_price
        report = self.analyze(candles, price)
        summary = summarize_signals(report, price)

        logger.info(
            f"{request.symbol}: {report.market_regime.value}, "
            f"{summary.up_count} up / {summary.down_count} down signals"
        )

        return IndicatorOutput(
            symbol=request.symbol,
            timestamp=candles[-1].timestamp,
            candle_count=len(candles),
            current_price=price,
            report=report,
            summary=summary,
        )

    def analyze(
        self,
        candles: Sequence[Candle],
        current_price: Optional[float] = None,
    ) -> IndicatorReport:
        return analyze_market(candles, current_price, self._config)

    async def health_check(self) -> bool:
        """Indicator service is always healthy (pure computation)."""
        return True


# Singleton instance
_service_instance: Optional[IndicatorService] = None


def get_indicator_service() -> IndicatorService:
    """Get or create indicator service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = IndicatorService()
    return _service_instance

"""
Indicator Engine Service Interface

Defines the contract for the indicator calculation layer.
"""

from abc import abstractmethod
from typing import Optional, Sequence

from indicator_engine.core.config import IndicatorConfig
from indicator_engine.services.base import BaseService
from indicator_engine.schemas.market import Candle
from indicator_engine.schemas.indicators import (
    IndicatorOutput,
    IndicatorReport,
    IndicatorRequest,
)


class IndicatorServiceInterface(BaseService[IndicatorRequest, IndicatorOutput]):
    """
    Indicator Engine Service Contract.

    INPUT: IndicatorRequest
        - symbol: instrument name
        - candles: ordered OHLCV bars, oldest first
        - current_price: optional live price

    OUTPUT: IndicatorOutput
        - report: every indicator plus market regime
        - summary: per-indicator signal votes
    """

    @property
    def name(self) -> str:
        return "IndicatorService"

    @abstractmethod
    async def execute(self, input_data: IndicatorRequest) -> IndicatorOutput:
        """Calculate the report and signal summary for one symbol."""
        pass

    @abstractmethod
    def analyze(
        self,
        candles: Sequence[Candle],
        current_price: Optional[float] = None,
    ) -> IndicatorReport:
        """
        Calculate the indicator report for a candle sequence.

        Args:
            candles: Ordered candles, oldest first (read-only)
            current_price: Live price; defaults to the latest close

        Returns:
            Complete indicator report
        """
        pass

    @property
    @abstractmethod
    def config(self) -> IndicatorConfig:
        """Periods and thresholds in use."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Indicator service is always healthy (pure computation)."""
        pass

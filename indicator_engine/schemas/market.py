"""
CONTRACT 1: Candle Input

Input boundary of the indicator engine.

The market-data collaborator supplies an ordered candle sequence (oldest first).
The engine only reads it: no fetching, no reordering, no provenance checks.
"""

from datetime import datetime
from pydantic import BaseModel, ConfigDict


class Candle(BaseModel):
    """
    Single OHLCV bar.

    low <= {open, close} <= high is expected but not enforced;
    crossed bars simply produce meaningless numbers downstream.
    """

    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    open: float
    high: float
    low: float
    close: float
    volume: float

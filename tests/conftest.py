"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta, timezone

import numpy as np
import pytest

from indicator_engine.schemas.market import Candle

START = datetime(2024, 1, 1, tzinfo=timezone.utc)


def build_candles(closes, highs=None, lows=None, volumes=None, spread=0.0):
    """
    Hourly candles from a close series.

    Highs/lows default to close +/- spread; open equals the previous close.
    """
    candles = []
    for i, close in enumerate(closes):
        candles.append(
            Candle(
                timestamp=START + timedelta(hours=i),
                open=closes[i - 1] if i > 0 else close,
                high=highs[i] if highs is not None else close + spread,
                low=lows[i] if lows is not None else close - spread,
                close=close,
                volume=volumes[i] if volumes is not None else 1000.0,
            )
        )
    return candles


@pytest.fixture
def candle_factory():
    """Factory for candle sequences."""
    return build_candles


@pytest.fixture
def flat_candles():
    """25 candles with every OHLC at 100 and volume 1000."""
    return build_candles([100.0] * 25)


@pytest.fixture
def uptrend_candles():
    """60 candles rising one point per bar with a fixed 2-point range."""
    return build_candles([100.0 + i for i in range(60)], spread=1.0)


@pytest.fixture
def random_walk_candles():
    """250 candles of a seeded random walk with positive volume."""
    rng = np.random.default_rng(7)
    closes = 100 + np.cumsum(rng.normal(0, 1, 250))
    highs = closes + rng.uniform(0.1, 1.5, 250)
    lows = closes - rng.uniform(0.1, 1.5, 250)
    volumes = rng.uniform(500, 1500, 250)
    return build_candles(
        [float(c) for c in closes],
        highs=[float(h) for h in highs],
        lows=[float(lo) for lo in lows],
        volumes=[float(v) for v in volumes],
    )

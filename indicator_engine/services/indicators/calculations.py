"""
Technical Indicator Calculations

Pure NumPy implementations of the engine's indicators.
All math is deterministic: every function reads its inputs and allocates its own output.

Calculators never raise on short history. They return an IndicatorResult whose
value is the documented neutral default and whose `available` flag is False.
"""

import math
from dataclasses import dataclass
from typing import Generic, Optional, Sequence, TypeVar

import numpy as np

from indicator_engine.schemas.indicators import MarketRegime
from indicator_engine.schemas.market import Candle

T = TypeVar("T")


@dataclass
class OHLCVData:
    """OHLCV data arrays for calculations."""

    highs: np.ndarray
    lows: np.ndarray
    closes: np.ndarray
    volumes: np.ndarray

    @classmethod
    def from_candles(cls, candles: Sequence[Candle]) -> "OHLCVData":
        """Copy candle fields into fresh arrays; the caller's sequence is untouched."""
        return cls(
            highs=np.array([c.high for c in candles], dtype=float),
            lows=np.array([c.low for c in candles], dtype=float),
            closes=np.array([c.close for c in candles], dtype=float),
            volumes=np.array([c.volume for c in candles], dtype=float),
        )

    def __len__(self) -> int:
        return len(self.closes)


@dataclass(frozen=True)
class IndicatorResult(Generic[T]):
    """Calculator output: the value plus whether enough history backed it."""

    value: T
    available: bool = True


def _insufficient(value: T) -> IndicatorResult[T]:
    return IndicatorResult(value=value, available=False)


def _as_array(values) -> np.ndarray:
    return np.asarray(values, dtype=float)


def _sequential_sum(values) -> float:
    """Strict left-to-right sum; np.sum's pairwise order rounds differently."""
    values = _as_array(values)
    if len(values) == 0:
        return 0.0
    return float(np.add.accumulate(values)[-1])


def _mean(values) -> float:
    values = _as_array(values)
    return _sequential_sum(values) / len(values)


# =============================================================================
# MOVING AVERAGES
# =============================================================================


def sma(prices, period: int) -> float:
    """
    Simple Moving Average of the last `period` prices.

    With fewer prices than `period`, the mean of everything available.
    """
    prices = _as_array(prices)
    if len(prices) == 0:
        return 0.0
    if len(prices) < period:
        return _mean(prices)
    return _mean(prices[-period:])


def ema(prices, period: int) -> float:
    """
    Exponential Moving Average over the trailing `period` window.

    Seeds with the window's SMA, then smooths forward through the same window.
    Shorter input returns the latest price unchanged.
    """
    prices = _as_array(prices)
    if len(prices) == 0:
        return 0.0
    if len(prices) < period:
        return float(prices[-1])

    window = prices[-period:]
    multiplier = 2 / (period + 1)

    # Start with SMA
    result = _mean(window)

    for price in window:
        result = (float(price) - result) * multiplier + result

    return result


# =============================================================================
# MOMENTUM INDICATORS
# =============================================================================


def rsi(closes, period: int = 14) -> IndicatorResult[float]:
    """Relative Strength Index from simple (non-Wilder) gain/loss averages."""
    closes = _as_array(closes)
    if len(closes) < period + 1:
        return _insufficient(50.0)

    deltas = np.diff(closes[-(period + 1):])
    gains = np.where(deltas > 0, deltas, 0.0)
    losses = np.where(deltas < 0, -deltas, 0.0)

    avg_gain = _sequential_sum(gains) / period
    avg_loss = _sequential_sum(losses) / period

    if avg_loss == 0:
        return IndicatorResult(100.0)

    rs = avg_gain / avg_loss
    return IndicatorResult(100 - (100 / (1 + rs)))


def _percent_k(
    highs: np.ndarray, lows: np.ndarray, closes: np.ndarray, end: int, k_period: int
) -> Optional[float]:
    """%K for the window ending at `end` (inclusive); None on a zero range."""
    highest_high = float(np.max(highs[end - k_period + 1 : end + 1]))
    lowest_low = float(np.min(lows[end - k_period + 1 : end + 1]))

    if highest_high == lowest_low:
        return None
    return ((float(closes[end]) - lowest_low) / (highest_high - lowest_low)) * 100


def stochastic(
    highs,
    lows,
    closes,
    k_period: int = 14,
    d_period: int = 3,
) -> IndicatorResult[tuple[float, float]]:
    """
    Stochastic Oscillator.

    Returns: (k, d)
    """
    highs, lows, closes = _as_array(highs), _as_array(lows), _as_array(closes)
    n = len(closes)
    if n < k_period:
        return _insufficient((50.0, 50.0))

    k = _percent_k(highs, lows, closes, n - 1, k_period)
    if k is None:
        k = 50.0

    # Slide the same window backward; flat windows contribute no sample
    k_values = []
    for end in range(max(0, n - k_period - d_period), n):
        if end < k_period - 1:
            continue
        value = _percent_k(highs, lows, closes, end, k_period)
        if value is not None:
            k_values.append(value)

    if len(k_values) >= d_period:
        d = _mean(k_values[-d_period:])
    else:
        d = k

    return IndicatorResult((k, d))


def _percent_change(closes, period: int) -> IndicatorResult[float]:
    closes = _as_array(closes)
    if len(closes) < period + 1:
        return _insufficient(0.0)

    past = float(closes[-period - 1])
    if past == 0:
        return _insufficient(0.0)

    return IndicatorResult(((float(closes[-1]) - past) / past) * 100)


def momentum(closes, period: int = 10) -> IndicatorResult[float]:
    """Price momentum: % change over `period` bars."""
    return _percent_change(closes, period)


def roc(closes, period: int = 12) -> IndicatorResult[float]:
    """Rate of Change: % change over `period` bars."""
    return _percent_change(closes, period)


# =============================================================================
# TREND INDICATORS
# =============================================================================


def macd_history(closes, fast_period: int = 12, slow_period: int = 26) -> np.ndarray:
    """
    MACD line recomputed over every prefix of at least `slow_period` closes.

    Element j is EMA(fast) - EMA(slow) over closes[: slow_period + j].
    """
    closes = _as_array(closes)
    return np.array(
        [
            ema(closes[:end], fast_period) - ema(closes[:end], slow_period)
            for end in range(slow_period, len(closes) + 1)
        ],
        dtype=float,
    )


def macd(
    closes,
    fast_period: int = 12,
    slow_period: int = 26,
    signal_period: int = 9,
) -> IndicatorResult[tuple[float, float, float]]:
    """
    MACD (Moving Average Convergence Divergence).

    Returns: (macd_line, signal_line, histogram)
    """
    closes = _as_array(closes)
    if len(closes) == 0:
        return _insufficient((0.0, 0.0, 0.0))

    macd_line = ema(closes, fast_period) - ema(closes, slow_period)

    history = macd_history(closes, fast_period, slow_period)
    if len(history) == 0:
        # No full slow window yet: flat signal, zero histogram
        return _insufficient((macd_line, macd_line, 0.0))

    # Under signal_period entries the EMA just echoes the latest MACD value
    signal_line = ema(history, signal_period)
    histogram = macd_line - signal_line

    return IndicatorResult(
        (macd_line, signal_line, histogram),
        available=len(history) >= signal_period,
    )


def moving_averages(
    closes,
    sma_periods: Sequence[int] = (20, 50, 100, 200),
    ema_periods: Sequence[int] = (12, 26, 50),
) -> dict[str, float]:
    """Named SMA/EMA bundle, e.g. {'sma20': ..., 'ema12': ...}."""
    closes = _as_array(closes)
    result = {f"sma{period}": sma(closes, period) for period in sma_periods}
    result.update({f"ema{period}": ema(closes, period) for period in ema_periods})
    return result


def true_range(highs, lows, closes) -> np.ndarray:
    """Per-step True Range; element i covers bars i and i+1."""
    highs, lows, closes = _as_array(highs), _as_array(lows), _as_array(closes)
    if len(closes) < 2:
        return np.array([], dtype=float)

    prev_close = closes[:-1]
    return np.maximum.reduce(
        [
            highs[1:] - lows[1:],
            np.abs(highs[1:] - prev_close),
            np.abs(lows[1:] - prev_close),
        ]
    )


def directional_movement(highs, lows) -> tuple[np.ndarray, np.ndarray]:
    """
    Per-step +DM and -DM.

    Returns: (plus_dm, minus_dm)
    """
    highs, lows = _as_array(highs), _as_array(lows)
    up_move = highs[1:] - highs[:-1]
    down_move = lows[:-1] - lows[1:]

    plus_dm = np.where((up_move > down_move) & (up_move > 0), up_move, 0.0)
    minus_dm = np.where((down_move > up_move) & (down_move > 0), down_move, 0.0)
    return plus_dm, minus_dm


def _directional_index(
    tr: np.ndarray, plus_dm: np.ndarray, minus_dm: np.ndarray
) -> tuple[float, float, float]:
    """(+DI, -DI, DX) over one window, using simple means."""
    atr_local = _mean(tr)
    if atr_local == 0:
        return 0.0, 0.0, 0.0

    plus_di = _mean(plus_dm) / atr_local * 100
    minus_di = _mean(minus_dm) / atr_local * 100

    di_sum = plus_di + minus_di
    dx = abs(plus_di - minus_di) / di_sum * 100 if di_sum != 0 else 0.0
    return plus_di, minus_di, dx


def adx(highs, lows, closes, period: int = 14) -> IndicatorResult[tuple[float, float, float]]:
    """
    Average Directional Index.

    DI values come from the trailing `period` window. ADX averages DX over the
    windows ending inside [period, 2 * period) of the True Range history - a
    deliberately narrower horizon than Wilder's continuous smoothing.

    Returns: (adx, plus_di, minus_di)
    """
    highs, lows, closes = _as_array(highs), _as_array(lows), _as_array(closes)
    if len(closes) < period + 1:
        return _insufficient((0.0, 0.0, 0.0))

    tr = true_range(highs, lows, closes)
    plus_dm, minus_dm = directional_movement(highs, lows)

    plus_di, minus_di, dx = _directional_index(
        tr[-period:], plus_dm[-period:], minus_dm[-period:]
    )

    dx_values = []
    for end in range(period, min(len(tr), period * 2)):
        start = end - period
        window_plus, window_minus, window_dx = _directional_index(
            tr[start:end], plus_dm[start:end], minus_dm[start:end]
        )
        if window_plus + window_minus != 0:
            dx_values.append(window_dx)

    adx_value = _mean(dx_values) if dx_values else dx

    return IndicatorResult((adx_value, plus_di, minus_di))


# =============================================================================
# VOLATILITY INDICATORS
# =============================================================================


def atr(highs, lows, closes, period: int = 14) -> IndicatorResult[float]:
    """Average True Range as a simple mean over the trailing window."""
    if len(closes) < period + 1:
        return _insufficient(0.0)

    tr = true_range(highs, lows, closes)
    return IndicatorResult(_mean(tr[-period:]))


def bollinger_bands(
    closes, period: int = 20, std_dev: float = 2.0
) -> IndicatorResult[tuple[float, float, float]]:
    """
    Bollinger Bands with population standard deviation (divisor = period).

    Returns: (upper, middle, lower)
    """
    closes = _as_array(closes)
    if len(closes) == 0:
        return _insufficient((0.0, 0.0, 0.0))

    middle = sma(closes, period)
    window = closes[-period:]
    variance = _sequential_sum((window - middle) ** 2) / period
    sigma = math.sqrt(variance)

    bands = (middle + std_dev * sigma, middle, middle - std_dev * sigma)
    return IndicatorResult(bands, available=len(closes) >= period)


def bollinger_bandwidth(upper: float, middle: float, lower: float) -> float:
    """Band width as a percentage of the middle band."""
    if middle == 0:
        return 0.0
    return (upper - lower) / middle * 100


# =============================================================================
# VOLUME INDICATORS
# =============================================================================


def obv(closes, volumes) -> IndicatorResult[float]:
    """On-Balance Volume, starting from zero at the first bar."""
    closes, volumes = _as_array(closes), _as_array(volumes)
    if len(closes) < 2:
        return _insufficient(0.0)

    direction = np.sign(np.diff(closes))
    return IndicatorResult(_sequential_sum(direction * volumes[1:]))


def volume_trend(volumes, window: int = 5) -> IndicatorResult[float]:
    """% change of the mean volume of the last `window` bars vs the `window` before."""
    volumes = _as_array(volumes)
    if len(volumes) < window * 2:
        return _insufficient(0.0)

    recent_avg = _mean(volumes[-window:])
    older_avg = _mean(volumes[-window * 2 : -window])

    if older_avg == 0:
        return _insufficient(0.0)

    return IndicatorResult((recent_avg / older_avg - 1) * 100)


# =============================================================================
# SUPPORT/RESISTANCE
# =============================================================================


def find_pivot_points(highs, lows, window: int = 5) -> list[float]:
    """
    Local extremes within +/- `window` bars.

    A bar is a pivot high when its high is >= every high in the window and a
    pivot low when its low is <= every low. Ties count, so a plateau yields
    several adjacent pivots.
    """
    highs, lows = _as_array(highs), _as_array(lows)
    pivots = []

    for i in range(window, len(highs) - window):
        if highs[i] >= np.max(highs[i - window : i + window + 1]):
            pivots.append(float(highs[i]))
        if lows[i] <= np.min(lows[i - window : i + window + 1]):
            pivots.append(float(lows[i]))

    return pivots


def find_support_resistance(
    highs,
    lows,
    current_price: float,
    window: int = 5,
    min_candles: int = 20,
    fallback_band_percent: float = 2.0,
    pivot_fallback_percent: float = 3.0,
) -> IndicatorResult[tuple[float, float, float, float]]:
    """
    Nearest pivot support below and resistance above the current price.

    Returns: (nearest_support, nearest_resistance, distance_to_support, distance_to_resistance)
    """
    if len(highs) < min_candles:
        band = fallback_band_percent / 100
        return _insufficient(
            (
                current_price * (1 - band),
                current_price * (1 + band),
                fallback_band_percent,
                fallback_band_percent,
            )
        )

    pivots = find_pivot_points(highs, lows, window)

    supports = [p for p in pivots if p < current_price]
    resistances = [p for p in pivots if p > current_price]

    fallback = pivot_fallback_percent / 100
    nearest_support = max(supports) if supports else current_price * (1 - fallback)
    nearest_resistance = min(resistances) if resistances else current_price * (1 + fallback)

    if current_price == 0:
        return IndicatorResult((nearest_support, nearest_resistance, 0.0, 0.0))

    distance_to_support = (current_price - nearest_support) / current_price * 100
    distance_to_resistance = (nearest_resistance - current_price) / current_price * 100

    return IndicatorResult(
        (nearest_support, nearest_resistance, distance_to_support, distance_to_resistance)
    )


# =============================================================================
# COMPOSITE CLASSIFIER
# =============================================================================


def momentum_run(closes, lookback: int = 10) -> int:
    """
    Consecutive same-direction closes counted backward from the latest bar.

    A close that does not rise counts as a down move. The run stops at the
    first reversal or after `lookback` steps.
    """
    closes = _as_array(closes)
    run = 0
    last_direction = 0

    for i in range(len(closes) - 1, max(len(closes) - 1 - lookback, 0), -1):
        direction = 1 if closes[i] > closes[i - 1] else -1
        if last_direction == 0:
            last_direction = direction
            run = 1
        elif direction == last_direction:
            run += 1
        else:
            break

    return run


def trend_strength(
    closes,
    adx_value: float,
    min_candles: int = 20,
    sma_period: int = 20,
    lookback: int = 10,
) -> IndicatorResult[float]:
    """Mean of ADX, scaled SMA deviation and momentum run, clamped to [0, 100]."""
    closes = _as_array(closes)
    if len(closes) < min_candles:
        return _insufficient(0.0)

    average = sma(closes, sma_period)
    current = float(closes[-1])
    position_score = (current - average) / average * 100 if average != 0 else 0.0

    momentum_score = momentum_run(closes, lookback) * 10
    score = (adx_value + abs(position_score) * 10 + momentum_score) / 3

    return IndicatorResult(min(100.0, max(0.0, score)))


def determine_market_regime(
    adx_value: float,
    atr_value: float,
    current_price: float,
    strong_trend_adx: float = 40.0,
    trend_adx: float = 25.0,
    strong_trend_volatility: float = 0.5,
) -> MarketRegime:
    """Classify the market from ADX and ATR as a % of price."""
    volatility_ratio = atr_value / current_price * 100 if current_price != 0 else 0.0

    if adx_value > strong_trend_adx and volatility_ratio > strong_trend_volatility:
        return MarketRegime.STRONG_TRENDING
    elif adx_value > trend_adx:
        return MarketRegime.TRENDING
    return MarketRegime.RANGING

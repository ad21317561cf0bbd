"""Engine data models — typed value objects for indicator, signal and trend output."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Literal


SignalType = Literal["BUY", "SELL", "HOLD"]
SignalStrength = Literal["STRONG", "MODERATE", "WEAK"]
SignalUrgency = Literal["HIGH", "MEDIUM", "LOW"]
TrendDirection = Literal["BULLISH", "BEARISH", "NEUTRAL"]


@dataclass(frozen=True)
class PricePoint:
    """A single OHLCV observation. ``timestamp`` is epoch milliseconds."""

    timestamp: int
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "open": self.open,
            "high": self.high,
            "low": self.low,
            "close": self.close,
            "volume": self.volume,
        }


# ── Indicator bundle ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class MACDResult:
    value: float
    signal: float
    histogram: float


@dataclass(frozen=True)
class MovingAverages:
    sma20: float
    sma50: float
    sma200: float
    ema12: float
    ema26: float


@dataclass(frozen=True)
class BollingerBands:
    upper: float
    middle: float
    lower: float


@dataclass(frozen=True)
class StochasticResult:
    k: float
    d: float


@dataclass(frozen=True)
class TechnicalIndicators:
    """All indicators computed from one price series snapshot."""

    rsi: float
    macd: MACDResult
    moving_averages: MovingAverages
    bollinger_bands: BollingerBands
    stochastic: StochasticResult
    atr: float
    adx: float

    def to_dict(self) -> dict:
        ma = self.moving_averages
        bb = self.bollinger_bands
        return {
            "rsi": self.rsi,
            "macd": {
                "value": self.macd.value,
                "signal": self.macd.signal,
                "histogram": self.macd.histogram,
            },
            "movingAverages": {
                "sma20": ma.sma20,
                "sma50": ma.sma50,
                "sma200": ma.sma200,
                "ema12": ma.ema12,
                "ema26": ma.ema26,
            },
            "bollingerBands": {
                "upper": bb.upper,
                "middle": bb.middle,
                "lower": bb.lower,
            },
            "stochastic": {"k": self.stochastic.k, "d": self.stochastic.d},
            "atr": self.atr,
            "adx": self.adx,
        }


# ── Signal ───────────────────────────────────────────────────────────────


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Signal:
    """A classified trading signal with its scored rationale.

    ``timestamp`` is creation-time metadata and takes no part in equality.
    """

    type: SignalType
    strength: SignalStrength
    urgency: SignalUrgency
    confidence: float  # 50..95
    indicators: tuple[str, ...]
    action_message: str
    timestamp: datetime = field(default_factory=_utcnow, compare=False)

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "strength": self.strength,
            "urgency": self.urgency,
            "confidence": self.confidence,
            "indicators": list(self.indicators),
            "actionMessage": self.action_message,
            "timestamp": self.timestamp.isoformat(),
        }


# ── Trend ────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class PivotPoints:
    """Classic floor-trader pivot levels."""

    pp: float
    r1: float
    r2: float
    r3: float
    s1: float
    s2: float
    s3: float

    def to_dict(self) -> dict:
        return {
            "pp": self.pp,
            "r1": self.r1,
            "r2": self.r2,
            "r3": self.r3,
            "s1": self.s1,
            "s2": self.s2,
            "s3": self.s3,
        }


@dataclass(frozen=True)
class TrendAnalysis:
    """Directional trend, support/resistance band and pivot levels."""

    direction: TrendDirection
    strength: float  # 0..100
    support: float
    resistance: float
    pivot_points: PivotPoints

    def to_dict(self) -> dict:
        return {
            "direction": self.direction,
            "strength": self.strength,
            "support": self.support,
            "resistance": self.resistance,
            "pivotPoints": self.pivot_points.to_dict(),
        }


@dataclass(frozen=True)
class MarketAnalysis:
    """Indicators, signal and trend for one asset snapshot."""

    asset: str
    current_price: float
    indicators: TechnicalIndicators
    signal: Signal
    trend: TrendAnalysis

    def to_dict(self) -> dict:
        return {
            "asset": self.asset,
            "currentPrice": self.current_price,
            "indicators": self.indicators.to_dict(),
            "signal": self.signal.to_dict(),
            "trend": self.trend.to_dict(),
        }

"""Signal generation — scores an indicator bundle into a BUY/SELL/HOLD signal.

Pure functions, no I/O.

Each rule adds to either the buy score or the sell score (never both) and
records a rationale string.  The score difference picks the signal type;
the winning side's score picks strength and urgency; the ratio of the
difference to the total picks confidence.
"""

from datetime import datetime
from typing import Optional

from signalforge.engine.models import (
    Signal,
    SignalStrength,
    SignalType,
    SignalUrgency,
    TechnicalIndicators,
)

# ── Scoring thresholds ───────────────────────────────────────────────────

RSI_OVERSOLD = 30
RSI_OVERBOUGHT = 70
STOCHASTIC_OVERSOLD = 20
STOCHASTIC_OVERBOUGHT = 80
ADX_STRONG_TREND = 25

# A side must lead by more than this to leave HOLD.
DECISION_MARGIN = 2.0
STRONG_SCORE = 5.0
MODERATE_SCORE = 3.0

NEUTRAL_CONFIDENCE = 50.0
MAX_CONFIDENCE = 95.0


# ── Action messages ──────────────────────────────────────────────────────
# Keyed by (type, strength). HOLD is always classified MODERATE.

ACTION_MESSAGES: dict[tuple[str, str], str] = {
    ("BUY", "STRONG"): (
        "Several indicators line up bullish for {asset}. "
        "Consider buying, and size the position to your risk tolerance."
    ),
    ("BUY", "MODERATE"): (
        "Indicators lean bullish for {asset}. "
        "Consider buying a partial position and adding on confirmation."
    ),
    ("BUY", "WEAK"): (
        "Early bullish signs for {asset}. "
        "Consider buying only if the next sessions confirm the move."
    ),
    ("SELL", "STRONG"): (
        "Several indicators line up bearish for {asset}. "
        "Consider selling or reducing exposure to protect your capital."
    ),
    ("SELL", "MODERATE"): (
        "Indicators lean bearish for {asset}. "
        "Consider selling part of your position or tightening stops."
    ),
    ("SELL", "WEAK"): (
        "Early bearish signs for {asset}. "
        "Consider selling only if the next sessions confirm the move."
    ),
    ("HOLD", "MODERATE"): (
        "No clear edge for {asset} right now. "
        "Consider holding your current position and waiting for a clearer signal."
    ),
}


def action_message(signal_type: SignalType, strength: SignalStrength, asset_name: str) -> str:
    """Return the guidance message for a classified signal."""
    if signal_type == "HOLD":
        strength = "MODERATE"
    return ACTION_MESSAGES[(signal_type, strength)].format(asset=asset_name)


# ── Scoring ──────────────────────────────────────────────────────────────


def score_indicators(
    indicators: TechnicalIndicators,
    current_price: float,
) -> tuple[float, float, list[str]]:
    """Apply the scoring rules in order.

    Returns:
        ``(buy_score, sell_score, rationale)`` where *rationale* lists the
        triggered rules in evaluation order.
    """
    rationale: list[str] = []
    buy_score = 0.0
    sell_score = 0.0

    ma = indicators.moving_averages
    bb = indicators.bollinger_bands
    m = indicators.macd
    st = indicators.stochastic

    if indicators.rsi < RSI_OVERSOLD:
        rationale.append("RSI Oversold")
        buy_score += 2
    elif indicators.rsi > RSI_OVERBOUGHT:
        rationale.append("RSI Overbought")
        sell_score += 2

    if m.histogram > 0 and m.value > m.signal:
        rationale.append("MACD Bullish Crossover")
        buy_score += 2
    elif m.histogram < 0 and m.value < m.signal:
        rationale.append("MACD Bearish Crossover")
        sell_score += 2

    if current_price > ma.sma20 > ma.sma50:
        rationale.append("Price Above MA20 & MA50")
        buy_score += 1.5
    elif current_price < ma.sma20 < ma.sma50:
        rationale.append("Price Below MA20 & MA50")
        sell_score += 1.5

    if ma.sma50 > ma.sma200:
        rationale.append("Golden Cross (MA50 > MA200)")
        buy_score += 1
    elif ma.sma50 < ma.sma200:
        rationale.append("Death Cross (MA50 < MA200)")
        sell_score += 1

    if current_price <= bb.lower:
        rationale.append("Price at Lower Bollinger Band")
        buy_score += 1.5
    elif current_price >= bb.upper:
        rationale.append("Price at Upper Bollinger Band")
        sell_score += 1.5

    if st.k < STOCHASTIC_OVERSOLD and st.k > st.d:
        rationale.append("Stochastic Oversold Crossover")
        buy_score += 1
    elif st.k > STOCHASTIC_OVERBOUGHT and st.k < st.d:
        rationale.append("Stochastic Overbought Crossover")
        sell_score += 1

    # Informational only
    if indicators.adx > ADX_STRONG_TREND:
        rationale.append("Strong Trend (ADX > 25)")

    return buy_score, sell_score, rationale


def _grade(score: float) -> tuple[SignalStrength, SignalUrgency]:
    if score > STRONG_SCORE:
        return "STRONG", "HIGH"
    if score > MODERATE_SCORE:
        return "MODERATE", "MEDIUM"
    return "WEAK", "LOW"


def classify(
    buy_score: float, sell_score: float
) -> tuple[SignalType, SignalStrength, SignalUrgency, float]:
    """Turn buy/sell scores into ``(type, strength, urgency, confidence)``."""
    diff = buy_score - sell_score
    total = buy_score + sell_score

    if total == 0:
        confidence = NEUTRAL_CONFIDENCE
    else:
        confidence = min(MAX_CONFIDENCE, abs(diff) / total * 100 + 50)

    if diff > DECISION_MARGIN:
        strength, urgency = _grade(buy_score)
        return "BUY", strength, urgency, confidence
    if diff < -DECISION_MARGIN:
        strength, urgency = _grade(sell_score)
        return "SELL", strength, urgency, confidence
    return "HOLD", "MODERATE", "LOW", confidence


def generate_signal(
    indicators: TechnicalIndicators,
    current_price: float,
    asset_name: str,
    timestamp: Optional[datetime] = None,
) -> Signal:
    """Score *indicators* at *current_price* into a trading signal.

    Args:
        indicators: Indicator bundle for the asset.
        current_price: Price the signal is evaluated at.
        asset_name: Display name interpolated into the action message.
        timestamp: Signal time; defaults to now (UTC).

    Returns:
        ``Signal`` whose ``indicators`` field lists the triggered rules.
    """
    buy_score, sell_score, rationale = score_indicators(indicators, current_price)
    signal_type, strength, urgency, confidence = classify(buy_score, sell_score)

    fields = dict(
        type=signal_type,
        strength=strength,
        urgency=urgency,
        confidence=confidence,
        indicators=tuple(rationale),
        action_message=action_message(signal_type, strength, asset_name),
    )
    if timestamp is not None:
        fields["timestamp"] = timestamp
    return Signal(**fields)

"""CLI dashboard — prints an asset analysis to the console."""

from signalforge.engine.models import MarketAnalysis


def format_price(price: float, decimals: int = 2) -> str:
    """Thousands-separated price with a fixed number of decimals."""
    return f"{price:,.{decimals}f}"


def format_change(change: float, percent: float) -> str:
    """Format an absolute and percentage change, e.g. ``+12.50 (+1.25%)``."""
    sign = "+" if change >= 0 else ""
    return f"{sign}{format_price(change)} ({sign}{percent:.2f}%)"


def render_analysis(analysis: MarketAnalysis) -> str:
    """Format and print one asset analysis.

    Returns:
        The formatted string (also printed to stdout).
    """
    ind = analysis.indicators
    ma = ind.moving_averages
    bb = ind.bollinger_bands
    sig = analysis.signal
    trend = analysis.trend
    pv = trend.pivot_points

    rationale = ", ".join(sig.indicators) if sig.indicators else "none"

    lines = [
        f"──────────────── {analysis.asset} ────────────────",
        f"  Price:           {format_price(analysis.current_price)}",
        f"  Signal:          {sig.type} ({sig.strength}, urgency {sig.urgency})",
        f"  Confidence:      {sig.confidence:.0f}%",
        f"  Rationale:       {rationale}",
        f"  Action:          {sig.action_message}",
        "",
        f"  RSI(14):         {ind.rsi:.2f}",
        f"  MACD:            {ind.macd.value:.4f} / signal {ind.macd.signal:.4f}"
        f" / hist {ind.macd.histogram:.4f}",
        f"  SMA 20/50/200:   {format_price(ma.sma20)} / {format_price(ma.sma50)}"
        f" / {format_price(ma.sma200)}",
        f"  EMA 12/26:       {format_price(ma.ema12)} / {format_price(ma.ema26)}",
        f"  Bollinger:       {format_price(bb.lower)} - {format_price(bb.middle)}"
        f" - {format_price(bb.upper)}",
        f"  Stochastic K/D:  {ind.stochastic.k:.2f} / {ind.stochastic.d:.2f}",
        f"  ATR(14):         {ind.atr:.4f}",
        f"  ADX:             {ind.adx:.2f}",
        "",
        f"  Trend:           {trend.direction} ({trend.strength:.0f})",
        f"  Support:         {format_price(trend.support)}",
        f"  Resistance:      {format_price(trend.resistance)}",
        f"  Pivots:          S3 {format_price(pv.s3)}  S2 {format_price(pv.s2)}"
        f"  S1 {format_price(pv.s1)}  PP {format_price(pv.pp)}",
        f"                   R1 {format_price(pv.r1)}  R2 {format_price(pv.r2)}"
        f"  R3 {format_price(pv.r3)}",
        "──────────────────────────────────────────────────",
    ]
    output = "\n".join(lines)
    print(output)
    return output

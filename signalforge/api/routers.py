"""Analysis API routers — /indicators, /signal, /trend, /analysis, /signals/history.

No business logic. Parses the request body into a price series and
delegates to the engine.
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException

from signalforge.config import MAX_SIGNAL_HISTORY, Config
from signalforge.engine.analysis import analyze
from signalforge.engine.history import (
    DEFAULT_MAX_SIGNALS,
    DEFAULT_MIN_POINTS,
    signal_history,
)
from signalforge.engine.indicators import compute_indicators
from signalforge.engine.models import PricePoint
from signalforge.engine.signals import generate_signal
from signalforge.engine.trend import analyze_trend
from signalforge.engine.validation import (
    SeriesValidationError,
    parse_price,
    parse_series,
    validate_series,
)

logger = logging.getLogger("signalforge")
router = APIRouter()

_config: Optional[Config] = None  # Set via configure_routers()


def configure_routers(config: Optional[Config] = None) -> None:
    """Inject the application config (``None`` restores defaults)."""
    global _config  # noqa: PLW0603
    _config = config


def _validate_enabled() -> bool:
    return _config.validate_input if _config is not None else True


def _parse_body(body: dict) -> tuple[str, list[PricePoint], float]:
    """Extract ``(asset, series, current_price)`` from a request body.

    Raises ``HTTPException(422)`` when the body breaks the input contract.
    """
    try:
        if not isinstance(body, dict):
            raise SeriesValidationError("Request body must be a JSON object")
        rows = body.get("candles")
        if not isinstance(rows, list):
            raise SeriesValidationError("'candles' must be a list of candle objects")
        series = parse_series(rows)
        if _validate_enabled():
            validate_series(series)

        price = body.get("current_price")
        if price is None:
            current_price = series[-1].close if series else 0.0
        else:
            current_price = parse_price(price)
    except SeriesValidationError as exc:
        logger.warning("Rejected analysis request: %s", exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    asset = str(body.get("asset") or "Asset")
    return asset, series, current_price


# ── Endpoints ────────────────────────────────────────────────────────────


@router.post("/indicators")
async def post_indicators(body: dict):
    """Return the technical indicator bundle for a series."""
    _, series, _ = _parse_body(body)
    return compute_indicators(series).to_dict()


@router.post("/signal")
async def post_signal(body: dict):
    """Return the trading signal at the current price."""
    asset, series, current_price = _parse_body(body)
    indicators = compute_indicators(series)
    return generate_signal(indicators, current_price, asset).to_dict()


@router.post("/trend")
async def post_trend(body: dict):
    """Return trend direction, support/resistance and pivot points."""
    _, series, current_price = _parse_body(body)
    return analyze_trend(series, current_price).to_dict()


@router.post("/analysis")
async def post_analysis(body: dict):
    """Return indicators, signal and trend in one response."""
    asset, series, current_price = _parse_body(body)
    result = analyze(series, asset, current_price=current_price, validate=False)
    logger.info(
        "Analysis for %s: %s %s (%.0f%%)",
        asset, result.signal.type, result.signal.strength, result.signal.confidence,
    )
    return result.to_dict()


@router.post("/signals/history")
async def post_signal_history(body: dict):
    """Return signals replayed at earlier points of the series, newest first."""
    asset, series, _ = _parse_body(body)

    min_points = _config.history_min_points if _config else DEFAULT_MIN_POINTS
    limit = body.get("limit")
    if limit is None:
        limit = _config.signal_history_size if _config else DEFAULT_MAX_SIGNALS
    elif (
        not isinstance(limit, int)
        or isinstance(limit, bool)
        or not 1 <= limit <= MAX_SIGNAL_HISTORY
    ):
        detail = f"'limit' must be an integer from 1 to {MAX_SIGNAL_HISTORY}"
        logger.warning("Rejected history request: %s", detail)
        raise HTTPException(status_code=422, detail=detail)

    signals = signal_history(series, asset, max_signals=limit, min_points=min_points)
    return {"asset": asset, "signals": [s.to_dict() for s in signals]}

"""Load price series from JSON or CSV files."""

import json
import logging
from pathlib import Path

import pandas as pd

from signalforge.engine.models import PricePoint
from signalforge.engine.validation import SeriesValidationError, parse_series

logger = logging.getLogger("signalforge")

_CSV_COLUMNS = ["timestamp", "open", "high", "low", "close"]


def _rows_from_json(path: Path) -> list[dict]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("candles")
    if not isinstance(data, list):
        raise SeriesValidationError(
            f"{path}: expected a list of candles or an object with a 'candles' list"
        )
    return data


def _rows_from_csv(path: Path) -> list[dict]:
    df = pd.read_csv(path)
    df.columns = [str(c).strip().lower() for c in df.columns]

    missing = [c for c in _CSV_COLUMNS if c not in df.columns]
    if missing:
        raise SeriesValidationError(f"{path}: missing column(s): {', '.join(missing)}")

    # Date strings become epoch milliseconds.
    if not pd.api.types.is_numeric_dtype(df["timestamp"]):
        times = pd.to_datetime(df["timestamp"], utc=True)
        df["timestamp"] = (times - pd.Timestamp(0, tz="UTC")) // pd.Timedelta(milliseconds=1)

    columns = _CSV_COLUMNS + (["volume"] if "volume" in df.columns else [])
    return df[columns].to_dict(orient="records")


def load_series(path: str | Path) -> list[PricePoint]:
    """Read a price series from *path*.

    ``.json``: a list of candle objects, or ``{"candles": [...]}``.
    ``.csv``: columns ``timestamp, open, high, low, close[, volume]``;
    timestamps may be epoch milliseconds or date strings.

    Raises ``ValueError`` for an unsupported suffix and
    ``SeriesValidationError`` for malformed content.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".json":
        rows = _rows_from_json(path)
    elif suffix == ".csv":
        rows = _rows_from_csv(path)
    else:
        raise ValueError(f"Unsupported series file type '{suffix}' (use .json or .csv)")

    series = parse_series(rows)
    logger.info("Loaded %d candle(s) from %s", len(series), path)
    return series

"""SignalForge — application configuration.

Loads .env variables into a typed config object.
Every variable is optional; malformed values fail fast on startup.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv


# Upper bound for signals returned by one history request.
MAX_SIGNAL_HISTORY = 50

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Config:
    """Typed configuration loaded from environment variables."""

    log_level: str
    api_host: str
    api_port: int
    validate_input: bool
    signal_history_size: int
    history_min_points: int


def _env_int(name: str, default: int, minimum: int, maximum: int | None = None) -> int:
    raw = os.environ.get(name, str(default))
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got '{raw}'") from None
    if value < minimum:
        raise ValueError(f"{name} must be at least {minimum}, got {value}")
    if maximum is not None and value > maximum:
        raise ValueError(f"{name} must be at most {maximum}, got {value}")
    return value


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    lowered = raw.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean (true/false), got '{raw}'")


def load_config(env_path: str | None = None) -> Config:
    """Load configuration from environment variables.

    Raises ``ValueError`` with a message naming the variable when a value
    cannot be parsed or is out of range.
    """
    load_dotenv(dotenv_path=env_path)

    return Config(
        log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        api_host=os.environ.get("API_HOST", "0.0.0.0"),
        api_port=_env_int("API_PORT", 8080, minimum=1),
        validate_input=_env_bool("VALIDATE_INPUT", True),
        signal_history_size=_env_int(
            "SIGNAL_HISTORY_SIZE", 5, minimum=1, maximum=MAX_SIGNAL_HISTORY
        ),
        history_min_points=_env_int("HISTORY_MIN_POINTS", 20, minimum=2),
    )

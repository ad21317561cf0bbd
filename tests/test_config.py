"""Tests for signalforge.config — environment variable loading and validation."""

import os

import pytest

from signalforge.config import Config, load_config

_ENV_VARS = [
    "LOG_LEVEL",
    "API_HOST",
    "API_PORT",
    "VALIDATE_INPUT",
    "SIGNAL_HISTORY_SIZE",
    "HISTORY_MIN_POINTS",
]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Ensure SignalForge env vars are cleared between tests."""
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    yield
    # load_dotenv writes straight to os.environ
    for var in _ENV_VARS:
        os.environ.pop(var, None)


@pytest.fixture
def env_path(tmp_path):
    # Non-existent file so load_dotenv doesn't re-populate from a real .env
    return str(tmp_path / "nonexistent.env")


class TestLoadConfig:
    def test_defaults(self, env_path):
        cfg = load_config(env_path)
        assert cfg == Config(
            log_level="INFO",
            api_host="0.0.0.0",
            api_port=8080,
            validate_input=True,
            signal_history_size=5,
            history_min_points=20,
        )

    def test_overrides(self, monkeypatch, env_path):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("API_HOST", "127.0.0.1")
        monkeypatch.setenv("API_PORT", "9000")
        monkeypatch.setenv("VALIDATE_INPUT", "false")
        monkeypatch.setenv("SIGNAL_HISTORY_SIZE", "10")
        monkeypatch.setenv("HISTORY_MIN_POINTS", "30")
        cfg = load_config(env_path)
        assert cfg.log_level == "DEBUG"
        assert cfg.api_host == "127.0.0.1"
        assert cfg.api_port == 9000
        assert cfg.validate_input is False
        assert cfg.signal_history_size == 10
        assert cfg.history_min_points == 30

    def test_reads_env_file(self, tmp_path):
        path = tmp_path / ".env"
        path.write_text("API_PORT=7070\nVALIDATE_INPUT=no\n")
        cfg = load_config(str(path))
        assert cfg.api_port == 7070
        assert cfg.validate_input is False

    def test_invalid_port(self, monkeypatch, env_path):
        monkeypatch.setenv("API_PORT", "not-a-number")
        with pytest.raises(ValueError, match="API_PORT"):
            load_config(env_path)

    def test_history_size_minimum(self, monkeypatch, env_path):
        monkeypatch.setenv("SIGNAL_HISTORY_SIZE", "0")
        with pytest.raises(ValueError, match="SIGNAL_HISTORY_SIZE"):
            load_config(env_path)

    def test_history_size_maximum(self, monkeypatch, env_path):
        monkeypatch.setenv("SIGNAL_HISTORY_SIZE", "51")
        with pytest.raises(ValueError, match="SIGNAL_HISTORY_SIZE must be at most 50"):
            load_config(env_path)

    def test_history_size_upper_bound_accepted(self, monkeypatch, env_path):
        monkeypatch.setenv("SIGNAL_HISTORY_SIZE", "50")
        assert load_config(env_path).signal_history_size == 50

    def test_min_points_minimum(self, monkeypatch, env_path):
        monkeypatch.setenv("HISTORY_MIN_POINTS", "1")
        with pytest.raises(ValueError, match="HISTORY_MIN_POINTS"):
            load_config(env_path)

    def test_invalid_bool(self, monkeypatch, env_path):
        monkeypatch.setenv("VALIDATE_INPUT", "maybe")
        with pytest.raises(ValueError, match="VALIDATE_INPUT"):
            load_config(env_path)

    def test_empty_bool_uses_default(self, monkeypatch, env_path):
        monkeypatch.setenv("VALIDATE_INPUT", "")
        assert load_config(env_path).validate_input is True

    def test_frozen(self, env_path):
        cfg = load_config(env_path)
        with pytest.raises(AttributeError):
            cfg.api_port = 1

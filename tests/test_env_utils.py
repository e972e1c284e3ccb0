from __future__ import annotations

from reqmetrics.config import ProfilingConfig
from reqmetrics.utils.env import env_bool, env_str


def test_env_bool_parsing(monkeypatch):
    monkeypatch.setenv("X_BOOL", "1")
    assert env_bool("X_BOOL") is True
    monkeypatch.setenv("X_BOOL", "true")
    assert env_bool("X_BOOL") is True
    monkeypatch.setenv("X_BOOL", " on ")
    assert env_bool("X_BOOL") is True
    monkeypatch.setenv("X_BOOL", "no")
    assert env_bool("X_BOOL", True) is False
    monkeypatch.delenv("X_BOOL", raising=False)
    assert env_bool("X_BOOL", False) is False
    assert env_bool("X_BOOL", True) is True


def test_env_str_defaults_on_blank(monkeypatch):
    monkeypatch.setenv("X_STR", "  ")
    assert env_str("X_STR", "fallback") == "fallback"
    monkeypatch.setenv("X_STR", "custom.logger")
    assert env_str("X_STR", "fallback") == "custom.logger"


def test_profiling_config_from_env(monkeypatch):
    monkeypatch.delenv("REQMETRICS_ENABLE_PROFILING", raising=False)
    monkeypatch.delenv("REQMETRICS_LATENCY_LOGGER", raising=False)
    cfg = ProfilingConfig.from_env()
    assert cfg.enabled is False
    assert cfg.latency_logger == "reqmetrics.latency"

    monkeypatch.setenv("REQMETRICS_ENABLE_PROFILING", "yes")
    monkeypatch.setenv("REQMETRICS_LATENCY_LOGGER", "client.latency")
    cfg = ProfilingConfig.from_env()
    assert cfg.enabled is True
    assert cfg.latency_logger == "client.latency"

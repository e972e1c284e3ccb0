"""Environment parsing helpers.

Small helpers to consistently parse env vars with sane defaults.
"""
from __future__ import annotations

import os


_TRUTHY = ("1", "true", "True", "TRUE", "YES", "yes", "on", "On")


def env_bool(name: str, default: bool = False) -> bool:
    val = os.getenv(name)
    if val is None:
        return bool(default)
    return val.strip() in _TRUTHY


def env_str(name: str, default: str) -> str:
    val = os.getenv(name, "").strip()
    return val or default

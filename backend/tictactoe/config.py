"""Конфигурация приложения."""
import os
from functools import lru_cache

from .constants import MATCH_MODE_NAMED, MATCH_MODES


def _flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() in ("1", "true", "yes")


@lru_cache
def get_config():
    match_mode = os.environ.get("MATCH_MODE", MATCH_MODE_NAMED).lower()
    if match_mode not in MATCH_MODES:
        match_mode = MATCH_MODE_NAMED
    return type("Config", (), {
        "match_mode": match_mode,
        "enforce_turns": _flag("ENFORCE_TURNS", "1"),
        "debug": _flag("DEBUG", "0"),
        "allowed_origins": os.environ.get("ALLOWED_ORIGINS", "*").split(","),
        "host": os.environ.get("HOST", "0.0.0.0"),
        "port": int(os.environ.get("PORT", "52301")),
        "log_level": os.environ.get("LOG_LEVEL", "INFO").upper(),
    })()

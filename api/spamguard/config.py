"""Runtime settings read from the environment."""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

_TRUE_VALUES = {"1", "true", "yes"}
_METHODS = {"local", "ai"}


@dataclass(frozen=True)
class Settings:
    default_method: str = "local"
    enable_dns_checks: bool = False
    dns_timeout_seconds: float = 2.0
    log_level: str = "INFO"

    @staticmethod
    def from_env() -> "Settings":
        method = os.getenv("SPAMGUARD_DEFAULT_METHOD", "local").strip().lower()
        return Settings(
            default_method=method if method in _METHODS else "local",
            enable_dns_checks=os.getenv("SPAMGUARD_ENABLE_DNS_CHECKS", "false").strip().lower()
            in _TRUE_VALUES,
            dns_timeout_seconds=_parse_positive_float(os.getenv("SPAMGUARD_DNS_TIMEOUT_SECONDS"), 2.0),
            log_level=_parse_log_level(os.getenv("LOG_LEVEL")),
        )


def _parse_positive_float(raw: str | None, default: float) -> float:
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _parse_log_level(raw: str | None) -> str:
    level = (raw or "").strip().upper()
    # getLevelName maps known names to ints and unknown ones to "Level X".
    return level if level and isinstance(logging.getLevelName(level), int) else "INFO"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()

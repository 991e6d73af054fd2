"""Environment-variable helpers shared by telemetry, profiles, and the CLI."""

from __future__ import annotations

import os
from typing import Optional

ENV_PREFIX = "REFORMAT_ENGINE_"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def env(name: str, default: Optional[str] = None, *, prefix: str = ENV_PREFIX) -> Optional[str]:
    return os.getenv(f"{prefix}{name}", default)


def env_flag(name: str, default: bool, *, prefix: str = ENV_PREFIX) -> bool:
    raw = env(name, prefix=prefix)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    return default


def env_int(name: str, fallback: int, *, prefix: str = ENV_PREFIX) -> int:
    value = env(name, prefix=prefix)
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


__all__ = ["ENV_PREFIX", "env", "env_flag", "env_int"]

"""Runtime services: environment configuration and telemetry."""

from . import telemetry
from .environment import ENV_PREFIX, env, env_flag, env_int

__all__ = ["telemetry", "ENV_PREFIX", "env", "env_flag", "env_int"]

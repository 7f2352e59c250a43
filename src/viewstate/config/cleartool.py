"""Cleartool invocation settings."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_float, env_int, env_str

DEFAULT_CLEARTOOL_EXECUTABLE = "cleartool"
DEFAULT_TIMEOUT_SECONDS = 120.0
DEFAULT_PATHS_PER_INVOCATION = 100


@dataclass(frozen=True, slots=True)
class CleartoolConfig:
    executable: str = DEFAULT_CLEARTOOL_EXECUTABLE
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    paths_per_invocation: int = DEFAULT_PATHS_PER_INVOCATION


def get_cleartool_config() -> CleartoolConfig:
    return CleartoolConfig(
        executable=env_str("CLEARTOOL_PATH", DEFAULT_CLEARTOOL_EXECUTABLE),
        timeout_seconds=env_float("CLEARTOOL_TIMEOUT", DEFAULT_TIMEOUT_SECONDS),
        paths_per_invocation=env_int("CLEARTOOL_PATHS_PER_CALL", DEFAULT_PATHS_PER_INVOCATION),
    )

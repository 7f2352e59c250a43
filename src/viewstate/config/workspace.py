"""Settings for the local workspace used by the command line."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_list

DEFAULT_IGNORE_PATTERNS = ("*.class", "*.pyc", "*.keep", "*.contrib", "*.contrib.*")


@dataclass(frozen=True, slots=True)
class WorkspaceConfig:
    ignore_patterns: tuple[str, ...] = DEFAULT_IGNORE_PATTERNS


def get_workspace_config() -> WorkspaceConfig:
    patterns = env_list("VIEWSTATE_IGNORE")
    return WorkspaceConfig(ignore_patterns=patterns or DEFAULT_IGNORE_PATTERNS)

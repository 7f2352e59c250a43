"""Application configuration helpers."""

from __future__ import annotations

from .cleartool import CleartoolConfig, get_cleartool_config
from .env import env_flag, env_float, env_int, env_list, env_str
from .errors import ConfigurationError
from .logging import configure_logging, log_level_from_env
from .view import DEFAULT_ITERATIVE_STATUS_LIMIT, ViewSettings, get_view_settings
from .workspace import WorkspaceConfig, get_workspace_config

__all__ = [
    "DEFAULT_ITERATIVE_STATUS_LIMIT",
    "CleartoolConfig",
    "ConfigurationError",
    "ViewSettings",
    "WorkspaceConfig",
    "configure_logging",
    "env_flag",
    "env_float",
    "env_int",
    "env_list",
    "env_str",
    "get_cleartool_config",
    "get_view_settings",
    "get_workspace_config",
    "log_level_from_env",
]

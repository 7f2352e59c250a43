"""Domain port definitions for adapters."""

from __future__ import annotations

from .activities import ActivityRegistry
from .emission import ChangeSink
from .host import FileMarkers, ProjectLayout, StatusCache, VersionControlHost
from .tool import RepositoryTool
from .ui import Notifier, ProgressToken, UiScheduler

__all__ = [
    "ActivityRegistry",
    "ChangeSink",
    "FileMarkers",
    "Notifier",
    "ProgressToken",
    "ProjectLayout",
    "RepositoryTool",
    "StatusCache",
    "UiScheduler",
    "VersionControlHost",
]

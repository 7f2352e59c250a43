"""cleartool command-line adapter."""

from __future__ import annotations

from .client import CleartoolOutput, CleartoolRunner, is_server_down_message
from .parser import (
    ViewUpdate,
    parse_checkout_output,
    parse_describe_output,
    parse_status_output,
    parse_update_output,
)
from .repository import CleartoolRepository

__all__ = [
    "CleartoolOutput",
    "CleartoolRepository",
    "CleartoolRunner",
    "ViewUpdate",
    "is_server_down_message",
    "parse_checkout_output",
    "parse_describe_output",
    "parse_status_output",
    "parse_update_output",
]

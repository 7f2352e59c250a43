"""Pydantic models for records parsed out of cleartool output."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, field_validator

from viewstate.domain.model import Verdict


def _require_text(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            raise ValueError("must not be blank")
        return stripped
    return value


class CleartoolRecord(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    path: str

    _normalize_path = field_validator("path", mode="before")(_require_text)


class StatusRecord(CleartoolRecord):
    """``ls`` line that carries a verdict. Unchanged elements produce no record."""

    verdict: Verdict


class ActivityRecord(CleartoolRecord):
    activity: str

    _normalize_activity = field_validator("activity", mode="before")(_require_text)


class UpdateKind(StrEnum):
    UPDATED = "updated"
    SKIPPED = "skipped"
    REMOVED = "removed"


class UpdateRecord(CleartoolRecord):
    kind: UpdateKind

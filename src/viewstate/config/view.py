"""Per-working-copy settings read by every reconciliation pass."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_flag, env_int

DEFAULT_ITERATIVE_STATUS_LIMIT = 200


@dataclass(slots=True)
class ViewSettings:
    """Mutable on purpose: a pass flips ``offline`` when the server goes away."""

    offline: bool = False
    use_activities: bool = False
    iterative_status_limit: int = DEFAULT_ITERATIVE_STATUS_LIMIT


def get_view_settings() -> ViewSettings:
    return ViewSettings(
        offline=env_flag("VIEWSTATE_OFFLINE"),
        use_activities=env_flag("VIEWSTATE_USE_ACTIVITIES"),
        iterative_status_limit=env_int(
            "VIEWSTATE_ITERATIVE_LIMIT", DEFAULT_ITERATIVE_STATUS_LIMIT
        ),
    )

"""Ports for the external version-control tool."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from viewstate.domain.model import Verdict, WorkPath


@runtime_checkable
class RepositoryTool(Protocol):
    """Batched queries against the repository.

    Every call is blocking and may raise ``ToolError``/``ConnectivityFailure``
    or ``ToolStartFailure``.
    """

    def resolve_multi(self, paths: Sequence[WorkPath]) -> Mapping[WorkPath, Verdict]: ...

    def list_checked_out_by_me(self, root: WorkPath) -> set[WorkPath]: ...

    def describe_multi(self, paths: Sequence[WorkPath]) -> Mapping[WorkPath, str]: ...

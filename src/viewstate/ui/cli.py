# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from viewstate.app import open_view_session, update_view
from viewstate.config import ConfigurationError, configure_logging, get_view_settings
from viewstate.domain.model import PassOutcome

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from viewstate.adapters.cleartool import ViewUpdate
    from viewstate.adapters.memory import Emission
    from viewstate.app import StatusReport

log = logging.getLogger(__name__)

_FAILED_OUTCOMES = frozenset({PassOutcome.CONNECTIVITY_LOST, PassOutcome.TOOL_FAILED})


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Classify changes in a ClearCase snapshot view")
    parser.add_argument("--verbose", action="store_true", help="Log debug output")
    subparsers = parser.add_subparsers(dest="command", required=True)

    status = subparsers.add_parser("status", help="Report new, changed and hijacked files")
    status.add_argument("roots", nargs="+", help="Content roots of the working copy")
    status.add_argument(
        "--file",
        dest="files",
        action="append",
        default=[],
        help="Only look at this path (repeatable); the whole workspace otherwise",
    )
    status.add_argument(
        "--added",
        action="append",
        default=[],
        help="Path already scheduled for addition (repeatable)",
    )
    status.add_argument(
        "--merge-conflict",
        dest="merge_conflicts",
        action="append",
        default=[],
        help="Path left in merge conflict (repeatable)",
    )
    status.add_argument(
        "--offline",
        action="store_true",
        help="Do not contact the ClearCase server, use remembered state only",
    )
    status.add_argument(
        "--activities",
        action="store_true",
        help="File changes under the activity they were checked out in",
    )
    status.add_argument(
        "--limit",
        type=int,
        help="Candidate count from which checkouts are listed instead of queried",
    )

    update = subparsers.add_parser("update", help="Update the snapshot views holding ROOTS")
    update.add_argument("roots", nargs="+", help="Content roots of the working copy")

    return parser.parse_args(list(argv))


def _format_emission(event: Emission) -> str:
    change = event.change
    if change is not None and change.is_rename:
        label = f"{change.before} -> {change.after}"
    else:
        label = str(event.path)
    status = change.status.value if change is not None else event.kind.value
    suffix = f" [{event.activity}]" if event.activity else ""
    return f"{status:<22} {label}{suffix}"


def _print_status(report: StatusReport) -> None:
    for event in report.sink.events:
        print(_format_emission(event))
    result = report.result
    if result.message:
        print(f"Error: {result.message}", file=sys.stderr)
    log.info("Pass finished: outcome=%s, mode=%s", result.outcome, result.mode)


def _print_update(results: Sequence[ViewUpdate]) -> None:
    for result in results:
        print(f"{result.root}:")
        for label, paths in (
            ("updated", result.updated),
            ("kept hijacked", result.skipped),
            ("removed", result.removed),
        ):
            for path in paths:
                print(f"  {label:<14} {path}")


def _run_status(args: argparse.Namespace) -> PassOutcome:
    settings = get_view_settings()
    if args.offline:
        settings.offline = True
    if args.activities:
        settings.use_activities = True
    if args.limit is not None:
        if args.limit < 1:
            raise ValueError("--limit must be a positive integer")
        settings.iterative_status_limit = args.limit

    session = open_view_session(args.roots, settings=settings)
    for path in args.added:
        session.schedule_addition(path)
    for path in args.merge_conflicts:
        session.mark_merge_conflict(path)
    report = session.status(args.files)
    _print_status(report)
    return report.result.outcome


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    parsed_args: argparse.Namespace
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)

    try:
        configure_logging(level=logging.DEBUG if parsed_args.verbose else None)
        if parsed_args.command == "status":
            outcome = _run_status(parsed_args)
            if outcome in _FAILED_OUTCOMES:
                sys.exit(1)
        elif parsed_args.command == "update":
            _print_update(update_view(parsed_args.roots))
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except (ValueError, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)
    except Exception:
        log.exception("Fatal error")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    print("\nClosed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()

# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from kprune.app import prune_manifest, recorded_objects
from kprune.config import configure_logging
from kprune.domain.model import DryRunStrategy, PropagationPolicy

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from kprune.domain.model import PruneEvent

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Delete previously applied objects omitted from the current apply"
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every prune decision",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    prune = subparsers.add_parser("prune", help="Prune objects missing from a manifest")
    prune.add_argument(
        "--manifest",
        type=Path,
        required=True,
        help="JSON manifest holding the applied objects and exactly one inventory object",
    )
    prune.add_argument(
        "--dry-run",
        type=DryRunStrategy,
        choices=list(DryRunStrategy),
        default=DryRunStrategy.NONE,
        help="Report what would be pruned without deleting (default: %(default)s)",
    )
    prune.add_argument(
        "--propagation-policy",
        type=PropagationPolicy,
        choices=list(PropagationPolicy),
        default=None,
        help="Cascade policy sent with each delete (defaults to the server's)",
    )
    prune.add_argument(
        "--static-mappings",
        action="store_true",
        help="Resolve kinds from the built-in table instead of API discovery",
    )

    inventory = subparsers.add_parser("inventory", help="Inventory inspection commands")
    inventory_sub = inventory.add_subparsers(dest="inventory_command", required=True)
    show = inventory_sub.add_parser("show", help="List the recorded objects")
    show.add_argument(
        "--manifest",
        type=Path,
        required=True,
        help="JSON manifest holding the inventory object",
    )

    return parser.parse_args(list(argv))


def _log_event(event: PruneEvent) -> None:
    log.info("%s %s", event.identity, event.operation)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        if parsed_args.command == "prune":
            summary = prune_manifest(
                parsed_args.manifest,
                dry_run=parsed_args.dry_run,
                propagation_policy=parsed_args.propagation_policy,
                static_mappings=parsed_args.static_mappings,
                on_event=_log_event,
            )
            suffix = ""
            if summary.dry_run.client_or_server_dry_run():
                suffix = f" ({summary.dry_run} dry run)"
            log.info("%s pruned, %s skipped%s", summary.pruned, summary.skipped, suffix)
        elif parsed_args.command == "inventory" and parsed_args.inventory_command == "show":
            for identity in recorded_objects(parsed_args.manifest):
                print(identity)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error during prune")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()

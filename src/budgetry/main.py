from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from budgetry.app import import_proposals_to_budget
from budgetry.config import ConfigurationError, configure_logging, get_locale_registry
from budgetry.domain.model import translated

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)

EXIT_FATAL = 1
EXIT_INVALID = 2


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Budgetry administration commands")
    subparsers = parser.add_subparsers(dest="command", required=True)

    import_proposals = subparsers.add_parser(
        "import-proposals",
        help="Create budget projects from the accepted proposals of a component",
    )
    import_proposals.add_argument(
        "--origin-component",
        dest="origin_component_id",
        type=str,
        required=True,
        help="Id of the proposals component to import from",
    )
    import_proposals.add_argument(
        "--budget",
        dest="budget_id",
        type=str,
        required=True,
        help="Id of the budget receiving the projects",
    )
    import_proposals.add_argument(
        "--default-budget",
        type=int,
        required=True,
        help="Budget amount assigned to every created project",
    )
    import_proposals.add_argument(
        "--user-id",
        dest="current_user_id",
        type=str,
        required=True,
        help="Id of the admin user performing the import",
    )
    import_proposals.add_argument(
        "--confirm",
        dest="import_all_accepted_proposals",
        action="store_true",
        help="Confirm importing all accepted proposals (required)",
    )

    return parser.parse_args(list(argv))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    try:
        configure_logging()
    except ConfigurationError:
        configure_logging(level=logging.INFO)
        log.exception("Invalid logging configuration")
        sys.exit(EXIT_FATAL)
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    # argparse exits with status 2 (EXIT_INVALID) on bad arguments
    parsed_args = _parse_args(args_list)

    try:
        if parsed_args.command != "import-proposals":
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
        payload: dict[str, object] = {
            "origin_component_id": parsed_args.origin_component_id,
            "budget_id": parsed_args.budget_id,
            "default_budget": parsed_args.default_budget,
            "current_user_id": parsed_args.current_user_id,
            "import_all_accepted_proposals": parsed_args.import_all_accepted_proposals,
        }
        outcome = import_proposals_to_budget(payload)
    except Exception:
        log.exception("Fatal error during proposal import")
        sys.exit(EXIT_FATAL)

    if not outcome.is_ok:
        for error in outcome.errors:
            log.error("Invalid import request: %s", error)
        sys.exit(EXIT_INVALID)

    default_locale = get_locale_registry().default_locale()
    for project in outcome.created:
        log.info("Created project %s: %s", project.id, translated(project.title, default_locale))
    log.info("Imported %s project(s)", len(outcome.created))


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()

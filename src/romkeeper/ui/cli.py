from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from romkeeper.app import check_roms, import_roms
from romkeeper.config import ConfigurationError, configure_logging
from romkeeper.domain.model import HashAlgorithm
from romkeeper.ui.prompt import choose_rom, choose_system, confirm_moves

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Keep a rom library in sync with its catalog")
    subparsers = parser.add_subparsers(dest="command", required=True)

    check = subparsers.add_parser("check", help="Check ROM files integrity")
    check.add_argument(
        "-a",
        "--all",
        dest="all_systems",
        action="store_true",
        help="Check all systems",
    )
    check.add_argument(
        "-y",
        "--yes",
        dest="assume_yes",
        action="store_true",
        help="Automatically say yes to prompts",
    )
    check.add_argument(
        "-s",
        "--system",
        type=str,
        help="Name of the system to check",
    )

    import_ = subparsers.add_parser("import", help="Validate and import ROM files")
    import_.add_argument(
        "roms",
        nargs="+",
        type=Path,
        metavar="ROMS",
        help="Files or directories to import",
    )
    import_.add_argument(
        "-s",
        "--system",
        type=str,
        help="Name of the system to import into",
    )
    import_.add_argument(
        "-a",
        "--hash",
        dest="hash_algorithm",
        type=str.upper,
        choices=[algorithm.value for algorithm in HashAlgorithm],
        help="Hash algorithm used to match files (defaults to the stored setting)",
    )

    return parser.parse_args(list(argv))


def _run(parsed_args: argparse.Namespace) -> None:
    if parsed_args.command == "check":
        reports = check_roms(
            system_name=parsed_args.system,
            all_systems=parsed_args.all_systems,
            assume_yes=parsed_args.assume_yes,
            choose_system=choose_system,
            confirm=confirm_moves,
        )
        trashed = sum(len(report.moves) for report in reports if report.confirmed)
        log.info("Checked %d system(s), moved %d file(s) to trash", len(reports), trashed)
    elif parsed_args.command == "import":
        import_roms(
            parsed_args.roms,
            system_name=parsed_args.system,
            hash_algorithm=parsed_args.hash_algorithm,
            choose_system=choose_system,
            disambiguate=choose_rom,
        )
    else:
        raise ValueError(f"Unsupported command: {parsed_args.command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    load_dotenv()
    configure_logging()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)

    try:
        _run(parsed_args)
    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from deskexec import __version__
from deskexec.core.common.exceptions import DeskExecError, DesktopEntryError
from deskexec.core.common.logging import LogFormat, configure_logging, get_logger
from deskexec.core.config.app_config import AppConfig, LogLevel
from deskexec.desktop_entry import read_desktop_entry
from deskexec.shellparse import Command, parse
from deskexec.steam import SteamLibrary
from deskexec.validity import ValidityStatus

logger = get_logger(__name__)


def build_cli_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the ``deskexec`` command."""
    parser = argparse.ArgumentParser(
        prog="deskexec",
        description="Parse and check the Exec lines of desktop entries",
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "--log-level",
        choices=[level.value for level in LogLevel],
        help="Override DESKEXEC_LOG_LEVEL",
    )
    parser.add_argument(
        "--log-format",
        choices=[fmt.value for fmt in LogFormat],
        help="Override DESKEXEC_LOG_FORMAT",
    )

    subparsers = parser.add_subparsers(dest="action", required=True)

    parse_cmd = subparsers.add_parser("parse", help="Tokenize an Exec command line")
    parse_cmd.add_argument("exec_line", metavar="EXEC")
    parse_cmd.add_argument(
        "--flatten",
        action="store_true",
        help="Replace an env wrapper with the command it starts",
    )
    parse_cmd.add_argument("--json", action="store_true", help="Print JSON")

    check_cmd = subparsers.add_parser("check", help="Check desktop entry files")
    check_cmd.add_argument("files", metavar="FILE", nargs="+", type=Path)
    check_cmd.add_argument(
        "--no-steam",
        action="store_true",
        help="Skip the installed Steam game check",
    )
    check_cmd.add_argument("--steam-root", type=Path, help="Steam root directory")
    check_cmd.add_argument("--search-path", help="PATH used to look up binaries")

    return parser


def apply_cli_args(args: argparse.Namespace, cfg: AppConfig) -> AppConfig:
    """Return a copy of ``cfg`` with command line overrides applied."""
    cfg = cfg.model_copy(deep=True)
    if args.log_level:
        cfg.logging.level = LogLevel(args.log_level)
    if args.log_format:
        cfg.logging.format = LogFormat(args.log_format)
    if getattr(args, "no_steam", False):
        cfg.steam.enabled = False
    if getattr(args, "steam_root", None) is not None:
        cfg.steam.root = args.steam_root
    if getattr(args, "search_path", None) is not None:
        cfg.search_path = args.search_path
    return cfg


def _command_to_dict(command: Command) -> dict[str, Any]:
    return {
        "command": command.command,
        "args": command.args,
        "variables": [list(variable) for variable in command.variables],
        "tokens": command.to_tokens(),
    }


def _run_parse(args: argparse.Namespace) -> int:
    command = parse(args.exec_line)
    if command is None:
        sys.stderr.write("ERROR: no command found\n")
        return 1

    if args.flatten:
        command.flatten_env()

    if args.json:
        sys.stdout.write(json.dumps(_command_to_dict(command)) + "\n")
    else:
        sys.stdout.write(f"{command}\n")
    return 0


def _run_check(args: argparse.Namespace, cfg: AppConfig) -> int:
    library = SteamLibrary(cfg.steam.root) if cfg.steam.enabled else None

    exit_code = 0
    for path in args.files:
        try:
            entry = read_desktop_entry(path)
        except DesktopEntryError as e:
            logger.warning("Unreadable desktop entry", path=str(path), error=e.message)
            sys.stdout.write(f"{path}: ERROR: {e.message}\n")
            exit_code = 1
            continue

        status = ValidityStatus.from_desktop_entry(
            entry, library=library, search_path=cfg.search_path
        )
        if status.is_valid():
            sys.stdout.write(f"{path}: OK\n")
        else:
            reason = (status.error_string() or "").replace("\n", "; ")
            sys.stdout.write(f"{path}: INVALID: {reason}\n")
            exit_code = 1
    return exit_code


def main(argv: Sequence[str] | None = None) -> int:
    args = build_cli_parser().parse_args(argv)

    try:
        cfg = apply_cli_args(args, AppConfig.from_env())
    except DeskExecError as e:
        sys.stderr.write(f"ERROR: {e.message}\n")
        return 2

    configure_logging(cfg.logging.numeric_level, cfg.logging.format)
    logger.debug("Configuration loaded", config=cfg.model_dump(mode="json"))

    if args.action == "parse":
        return _run_parse(args)
    return _run_check(args, cfg)


if __name__ == "__main__":
    sys.exit(main())

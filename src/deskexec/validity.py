"""
Validity checks for desktop entries.

An entry is valid when it has a ``Name`` and its ``Exec`` command can be
started: the command line parses, a Steam game it launches is installed,
and the effective binary (after unwrapping ``env``) is found on the search
path. Entries without ``Exec`` are considered launchable.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Mapping
from dataclasses import dataclass

from deskexec.core.common.exceptions import (
    BinaryNotFoundError,
    ExecError,
    ExecFieldNotFoundError,
    ExecParseError,
    SteamAppNotInstalledError,
)
from deskexec.core.interfaces.command_parser_interface import ICommandParser
from deskexec.core.interfaces.installed_app_lookup_interface import (
    IInstalledAppLookup,
)
from deskexec.shellparse import parse

logger = logging.getLogger(__name__)


def check_exec(
    entry: Mapping[str, str],
    *,
    library: IInstalledAppLookup | None = None,
    parser: ICommandParser = parse,
) -> str:
    """Return the binary an entry's ``Exec`` key would start.

    Args:
        entry: Key/value pairs of the ``[Desktop Entry]`` group
        library: Installed Steam game lookup; Steam checks are skipped when None
        parser: Command line parser

    Raises:
        ExecFieldNotFoundError: The entry has no ``Exec`` key
        ExecParseError: The ``Exec`` value holds no command
        SteamAppNotInstalledError: The entry launches an uninstalled Steam game
    """
    exec_value = entry.get("Exec")
    if exec_value is None:
        raise ExecFieldNotFoundError()

    command = parser(exec_value)
    if command is None:
        raise ExecParseError(details={"exec": exec_value})

    if (
        library is not None
        and command.is_steam_app()
        and not command.is_steam_app_installed(library)
    ):
        raise SteamAppNotInstalledError(app_id=command.find_steam_appid())

    command.flatten_env()
    return command.command


def resolve_binary(binary: str, search_path: str | None = None) -> str:
    """Locate ``binary`` the way a launcher would, or raise BinaryNotFoundError."""
    resolved = shutil.which(binary, path=search_path)
    if resolved is None:
        raise BinaryNotFoundError(binary)
    return resolved


@dataclass(frozen=True)
class ValidityStatus:
    empty_name: bool = False
    exec_ok: bool = True
    exec_fail_reason: str | None = None

    @classmethod
    def from_desktop_entry(
        cls,
        entry: Mapping[str, str],
        *,
        library: IInstalledAppLookup | None = None,
        search_path: str | None = None,
    ) -> ValidityStatus:
        exec_ok = True
        exec_fail_reason: str | None = None
        try:
            resolve_binary(check_exec(entry, library=library), search_path)
        except ExecFieldNotFoundError:
            pass
        except ExecError as e:
            logger.debug("Exec check failed: %s", e.message)
            exec_ok = False
            exec_fail_reason = e.message

        return cls(
            empty_name=not entry.get("Name"),
            exec_ok=exec_ok,
            exec_fail_reason=exec_fail_reason,
        )

    def is_valid(self) -> bool:
        return not self.empty_name and self.exec_ok

    def error_string(self) -> str | None:
        if self.is_valid():
            return None

        lines: list[str] = []
        if self.empty_name:
            lines.append("Missing name field")
        if not self.exec_ok:
            lines.append(self.exec_fail_reason or "Exec check failed")
        return "\n".join(lines).strip()

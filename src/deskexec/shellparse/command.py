"""
Core data structure for a parsed ``Exec=`` command line.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass, field

from deskexec.core.interfaces.installed_app_lookup_interface import (
    IInstalledAppLookup,
)

logger = logging.getLogger(__name__)

STEAM_ARG_FORMAT = "steam://rungameid/"
STEAM_APPID_PATTERN = re.compile(r"\+?[0-9]+")
MAX_STEAM_APPID = 2**64 - 1

# Unicode White_Space; str.isspace() also accepts U+001C..U+001F
WHITESPACE = (
    "\t\n\x0b\x0c\r \x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)


def is_whitespace(char: str) -> bool:
    return char in WHITESPACE


def parse_variable(token: str) -> tuple[str, str] | None:
    """Split a ``VAR=value`` token on its first ``=``.

    No validation is performed on the variable name.
    """
    if "=" not in token:
        return None
    name, value = token.split("=", 1)
    return name, value


@dataclass
class Command:
    """
    Represents a parsed command line.

    Attributes:
        command: The program name or path to execute.
        args: Positional arguments, in order.
        variables: Leading ``VAR=value`` assignments, in order.
    """

    command: str
    args: list[str] = field(default_factory=list)
    variables: list[tuple[str, str]] = field(default_factory=list)

    def is_env(self) -> bool:
        return self.command == "env"

    def flatten_env(self) -> None:
        """Replace an ``env`` wrapper with the binary it starts.

        Assignments given to ``env`` are moved to ``variables``. If no
        binary can be found among the arguments the command is left as is.
        """
        if not self.is_env():
            return

        binary_index: int | None = None
        for i, arg in enumerate(self.args):
            if not arg.startswith("-") and "=" not in arg:
                binary_index = i
                break

        if binary_index is None:
            return

        drained = self.args[:binary_index]
        del self.args[:binary_index]
        for arg in drained:
            variable = parse_variable(arg)
            if variable is None:
                logger.debug("Dropping env argument %r while flattening", arg)
                continue
            self.variables.append(variable)

        self.command = self.args.pop(0)

    def find_steam_appid(self) -> int | None:
        for arg in self.args:
            arg = arg.strip(WHITESPACE)
            if arg.startswith(STEAM_ARG_FORMAT):
                appid = arg[len(STEAM_ARG_FORMAT) :]
                if not STEAM_APPID_PATTERN.fullmatch(appid):
                    return None
                value = int(appid)
                return value if value <= MAX_STEAM_APPID else None
        return None

    def is_steam_app(self) -> bool:
        return self.command == "steam" and self.find_steam_appid() is not None

    def is_steam_app_installed(self, library: IInstalledAppLookup) -> bool:
        """Check whether the Steam game launched by this command is installed."""
        app_id = self.find_steam_appid() if self.command == "steam" else None
        if app_id is None:
            return False
        return library.is_app_installed(app_id)

    def environment(self) -> dict[str, str]:
        """Return the variables as a mapping; later assignments win."""
        return dict(self.variables)

    def argv(self) -> list[str]:
        return [self.command, *self.args]

    def to_tokens(self) -> list[str]:
        """Return ``VAR=value`` tokens followed by the command and its arguments."""
        return [f"{name}={value}" for name, value in self.variables] + self.argv()

    def __iter__(self) -> Iterator[str]:
        return iter(self.to_tokens())

    def __str__(self) -> str:
        # No trailing space after the command when there are no arguments
        prefix = "".join(f"{name}={value} " for name, value in self.variables)
        return prefix + " ".join(self.argv())

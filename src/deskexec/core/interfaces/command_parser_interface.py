from __future__ import annotations

from typing import Protocol

from deskexec.shellparse.command import Command


class ICommandParser(Protocol):
    """Parses a raw command line into a structured command.

    Implementations should be pure and side-effect free.
    """

    def __call__(self, text: str) -> Command | None:
        """Parse a command line.

        Args:
            text: Raw command line (may be empty)

        Returns:
            The parsed command, or None when no command token is present.
        """
        ...

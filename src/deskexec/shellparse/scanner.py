"""
Tokenizer for the shell-like command lines found in ``Exec=`` fields.

The grammar is deliberately narrow: whitespace separates tokens, ``"`` and
``'`` quote spans without nesting, and a backslash escapes exactly one
character in or out of quotes. Leading ``VAR=value`` tokens are collected
as environment assignments until the first other token, which becomes the
command.
"""

from __future__ import annotations

import logging
from enum import Enum

from deskexec.shellparse.command import Command, is_whitespace, parse_variable

logger = logging.getLogger(__name__)

QUOTE_CHARS = ('"', "'")
ESCAPE_CHAR = "\\"


class ScanState(str, Enum):
    """Scanner states."""

    IDLE = "idle"
    IN_TOKEN = "in_token"
    IN_QUOTE = "in_quote"
    SEEN_WHITESPACE = "seen_whitespace"


class CommandScanner:
    """Scanner that accumulates one command line.

    ``finish`` hands the accumulated command over and resets the scanner, so
    the same instance can scan another line afterwards.
    """

    def __init__(self) -> None:
        self.state = ScanState.IDLE
        self.delimiter: str | None = None
        self.escape = False
        self._token: list[str] = []
        self._command: str | None = None
        self._args: list[str] = []
        self._variables: list[tuple[str, str]] = []

    def feed(self, text: str) -> None:
        for char in text:
            self._step(char)

    def _step(self, char: str) -> None:
        # Token completion is deferred until the next token starts
        if self.state is ScanState.SEEN_WHITESPACE and not is_whitespace(char):
            self._finish_token()
            self.state = ScanState.IDLE

        if self.escape:
            self.escape = False
            self._append(char)
        elif char == ESCAPE_CHAR:
            self.escape = True
            if self.state is ScanState.IDLE:
                self.state = ScanState.IN_TOKEN
        elif char in QUOTE_CHARS:
            if self.state is not ScanState.IN_QUOTE:
                self.state = ScanState.IN_QUOTE
                self.delimiter = char
            elif char == self.delimiter:
                self.state = ScanState.IN_TOKEN
                self.delimiter = None
            else:
                self._token.append(char)
        elif is_whitespace(char) and self.state is not ScanState.IN_QUOTE:
            self.state = ScanState.SEEN_WHITESPACE
        else:
            self._append(char)

    def _append(self, char: str) -> None:
        self._token.append(char)
        if self.state is not ScanState.IN_QUOTE:
            self.state = ScanState.IN_TOKEN

    def _finish_token(self) -> None:
        if not self._token:
            return

        token = "".join(self._token)
        self._token.clear()

        if self._command is not None:
            self._args.append(token)
            return

        variable = parse_variable(token)
        if variable is not None:
            self._variables.append(variable)
        else:
            self._command = token

    def finish(self) -> Command | None:
        """Complete the scan and build the command, if one was found."""
        if self.escape:
            logger.debug("Ignoring dangling escape at end of input")
        if self.state is ScanState.IN_QUOTE:
            logger.debug("Unterminated %s quote at end of input", self.delimiter)

        self._finish_token()
        self.escape = False
        self.delimiter = None
        self.state = ScanState.IDLE

        command, self._command = self._command, None
        args, self._args = self._args, []
        variables, self._variables = self._variables, []

        if command is None:
            return None
        return Command(command=command, args=args, variables=variables)


def parse(text: str) -> Command | None:
    """Parse a command line.

    Args:
        text: The raw command line, typically the value of an ``Exec`` key.

    Returns:
        The parsed command, or None when the input holds no command token.
    """
    scanner = CommandScanner()
    scanner.feed(text)
    return scanner.finish()

"""Tokenizer for ``Exec=`` command lines of desktop entries."""

from deskexec.shellparse.command import Command, parse_variable
from deskexec.shellparse.scanner import CommandScanner, ScanState, parse

__all__ = ["Command", "CommandScanner", "ScanState", "parse", "parse_variable"]

"""
Minimal reader for the ``[Desktop Entry]`` group of a ``.desktop`` file.

Only what the validity checker needs is provided: the raw key/value pairs of
the main group, localized keys included verbatim (``Name[de]``).
"""

from __future__ import annotations

import configparser
import logging
from pathlib import Path

from deskexec.core.common.exceptions import DesktopEntryError

logger = logging.getLogger(__name__)

DESKTOP_ENTRY_GROUP = "Desktop Entry"


def _make_parser() -> configparser.RawConfigParser:
    parser = configparser.RawConfigParser(
        interpolation=None,
        strict=False,
        delimiters=("=",),
        comment_prefixes=("#",),
    )
    # Keys are case sensitive
    parser.optionxform = str  # type: ignore[assignment,method-assign]
    return parser


def parse_desktop_entry(text: str, source: str = "<string>") -> dict[str, str]:
    """Return the ``[Desktop Entry]`` group of a desktop file's text."""
    parser = _make_parser()
    try:
        parser.read_string(text, source=source)
    except configparser.Error as e:
        raise DesktopEntryError(f"Failed to parse {source}: {e}", path=source) from e

    if not parser.has_section(DESKTOP_ENTRY_GROUP):
        raise DesktopEntryError(
            f"Missing [{DESKTOP_ENTRY_GROUP}] group in {source}", path=source
        )
    return dict(parser.items(DESKTOP_ENTRY_GROUP))


def read_desktop_entry(path: Path | str) -> dict[str, str]:
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DesktopEntryError(f"Failed to read {path}: {e}", path=str(path)) from e
    logger.debug("Read desktop entry %s", path)
    return parse_desktop_entry(text, source=str(path))

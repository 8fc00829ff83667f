"""
Installed Steam game lookup.

Steam records its library folders in ``steamapps/libraryfolders.vdf`` under
the Steam root. A game counts as installed when a library folder lists its
app id and the folder holds the matching ``appmanifest_<id>.acf``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import vdf
from pydantic import Field, ValidationError

from deskexec.core.interfaces.model_bases import DomainModel

logger = logging.getLogger(__name__)

# Relative to the Steam root (usually ~/.steam)
DEFAULT_STEAMAPPS_DIR = Path("steam") / "steamapps"
LIBRARYFOLDERS_VDF = DEFAULT_STEAMAPPS_DIR / "libraryfolders.vdf"


class LibraryFolder(DomainModel):
    """One Steam library folder and the apps it contains."""

    path: Path
    label: str = ""
    apps: dict[int, int] = Field(default_factory=dict)

    @property
    def steamapps_path(self) -> Path:
        return self.path / "steamapps"


def parse_library_folders(data: str) -> list[LibraryFolder]:
    """Parse the text of a ``libraryfolders.vdf`` file.

    Older Steam clients store bare paths under numeric keys instead of
    nested folder sections; both layouts are accepted.
    """
    document = vdf.loads(data)
    root = document.get("libraryfolders") or document.get("LibraryFolders") or {}

    folders: list[LibraryFolder] = []
    for key, entry in root.items():
        if not key.isdigit():
            continue
        raw: dict[str, Any] = {"path": entry} if isinstance(entry, str) else entry
        try:
            folders.append(LibraryFolder.model_validate(raw))
        except ValidationError as e:
            logger.warning("Skipping malformed Steam library folder %s: %s", key, e)
    return folders


class SteamLibrary:
    """Cache of the library folders of one Steam installation.

    The library file is read on first use and kept until ``refresh`` is
    called.
    """

    def __init__(self, steam_root: Path | str | None = None) -> None:
        self.steam_root = (
            Path(steam_root).expanduser()
            if steam_root is not None
            else Path.home() / ".steam"
        )
        self._folders: list[LibraryFolder] | None = None

    @property
    def library_folders_path(self) -> Path:
        return self.steam_root / LIBRARYFOLDERS_VDF

    def refresh(self) -> None:
        self._folders = None

    def folders(self) -> list[LibraryFolder]:
        if self._folders is None:
            self._folders = self._load()
        return self._folders

    def _load(self) -> list[LibraryFolder]:
        path = self.library_folders_path
        try:
            data = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("No Steam library file at %s", path)
            return []
        except OSError as e:
            logger.warning("Failed to read Steam library file %s: %s", path, e)
            return []

        try:
            folders = parse_library_folders(data)
        except (SyntaxError, ValueError, AttributeError) as e:
            logger.warning("Failed to parse Steam library file %s: %s", path, e)
            return []

        logger.debug("Loaded %d Steam library folders from %s", len(folders), path)
        return folders

    def find_steamapps_path_for_app(self, app_id: int) -> Path | None:
        for folder in self.folders():
            if app_id in folder.apps:
                return folder.steamapps_path
        return None

    def is_app_installed(self, app_id: int) -> bool:
        steamapps_path = self.find_steamapps_path_for_app(app_id)
        if steamapps_path is None:
            return False
        return (steamapps_path / f"appmanifest_{app_id}.acf").exists()

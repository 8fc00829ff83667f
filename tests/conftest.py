import logging
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
import structlog

LIBRARY_FOLDERS_TEMPLATE = """\
"libraryfolders"
{{
	"0"
	{{
		"path"		"{path}"
		"label"		""
		"contentid"		"4170063428306331311"
		"totalsize"		"0"
		"update_clean_bytes_tally"		"1622446138"
		"time_last_update_verified"		"1700000000"
		"apps"
		{{
{apps}
		}}
	}}
}}
"""


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    """Undo logging configuration done by the CLI during a test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


@pytest.fixture
def library_writer() -> Callable[[Path, Path, dict[int, int]], Path]:
    return write_library_folders


@pytest.fixture
def steam_root(tmp_path: Path) -> Path:
    """A Steam root with one library folder listing app 221380 as installed."""
    root = tmp_path / "dot-steam"
    library_path = tmp_path / "SteamLibrary"
    (library_path / "steamapps").mkdir(parents=True)
    (library_path / "steamapps" / "appmanifest_221380.acf").write_text(
        '"AppState"\n{\n\t"appid"\t\t"221380"\n}\n', encoding="utf-8"
    )
    write_library_folders(root, library_path, {221380: 1000, 440: 2000})
    return root


def write_library_folders(root: Path, library_path: Path, apps: dict[int, int]) -> Path:
    """Write a libraryfolders.vdf with one folder under the given Steam root."""
    vdf_path = root / "steam" / "steamapps" / "libraryfolders.vdf"
    vdf_path.parent.mkdir(parents=True, exist_ok=True)
    app_lines = "\n".join(
        f'\t\t\t"{app_id}"\t\t"{size}"' for app_id, size in apps.items()
    )
    vdf_path.write_text(
        LIBRARY_FOLDERS_TEMPLATE.format(path=library_path, apps=app_lines),
        encoding="utf-8",
    )
    return vdf_path

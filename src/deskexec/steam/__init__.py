from deskexec.steam.library import LibraryFolder, SteamLibrary, parse_library_folders

__all__ = ["LibraryFolder", "SteamLibrary", "parse_library_folders"]

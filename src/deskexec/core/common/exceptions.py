"""
Common exception classes for deskexec.

This module defines the exception hierarchy used by the validity checker,
the desktop entry reader and the configuration layer. The tokenizer itself
never raises; it reports a missing command with ``None``.
"""

from __future__ import annotations


class DeskExecError(Exception):
    """Base exception class for all deskexec errors."""

    def __init__(
        self,
        message: str,
        details: dict | None = None,
        **kwargs,
    ):
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        for key, value in (kwargs or {}).items():
            setattr(self, key, value)

    def to_dict(self) -> dict:
        error_dict = {
            "message": self.message,
            "type": self.__class__.__name__,
            "details": self.details,
        }

        for attr_name in dir(self):
            if (
                not attr_name.startswith("_")
                and attr_name not in ["message", "details", "args"]
                and not callable(getattr(self, attr_name))
            ):
                error_dict[attr_name] = getattr(self, attr_name)

        return {"error": error_dict}


class ConfigurationError(DeskExecError):
    """Raised when there's a configuration issue."""

    def __init__(
        self,
        message: str = "Configuration error",
        details: dict | None = None,
        **kwargs,
    ):
        super().__init__(message, details, **kwargs)


class DesktopEntryError(DeskExecError):
    """Raised when a desktop entry file cannot be read."""

    def __init__(
        self,
        message: str = "Invalid desktop entry",
        path: str | None = None,
        details: dict | None = None,
        **kwargs,
    ):
        super().__init__(message, details, **kwargs)
        self.path = path


class ExecError(DeskExecError):
    """Base class for problems with an entry's ``Exec`` field."""


class ExecFieldNotFoundError(ExecError):
    """Raised when the entry has no ``Exec`` key."""

    def __init__(
        self,
        message: str = "Exec field not found",
        details: dict | None = None,
        **kwargs,
    ):
        super().__init__(message, details, **kwargs)


class ExecParseError(ExecError):
    """Raised when the ``Exec`` value contains no command."""

    def __init__(
        self,
        message: str = "Exec parse error",
        details: dict | None = None,
        **kwargs,
    ):
        super().__init__(message, details, **kwargs)


class SteamAppNotInstalledError(ExecError):
    """Raised when the entry launches a Steam game that is not installed."""

    def __init__(
        self,
        message: str = "Steam app not installed",
        app_id: int | None = None,
        details: dict | None = None,
        **kwargs,
    ):
        super().__init__(message, details, **kwargs)
        self.app_id = app_id


class BinaryNotFoundError(ExecError):
    """Raised when the effective binary cannot be found on the search path."""

    def __init__(
        self,
        binary: str,
        message: str | None = None,
        details: dict | None = None,
        **kwargs,
    ):
        super().__init__(
            message or f"cannot find binary path: {binary}", details, **kwargs
        )
        self.binary = binary

from __future__ import annotations

from typing import Protocol


class IInstalledAppLookup(Protocol):
    """Answers whether a store application is installed locally.

    Implementations own whatever cache they keep and expose a way to
    refresh it; callers pass the instance in explicitly.
    """

    def is_app_installed(self, app_id: int) -> bool:
        """Return True when the application with ``app_id`` is installed.

        Args:
            app_id: Numeric store identifier of the application

        Returns:
            True if installed. Lookup failures are reported as False.
        """
        ...

    def refresh(self) -> None:
        """Drop any cached state so the next lookup reads fresh data."""
        ...

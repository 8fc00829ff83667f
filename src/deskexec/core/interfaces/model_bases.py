"""Nominal marker base class for pydantic models.

`DomainModel` marks pydantic-based configuration and data models so
static type checkers can tell them apart from plain dataclasses.
"""

from __future__ import annotations

from pydantic import BaseModel


class DomainModel(BaseModel):
    """Nominal marker for Pydantic-based domain models."""

    def __repr__(self) -> str:
        """Provide a concise, one-line summary of the object."""
        class_name = self.__class__.__name__

        repr_attrs = ("name", "path", "label")
        for attr in repr_attrs:
            if hasattr(self, attr):
                attr_value = getattr(self, attr)
                if attr_value is not None:
                    return f'<{class_name} {attr}="{attr_value}">'

        return f"<{class_name}>"

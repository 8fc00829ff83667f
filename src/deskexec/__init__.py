"""Parse and check the ``Exec`` command lines of freedesktop.org desktop entries."""

from deskexec.shellparse import Command, parse

__version__ = "0.1.0"

__all__ = ["Command", "__version__", "parse"]

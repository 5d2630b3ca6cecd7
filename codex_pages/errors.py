"""Exception types raised while loading projects and rendering documents."""

from __future__ import annotations


class RenderError(Exception):
    """Base class for failures that abort rendering a single document."""


class InputNotFoundError(RenderError, FileNotFoundError):
    """Raised when a referenced file, template, or document cannot be found."""


class MalformedInputError(RenderError, ValueError):
    """Raised when referenced content cannot be parsed into the expected shape."""


class ProjectExistsError(RenderError, FileExistsError):
    """Raised when a new project would overwrite an existing path."""


__all__ = [
    "InputNotFoundError",
    "MalformedInputError",
    "ProjectExistsError",
    "RenderError",
]

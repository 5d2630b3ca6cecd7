"""Render markdown documentation projects to HTML sites and LaTeX books.

Exports
-------
- ``app``: Cyclopts application with the ``build`` and ``latex`` commands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from codex_pages import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]

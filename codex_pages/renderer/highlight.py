"""Per-line syntax highlighting for code blocks."""

from __future__ import annotations

import logging
import typing as typ
from html import escape

from pygments import highlight
from pygments.formatters.html import HtmlFormatter
from pygments.lexers import get_lexer_by_name, get_lexer_for_filename
from pygments.util import ClassNotFound

if typ.TYPE_CHECKING:
    from pathlib import Path

    from pygments.lexer import Lexer

logger = logging.getLogger(__name__)

FALLBACK_STYLE = "default"


def plain_lines(code: str) -> list[str]:
    """Return ``code`` split into HTML-escaped lines."""
    return [escape(line, quote=False) for line in code.splitlines()]


class CodeHighlighter:
    """Highlight source code into one HTML fragment per line."""

    def __init__(self, pygments_style: str = "solarized-dark") -> None:
        """Initialize with a Pygments style, falling back to ``default``.

        Parameters
        ----------
        pygments_style : str, optional
            Name of the Pygments style used for inline colours.
        """
        try:
            self._formatter = HtmlFormatter(style=pygments_style, nowrap=True, noclasses=True)
        except ClassNotFound:
            logger.warning("Unknown pygments style %r, using %r", pygments_style, FALLBACK_STYLE)
            self._formatter = HtmlFormatter(style=FALLBACK_STYLE, nowrap=True, noclasses=True)

    def highlight_lines(self, code: str, language: str | None) -> list[str]:
        """Highlight ``code`` for ``language``.

        Returns
        -------
        list[str]
            Highlighted lines, or escaped plain lines when no language is
            given or Pygments has no lexer for it.
        """
        if not language:
            return plain_lines(code)
        try:
            lexer = get_lexer_by_name(language.lower())
        except ClassNotFound:
            logger.debug("No lexer for %r, rendering plain text", language)
            return plain_lines(code)
        return self._lines(code.strip(), lexer)

    def highlight_file_lines(self, path: Path, code: str) -> list[str]:
        """Highlight ``code`` using the lexer registered for ``path``'s name."""
        try:
            lexer = get_lexer_for_filename(path.name, code)
        except ClassNotFound:
            lexer = get_lexer_by_name("text")
        return self._lines(code, lexer)

    def _lines(self, code: str, lexer: Lexer) -> list[str]:
        return highlight(code, lexer, self._formatter).splitlines()


__all__ = ["CodeHighlighter", "plain_lines"]

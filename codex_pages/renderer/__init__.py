"""Render parsed documents to HTML or LaTeX."""

from .base import Renderer
from .context import ElementIdGenerator, OutputContext, RenderContext
from .highlight import CodeHighlighter
from .html import HtmlRenderer
from .latex import LatexRenderer

__all__ = [
    "CodeHighlighter",
    "ElementIdGenerator",
    "HtmlRenderer",
    "LatexRenderer",
    "OutputContext",
    "RenderContext",
    "Renderer",
]

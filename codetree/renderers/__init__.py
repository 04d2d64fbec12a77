"""Report renderers keyed by output format."""

from __future__ import annotations

from typing import Callable, Dict

from .base import OutputFormat, Renderer
from .json_report import JsonRenderer
from .templated import HtmlRenderer, MarkdownRenderer
from .text import TextRenderer

_RENDERERS: Dict[OutputFormat, Callable[[], Renderer]] = {
    OutputFormat.TEXT: TextRenderer,
    OutputFormat.JSON: JsonRenderer,
    OutputFormat.MARKDOWN: MarkdownRenderer,
    OutputFormat.HTML: HtmlRenderer,
}


def get_renderer(output_format: OutputFormat | str) -> Renderer:
    """Return a renderer for a format enum member or name/alias."""
    if not isinstance(output_format, OutputFormat):
        output_format = OutputFormat.parse(output_format)
    return _RENDERERS[output_format]()


__all__ = [
    "HtmlRenderer",
    "JsonRenderer",
    "MarkdownRenderer",
    "OutputFormat",
    "Renderer",
    "TextRenderer",
    "get_renderer",
]

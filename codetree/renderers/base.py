"""Renderer contract and output format selection."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..report import ProjectReport

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

_ALIASES = {
    "text": "text",
    "txt": "text",
    "json": "json",
    "markdown": "markdown",
    "md": "markdown",
    "html": "html",
}


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"
    MARKDOWN = "markdown"
    HTML = "html"

    @classmethod
    def parse(cls, value: str) -> "OutputFormat":
        """Accept a format name or alias, case-insensitively."""
        canonical = _ALIASES.get(value.strip().lower())
        if canonical is None:
            raise ValueError(f"Unknown output format: {value}")
        return cls(canonical)


class Renderer(ABC):
    """Serializes a finished :class:`ProjectReport`."""

    file_extension: str = ""

    @abstractmethod
    def render(self, report: ProjectReport) -> str:
        """Return the complete report document."""


def create_environment() -> Environment:
    loader = FileSystemLoader(str(TEMPLATES_DIR))
    return Environment(
        loader=loader,
        autoescape=select_autoescape(enabled_extensions=("html.j2",), default_for_string=False),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )

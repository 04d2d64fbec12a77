"""Human-readable formatting helpers for reports and console output."""

from __future__ import annotations

from pathlib import PurePath

_SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")
_SIZE_THRESHOLD = 1024

_LANGUAGE_BY_EXTENSION = {
    "rs": "rust",
    "js": "javascript",
    "jsx": "javascript",
    "ts": "typescript",
    "tsx": "typescript",
    "py": "python",
    "java": "java",
    "c": "c",
    "h": "c",
    "hpp": "cpp",
    "cpp": "cpp",
    "cc": "cpp",
    "cxx": "cpp",
    "cs": "csharp",
    "go": "go",
    "rb": "ruby",
    "php": "php",
    "html": "html",
    "css": "css",
    "scss": "scss",
    "sass": "scss",
    "json": "json",
    "xml": "xml",
    "yml": "yaml",
    "yaml": "yaml",
    "toml": "toml",
    "md": "markdown",
    "sh": "bash",
    "bash": "bash",
    "sql": "sql",
}


def format_size(size: int) -> str:
    """Format a byte count as ``512 B`` or ``1.5 KB`` style text."""
    if size <= 0:
        return "0 B"
    value = float(size)
    unit_index = 0
    while value >= _SIZE_THRESHOLD and unit_index < len(_SIZE_UNITS) - 1:
        value /= _SIZE_THRESHOLD
        unit_index += 1
    if unit_index == 0:
        return f"{size} B"
    return f"{value:.1f} {_SIZE_UNITS[unit_index]}"


def percentage(part: int, whole: int) -> float:
    return part / whole * 100.0 if whole else 0.0


def language_for(path: str) -> str:
    """Syntax-highlighting hint for a file path, or an empty string."""
    suffix = PurePath(path).suffix
    return _LANGUAGE_BY_EXTENSION.get(suffix[1:].lower(), "") if suffix else ""


__all__ = ["format_size", "language_for", "percentage"]

"""Markdown and HTML renderers backed by Jinja2 templates."""

from __future__ import annotations

from typing import Any, Dict

from jinja2 import Environment

from ..formatting import format_size, language_for, percentage
from ..report import ProjectReport
from .base import Renderer, create_environment
from .text import SENSITIVE_PLACEHOLDER, UNREADABLE_PLACEHOLDER


def _with_trailing_newline(content: str | None) -> str:
    if not content:
        return ""
    return content if content.endswith("\n") else f"{content}\n"


class TemplateRenderer(Renderer):
    """Renders ``template_name`` with a context shared by every templated format."""

    template_name: str = ""

    def __init__(self, env: Environment | None = None) -> None:
        self.env = env or create_environment()

    def render(self, report: ProjectReport) -> str:
        template = self.env.get_template(self.template_name)
        return template.render(**self.context(report))

    def context(self, report: ProjectReport) -> Dict[str, Any]:
        stats = report.statistics
        return {
            "title": "Codetree Project Analysis",
            "report": report,
            "generated_at": report.generated_label,
            "info_lines": [line for line in report.project_info.splitlines() if line.strip()],
            "stats": stats,
            "total_size": format_size(stats.total_size_bytes),
            "code_percentage": percentage(stats.code_lines, stats.total_lines),
            "comment_percentage": percentage(stats.comment_lines, stats.total_lines),
            "blank_percentage": percentage(stats.blank_lines, stats.total_lines),
            "extensions": [
                {"extension": ext, "count": count, "lines": lines, "size": format_size(size)}
                for ext, count, lines, size in stats.extensions_by_count()
            ],
            "files": [
                {
                    "relative_path": item.relative_path,
                    "content": item.content,
                    "body": _with_trailing_newline(item.content),
                    "is_sensitive": item.is_sensitive,
                    "line_count": item.line_count,
                    "size": format_size(item.size_bytes),
                    "language": language_for(item.relative_path),
                }
                for item in report.files
            ],
            "sensitive_placeholder": SENSITIVE_PLACEHOLDER,
            "unreadable_placeholder": UNREADABLE_PLACEHOLDER,
        }


class MarkdownRenderer(TemplateRenderer):
    file_extension = "md"
    template_name = "report.md.j2"


class HtmlRenderer(TemplateRenderer):
    file_extension = "html"
    template_name = "report.html.j2"

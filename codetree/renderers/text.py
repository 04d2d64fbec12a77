"""Plain-text report renderer."""

from __future__ import annotations

from typing import List

from ..report import ProjectReport
from .base import Renderer

SENSITIVE_PLACEHOLDER = "[SENSITIVE FILE - Content Protected]"
UNREADABLE_PLACEHOLDER = "[Unable to read file content]"


class TextRenderer(Renderer):
    file_extension = "txt"

    def render(self, report: ProjectReport) -> str:
        parts: List[str] = [
            "CODETREE PROJECT ANALYSIS\n",
            "========================\n\n",
            f"Generated: {report.generated_label}\n\n",
            report.project_info,
            "\n",
            "Project File Tree:\n",
            "==================\n",
            report.file_tree,
            "\n",
            report.statistics.format_stats(),
            "\n",
            "Project Files:\n",
            "==============\n\n",
        ]
        for index, item in enumerate(report.files, start=1):
            parts.append(f"{index}. {item.relative_path}\n")
            if item.is_sensitive:
                parts.append(f"   {SENSITIVE_PLACEHOLDER}\n\n")
            elif item.content is not None:
                parts.append(f"\n{item.content}\n")
            else:
                parts.append(f"   {UNREADABLE_PLACEHOLDER}\n")
            parts.append("\n")
        return "".join(parts)

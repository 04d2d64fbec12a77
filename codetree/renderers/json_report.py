"""JSON report renderer."""

from __future__ import annotations

import json

from ..report import ProjectReport
from .base import Renderer


class JsonRenderer(Renderer):
    file_extension = "json"

    def render(self, report: ProjectReport) -> str:
        return json.dumps(report.to_dict(), indent=2, ensure_ascii=False)

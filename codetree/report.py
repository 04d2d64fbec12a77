"""Assembly of the report handed to the renderers."""

from __future__ import annotations

import sys
from dataclasses import asdict, dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO

from .detector import ProjectDetector
from .exclusions import SensitiveFileSet
from .logging import get_logger
from .models import ExclusionReport, FileRecord, ReportFile
from .stats import ProjectStats, split_lines

logger = get_logger("report")


@dataclass
class ProjectReport:
    """Everything a renderer needs; produced once per run."""

    root: str
    project_info: str
    file_tree: str
    statistics: ProjectStats
    files: List[ReportFile]
    generated_at: datetime
    project_types: List[str] = field(default_factory=list)
    frameworks: Dict[str, str] = field(default_factory=dict)
    exclusions: ExclusionReport = field(default_factory=ExclusionReport)

    @property
    def generated_label(self) -> str:
        return self.generated_at.strftime("%Y-%m-%d %H:%M:%S UTC")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "root": self.root,
            "project_info": self.project_info,
            "project_types": self.project_types,
            "frameworks": self.frameworks,
            "file_tree": self.file_tree,
            "statistics": self.statistics.to_dict(),
            "exclusions": self.exclusions.to_dict(),
            "files": [asdict(item) for item in self.files],
            "generated_at": self.generated_at.isoformat().replace("+00:00", "Z"),
        }


class ProgressPrinter:
    """Writes ``Processing Files: N% Complete`` on a single console line."""

    def __init__(self, stream: TextIO | None = None, enabled: bool = True) -> None:
        self.stream = stream or sys.stdout
        self.enabled = enabled
        self._last: Optional[int] = None

    def update(self, done: int, total: int) -> None:
        if not self.enabled or total == 0:
            return
        percent = int(done / total * 100)
        if percent == self._last:
            return
        self._last = percent
        self.stream.write(f"\rProcessing Files: {percent}% Complete")
        self.stream.flush()

    def finish(self) -> None:
        if self.enabled and self._last is not None:
            self.stream.write("\n")
            self.stream.flush()


def _read_content(path: Path) -> Optional[str]:
    try:
        return path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Content unavailable for %s: %s", path, exc)
        return None


def _logical_size(path: Path) -> int:
    try:
        return path.stat().st_size
    except OSError:
        return 0


def collect_report_files(
    root: Path,
    records: List[FileRecord],
    sensitive_files: SensitiveFileSet,
    progress: ProgressPrinter | None = None,
) -> List[ReportFile]:
    """Read the content of every kept file, withholding sensitive ones."""
    files: List[ReportFile] = []
    total = len(records)
    for index, record in enumerate(records, start=1):
        if progress is not None:
            progress.update(index, total)

        path = record.path
        is_sensitive = sensitive_files.is_sensitive(path.name)
        content: Optional[str] = None
        line_count = 0
        size_bytes = 0
        if path.exists():
            size_bytes = _logical_size(path)
            if not is_sensitive:
                content = _read_content(path)
                if content is not None:
                    line_count = len(split_lines(content))

        files.append(
            ReportFile(
                path=str(path),
                relative_path=path.relative_to(root).as_posix(),
                content=content,
                is_sensitive=is_sensitive,
                size_bytes=size_bytes,
                line_count=line_count,
            )
        )
    if progress is not None:
        progress.finish()
    return files


def build_report(
    root: Path,
    detector: ProjectDetector,
    file_tree: str,
    stats: ProjectStats,
    files: List[ReportFile],
    generated_at: datetime | None = None,
) -> ProjectReport:
    return ProjectReport(
        root=str(root),
        project_info=detector.format_project_info(),
        file_tree=file_tree,
        statistics=stats,
        files=files,
        generated_at=generated_at or datetime.now(UTC),
        project_types=sorted(detector.project_types),
        frameworks=detector.framework_detection.as_display_dict(),
        exclusions=detector.exclusion_report,
    )


__all__ = ["ProgressPrinter", "ProjectReport", "build_report", "collect_report_files"]

"""Pipeline orchestration: detect, walk, assemble, render and write."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, TextIO

from .config import CodetreeConfig, load_config
from .detector import ProjectDetector
from .exclusions import SensitiveFileSet
from .logging import get_logger
from .renderers import OutputFormat, Renderer, get_renderer
from .report import ProgressPrinter, ProjectReport, build_report, collect_report_files
from .stats import ProjectStats
from .walker import TreeWalker


class ReportWriteError(RuntimeError):
    """Raised when the rendered report cannot be written to disk."""


@dataclass
class ScanOutcome:
    """Result of a completed run."""

    path: Path
    report: ProjectReport
    output_format: OutputFormat


@dataclass
class ScanSettings:
    """Effective settings for one run after merging config and overrides."""

    output_format: OutputFormat
    output_name: str
    progress: bool
    config: CodetreeConfig

    def output_file_name(self, renderer: Renderer) -> str:
        return f"{self.output_name}.{renderer.file_extension}"


def resolve_root(path: str | Path) -> Path:
    root = Path(path).expanduser().resolve()
    if not root.exists():
        raise FileNotFoundError(f"Directory not found: {path}")
    if not root.is_dir():
        raise NotADirectoryError(f"Path is not a directory: {path}")
    return root


class Orchestrator:
    """Coordinates a full codetree run for one project root."""

    def __init__(self, stdout: TextIO | None = None, program_name: str | None = None) -> None:
        self.stdout = stdout or sys.stdout
        self.program_name = program_name if program_name is not None else Path(sys.argv[0]).name
        self.logger = get_logger("orchestrator")

    def resolve_settings(
        self,
        root: Path,
        *,
        output_format: Optional[str] = None,
        output_name: Optional[str] = None,
        progress: Optional[bool] = None,
        config_path: Optional[Path] = None,
    ) -> ScanSettings:
        """Explicit arguments win over .codetree.yml values."""
        config = load_config(config_path or root)
        return ScanSettings(
            output_format=OutputFormat.parse(output_format or config.output.format),
            output_name=output_name or config.output.name,
            progress=config.progress if progress is None else progress,
            config=config,
        )

    def scan(self, path: str | Path, settings: ScanSettings | None = None) -> ProjectReport:
        """Build the report for ``path`` without writing anything."""
        root = resolve_root(path)
        settings = settings or self.resolve_settings(root)
        renderer = get_renderer(settings.output_format)
        config = settings.config

        sensitive = SensitiveFileSet.with_extra(config.sensitive_files)
        detector = ProjectDetector()
        detector.add_excluded_dirs(config.exclude_dirs)
        detector.add_excluded_files(config.exclude_files)
        detector.detect_project_types(root)

        stats = ProjectStats(sensitive)
        walker = TreeWalker(
            detector,
            stats,
            skip_names=(self.program_name, settings.output_file_name(renderer)),
        )
        self.logger.info("Generating file tree for %s", root)
        result = walker.walk(root)
        self.logger.debug("Walk kept %d files", len(result.files))

        progress = ProgressPrinter(self.stdout, enabled=settings.progress)
        files = collect_report_files(root, result.files, sensitive, progress)
        return build_report(root, detector, result.tree_text, stats, files)

    def run(
        self,
        path: str | Path,
        *,
        output_format: Optional[str] = None,
        output_name: Optional[str] = None,
        progress: Optional[bool] = None,
        config_path: Optional[Path] = None,
    ) -> ScanOutcome:
        """Scan ``path`` and write the rendered report into it."""
        root = resolve_root(path)
        settings = self.resolve_settings(
            root,
            output_format=output_format,
            output_name=output_name,
            progress=progress,
            config_path=config_path,
        )
        renderer = get_renderer(settings.output_format)
        report = self.scan(root, settings)
        content = renderer.render(report)

        output_path = root / settings.output_file_name(renderer)
        self.write_report(output_path, content)
        self.logger.info("Report written to %s", output_path)
        return ScanOutcome(path=output_path, report=report, output_format=settings.output_format)

    @staticmethod
    def write_report(output_path: Path, content: str) -> None:
        """Replace ``output_path`` with ``content``; failures are fatal."""
        try:
            if output_path.exists():
                output_path.unlink()
            output_path.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise ReportWriteError(f"Failed to write report to {output_path}: {exc}") from exc


__all__ = ["Orchestrator", "ReportWriteError", "ScanOutcome", "ScanSettings", "resolve_root"]

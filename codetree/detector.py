"""Project type detection and the exclusion rules it produces."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional, Set

from .exclusions import ExclusionPolicy, ExclusionRuleSet
from .formatting import format_size
from .frameworks import FrameworkDetector
from .logging import get_logger
from .models import ExclusionReport

# Added for every project regardless of its detected type.
COMMON_EXCLUDED_DIRS = ("assets", "asset", "public", "bin")

logger = get_logger("detector")


def _read_manifest(path: Path) -> Optional[str]:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Could not read %s: %s", path, exc)
        return None


def _has_dotnet_project(root: Path) -> bool:
    try:
        return any(
            entry.suffix in {".csproj", ".fsproj"} for entry in root.iterdir()
        )
    except OSError:
        return False


class ProjectDetector:
    """Classifies a project root and owns the rules used by the walk."""

    def __init__(
        self,
        rules: ExclusionRuleSet | None = None,
        frameworks: FrameworkDetector | None = None,
    ) -> None:
        self.rules = rules or ExclusionRuleSet()
        self.policy = ExclusionPolicy(self.rules)
        self.framework_detection = frameworks or FrameworkDetector()
        self.project_types: Set[str] = set()
        self.exclusion_report = ExclusionReport()

    def _mark(self, project_type: str, *excluded_dirs: str) -> None:
        self.project_types.add(project_type)
        self.rules.add_dirs(*excluded_dirs)
        logger.debug("Detected %s project", project_type)

    def detect_project_types(self, root: Path) -> Set[str]:
        """Inspect marker files under ``root``; checks are independent."""
        if (root / "Cargo.toml").exists():
            self._mark("Rust", "target")

        package_json = root / "package.json"
        if package_json.exists():
            self._mark("JavaScript/Node.js", "node_modules", "dist", "build")
            content = _read_manifest(package_json)
            if content is not None:
                self.framework_detection.detect_js_frameworks(content)

        if any((root / name).exists() for name in ("setup.py", "requirements.txt", "pyproject.toml")):
            self._mark("Python", "__pycache__", ".pytest_cache", "venv", "dist", "build")
            self.framework_detection.detect_python_frameworks(root)

        pom_xml = root / "pom.xml"
        if pom_xml.exists():
            self._mark("Java/Maven", "target")
            self.framework_detection.detect_java_frameworks(_read_manifest(pom_xml))

        if (root / "build.gradle").exists() or (root / "build.gradle.kts").exists():
            self._mark("Java/Gradle", "build", ".gradle")
            self.framework_detection.detect_java_frameworks(None)

        if _has_dotnet_project(root):
            self._mark(".NET", "bin", "obj")
            self.framework_detection.detect_dotnet_frameworks(root)

        if (root / "go.mod").exists():
            self._mark("Go", "vendor")

        if (root / "Gemfile").exists():
            self._mark("Ruby")
            self.framework_detection.detect_ruby_frameworks(root)

        if (root / "composer.json").exists():
            self._mark("PHP", "vendor")
            self.framework_detection.detect_php_frameworks(root)

        self.rules.add_dirs(*COMMON_EXCLUDED_DIRS)
        logger.info(
            "Project types: %s",
            ", ".join(sorted(self.project_types)) or "none detected",
        )
        return self.project_types

    def add_excluded_dirs(self, names: Iterable[str]) -> None:
        self.rules.add_dirs(*names)

    def add_excluded_files(self, names: Iterable[str]) -> None:
        self.rules.add_files(*names)

    def is_excluded_dir(self, name: str) -> bool:
        return self.policy.should_exclude_dir(name)

    def format_project_info(self) -> str:
        parts: List[str] = []
        if self.project_types:
            parts.append(f"Detected Project Types: {', '.join(sorted(self.project_types))}\n")
            parts.append(
                f"Auto-excluded build directories: {', '.join(sorted(self.rules.project_dirs))}\n\n"
            )
        else:
            parts.append("No specific project type detected\n\n")

        parts.append(self.framework_detection.format_frameworks())
        parts.append(self._format_exclusions())
        return "".join(parts)

    def _format_exclusions(self) -> str:
        report = self.exclusion_report
        if report.total_size == 0:
            return ""

        lines = [
            "",
            "Excluded Content Analysis:",
            "==========================",
            f"Total excluded content size: {format_size(report.total_size)}",
            "",
        ]
        if report.directories:
            lines.append("Top 10 Largest Excluded Directories:")
            for index, entry in enumerate(report.largest_directories(), start=1):
                lines.append(
                    f"  {index}. {entry.path} - {format_size(entry.size)} "
                    f"({entry.file_count} files) - Reason: {entry.reason}"
                )
            lines.append("")
        if report.files:
            lines.append("Top 10 Largest Excluded Files:")
            for index, entry in enumerate(report.largest_files(), start=1):
                lines.append(
                    f"  {index}. {entry.path} - {format_size(entry.size)} - Reason: {entry.reason}"
                )
            lines.append("")
        return "\n".join(lines) + "\n"


__all__ = ["COMMON_EXCLUDED_DIRS", "ProjectDetector"]

"""Core data models shared across codetree components."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

NO_EXTENSION = "no_extension"


def extension_of(path: Path) -> str:
    """Lower-cased extension without the dot, or ``no_extension``."""
    suffix = path.suffix
    return suffix[1:].lower() if suffix else NO_EXTENSION


@dataclass(frozen=True)
class FileRecord:
    """Measurements taken for one file that survived the exclusion rules."""

    path: Path
    size: int
    total_lines: int
    blank_lines: int
    comment_lines: int
    is_sensitive: bool
    extension: str
    content_size: int = 0
    is_text: bool = True

    @property
    def code_lines(self) -> int:
        return self.total_lines - self.blank_lines - self.comment_lines


@dataclass(frozen=True)
class ExcludedDirectory:
    path: str
    size: int
    file_count: int
    reason: str


@dataclass(frozen=True)
class ExcludedFile:
    path: str
    size: int
    reason: str


@dataclass
class ExclusionReport:
    """Directories and files skipped by the walk, with their sizes."""

    directories: List[ExcludedDirectory] = field(default_factory=list)
    files: List[ExcludedFile] = field(default_factory=list)
    total_size: int = 0

    def add_directory(self, entry: ExcludedDirectory) -> None:
        self.total_size += entry.size
        self.directories.append(entry)

    def add_file(self, entry: ExcludedFile) -> None:
        self.total_size += entry.size
        self.files.append(entry)

    def largest_directories(self, limit: int = 10) -> List[ExcludedDirectory]:
        return sorted(self.directories, key=lambda entry: (-entry.size, entry.path))[:limit]

    def largest_files(self, limit: int = 10) -> List[ExcludedFile]:
        return sorted(self.files, key=lambda entry: (-entry.size, entry.path))[:limit]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_size": self.total_size,
            "directories": [asdict(entry) for entry in self.directories],
            "files": [asdict(entry) for entry in self.files],
        }


@dataclass
class ReportFile:
    """A file as it appears in the rendered report."""

    path: str
    relative_path: str
    content: Optional[str]
    is_sensitive: bool
    size_bytes: int
    line_count: int

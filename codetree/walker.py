"""Depth-first directory walk that builds the tree text and file statistics."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, Iterable, List, Tuple

from .detector import ProjectDetector
from .logging import get_logger
from .models import ExcludedDirectory, ExcludedFile, FileRecord
from .size_probe import directory_size, real_file_size
from .stats import ProjectStats

BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE = "│   "

logger = get_logger("walker")


@dataclass
class WalkResult:
    """What one directory (and everything kept below it) contributed."""

    tree_lines: List[str] = field(default_factory=list)
    files: List[FileRecord] = field(default_factory=list)
    excluded_directories: List[ExcludedDirectory] = field(default_factory=list)
    excluded_files: List[ExcludedFile] = field(default_factory=list)

    def merge(self, other: "WalkResult") -> None:
        self.tree_lines.extend(other.tree_lines)
        self.files.extend(other.files)
        self.excluded_directories.extend(other.excluded_directories)
        self.excluded_files.extend(other.excluded_files)

    @property
    def tree_text(self) -> str:
        return "".join(f"{line}\n" for line in self.tree_lines)

    @property
    def file_paths(self) -> List[Path]:
        return [record.path for record in self.files]


class TreeWalker:
    """Walks a project root one directory level at a time.

    ``skip_names`` are always left out of the tree, typically the running
    executable and the report file the run is about to write.
    """

    def __init__(
        self,
        detector: ProjectDetector,
        stats: ProjectStats,
        skip_names: Iterable[str] = (),
    ) -> None:
        self.detector = detector
        self.stats = stats
        self.skip_names: FrozenSet[str] = frozenset(name for name in skip_names if name)

    def walk(self, root: Path) -> WalkResult:
        """Walk ``root``, finalize the statistics and record exclusions on the detector."""
        self.detector.rules.seal()
        result = self._walk_directory(root, root, depth=0)

        report = self.detector.exclusion_report
        for directory in result.excluded_directories:
            report.add_directory(directory)
        for excluded in result.excluded_files:
            report.add_file(excluded)

        self.stats.finalize()
        logger.debug(
            "Walk finished: %d files kept, %d directories and %d files excluded",
            len(result.files),
            len(result.excluded_directories),
            len(result.excluded_files),
        )
        return result

    def _list_directory(self, directory: Path) -> List[Tuple[str, Path, bool]]:
        entries: List[Tuple[str, Path, bool]] = []
        try:
            with os.scandir(directory) as iterator:
                for entry in iterator:
                    try:
                        is_dir = entry.is_dir(follow_symlinks=False)
                    except OSError as exc:
                        logger.debug("Dropping unreadable entry %s: %s", entry.path, exc)
                        continue
                    entries.append((entry.name, Path(entry.path), is_dir))
        except OSError as exc:
            logger.debug("Could not list %s: %s", directory, exc)
        return entries

    def _walk_directory(self, root: Path, directory: Path, depth: int) -> WalkResult:
        result = WalkResult()
        policy = self.detector.policy
        kept: List[Tuple[str, Path, bool]] = []

        for name, path, is_dir in self._list_directory(directory):
            relative = path.relative_to(root).as_posix()
            if is_dir and policy.should_exclude_dir(name):
                size, file_count = directory_size(path)
                reason = policy.reason_for(name)
                result.excluded_directories.append(
                    ExcludedDirectory(path=relative, size=size, file_count=file_count, reason=reason)
                )
                logger.debug("Excluded directory %s (%s)", relative, reason)
            elif not is_dir and policy.should_exclude_file(name):
                try:
                    size = real_file_size(path)
                except OSError:
                    continue
                result.excluded_files.append(
                    ExcludedFile(path=relative, size=size, reason=policy.file_reason_for(name))
                )
            elif name in self.skip_names:
                logger.debug("Skipping %s", relative)
            else:
                kept.append((name, path, is_dir))

        kept.sort(key=lambda item: (not item[2], item[0]))

        indent = PIPE * depth
        for index, (name, path, is_dir) in enumerate(kept):
            connector = LAST_BRANCH if index == len(kept) - 1 else BRANCH
            if is_dir:
                result.tree_lines.append(f"{indent}{connector}{name}/")
                result.merge(self._walk_directory(root, path, depth + 1))
            else:
                record = self.stats.add_file(path)
                if record is None:
                    continue
                result.tree_lines.append(f"{indent}{connector}{name}")
                result.files.append(record)

        return result


__all__ = ["TreeWalker", "WalkResult"]

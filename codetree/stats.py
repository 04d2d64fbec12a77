"""Per-file line/size measurement and running project statistics."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

from .exclusions import SensitiveFileSet
from .formatting import format_size, percentage
from .logging import get_logger
from .models import FileRecord, extension_of
from .size_probe import real_file_size

LARGEST_FILES_LIMIT = 10

_C_STYLE = frozenset({"rs", "c", "cpp", "h", "hpp", "js", "jsx", "ts", "tsx", "java", "cs", "go", "swift"})
_HASH_STYLE = frozenset({"py", "rb", "sh", "bash", "yml", "yaml"})
_MARKUP_STYLE = frozenset({"html", "xml", "svg"})
_STYLESHEET_STYLE = frozenset({"css", "scss", "sass"})

logger = get_logger("stats")


def is_likely_comment(line: str, extension: str) -> bool:
    """Prefix heuristic for a trimmed, non-empty line.

    Block comments are not tracked across lines, so any line starting with
    ``*`` in a C-style file counts as a comment.
    """
    if extension in _C_STYLE or extension in _STYLESHEET_STYLE:
        return line.startswith(("//", "/*", "*", "*/"))
    if extension in _HASH_STYLE:
        return line.startswith("#")
    if extension in _MARKUP_STYLE:
        return line.startswith("<!--") or "-->" in line
    return False


def split_lines(text: str) -> List[str]:
    """Split on ``\\n`` or ``\\r\\n`` only.

    Form feeds and bare ``\\r`` stay inside the line they appear in, and a
    final newline does not start an extra empty line.
    """
    lines = text.split("\n")
    tail = lines.pop()
    lines = [line.removesuffix("\r") for line in lines]
    if tail:
        lines.append(tail)
    return lines


def count_lines(text: str, extension: str) -> Tuple[int, int, int]:
    """Return ``(total, blank, comment)`` line counts for decoded text."""
    lines = split_lines(text)
    blank = 0
    comments = 0
    for line in lines:
        trimmed = line.strip()
        if not trimmed:
            blank += 1
        elif is_likely_comment(trimmed, extension):
            comments += 1
    return len(lines), blank, comments


class ProjectStats:
    """Running totals over every file handed to :meth:`add_file`.

    Mutated by a single walk; not safe for concurrent use.
    """

    def __init__(
        self,
        sensitive_files: SensitiveFileSet | None = None,
        size_probe: Callable[[Path], int] = real_file_size,
    ) -> None:
        self._sensitive = sensitive_files or SensitiveFileSet()
        self._size_probe = size_probe

        self.total_files = 0
        self.total_lines = 0
        self.code_lines = 0
        self.comment_lines = 0
        self.blank_lines = 0
        self.files_by_extension: Dict[str, int] = {}
        self.lines_by_extension: Dict[str, int] = {}
        self.size_by_extension: Dict[str, int] = {}
        self.total_size_bytes = 0
        self.total_content_size_bytes = 0
        self.sensitive_files_count = 0
        self.largest_files: List[Tuple[str, int]] = []
        self.average_file_size = 0

    def add_file(self, path: Path) -> Optional[FileRecord]:
        """Measure ``path`` and fold it into the totals.

        Returns None without touching any counter when the file vanished
        between listing and reading.
        """
        if not path.exists():
            logger.debug("File disappeared before it could be measured: %s", path)
            return None

        extension = extension_of(path)
        is_sensitive = self._sensitive.is_sensitive(path.name)

        try:
            size = self._size_probe(path)
        except OSError as exc:
            logger.debug("Could not size %s: %s", path, exc)
            size = 0

        total = blank = comments = content_size = 0
        is_text = False
        try:
            raw = path.read_bytes()
            text = raw.decode("utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("No line data for %s: %s", path, exc)
        else:
            is_text = True
            content_size = len(raw)
            total, blank, comments = count_lines(text, extension)

        record = FileRecord(
            path=path,
            size=size,
            total_lines=total,
            blank_lines=blank,
            comment_lines=comments,
            is_sensitive=is_sensitive,
            extension=extension,
            content_size=content_size,
            is_text=is_text,
        )
        self._fold(record)
        return record

    def _fold(self, record: FileRecord) -> None:
        ext = record.extension
        self.total_files += 1
        self.files_by_extension[ext] = self.files_by_extension.get(ext, 0) + 1
        if record.is_sensitive:
            self.sensitive_files_count += 1

        self.total_size_bytes += record.size
        self.size_by_extension[ext] = self.size_by_extension.get(ext, 0) + record.size

        if record.is_text:
            self.total_content_size_bytes += record.content_size
            self.total_lines += record.total_lines
            self.blank_lines += record.blank_lines
            self.comment_lines += record.comment_lines
            self.code_lines += record.code_lines
            self.lines_by_extension[ext] = self.lines_by_extension.get(ext, 0) + record.total_lines

        self.largest_files.append((str(record.path), record.size))
        self.largest_files.sort(key=lambda item: item[1], reverse=True)
        del self.largest_files[LARGEST_FILES_LIMIT:]

    def finalize(self) -> None:
        self.average_file_size = self.total_size_bytes // self.total_files if self.total_files else 0

    def extensions_by_count(self) -> List[Tuple[str, int, int, int]]:
        """``(extension, files, lines, bytes)`` rows, most common first."""
        rows = [
            (
                ext,
                count,
                self.lines_by_extension.get(ext, 0),
                self.size_by_extension.get(ext, 0),
            )
            for ext, count in self.files_by_extension.items()
        ]
        rows.sort(key=lambda row: (-row[1], row[0]))
        return rows

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_lines": self.total_lines,
            "code_lines": self.code_lines,
            "blank_lines": self.blank_lines,
            "comment_lines": self.comment_lines,
            "total_files": self.total_files,
            "files_by_extension": dict(sorted(self.files_by_extension.items())),
            "lines_by_extension": dict(sorted(self.lines_by_extension.items())),
            "total_size_bytes": self.total_size_bytes,
            "total_content_size_bytes": self.total_content_size_bytes,
            "size_by_extension": dict(sorted(self.size_by_extension.items())),
            "sensitive_files_count": self.sensitive_files_count,
            "largest_files": [list(item) for item in self.largest_files],
            "average_file_size": self.average_file_size,
        }

    def format_stats(self) -> str:
        lines = [
            "",
            "Project Statistics:",
            "==================",
            f"Total Files: {self.total_files}",
            f"Total Lines of Code: {self.total_lines}",
            f"  - Code Lines: {self.code_lines} ({percentage(self.code_lines, self.total_lines):.1f}%)",
            f"  - Comment Lines: {self.comment_lines} ({percentage(self.comment_lines, self.total_lines):.1f}%)",
            f"  - Blank Lines: {self.blank_lines} ({percentage(self.blank_lines, self.total_lines):.1f}%)",
            f"Total File System Size: {format_size(self.total_size_bytes)}",
            f"Total Content Size: {format_size(self.total_content_size_bytes)}",
            f"Average File Size: {format_size(self.average_file_size)}",
        ]
        if self.total_size_bytes and self.total_content_size_bytes:
            ratio = percentage(self.total_content_size_bytes, self.total_size_bytes)
            lines.append(f"Content to File Size Ratio: {ratio:.1f}%")

        if self.sensitive_files_count:
            lines.append("")
            lines.append(
                f"Detected {self.sensitive_files_count} potentially sensitive file(s) "
                "that have been protected."
            )

        lines.append("")
        lines.append("Files by Type:")
        for ext, count, line_count, size in self.extensions_by_count():
            lines.append(f"  .{ext}: {count} files, {line_count} lines, {format_size(size)}")

        if self.largest_files:
            lines.append("")
            lines.append("Largest Files:")
            for path, size in self.largest_files[:5]:
                lines.append(f"  {Path(path).name}: {format_size(size)}")

        return "\n".join(lines) + "\n"


__all__ = ["LARGEST_FILES_LIMIT", "ProjectStats", "count_lines", "is_likely_comment", "split_lines"]

"""On-disk size measurement for files and excluded directory trees."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Tuple

from .logging import get_logger

_BLOCK_SIZE = 512
_INVALID_FILE_SIZE = 0xFFFFFFFF

logger = get_logger("size_probe")


def real_file_size(path: Path) -> int:
    """Return the bytes a file actually occupies on disk.

    Block-based platforms report ``min(st_blocks * 512, st_size)`` so sparse
    files are not overstated; Windows asks for the compressed size. Anything
    else falls back to the logical length.

    Raises:
        OSError: when the file cannot be stat'ed.
    """
    if sys.platform == "win32":
        return _windows_file_size(path)
    stat_result = os.stat(path)
    blocks = getattr(stat_result, "st_blocks", None)
    if blocks is None:
        return stat_result.st_size
    return min(blocks * _BLOCK_SIZE, stat_result.st_size)


def _windows_file_size(path: Path) -> int:
    import ctypes
    from ctypes import wintypes

    if os.path.isdir(path):
        return 0

    kernel32 = ctypes.WinDLL("kernel32", use_last_error=True)  # type: ignore[attr-defined]
    get_compressed = kernel32.GetCompressedFileSizeW
    get_compressed.argtypes = [wintypes.LPCWSTR, ctypes.POINTER(wintypes.DWORD)]
    get_compressed.restype = wintypes.DWORD

    high = wintypes.DWORD(0)
    low = get_compressed(str(path), ctypes.byref(high))
    if low == _INVALID_FILE_SIZE and ctypes.get_last_error() != 0:  # type: ignore[attr-defined]
        return os.stat(path).st_size
    return (high.value << 32) | low


def safe_file_size(path: Path) -> int:
    """``real_file_size`` that reports 0 instead of raising."""
    try:
        return real_file_size(path)
    except OSError as exc:
        logger.debug("Could not size %s: %s", path, exc)
        return 0


def directory_size(path: Path) -> Tuple[int, int]:
    """Return ``(total_size, file_count)`` for every file below ``path``.

    No exclusion rules apply here; unreadable entries are skipped.
    """
    total_size = 0
    file_count = 0

    def _on_error(exc: OSError) -> None:
        logger.debug("Skipping unreadable directory %s: %s", exc.filename, exc)

    for dirpath, _dirnames, filenames in os.walk(path, onerror=_on_error):
        for filename in filenames:
            file_path = Path(dirpath) / filename
            if not file_path.is_file():
                continue
            file_count += 1
            total_size += safe_file_size(file_path)
    return total_size, file_count


__all__ = ["directory_size", "real_file_size", "safe_file_size"]

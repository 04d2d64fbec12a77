"""Helper utilities for constructing temporary project trees in tests."""

from __future__ import annotations

import io
import textwrap
from pathlib import Path
from typing import Mapping

from codetree.orchestrator import Orchestrator
from codetree.report import ProjectReport


class RepoBuilder:
    """Utility for writing files into a throwaway project and rescanning it."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "repo"
        self.root.mkdir()
        self.stdout = io.StringIO()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the project."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def write_bytes(self, relative: str, content: bytes) -> Path:
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return path

    def orchestrator(self) -> Orchestrator:
        return Orchestrator(stdout=self.stdout, program_name="")

    def scan(self) -> ProjectReport:
        """Return a fresh report of the project contents."""
        return self.orchestrator().scan(self.root)

    def path(self) -> Path:
        """Return the project root path."""
        return self.root


__all__ = ["RepoBuilder"]

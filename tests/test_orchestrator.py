"""End-to-end tests for the scan pipeline."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from tests._fixtures.repo_builder import RepoBuilder

from codetree.orchestrator import Orchestrator, ReportWriteError, resolve_root
from codetree.renderers import OutputFormat


def test_scan_redacts_sensitive_files(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "app/settings.py": "SECRET_KEY = 'hunter2'\n",
            "app/main.py": "print('ok')\n",
        }
    )

    report = repo_builder.scan()

    files = {item.relative_path: item for item in report.files}
    assert files["app/settings.py"].is_sensitive
    assert files["app/settings.py"].content is None
    assert files["app/settings.py"].line_count == 0
    assert files["app/main.py"].content == "print('ok')\n"
    assert report.statistics.sensitive_files_count == 1


def test_run_writes_text_report_and_never_leaks_secrets(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "config.json": '{"token": "abc123"}',
            "src/index.js": "// entry\nconsole.log(1);\n",
        }
    )

    outcome = repo_builder.orchestrator().run(repo_builder.path(), progress=False)

    assert outcome.path == repo_builder.path().resolve() / "codetree.txt"
    content = outcome.path.read_text(encoding="utf-8")
    assert "abc123" not in content
    assert "[SENSITIVE FILE - Content Protected]" in content
    assert "console.log(1);" in content


def test_run_replaces_previous_report(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"main.py": "x = 1\n", "codetree.txt": "stale report\n"})

    outcome = repo_builder.orchestrator().run(repo_builder.path(), progress=False)

    content = outcome.path.read_text(encoding="utf-8")
    assert "stale report" not in content
    assert "codetree.txt" not in outcome.report.file_tree
    assert [item.relative_path for item in outcome.report.files] == ["main.py"]


def test_run_honours_format_and_name(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"main.go": "package main\n"})

    outcome = repo_builder.orchestrator().run(
        repo_builder.path(), output_format="json", output_name="dump", progress=False
    )

    assert outcome.path.name == "dump.json"
    assert outcome.output_format is OutputFormat.JSON
    data = json.loads(outcome.path.read_text(encoding="utf-8"))
    assert data["statistics"]["total_files"] == 1


def test_config_file_supplies_defaults(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            ".codetree.yml": """
            output:
              name: snapshot
              format: md
            exclude_dirs: [fixtures]
            sensitive_files: [".pem"]
            progress: false
            """,
            "fixtures/big.txt": "data\n",
            "certs/server.pem": "-----BEGIN-----\n",
            "lib.py": "x = 1\n",
        }
    )

    outcome = repo_builder.orchestrator().run(repo_builder.path())

    assert outcome.path.name == "snapshot.md"
    assert "fixtures" not in outcome.report.file_tree
    pem = next(item for item in outcome.report.files if item.relative_path == "certs/server.pem")
    assert pem.is_sensitive and pem.content is None
    assert repo_builder.stdout.getvalue() == ""


def test_explicit_arguments_override_config(repo_builder: RepoBuilder) -> None:
    repo_builder.write({".codetree.yml": "output:\n  format: html\n", "a.py": "\n"})

    outcome = repo_builder.orchestrator().run(repo_builder.path(), output_format="text", progress=False)

    assert outcome.path.name == "codetree.txt"


def test_progress_is_printed(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"a.py": "x\n", "b.py": "y\n"})

    repo_builder.orchestrator().run(repo_builder.path())

    output = repo_builder.stdout.getvalue()
    assert "\rProcessing Files: 50% Complete" in output
    assert "\rProcessing Files: 100% Complete" in output


def test_write_failure_raises(monkeypatch: pytest.MonkeyPatch, repo_builder: RepoBuilder) -> None:
    repo_builder.write({"a.py": "x\n"})

    def refuse(self: Path, *args: object, **kwargs: object) -> int:
        raise PermissionError("read-only")

    monkeypatch.setattr(Path, "write_text", refuse)

    with pytest.raises(ReportWriteError):
        repo_builder.orchestrator().run(repo_builder.path(), progress=False)


def test_unknown_format_is_rejected(repo_builder: RepoBuilder) -> None:
    with pytest.raises(ValueError):
        repo_builder.orchestrator().run(repo_builder.path(), output_format="pdf")


def test_resolve_root_errors(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        resolve_root(tmp_path / "missing")

    file_path = tmp_path / "file.txt"
    file_path.write_text("", encoding="utf-8")
    with pytest.raises(NotADirectoryError):
        resolve_root(file_path)


def test_program_name_is_skipped(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"codetree": "#!/bin/sh\n", "main.py": ""})

    report = Orchestrator(program_name="codetree").scan(repo_builder.path())

    assert [item.relative_path for item in report.files] == ["main.py"]


def test_env_file_never_reaches_report(repo_builder: RepoBuilder) -> None:
    repo_builder.write({".env": "PLAIN=value-without-keywords\n", "main.py": "x = 1\n"})

    outcome = repo_builder.orchestrator().run(repo_builder.path(), output_format="json", progress=False)

    assert "value-without-keywords" not in outcome.path.read_text(encoding="utf-8")
    excluded = {entry.path: entry.reason for entry in outcome.report.exclusions.files}
    assert excluded[".env"] == "Environment configuration file"


def test_report_line_counts_match_statistics(repo_builder: RepoBuilder) -> None:
    repo_builder.write_bytes("feed.c", b"int a;\x0cint b;\nint c;\n")
    repo_builder.write_bytes("mac.py", b"a = 1\rb = 2\n")
    repo_builder.write_bytes("dos.py", b"a = 1\r\nb = 2\r\n")

    report = repo_builder.scan()

    counts = {item.relative_path: item.line_count for item in report.files}
    assert counts == {"dos.py": 2, "feed.c": 2, "mac.py": 1}
    assert report.statistics.total_lines == 5
    dos = next(item for item in report.files if item.relative_path == "dos.py")
    assert dos.content == "a = 1\r\nb = 2\r\n"

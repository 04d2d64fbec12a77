"""Tests for the report renderers."""

from __future__ import annotations

import json
from datetime import UTC, datetime

import pytest

from tests._fixtures.repo_builder import RepoBuilder

from codetree.renderers import (
    HtmlRenderer,
    JsonRenderer,
    MarkdownRenderer,
    OutputFormat,
    TextRenderer,
    get_renderer,
)
from codetree.report import ProjectReport


@pytest.fixture
def report(repo_builder: RepoBuilder) -> ProjectReport:
    repo_builder.write(
        {
            "package.json": '{"dependencies": {"react": "18.2.0"}}',
            "src/App.jsx": "// root\nexport const App = () => <b>&</b>;\n",
            ".env.local": "API_KEY=secret-value\n",
        }
    )
    repo_builder.write_bytes("img/logo.png", b"\x89PNG\xff\xfe")
    scanned = repo_builder.scan()
    scanned.generated_at = datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC)
    return scanned


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("text", OutputFormat.TEXT),
        ("TXT", OutputFormat.TEXT),
        ("json", OutputFormat.JSON),
        ("md", OutputFormat.MARKDOWN),
        ("markdown", OutputFormat.MARKDOWN),
        (" html ", OutputFormat.HTML),
    ],
)
def test_output_format_parse(value: str, expected: OutputFormat) -> None:
    assert OutputFormat.parse(value) is expected


def test_output_format_parse_rejects_unknown() -> None:
    with pytest.raises(ValueError):
        OutputFormat.parse("pdf")


def test_get_renderer_extensions() -> None:
    assert get_renderer("text").file_extension == "txt"
    assert get_renderer(OutputFormat.JSON).file_extension == "json"
    assert get_renderer("md").file_extension == "md"
    assert get_renderer("html").file_extension == "html"


def test_text_renderer_layout(report: ProjectReport) -> None:
    content = TextRenderer().render(report)

    assert content.startswith("CODETREE PROJECT ANALYSIS\n")
    assert "Generated: 2024-01-02 03:04:05 UTC" in content
    assert "Detected Project Types: JavaScript/Node.js" in content
    assert "Project File Tree:" in content
    assert "export const App" in content
    assert "secret-value" not in content
    assert "[SENSITIVE FILE - Content Protected]" in content
    assert "[Unable to read file content]" in content


def test_json_renderer_round_trips_report(report: ProjectReport) -> None:
    data = json.loads(JsonRenderer().render(report))

    assert data["generated_at"] == "2024-01-02T03:04:05Z"
    assert data["project_types"] == ["JavaScript/Node.js"]
    assert data["frameworks"] == {"React": "18.2.0"}
    secrets = [item for item in data["files"] if item["is_sensitive"]]
    assert [item["relative_path"] for item in secrets] == [".env.local"]
    assert secrets[0]["content"] is None
    assert "secret-value" not in json.dumps(data)


def test_markdown_renderer_fences_with_language(report: ProjectReport) -> None:
    content = MarkdownRenderer().render(report)

    assert "**Generated:** 2024-01-02 03:04:05 UTC" in content
    assert "### 📝 src/App.jsx" in content
    assert "```javascript\n// root\n" in content
    assert "secret-value" not in content


def test_html_renderer_escapes_content(report: ProjectReport) -> None:
    content = HtmlRenderer().render(report)

    assert content.lstrip().startswith("<!DOCTYPE html>")
    assert "&lt;b&gt;&amp;&lt;/b&gt;" in content
    assert '<code class="language-javascript">' in content
    assert "secret-value" not in content

"""Tests for codetree.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from codetree.config import CodetreeConfig, ConfigError, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, CodetreeConfig)
    assert config.root == tmp_path.resolve()
    assert config.output.name == "codetree"
    assert config.output.format == "text"
    assert config.exclude_dirs == []
    assert config.exclude_files == []
    assert config.sensitive_files == []
    assert config.progress is True


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".codetree.yml"
    config_file.write_text(
        """
output:
  name: "project-dump"
  format: "Markdown"
exclude_dirs:
  - "fixtures"
  - "generated"
exclude_files: ["notes.txt"]
sensitive_files:
  - ".secret"
progress: false
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.output.name == "project-dump"
    assert config.output.format == "markdown"
    assert config.exclude_dirs == ["fixtures", "generated"]
    assert config.exclude_files == ["notes.txt"]
    assert config.sensitive_files == [".secret"]
    assert config.progress is False


def test_load_config_accepts_single_string_lists(tmp_path: Path) -> None:
    (tmp_path / ".codetree.yml").write_text("exclude_dirs: fixtures\n", encoding="utf-8")

    config = load_config(tmp_path)

    assert config.exclude_dirs == ["fixtures"]


def test_load_config_empty_file_uses_defaults(tmp_path: Path) -> None:
    (tmp_path / ".codetree.yml").write_text("\n", encoding="utf-8")

    config = load_config(tmp_path)

    assert config.output.format == "text"


def test_load_config_rejects_invalid_yaml(tmp_path: Path) -> None:
    (tmp_path / ".codetree.yml").write_text("output: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_rejects_non_mapping_root(tmp_path: Path) -> None:
    (tmp_path / ".codetree.yml").write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="mapping"):
        load_config(tmp_path)

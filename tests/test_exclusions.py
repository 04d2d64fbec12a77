"""Tests for exclusion rules and sensitive file matching."""

from __future__ import annotations

import pytest

from codetree.exclusions import (
    BASE_EXCLUDED_DIRS,
    ExclusionPolicy,
    ExclusionRuleSet,
    SensitiveFileSet,
)


def test_base_directories_are_always_excluded() -> None:
    policy = ExclusionPolicy(ExclusionRuleSet())
    for name in BASE_EXCLUDED_DIRS:
        assert policy.should_exclude_dir(name)
    assert not policy.should_exclude_dir("src")


def test_project_dirs_do_not_repeat_base_names() -> None:
    rules = ExclusionRuleSet()
    rules.add_dirs("target", "obj")

    assert rules.project_dirs == frozenset({"target"})
    assert "obj" in rules.directories


def test_reason_prefers_base_classification() -> None:
    rules = ExclusionRuleSet()
    rules.add_dirs("obj", "target", "custom")
    policy = ExclusionPolicy(rules)

    assert policy.reason_for("obj") == "Base excluded directory"
    assert policy.reason_for("target") == "Rust/Java build directory"
    assert policy.reason_for("custom") == "Project-specific excluded directory"
    assert policy.reason_for("src") == "Unknown exclusion reason"


def test_file_reasons() -> None:
    policy = ExclusionPolicy(ExclusionRuleSet())

    assert policy.should_exclude_file("yarn.lock")
    assert policy.file_reason_for("yarn.lock") == "Dependency lock file"
    assert policy.file_reason_for("notes.cfg") == "Configuration/system file"


def test_sealed_rules_reject_additions() -> None:
    rules = ExclusionRuleSet()
    rules.seal()

    with pytest.raises(RuntimeError):
        rules.add_dirs("late")
    with pytest.raises(RuntimeError):
        rules.add_files("late.txt")


@pytest.mark.parametrize(
    "name",
    [".env", ".env.local", "app-config.json", "settings.py", "wp-config.php", "application.properties"],
)
def test_sensitive_suffixes_match(name: str) -> None:
    assert SensitiveFileSet().is_sensitive(name)


def test_sensitive_match_is_suffix_only() -> None:
    sensitive = SensitiveFileSet()

    assert not sensitive.is_sensitive("config.json.bak")
    assert not sensitive.is_sensitive("main.py")


def test_sensitive_set_accepts_extra_suffixes() -> None:
    sensitive = SensitiveFileSet.with_extra([".pem", ".env"])

    assert sensitive.is_sensitive("server.pem")
    assert sensitive.suffixes.count(".env") == 1

"""Tests for project type detection."""

from __future__ import annotations

from tests._fixtures.repo_builder import RepoBuilder

from codetree.detector import COMMON_EXCLUDED_DIRS, ProjectDetector
from codetree.frameworks import Framework


def test_rust_project_excludes_target(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"Cargo.toml": "[package]\nname = 'demo'\n"})

    detector = ProjectDetector()
    types = detector.detect_project_types(repo_builder.path())

    assert types == {"Rust"}
    assert detector.is_excluded_dir("target")
    assert detector.policy.reason_for("target") == "Rust/Java build directory"


def test_common_directories_always_added(repo_builder: RepoBuilder) -> None:
    detector = ProjectDetector()
    detector.detect_project_types(repo_builder.path())

    assert detector.project_types == set()
    for name in COMMON_EXCLUDED_DIRS:
        assert detector.is_excluded_dir(name)


def test_polyglot_project_accumulates_types(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "package.json": '{"dependencies": {"react": "18.2.0"}}',
            "pyproject.toml": "[project]\nname = 'api'\n",
            "go.mod": "module example.com/demo\n",
            "build.gradle.kts": "",
            "App.csproj": "<Project />",
        }
    )

    detector = ProjectDetector()
    types = detector.detect_project_types(repo_builder.path())

    assert types == {"JavaScript/Node.js", "Python", "Go", "Java/Gradle", ".NET"}
    for name in ("node_modules", "__pycache__", "vendor", ".gradle", "bin"):
        assert detector.is_excluded_dir(name)
    assert detector.framework_detection.frameworks[Framework.REACT] == "18.2.0"


def test_maven_pom_frameworks(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"pom.xml": "<project><artifactId>hibernate-core</artifactId></project>"})

    detector = ProjectDetector()
    detector.detect_project_types(repo_builder.path())

    assert "Java/Maven" in detector.project_types
    assert Framework.HIBERNATE in detector.framework_detection.frameworks


def test_rails_and_laravel(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "Gemfile": "source 'https://rubygems.org'\n",
            "config/routes.rb": "",
            "composer.json": "{}",
            "artisan": "",
        }
    )

    detector = ProjectDetector()
    detector.detect_project_types(repo_builder.path())

    assert {"Ruby", "PHP"} <= detector.project_types
    frameworks = detector.framework_detection.frameworks
    assert Framework.RAILS in frameworks
    assert Framework.LARAVEL in frameworks


def test_format_project_info_lists_types_and_exclusions(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"Cargo.toml": "", "go.mod": ""})

    detector = ProjectDetector()
    detector.detect_project_types(repo_builder.path())
    info = detector.format_project_info()

    assert info.startswith("Detected Project Types: Go, Rust\n")
    assert "Auto-excluded build directories: asset, assets, bin, public, target, vendor" in info
    assert "No specific frameworks detected" in info


def test_format_project_info_without_types() -> None:
    detector = ProjectDetector()

    assert detector.format_project_info().startswith("No specific project type detected")

"""Configuration loading for codetree (.codetree.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".codetree.yml"
DEFAULT_OUTPUT_NAME = "codetree"
DEFAULT_OUTPUT_FORMAT = "text"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class OutputConfig:
    """Where and how the report is written."""

    name: str = DEFAULT_OUTPUT_NAME
    format: str = DEFAULT_OUTPUT_FORMAT


@dataclass
class CodetreeConfig:
    """Settings read from .codetree.yml at the scanned root."""

    root: Path
    output: OutputConfig = field(default_factory=OutputConfig)
    exclude_dirs: List[str] = field(default_factory=list)
    exclude_files: List[str] = field(default_factory=list)
    sensitive_files: List[str] = field(default_factory=list)
    progress: bool = True


def load_config(config_path: Path) -> CodetreeConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return CodetreeConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    output = OutputConfig()
    output_data = _as_dict(data.get("output"))
    if output_data:
        name = _as_str(output_data.get("name"))
        if name:
            output.name = name
        fmt = _as_str(output_data.get("format"))
        if fmt:
            output.format = fmt.lower()

    progress = _as_bool(data.get("progress"))

    return CodetreeConfig(
        root=root,
        output=output,
        exclude_dirs=_as_str_list(data.get("exclude_dirs")),
        exclude_files=_as_str_list(data.get("exclude_files")),
        sensitive_files=_as_str_list(data.get("sensitive_files")),
        progress=True if progress is None else progress,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1", "on"}:
            return True
        if lowered in {"false", "no", "0", "off"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []

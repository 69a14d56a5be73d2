"""Configuration loading for packagebuilder (.packagebuilder.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".packagebuilder.yml"
DEFAULT_EXTENSION = "php"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class WriterConfig:
    """Manifest writer settings from .packagebuilder.yml."""

    dry_run: bool = False
    overwrite_existing: bool = False
    with_autogenerated_timestamp: bool = False


@dataclass
class BuilderConfig:
    """Represents the settings defined in .packagebuilder.yml."""

    root: Path
    extension: str = DEFAULT_EXTENSION
    recursive: bool = True
    exclude_paths: List[str] = field(default_factory=list)
    writer: WriterConfig = field(default_factory=WriterConfig)


def load_config(config_path: Path) -> BuilderConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return BuilderConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    extension = _as_extension(data.get("extension"))
    recursive = _as_bool(data.get("recursive"))

    writer = WriterConfig()
    writer_data = _as_dict(data.get("writer"))
    if writer_data:
        writer.dry_run = _as_bool(writer_data.get("dry_run")) or False
        writer.overwrite_existing = _as_bool(writer_data.get("overwrite_existing")) or False
        writer.with_autogenerated_timestamp = (
            _as_bool(writer_data.get("with_autogenerated_timestamp")) or False
        )

    return BuilderConfig(
        root=root,
        extension=extension or DEFAULT_EXTENSION,
        recursive=True if recursive is None else recursive,
        exclude_paths=_as_str_list(data.get("exclude_paths")),
        writer=writer,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_extension(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    cleaned = value.strip().lstrip(".").lower()
    return cleaned or None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "BuilderConfig",
    "CONFIG_FILENAME",
    "ConfigError",
    "DEFAULT_EXTENSION",
    "WriterConfig",
    "load_config",
]

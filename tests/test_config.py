"""Tests for packagebuilder.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from packagebuilder.config import BuilderConfig, ConfigError, WriterConfig, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, BuilderConfig)
    assert config.root == tmp_path.resolve()
    assert config.extension == "php"
    assert config.recursive is True
    assert config.exclude_paths == []
    assert config.writer == WriterConfig()


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".packagebuilder.yml"
    config_file.write_text(
        """
extension: ".INC"
recursive: false
exclude_paths:
  - "legacy/"
  - "*.tpl.php"
writer:
  dry_run: yes
  overwrite_existing: true
  with_autogenerated_timestamp: "true"
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.extension == "inc"
    assert config.recursive is False
    assert config.exclude_paths == ["legacy/", "*.tpl.php"]
    assert config.writer.dry_run is True
    assert config.writer.overwrite_existing is True
    assert config.writer.with_autogenerated_timestamp is True


def test_load_config_accepts_single_exclude_string(tmp_path: Path) -> None:
    (tmp_path / ".packagebuilder.yml").write_text("exclude_paths: build/\n", encoding="utf-8")

    assert load_config(tmp_path).exclude_paths == ["build/"]


def test_load_config_treats_empty_file_as_defaults(tmp_path: Path) -> None:
    (tmp_path / ".packagebuilder.yml").write_text("\n", encoding="utf-8")

    config = load_config(tmp_path)

    assert config.extension == "php"
    assert config.writer.overwrite_existing is False


def test_load_config_rejects_non_mapping(tmp_path: Path) -> None:
    (tmp_path / ".packagebuilder.yml").write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="mapping"):
        load_config(tmp_path)


def test_load_config_reports_yaml_errors(tmp_path: Path) -> None:
    (tmp_path / ".packagebuilder.yml").write_text("writer: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="Failed to parse"):
        load_config(tmp_path)

"""Tests for restmap.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from restmap.config import ConfigError, RestmapConfig, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, RestmapConfig)
    assert config.root == tmp_path.resolve()
    assert config.scan.extensions == [".java"]
    assert config.scan.workers is None
    assert config.exclude_paths == []
    assert config.root_markers == ["pom.xml", "build.gradle"]


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".restmap.yml"
    config_file.write_text(
        """
scan:
  extensions: [java, .KT, .java]
  workers: 4
exclude_paths:
  - "sandbox/"
  - "!sandbox/Keep.java"
root_markers:
  - settings.gradle
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.root == tmp_path.resolve()
    assert config.scan.extensions == [".java", ".kt"]
    assert config.scan.workers == 4
    assert config.exclude_paths == ["sandbox/", "!sandbox/Keep.java"]
    assert config.root_markers == ["settings.gradle"]


def test_load_config_accepts_empty_file(tmp_path: Path) -> None:
    (tmp_path / ".restmap.yml").write_text("\n", encoding="utf-8")

    config = load_config(tmp_path)

    assert config.scan.extensions == [".java"]


def test_load_config_from_sibling_file_path(tmp_path: Path) -> None:
    (tmp_path / ".restmap.yml").write_text("exclude_paths: build/\n", encoding="utf-8")

    config = load_config(tmp_path / "pom.xml")

    assert config.exclude_paths == ["build/"]


@pytest.mark.parametrize("workers", ["0", "-2"])
def test_load_config_rejects_non_positive_workers(tmp_path: Path, workers: str) -> None:
    (tmp_path / ".restmap.yml").write_text(f"scan:\n  workers: {workers}\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="workers"):
        load_config(tmp_path)


def test_load_config_rejects_non_mapping_root(tmp_path: Path) -> None:
    (tmp_path / ".restmap.yml").write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="mapping"):
        load_config(tmp_path)


def test_load_config_rejects_malformed_yaml(tmp_path: Path) -> None:
    (tmp_path / ".restmap.yml").write_text("scan: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="Failed to parse"):
        load_config(tmp_path)

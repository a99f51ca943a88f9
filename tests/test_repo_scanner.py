"""Tests for restmap.repo_scanner."""

from __future__ import annotations

from pathlib import Path

import pytest

from restmap.config import RestmapConfig, ScanConfig
from restmap.repo_scanner import IgnoreRule, IgnoreRules, RepoScanner, find_source_files


def _write(path: Path, content: str = "class X {}\n") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def _relative(files, root: Path):
    return [Path(file).relative_to(root.resolve()).as_posix() for file in files]


def test_find_source_files_filters_by_extension(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    _write(repo_root / "src" / "main" / "java" / "App.java")
    _write(repo_root / "src" / "main" / "resources" / "application.yml", "server:\n  port: 8080\n")
    _write(repo_root / "README.md", "# app\n")
    _write(repo_root / "Legacy.JAVA")

    files = RepoScanner().find_source_files(repo_root)

    assert _relative(files, repo_root) == ["Legacy.JAVA", "src/main/java/App.java"]
    assert all(Path(file).is_absolute() for file in files)


def test_find_source_files_skips_build_and_vcs_directories(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    _write(repo_root / "src" / "App.java")
    _write(repo_root / "target" / "generated-sources" / "Gen.java")
    _write(repo_root / ".git" / "hooks" / "Hook.java")
    _write(repo_root / ".restmap" / "Cached.java")

    files = find_source_files(repo_root)

    assert _relative(files, repo_root) == ["src/App.java"]


def test_find_source_files_respects_gitignore(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    _write(repo_root / ".gitignore", "# build output\nout/\n*Test.java\n")
    _write(repo_root / "src" / "App.java")
    _write(repo_root / "src" / "AppTest.java")
    _write(repo_root / "out" / "Copied.java")

    files = find_source_files(repo_root)

    assert _relative(files, repo_root) == ["src/App.java"]


def test_find_source_files_respects_exclude_paths(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    _write(
        repo_root / ".restmap.yml",
        "exclude_paths:\n  - legacy/\n  - '*Stub.java'\n  - '!KeepStub.java'\n",
    )
    _write(repo_root / "src" / "App.java")
    _write(repo_root / "src" / "ClientStub.java")
    _write(repo_root / "src" / "KeepStub.java")
    _write(repo_root / "legacy" / "Old.java")

    files = find_source_files(repo_root)

    assert _relative(files, repo_root) == ["src/App.java", "src/KeepStub.java"]


def test_find_source_files_uses_configured_extensions(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    _write(repo_root / "App.java")
    _write(repo_root / "Api.kt", "interface Api\n")
    config = RestmapConfig(root=repo_root, scan=ScanConfig(extensions=[".java", ".kt"]))

    files = RepoScanner(config).find_source_files(repo_root)

    assert _relative(files, repo_root) == ["Api.kt", "App.java"]


def test_find_source_files_ignores_invalid_config(tmp_path: Path) -> None:
    repo_root = tmp_path / "repo"
    _write(repo_root / ".restmap.yml", "- just\n- a list\n")
    _write(repo_root / "App.java")

    files = find_source_files(repo_root)

    assert _relative(files, repo_root) == ["App.java"]


def test_find_source_files_rejects_missing_directory(tmp_path: Path) -> None:
    missing = tmp_path / "missing"

    with pytest.raises(FileNotFoundError) as excinfo:
        RepoScanner().find_source_files(missing)

    assert str(missing) in str(excinfo.value)


def test_find_source_files_rejects_file_root(tmp_path: Path) -> None:
    source = tmp_path / "App.java"
    _write(source)

    with pytest.raises(NotADirectoryError):
        RepoScanner().find_source_files(source)


def test_anchored_rule_only_matches_from_root() -> None:
    rule = IgnoreRule.parse("/generated/")

    assert rule == IgnoreRule(glob="generated", dirs_only=True, rooted=True)
    assert rule.applies_to("generated", is_dir=True)
    assert not rule.applies_to("generated", is_dir=False)
    assert not rule.applies_to("src/generated", is_dir=True)


@pytest.mark.parametrize("line", ["", "   ", "# comment", "!", "/"])
def test_ignore_rule_parse_skips_empty_patterns(line: str) -> None:
    assert IgnoreRule.parse(line) is None


def test_last_matching_rule_wins() -> None:
    rules = IgnoreRules()
    rules.extend(["*.java", "!Keep.java", "Keep.java"])

    assert rules.ignores("src/Keep.java")
    assert not rules.ignores("src/App.kt")

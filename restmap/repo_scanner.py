"""Source file enumeration with .gitignore and .restmap.yml exclusions."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

from .config import CONFIG_FILENAME, ConfigError, RestmapConfig, load_config
from .logging import get_logger

_logger = get_logger("repo_scanner")

# Never descended into, whatever the ignore files say.
_PRUNED_DIRS = frozenset(
    {
        ".git",
        ".hg",
        ".svn",
        ".idea",
        ".vscode",
        ".gradle",
        ".mvn",
        ".restmap",
        "node_modules",
        "target",
        "__pycache__",
    }
)


@dataclass(frozen=True)
class IgnoreRule:
    """One gitignore-style pattern."""

    glob: str
    negate: bool = False
    dirs_only: bool = False
    rooted: bool = False

    @classmethod
    def parse(cls, line: str) -> Optional["IgnoreRule"]:
        """Build a rule from a pattern line; blank lines and comments give ``None``."""
        text = line.strip()
        if not text or text.startswith("#"):
            return None
        negate = text.startswith("!")
        text = text.lstrip("!")
        dirs_only = text.endswith("/")
        text = text.rstrip("/")
        rooted = text.startswith("/") or "/" in text
        text = text.lstrip("/")
        if not text:
            return None
        return cls(glob=text, negate=negate, dirs_only=dirs_only, rooted=rooted)

    def applies_to(self, rel_path: str, is_dir: bool) -> bool:
        if self.dirs_only and not is_dir:
            return False
        if self.rooted:
            return fnmatchcase(rel_path, self.glob) or rel_path.startswith(self.glob + "/")
        return any(fnmatchcase(segment, self.glob) for segment in rel_path.split("/"))


@dataclass
class IgnoreRules:
    """Ordered rule list; the last matching rule decides."""

    rules: List[IgnoreRule] = field(default_factory=list)

    def extend(self, lines: Iterable[str]) -> None:
        for line in lines:
            rule = IgnoreRule.parse(line)
            if rule is not None:
                self.rules.append(rule)

    def ignores(self, rel_path: str, is_dir: bool = False) -> bool:
        verdict = False
        for rule in self.rules:
            if rule.applies_to(rel_path, is_dir):
                verdict = not rule.negate
        return verdict


def load_ignore_rules(root: Path, config: RestmapConfig) -> IgnoreRules:
    """Collect rules from ``.gitignore`` followed by configured ``exclude_paths``."""
    rules = IgnoreRules()
    gitignore = root / ".gitignore"
    if gitignore.is_file():
        try:
            rules.extend(gitignore.read_text(encoding="utf-8", errors="ignore").splitlines())
        except OSError as exc:
            _logger.debug("Could not read %s: %s", gitignore, exc)
    rules.extend(config.exclude_paths)
    return rules


def _walk(root: Path, rules: IgnoreRules) -> Iterator[Path]:
    for dirpath, dirnames, filenames in os.walk(root):
        base = Path(dirpath)
        prefix = base.relative_to(root).as_posix()
        prefix = "" if prefix == "." else prefix + "/"

        dirnames[:] = [
            name
            for name in dirnames
            if name not in _PRUNED_DIRS and not rules.ignores(prefix + name, is_dir=True)
        ]
        for filename in filenames:
            if not rules.ignores(prefix + filename):
                yield base / filename


class RepoScanner:
    """Walks a project tree and lists the source files routes are read from."""

    def __init__(self, config: RestmapConfig | None = None) -> None:
        self._config = config

    def find_source_files(self, root: str | Path) -> List[str]:
        """Return sorted absolute paths of source files under ``root``."""
        root_path = Path(root).expanduser().resolve()
        if not root_path.exists():
            raise FileNotFoundError(f"Project path not found: {root}")
        if not root_path.is_dir():
            raise NotADirectoryError(f"Project path is not a directory: {root}")

        config = self._config or self._load_config(root_path)
        suffixes = {ext.lower() for ext in config.scan.extensions}
        rules = load_ignore_rules(root_path, config)

        files = sorted(
            str(path) for path in _walk(root_path, rules) if path.suffix.lower() in suffixes
        )
        _logger.debug("Found %d source file(s) under %s", len(files), root_path)
        return files

    @staticmethod
    def _load_config(root: Path) -> RestmapConfig:
        try:
            return load_config(root)
        except ConfigError as exc:
            _logger.warning("Ignoring invalid %s: %s", CONFIG_FILENAME, exc)
            return RestmapConfig(root=root)


def find_source_files(root: str | Path, config: RestmapConfig | None = None) -> List[str]:
    return RepoScanner(config).find_source_files(root)


__all__ = [
    "IgnoreRule",
    "IgnoreRules",
    "RepoScanner",
    "find_source_files",
    "load_ignore_rules",
]

"""Helper utilities for constructing temporary Java projects in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import List, Mapping

from restmap.models import RouteRecord
from restmap.scanner import EndpointScanner


class RepoBuilder:
    """Writes source files into a throwaway project and scans it."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "repo"
        self.root.mkdir()
        self._scanner = EndpointScanner(workers=2)

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the project."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def file(self, relative: str) -> str:
        """Return the absolute path string the scanner reports for `relative`."""
        return str((self.root / relative).resolve())

    def scan(self) -> List[RouteRecord]:
        """Return a fresh route table for the project."""
        return self._scanner.scan(self.root)

    def path(self) -> Path:
        return self.root


__all__ = ["RepoBuilder"]

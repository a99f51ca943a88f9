"""Project root detection."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from .config import DEFAULT_ROOT_MARKERS


def _nearest_with(start: Path, markers: Sequence[str]) -> Optional[Path]:
    for candidate in (start, *start.parents):
        if any((candidate / marker).exists() for marker in markers):
            return candidate
    return None


def detect_root_dir(
    start: str | Path | None = None, markers: Sequence[str] | None = None
) -> Path:
    """Return the project root containing ``start``.

    A ``.git`` directory wins over build markers so that a nested module's
    ``pom.xml`` does not truncate the project. Falls back to ``start`` itself.
    """
    origin = Path(start or Path.cwd()).expanduser().resolve()
    if origin.is_file():
        origin = origin.parent

    git_root = _nearest_with(origin, [".git"])
    if git_root is not None:
        return git_root

    marked = _nearest_with(origin, list(markers) if markers is not None else DEFAULT_ROOT_MARKERS)
    if marked is not None:
        return marked
    return origin


__all__ = ["detect_root_dir"]

"""Coordinates scans and result caching for the CLI and service front ends."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import load_config
from .logging import get_logger
from .models import RouteRecord
from .root import detect_root_dir
from .scanner import EndpointScanner
from .stores import EndpointCache

CACHE_DIRNAME = ".restmap"
CACHE_FILENAME = "endpoint_cache.json"


@dataclass
class ScanOutcome:
    """Route table for one project root."""

    root: Path
    records: List[RouteRecord]
    cached: bool


class Orchestrator:
    """Runs scans through a keyed cache.

    With an explicit ``cache`` every root shares that store (the service keeps
    one in memory). Without one, each root gets a JSON cache under
    ``<root>/.restmap/``.
    """

    def __init__(
        self,
        scanner: EndpointScanner | None = None,
        cache: EndpointCache | None = None,
        workers: Optional[int] = None,
    ) -> None:
        self.scanner = scanner or EndpointScanner(workers=workers)
        self._cache = cache
        self.logger = get_logger("orchestrator")

    def resolve_root(self, path: str | Path | None) -> Path:
        """Use ``path`` as given, or detect the project root from the cwd."""
        if path is not None:
            return Path(path).expanduser().resolve()
        return detect_root_dir(Path.cwd(), self._root_markers(Path.cwd()))

    def run_scan(self, path: str | Path | None = None, *, refresh: bool = False) -> ScanOutcome:
        root = self.resolve_root(path)
        if not root.exists():
            raise FileNotFoundError(f"Project path not found: {root}")
        if not root.is_dir():
            raise NotADirectoryError(f"Project path is not a directory: {root}")
        load_config(root)  # surface ConfigError before touching the cache

        cache = self._cache_for(root)
        if refresh:
            cache.invalidate(root)
        else:
            cached = cache.get(root)
            if cached is not None:
                self.logger.debug("Using cached endpoints for %s", root)
                return ScanOutcome(root=root, records=cached, cached=True)

        self.logger.info("Scanning %s", root)
        records = self.scanner.scan(root)
        cache.store(root, records)
        cache.persist()
        return ScanOutcome(root=root, records=records, cached=False)

    def cache_info(self, path: str | Path | None = None) -> Dict[str, Any]:
        root = self.resolve_root(path)
        return self._cache_for(root).info(root)

    def clear_cache(self, path: str | Path | None = None) -> bool:
        root = self.resolve_root(path)
        cache = self._cache_for(root)
        removed = cache.invalidate(root)
        cache.persist()
        return removed

    def _cache_for(self, root: Path) -> EndpointCache:
        if self._cache is not None:
            return self._cache
        return EndpointCache(root / CACHE_DIRNAME / CACHE_FILENAME)

    @staticmethod
    def _root_markers(start: Path) -> List[str]:
        return load_config(start).root_markers


__all__ = ["Orchestrator", "ScanOutcome"]

"""End-to-end route table construction for a project tree."""

from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional, Sequence

from .config import ConfigError, RestmapConfig, load_config
from .endpoints.clients import ClientResolver
from .endpoints.extractor import JavaFileExtractor
from .endpoints.linker import RouteLinker
from .logging import get_logger
from .models import FileDescriptor, RouteRecord
from .repo_scanner import RepoScanner

_logger = get_logger("scanner")


def default_workers() -> int:
    return max(1, min(32, (os.cpu_count() or 1) + 4))


def scan(
    root_dir: str | Path,
    files: Sequence[str | Path],
    *,
    workers: Optional[int] = None,
    extractor: JavaFileExtractor | None = None,
) -> List[RouteRecord]:
    """Build the sorted route table for ``files`` under ``root_dir``.

    Relative entries in ``files`` are taken relative to ``root_dir``, and every
    descriptor carries an absolute path. Unreadable files and files without a
    type declaration are skipped. The result is sorted by path only, so records
    sharing a path keep file-list order.
    """
    extractor = extractor or JavaFileExtractor()
    root = Path(root_dir).expanduser()
    paths = [str((root / path).resolve()) for path in files]
    if not paths:
        _logger.info("No source files found under %s", root_dir)
        return []

    descriptors = _extract_all(extractor, paths, workers or default_workers())
    records = RouteLinker().link(descriptors)
    records = ClientResolver().resolve(descriptors, records)
    records.sort(key=lambda record: record.full_path)

    if records:
        _logger.info("Found %d endpoint(s) in %d file(s) under %s", len(records), len(paths), root_dir)
    else:
        _logger.info("No endpoints found under %s", root_dir)
    return records


def _extract_all(
    extractor: JavaFileExtractor, paths: List[str], workers: int
) -> List[Optional[FileDescriptor]]:
    if workers <= 1 or len(paths) == 1:
        return [extractor.extract_file(path) for path in paths]
    with ThreadPoolExecutor(max_workers=min(workers, len(paths))) as executor:
        # map keeps input order, so aggregation is independent of completion order.
        return list(executor.map(extractor.extract_file, paths))


class EndpointScanner:
    """Discovers source files and scans them; holds no state between scans."""

    def __init__(
        self,
        repo_scanner: RepoScanner | None = None,
        extractor: JavaFileExtractor | None = None,
        workers: Optional[int] = None,
    ) -> None:
        self.repo_scanner = repo_scanner
        self.extractor = extractor or JavaFileExtractor()
        self.workers = workers
        self.logger = get_logger("scanner")

    def scan(
        self, root: str | Path, files: Optional[Sequence[str | Path]] = None
    ) -> List[RouteRecord]:
        root_path = Path(root).expanduser().resolve()
        config = self._load_config(root_path)
        if files is None:
            finder = self.repo_scanner or RepoScanner(config)
            files = finder.find_source_files(root_path)
        workers = self.workers or config.scan.workers
        self.logger.debug("Scanning %d file(s) under %s", len(files), root_path)
        return scan(root_path, files, workers=workers, extractor=self.extractor)

    def _load_config(self, root: Path) -> RestmapConfig:
        if not root.is_dir():
            return RestmapConfig(root=root)
        try:
            return load_config(root)
        except ConfigError as exc:
            self.logger.warning("Using default settings: %s", exc)
            return RestmapConfig(root=root)


__all__ = ["EndpointScanner", "default_workers", "scan"]

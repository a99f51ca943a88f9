"""Extraction, linking and client resolution for Spring MVC routes."""

from __future__ import annotations

from .clients import ClientResolver, resolve_clients
from .core import join_paths, method_upper, normalize_path
from .extractor import JavaFileExtractor, extract, extract_file
from .linker import RouteLinker, link

__all__ = [
    "ClientResolver",
    "JavaFileExtractor",
    "RouteLinker",
    "extract",
    "extract_file",
    "join_paths",
    "link",
    "method_upper",
    "normalize_path",
    "resolve_clients",
]

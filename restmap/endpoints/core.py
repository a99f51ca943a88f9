"""Shared path and verb helpers for endpoint resolution."""

from __future__ import annotations

import re
from typing import Optional

from ..models import REQUEST_METHOD

_REPEATED_SLASHES = re.compile(r"/{2,}")


def normalize_path(fragment: Optional[str]) -> str:
    """Return a fragment with a leading slash and no trailing slash.

    Empty fragments and the bare root ``/`` collapse to ``""`` so they can be
    concatenated without introducing a double slash.
    """
    if not fragment:
        return ""
    result = fragment.strip()
    if not result:
        return ""
    if not result.startswith("/"):
        result = "/" + result
    result = _REPEATED_SLASHES.sub("/", result)
    result = result.rstrip("/")
    return result


def join_paths(prefix: Optional[str], route: Optional[str]) -> str:
    """Combine type-level and method-level fragments into a full route."""
    combined = normalize_path(prefix) + normalize_path(route)
    return combined or "/"


def method_upper(value: Optional[str]) -> str:
    """Normalize HTTP verbs to uppercase, falling back to the generic sentinel."""
    verb = (value or "").strip().upper()
    return verb or REQUEST_METHOD


__all__ = ["join_paths", "method_upper", "normalize_path"]

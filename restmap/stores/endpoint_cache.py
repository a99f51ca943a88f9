"""Keyed store for scanned route tables, owned by the calling layer."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence

from ..logging import get_logger
from ..models import RouteRecord

_CACHE_VERSION = 1
_logger = get_logger("stores.endpoint_cache")


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _format_timestamp(value: datetime) -> str:
    return value.isoformat().replace("+00:00", "Z")


def _parse_timestamp(value: object) -> Optional[datetime]:
    if not isinstance(value, str):
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _root_key(root: str | Path) -> str:
    return str(Path(root).expanduser().resolve())


class EndpointCache:
    """Stores route tables keyed by project root.

    Entries never expire on their own; callers decide when to
    :meth:`invalidate` or :meth:`clear`. When constructed with a ``path`` the
    store can be persisted to and reloaded from JSON.
    """

    def __init__(
        self,
        path: Path | None = None,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._path = path
        self._clock = clock
        self._entries: Dict[str, Dict[str, Any]] = {}
        self._dirty = False
        if self._path is not None:
            self._load(self._path)

    def get(self, root: str | Path) -> Optional[List[RouteRecord]]:
        entry = self._entries.get(_root_key(root))
        if not entry:
            return None
        payload = entry.get("records")
        if not isinstance(payload, list):
            return None
        records: List[RouteRecord] = []
        for item in payload:
            record = RouteRecord.from_dict(item)
            if record is not None:
                records.append(record)
        return records

    def is_valid(self, root: str | Path) -> bool:
        return self.get(root) is not None

    def store(self, root: str | Path, records: Sequence[RouteRecord]) -> None:
        self._entries[_root_key(root)] = {
            "records": [record.to_dict() for record in records],
            "updated_at": _format_timestamp(self._clock()),
        }
        self._dirty = True

    def invalidate(self, root: str | Path) -> bool:
        """Drop the entry for ``root``; return True when one existed."""
        removed = self._entries.pop(_root_key(root), None) is not None
        if removed:
            self._dirty = True
        return removed

    def clear(self) -> None:
        self._entries.clear()
        self._dirty = True

    def roots(self) -> List[str]:
        return sorted(self._entries)

    def info(self, root: str | Path) -> Dict[str, Any]:
        key = _root_key(root)
        entry = self._entries.get(key)
        records = self.get(key) if entry else None
        updated = _parse_timestamp(entry.get("updated_at")) if entry else None
        age = max(0, int((self._clock() - updated).total_seconds())) if updated else 0
        return {
            "has_cache": records is not None,
            "root_dir": key if entry else None,
            "endpoint_count": len(records) if records else 0,
            "timestamp": _format_timestamp(updated) if updated else None,
            "age_seconds": age,
        }

    def persist(self) -> None:
        if not self._dirty or self._path is None:
            return
        payload = {"version": _CACHE_VERSION, "entries": self._entries}
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
        self._dirty = False

    # ------------------------------------------------------------------
    # Internal helpers

    def _load(self, path: Path) -> None:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return
        except (OSError, json.JSONDecodeError) as exc:
            _logger.debug("Ignoring unreadable endpoint cache %s: %s", path, exc)
            return
        if not isinstance(data, dict) or data.get("version") != _CACHE_VERSION:
            return
        entries = data.get("entries")
        if not isinstance(entries, dict):
            return
        valid: Dict[str, Dict[str, Any]] = {}
        for key, raw in entries.items():
            if not isinstance(key, str) or not isinstance(raw, dict):
                continue
            if not isinstance(raw.get("records"), list) or "updated_at" not in raw:
                continue
            valid[key] = raw
        self._entries = valid
        self._dirty = False


__all__ = ["EndpointCache"]

"""Resolve declarative Feign clients into additional route records."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Set

from ..logging import get_logger
from ..models import CLIENT_SUFFIX, FileDescriptor, MethodSignature, RouteRecord
from .core import join_paths, method_upper, normalize_path
from .linker import index_interfaces, named_descriptors

_logger = get_logger("clients")


class ClientResolver:
    """Adds routes seen only through ``@FeignClient`` stubs.

    A path already present in the result set is never emitted twice; records
    emitted earlier in the same pass suppress later ones with the same path.
    """

    def resolve(
        self,
        descriptors: Sequence[Optional[FileDescriptor]],
        existing: Sequence[RouteRecord],
    ) -> List[RouteRecord]:
        named = named_descriptors(descriptors)
        interfaces = index_interfaces(named)
        records = list(existing)
        used: Set[str] = {record.full_path for record in records}
        added = 0

        for client in (d for d in named if d.is_client):
            interface = interfaces.get(client.extends or "")
            if interface is not None:
                if normalize_path(client.client_path):
                    base = client.client_path
                else:
                    base = interface.base_path
                added += _append_new(
                    records, used, self._records(client, interface, interface.methods, base)
                )

            if client.base_path is not None:
                base = client.client_path if client.client_path is not None else client.base_path
                added += _append_new(records, used, self._records(client, client, client.methods, base))

        _logger.debug("Resolved %d client-only route(s)", added)
        return records

    @staticmethod
    def _records(
        client: FileDescriptor,
        declaring: FileDescriptor,
        methods: Iterable[MethodSignature],
        base: Optional[str],
    ) -> Iterable[RouteRecord]:
        for method in methods:
            if method.route is None:
                continue
            yield RouteRecord(
                http_method=method_upper(method.http_method),
                full_path=join_paths(base, method.route),
                file=declaring.path,
                line=method.line,
                type_name=f"{client.type_name}{CLIENT_SUFFIX}",
                method_name=method.name,
                client_name=client.client_name,
            )


def _append_new(
    records: List[RouteRecord], used: Set[str], candidates: Iterable[RouteRecord]
) -> int:
    added = 0
    for record in candidates:
        if record.full_path in used:
            continue
        records.append(record)
        used.add(record.full_path)
        added += 1
    return added


def resolve_clients(
    descriptors: Sequence[Optional[FileDescriptor]], existing: Sequence[RouteRecord]
) -> List[RouteRecord]:
    return ClientResolver().resolve(descriptors, existing)


__all__ = ["ClientResolver", "resolve_clients"]

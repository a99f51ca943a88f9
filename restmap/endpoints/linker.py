"""Resolve controllers against their interfaces into route records."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence

from ..logging import get_logger
from ..models import FileDescriptor, MethodSignature, RouteRecord
from .core import join_paths, method_upper

_logger = get_logger("linker")


def named_descriptors(descriptors: Iterable[Optional[FileDescriptor]]) -> List[FileDescriptor]:
    """Drop missing descriptors and those without a declared type."""
    return [d for d in descriptors if d is not None and d.type_name]


def index_interfaces(descriptors: Iterable[FileDescriptor]) -> Dict[str, FileDescriptor]:
    """Key interface descriptors by declared name; the first declaration wins."""
    interfaces: Dict[str, FileDescriptor] = {}
    for descriptor in descriptors:
        if descriptor.is_interface and descriptor.type_name:
            interfaces.setdefault(descriptor.type_name, descriptor)
    return interfaces


class RouteLinker:
    """Builds route records for every controller in a descriptor set.

    Routes inherited from an interface are reported at the interface method,
    with the controller's implementing method attached as a secondary target.
    Annotated, non-overriding controller methods are reported where they are
    declared. Both passes run for every controller.
    """

    def link(self, descriptors: Sequence[Optional[FileDescriptor]]) -> List[RouteRecord]:
        named = named_descriptors(descriptors)
        interfaces = index_interfaces(named)
        records: List[RouteRecord] = []
        for controller in (d for d in named if d.is_entry_point):
            interface = interfaces.get(controller.implements or "")
            if controller.implements and interface is None:
                _logger.debug(
                    "Interface %s of %s not found; using its own mappings only",
                    controller.implements,
                    controller.type_name,
                )
            if interface is not None:
                records.extend(self._interface_routes(controller, interface))
            records.extend(self._direct_routes(controller, interface))
        _logger.debug("Linked %d route(s) from %d file(s)", len(records), len(named))
        return records

    @staticmethod
    def _interface_routes(
        controller: FileDescriptor, interface: FileDescriptor
    ) -> Iterable[RouteRecord]:
        for method in interface.methods:
            if method.route is None:
                continue
            implementation = _find_method(controller.methods, method.name)
            yield RouteRecord(
                http_method=method_upper(method.http_method),
                full_path=join_paths(interface.base_path, method.route),
                file=interface.path,
                line=method.line,
                type_name=interface.type_name or "",
                method_name=method.name,
                impl_file=controller.path,
                impl_line=implementation.line if implementation else 1,
                impl_type_name=controller.type_name,
            )

    @staticmethod
    def _direct_routes(
        controller: FileDescriptor, interface: Optional[FileDescriptor]
    ) -> Iterable[RouteRecord]:
        if controller.base_path is not None:
            base = controller.base_path
        elif interface is not None:
            base = interface.base_path
        else:
            base = None
        for method in controller.methods:
            if method.route is None or method.is_override:
                continue
            yield RouteRecord(
                http_method=method_upper(method.http_method),
                full_path=join_paths(base, method.route),
                file=controller.path,
                line=method.line,
                type_name=controller.type_name or "",
                method_name=method.name,
            )


def _find_method(methods: Sequence[MethodSignature], name: str) -> Optional[MethodSignature]:
    for method in methods:
        if method.name == name:
            return method
    return None


def link(descriptors: Sequence[Optional[FileDescriptor]]) -> List[RouteRecord]:
    return RouteLinker().link(descriptors)


__all__ = ["RouteLinker", "index_interfaces", "link", "named_descriptors"]

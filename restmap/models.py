"""Core data models shared across restmap components."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import PurePath
from typing import Any, Dict, Optional, Tuple

KIND_CLASS = "class"
KIND_INTERFACE = "interface"

REQUEST_METHOD = "REQUEST"
CLIENT_SUFFIX = " [Feign]"


@dataclass(frozen=True)
class MethodSignature:
    """A method declaration together with the routing annotation staged above it.

    ``route`` is ``None`` when no routing annotation preceded the method (for
    example an ``@Override`` without mapping) and ``""`` when an annotation was
    present but no path could be read from it.
    """

    name: str
    line: int
    route: Optional[str] = None
    http_method: Optional[str] = None
    is_override: bool = False


@dataclass(frozen=True)
class FileDescriptor:
    """Structured view of one source file produced by the extractor."""

    path: str
    type_name: Optional[str] = None
    kind: str = KIND_CLASS
    is_entry_point: bool = False
    is_client: bool = False
    client_name: Optional[str] = None
    client_path: Optional[str] = None
    implements: Optional[str] = None
    extends: Optional[str] = None
    base_path: Optional[str] = None
    base_method: Optional[str] = None
    methods: Tuple[MethodSignature, ...] = field(default_factory=tuple)

    @property
    def is_interface(self) -> bool:
        return self.kind == KIND_INTERFACE


@dataclass(frozen=True)
class RouteRecord:
    """One resolved HTTP endpoint.

    ``file``/``line`` point at the declaring method, which is the interface for
    routes inherited from a contract. ``impl_file``/``impl_line`` are set when a
    local implementation of that contract exists.
    """

    http_method: str
    full_path: str
    file: str
    line: int
    type_name: str
    method_name: Optional[str] = None
    impl_file: Optional[str] = None
    impl_line: Optional[int] = None
    impl_type_name: Optional[str] = None
    client_name: Optional[str] = None

    def location(self) -> Tuple[str, int]:
        return self.file, self.line

    def impl_location(self) -> Optional[Tuple[str, int]]:
        if self.impl_file is None:
            return None
        return self.impl_file, self.impl_line or 1

    def display(self) -> str:
        """Return the single-line label used by pickers and the CLI."""
        filename = PurePath(self.file).name
        return f"{self.http_method:<7} {self.full_path}  →  {filename}:{self.line}"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, payload: object) -> Optional["RouteRecord"]:
        if not isinstance(payload, dict):
            return None
        http_method = payload.get("http_method")
        full_path = payload.get("full_path")
        file = payload.get("file")
        line = payload.get("line")
        type_name = payload.get("type_name")
        if (
            not isinstance(http_method, str)
            or not isinstance(full_path, str)
            or not isinstance(file, str)
            or not isinstance(line, int)
            or not isinstance(type_name, str)
        ):
            return None
        impl_line = payload.get("impl_line")
        return cls(
            http_method=http_method,
            full_path=full_path,
            file=file,
            line=line,
            type_name=type_name,
            method_name=_optional_str(payload.get("method_name")),
            impl_file=_optional_str(payload.get("impl_file")),
            impl_line=impl_line if isinstance(impl_line, int) else None,
            impl_type_name=_optional_str(payload.get("impl_type_name")),
            client_name=_optional_str(payload.get("client_name")),
        )


def _optional_str(value: object) -> Optional[str]:
    return value if isinstance(value, str) else None


__all__ = [
    "CLIENT_SUFFIX",
    "FileDescriptor",
    "KIND_CLASS",
    "KIND_INTERFACE",
    "MethodSignature",
    "REQUEST_METHOD",
    "RouteRecord",
]

"""Line-oriented extraction of Spring MVC routing metadata from Java sources."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from ..logging import get_logger
from ..models import (
    KIND_CLASS,
    KIND_INTERFACE,
    REQUEST_METHOD,
    FileDescriptor,
    MethodSignature,
)

_logger = get_logger("extractor")

_VERB_BY_ANNOTATION = {
    "Get": "GET",
    "Post": "POST",
    "Put": "PUT",
    "Delete": "DELETE",
    "Patch": "PATCH",
    "Request": None,
}

_ENTRY_POINT = re.compile(r"@(?:Rest)?Controller\b")
_FEIGN_CLIENT = re.compile(r"@FeignClient\b(?:\s*\((?P<args>[^)]*)\))?")
_MAPPING = re.compile(r"@(?P<kind>Get|Post|Put|Delete|Patch|Request)Mapping\b(?P<rest>.*)$")
_MAPPING_ARGS = re.compile(r"^\s*\((?P<args>[^)]*)\)")
_OVERRIDE = re.compile(r"@Override\b")

_MODIFIERS = r"(?:(?:public|protected|private|abstract|final|static|sealed|non-sealed|strictfp)\s+)*"
_INTERFACE_DECL = re.compile(rf"^{_MODIFIERS}interface\s+(?P<name>[A-Za-z_$][\w$]*)")
_CLASS_DECL = re.compile(rf"^{_MODIFIERS}class\s+(?P<name>[A-Za-z_$][\w$]*)")
_EXTENDS = re.compile(r"\bextends\s+(?P<name>[\w$.]+)")
_IMPLEMENTS = re.compile(r"\bimplements\s+(?P<name>[\w$.]+)")

_BARE_PATH = re.compile(r'^\s*\{?\s*"(?P<path>[^"]*)"')
_VALUE_PATH = re.compile(r'\bvalue\s*=\s*\{?\s*"(?P<path>[^"]*)"')
_PATH_PATH = re.compile(r'\bpath\s*=\s*\{?\s*"(?P<path>[^"]*)"')
# Feign client name sources, in precedence order. Only top-level arguments count.
_CLIENT_NAME_PATTERNS = (
    re.compile(r'(?:^|,)\s*name\s*=\s*"(?P<value>[^"]*)"'),
    re.compile(r'(?:^|,)\s*value\s*=\s*"(?P<value>[^"]*)"'),
    re.compile(r'^\s*"(?P<value>[^"]*)"'),
)
_REQUEST_METHOD = re.compile(r"RequestMethod\.(?P<verb>\w+)")

_COMMENT_PREFIXES = ("//", "/*", "*")

_METHOD_NAME = re.compile(r"\s(?P<name>[A-Za-z_$][\w$]*)\s*\(")
_NOT_METHODS = frozenset(
    {
        "if",
        "for",
        "while",
        "switch",
        "catch",
        "return",
        "new",
        "class",
        "interface",
        "enum",
        "synchronized",
    }
)


@dataclass(frozen=True)
class MappingAnnotation:
    """Path and verb read from a single routing annotation line."""

    path: str
    http_method: str


@dataclass
class _PendingState:
    """Annotation and override markers waiting for the next method signature."""

    annotation: Optional[MappingAnnotation] = None
    override: bool = False

    @property
    def idle(self) -> bool:
        return self.annotation is None and not self.override

    def consume(self, name: str, line: int) -> MethodSignature:
        annotation = self.annotation
        signature = MethodSignature(
            name=name,
            line=line,
            route=annotation.path if annotation else None,
            http_method=annotation.http_method if annotation else None,
            is_override=self.override,
        )
        self.annotation = None
        self.override = False
        return signature


def parse_mapping_annotation(line: str) -> Optional[MappingAnnotation]:
    """Return the routing annotation declared on ``line``, if any.

    Annotations whose argument list does not close on the same line are not
    recognised at all.
    """
    match = _MAPPING.search(line)
    if not match:
        return None
    default_verb = _VERB_BY_ANNOTATION[match.group("kind")]
    rest = match.group("rest")
    if not rest.lstrip().startswith("("):
        return MappingAnnotation(path="", http_method=default_verb or REQUEST_METHOD)
    args_match = _MAPPING_ARGS.match(rest)
    if not args_match:
        return None
    args = args_match.group("args")
    verb = default_verb or extract_request_method(args)
    return MappingAnnotation(path=extract_path(args) or "", http_method=verb)


def extract_path(args: str) -> Optional[str]:
    """Read a path from annotation arguments: bare string, then value=, then path=."""
    if not args or not args.strip():
        return None
    for pattern in (_BARE_PATH, _VALUE_PATH, _PATH_PATH):
        match = pattern.search(args)
        if match:
            return match.group("path")
    return None


def extract_request_method(args: str) -> str:
    match = _REQUEST_METHOD.search(args or "")
    if match:
        return match.group("verb").upper()
    return REQUEST_METHOD


def parse_method_name(line: str) -> Optional[str]:
    """Heuristically read a method name from a signature line."""
    match = _METHOD_NAME.search(line)
    if not match:
        return None
    name = match.group("name")
    if name in _NOT_METHODS:
        return None
    return name


def _simple_name(name: Optional[str]) -> Optional[str]:
    if not name:
        return None
    return name.rsplit(".", 1)[-1]


class JavaFileExtractor:
    """Builds a :class:`FileDescriptor` from one Java source file."""

    def extract(self, text: str, path: str = "") -> FileDescriptor:
        type_name: Optional[str] = None
        kind = KIND_CLASS
        is_entry_point = False
        is_client = False
        client_name: Optional[str] = None
        client_path: Optional[str] = None
        implements: Optional[str] = None
        extends: Optional[str] = None
        base: Optional[MappingAnnotation] = None
        methods: List[MethodSignature] = []
        pending = _PendingState()

        for number, raw_line in enumerate(text.split("\n"), start=1):
            line = raw_line.strip()
            if not line or line.startswith(_COMMENT_PREFIXES):
                continue

            if _ENTRY_POINT.search(line):
                is_entry_point = True

            feign = _FEIGN_CLIENT.search(line)
            if feign:
                is_client = True
                client_name, client_path = self._client_params(feign.group("args"))

            if type_name is None:
                interface = _INTERFACE_DECL.match(line)
                declared = _CLASS_DECL.match(line)
                if interface:
                    kind = KIND_INTERFACE
                    type_name = interface.group("name")
                    extends_match = _EXTENDS.search(line, interface.end())
                    extends = _simple_name(extends_match.group("name")) if extends_match else None
                elif declared:
                    kind = KIND_CLASS
                    type_name = declared.group("name")
                    implements_match = _IMPLEMENTS.search(line, declared.end())
                    implements = (
                        _simple_name(implements_match.group("name")) if implements_match else None
                    )

            mapping = parse_mapping_annotation(line)
            if mapping is not None:
                if type_name is None:
                    if base is None:
                        base = mapping
                else:
                    pending.annotation = mapping

            if _OVERRIDE.search(line):
                pending.override = True

            if type_name is not None and not pending.idle:
                name = parse_method_name(line)
                if name:
                    methods.append(pending.consume(name, number))

        return FileDescriptor(
            path=path,
            type_name=type_name,
            kind=kind,
            is_entry_point=is_entry_point,
            is_client=is_client,
            client_name=client_name,
            client_path=client_path,
            implements=implements,
            extends=extends,
            base_path=base.path if base else None,
            base_method=base.http_method if base else None,
            methods=tuple(methods),
        )

    def extract_file(self, path: str | Path) -> Optional[FileDescriptor]:
        """Read and extract ``path``; return ``None`` when it cannot be read."""
        file_path = Path(path)
        try:
            text = file_path.read_text(encoding="utf-8", errors="ignore")
        except OSError as exc:
            _logger.debug("Skipping unreadable file %s: %s", file_path, exc)
            return None
        return self.extract(text, str(file_path))

    @staticmethod
    def _client_params(args: Optional[str]) -> tuple[Optional[str], Optional[str]]:
        if not args:
            return None, None
        name = None
        for pattern in _CLIENT_NAME_PATTERNS:
            match = pattern.search(args)
            if match:
                name = match.group("value")
                break
        path_match = _PATH_PATH.search(args)
        return name, path_match.group("path") if path_match else None


_DEFAULT_EXTRACTOR = JavaFileExtractor()


def extract(text: str, path: str = "") -> FileDescriptor:
    """Return the descriptor for already-loaded file contents."""
    return _DEFAULT_EXTRACTOR.extract(text, path)


def extract_file(path: str | Path) -> Optional[FileDescriptor]:
    return _DEFAULT_EXTRACTOR.extract_file(path)


__all__ = [
    "JavaFileExtractor",
    "MappingAnnotation",
    "extract",
    "extract_file",
    "extract_path",
    "extract_request_method",
    "parse_mapping_annotation",
    "parse_method_name",
]

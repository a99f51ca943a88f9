"""Configuration loading for restmap (.restmap.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".restmap.yml"

DEFAULT_EXTENSIONS = [".java"]
DEFAULT_ROOT_MARKERS = ["pom.xml", "build.gradle"]


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ScanConfig:
    """File selection and worker settings for a scan."""

    extensions: List[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    workers: Optional[int] = None


@dataclass
class RestmapConfig:
    """Represents the settings defined in .restmap.yml."""

    root: Path
    scan: ScanConfig = field(default_factory=ScanConfig)
    exclude_paths: List[str] = field(default_factory=list)
    root_markers: List[str] = field(default_factory=lambda: list(DEFAULT_ROOT_MARKERS))


def load_config(config_path: Path) -> RestmapConfig:
    """Load configuration from a project directory or a config file path."""
    config_file = _resolve_config_path(Path(config_path))
    root = config_file.parent.resolve()

    if not config_file.exists():
        return RestmapConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    scan = ScanConfig()
    scan_data = _as_dict(data.get("scan"))
    if scan_data:
        extensions = _normalise_extensions(_as_str_list(scan_data.get("extensions")))
        if extensions:
            scan.extensions = extensions
        workers = _as_int(scan_data.get("workers"))
        if workers is not None and workers < 1:
            raise ConfigError("scan.workers must be a positive integer")
        scan.workers = workers

    markers = _as_str_list(data.get("root_markers"))

    return RestmapConfig(
        root=root,
        scan=scan,
        exclude_paths=_as_str_list(data.get("exclude_paths")),
        root_markers=markers or list(DEFAULT_ROOT_MARKERS),
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _normalise_extensions(values: Sequence[str]) -> List[str]:
    result: List[str] = []
    for value in values:
        cleaned = value.strip().lower()
        if not cleaned:
            continue
        if not cleaned.startswith("."):
            cleaned = "." + cleaned
        if cleaned not in result:
            result.append(cleaned)
    return result


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "RestmapConfig",
    "ScanConfig",
    "load_config",
]

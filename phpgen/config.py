"""Configuration loading for phpgen (.phpgen.yml) and composer PSR-4 mappings."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".phpgen.yml"
DEFAULT_FALLBACK_ROOT = "src"


class ConfigError(RuntimeError):
    """Raised when configuration is missing, unreadable, or inconsistent."""


@dataclass
class NamespaceMappings:
    """Two-tier PSR-4 prefix -> directory table; priority entries win on equal prefixes."""

    normal: Dict[str, str] = field(default_factory=dict)
    priority: Dict[str, str] = field(default_factory=dict)

    def effective(self) -> Dict[str, str]:
        merged = dict(self.normal)
        merged.update(self.priority)
        return merged

    def validate(self) -> None:
        """Raise ConfigError when the table cannot back path resolution."""
        if not self.normal and not self.priority:
            raise ConfigError(
                "At least one PSR-4 mapping must be configured (psr4 or priority_psr4)"
            )
        for tier, mappings in (("normal", self.normal), ("priority", self.priority)):
            for prefix, directory in mappings.items():
                if not prefix or not prefix.strip("\\"):
                    raise ConfigError(f"{tier.capitalize()} PSR-4 namespace cannot be empty")
                if not directory or not directory.strip():
                    raise ConfigError(
                        f"{tier.capitalize()} PSR-4 directory for namespace '{prefix}' cannot be empty"
                    )
        # Conflicts across tiers are allowed; only duplicates within one tier are rejected.
        _check_duplicate_directories(self.priority, "priority")
        _check_duplicate_directories(self.normal, "normal")


@dataclass
class PhpGenConfig:
    """Represents the settings defined in .phpgen.yml."""

    root: Path
    commands: List[str] = field(default_factory=list)
    mappings: NamespaceMappings = field(default_factory=NamespaceMappings)
    strict_types: bool = True
    fallback_root: str = DEFAULT_FALLBACK_ROOT
    templates_dir: Optional[Path] = None
    composer_file: Optional[Path] = None

    def with_psr4_mapping(self, prefix: str, directory: str) -> "PhpGenConfig":
        self.mappings.normal[prefix] = directory
        return self

    def with_priority_psr4_mapping(self, prefix: str, directory: str) -> "PhpGenConfig":
        self.mappings.priority[prefix] = directory
        return self

    def validate(self) -> None:
        self.mappings.validate()


def load_config(config_path: Path) -> PhpGenConfig:
    """Load configuration from disk; a missing file yields defaults rooted at its directory."""
    config_file = _resolve_config_path(Path(config_path))
    root = config_file.parent.resolve()

    if not config_file.exists():
        return PhpGenConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    normal: Dict[str, str] = {}
    composer_file: Optional[Path] = None
    composer_name = _as_str(data.get("composer"))
    if composer_name:
        composer_file = root / composer_name
        normal.update(read_composer_psr4(composer_file))
    # Explicit entries override anything imported from composer.json.
    normal.update(_as_mapping(data.get("psr4"), "psr4"))
    priority = _as_mapping(data.get("priority_psr4"), "priority_psr4")

    strict_types = _as_bool(data.get("strict_types"))
    fallback_root = _as_str(data.get("fallback_root")) or DEFAULT_FALLBACK_ROOT
    templates_dir_str = _as_str(data.get("templates_dir"))

    return PhpGenConfig(
        root=root,
        commands=_as_str_list(data.get("commands")),
        mappings=NamespaceMappings(normal=normal, priority=priority),
        strict_types=True if strict_types is None else strict_types,
        fallback_root=fallback_root.rstrip("/") or DEFAULT_FALLBACK_ROOT,
        templates_dir=root / templates_dir_str if templates_dir_str else None,
        composer_file=composer_file,
    )


def read_composer_psr4(composer_path: Path) -> Dict[str, str]:
    """Return PSR-4 mappings from the autoload and autoload-dev sections of composer.json."""
    if not composer_path.exists():
        raise ConfigError(f"Composer file not found: {composer_path}")
    try:
        composer = json.loads(composer_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Invalid JSON in composer file {composer_path}: {exc}") from exc
    if not isinstance(composer, dict):
        raise ConfigError(f"Invalid JSON in composer file: {composer_path}")

    mappings: Dict[str, str] = {}
    for section in ("autoload", "autoload-dev"):
        psr4 = _as_dict(_as_dict(composer.get(section)).get("psr-4"))
        for prefix, path in psr4.items():
            if isinstance(prefix, str):
                mappings[prefix] = _normalise_composer_path(path)
    return mappings


def _normalise_composer_path(path: Any) -> str:
    # composer allows a list of directories; the first one receives generated files
    if isinstance(path, list):
        path = path[0] if path else ""
    if not isinstance(path, str):
        return ""
    return path.rstrip("/")


def _check_duplicate_directories(mappings: Dict[str, str], tier: str) -> None:
    directory_to_prefix: Dict[str, str] = {}
    for prefix, directory in mappings.items():
        normalised = directory.rstrip("/\\")
        if normalised in directory_to_prefix:
            raise ConfigError(
                f"Duplicate directory '{directory}' found in {tier} PSR-4 mappings. "
                f"Namespaces '{directory_to_prefix[normalised]}' and '{prefix}' "
                "both map to the same directory."
            )
        directory_to_prefix[normalised] = prefix


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_mapping(value: Any, key: str) -> Dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"'{key}' must be a mapping of namespace prefix to directory")
    result: Dict[str, str] = {}
    for prefix, directory in value.items():
        result[str(prefix)] = "" if directory is None else str(directory)
    return result


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
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
    "NamespaceMappings",
    "PhpGenConfig",
    "load_config",
    "read_composer_psr4",
]

"""Configuration loading for swiftscan (.swiftscan.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".swiftscan.yml"

DEFAULT_EXTENSIONS = ("swift", "h", "m", "js")
DEFAULT_EXCLUDE_FRAGMENTS = ("/.build/", "/Pods/")
DEFAULT_KEYWORDS = ("class", "struct", "enum", "protocol", "typealias")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class DefinitionsConfig:
    """Settings for the definition file search."""

    extensions: List[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    exclude_fragments: List[str] = field(
        default_factory=lambda: list(DEFAULT_EXCLUDE_FRAGMENTS)
    )
    keywords: List[str] = field(default_factory=lambda: list(DEFAULT_KEYWORDS))


@dataclass
class SwiftScanConfig:
    """Represents the settings defined in .swiftscan.yml."""

    root: Path
    verbose: bool = False
    output_dir: Optional[Path] = None
    definitions: DefinitionsConfig = field(default_factory=DefinitionsConfig)


def load_config(config_path: Path) -> SwiftScanConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return SwiftScanConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    output_dir_str = _as_str(data.get("output_dir"))
    output_dir = (root / output_dir_str) if output_dir_str else None

    definitions = DefinitionsConfig()
    definitions_data = _as_dict(data.get("definitions"))
    if definitions_data:
        extensions = _as_str_list(definitions_data.get("extensions"))
        if extensions:
            definitions.extensions = [ext.lstrip(".").lower() for ext in extensions]
        if "exclude_fragments" in definitions_data:
            definitions.exclude_fragments = _as_str_list(
                definitions_data.get("exclude_fragments")
            )
        keywords = _as_str_list(definitions_data.get("keywords"))
        if keywords:
            definitions.keywords = keywords

    return SwiftScanConfig(
        root=root,
        verbose=_as_bool(data.get("verbose")) or False,
        output_dir=output_dir,
        definitions=definitions,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ConfigError(f"{path.name} is not valid UTF-8: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


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
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []

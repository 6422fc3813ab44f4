"""Configuration loading for assetmanifest (.assetmanifest.yml)."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, fields, replace
from importlib import metadata
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Pattern

import yaml

from .builder import serialize_manifest

CONFIG_FILE_NAME = ".assetmanifest.yml"
DEFAULT_FILE_NAME = "manifest.json"
DEFAULT_TRANSFORM_EXTENSIONS = re.compile(r"^(gz|map)$", re.IGNORECASE)

_CALLABLE_KEYS = ("filter", "map", "generate", "sort", "serialize")
_KNOWN_KEYS = (
    "public_path",
    "base_path",
    "file_name",
    "transform_extensions",
    "write_to_file_emit",
    "seed",
    *_CALLABLE_KEYS,
)


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ManifestOptions:
    """Options recognised by the manifest plugin."""

    public_path: Optional[str] = None
    base_path: str = ""
    file_name: str = DEFAULT_FILE_NAME
    transform_extensions: Pattern[str] = DEFAULT_TRANSFORM_EXTENSIONS
    write_to_file_emit: bool = False
    seed: Any = None
    filter: Optional[Callable[[Any], bool]] = None
    map: Optional[Callable[[Any], Any]] = None
    generate: Optional[Callable[[Any, List[Any]], Any]] = None
    sort: Optional[Callable[[Any, Any], int]] = None
    serialize: Callable[[Any], str] = field(default=serialize_manifest)

    def __post_init__(self) -> None:
        self.transform_extensions = compile_extensions(self.transform_extensions)

    def merged(self, **overrides: Any) -> "ManifestOptions":
        """Return a copy with keyword overrides applied; unknown keys raise."""
        known = {item.name for item in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ConfigError(f"Unknown manifest options: {', '.join(unknown)}")
        return replace(self, **overrides)


def compile_extensions(value: object) -> Pattern[str]:
    """Coerce a regex string, compiled pattern or extension list to a pattern."""
    if isinstance(value, re.Pattern):
        return value
    if isinstance(value, str):
        try:
            return re.compile(value, re.IGNORECASE)
        except re.error as exc:
            raise ConfigError(f"Invalid transform_extensions pattern: {exc}") from exc
    if isinstance(value, (list, tuple)) and all(isinstance(item, str) for item in value):
        alternation = "|".join(re.escape(item.lstrip(".")) for item in value)
        return re.compile(rf"^({alternation})$", re.IGNORECASE)
    raise ConfigError("transform_extensions must be a pattern or a list of extensions")


def load_config(config_path: Path) -> ManifestOptions:
    """Load manifest options from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)

    if not config_file.exists():
        return ManifestOptions()

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILE_NAME} must contain a mapping at the root")

    unknown = sorted((str(key) for key in set(data) - set(_KNOWN_KEYS)))
    if unknown:
        raise ConfigError(f"Unknown keys in {CONFIG_FILE_NAME}: {', '.join(unknown)}")

    overrides: Dict[str, Any] = {}

    public_path = data.get("public_path")
    if public_path is not None:
        overrides["public_path"] = _as_str(public_path, "public_path")

    base_path = data.get("base_path")
    if base_path is not None:
        overrides["base_path"] = _as_str(base_path, "base_path")

    file_name = data.get("file_name")
    if file_name is not None:
        overrides["file_name"] = _as_str(file_name, "file_name")

    extensions = data.get("transform_extensions")
    if extensions is not None:
        overrides["transform_extensions"] = compile_extensions(extensions)

    write_to_file = data.get("write_to_file_emit")
    if write_to_file is not None:
        if not isinstance(write_to_file, bool):
            raise ConfigError("write_to_file_emit must be a boolean")
        overrides["write_to_file_emit"] = write_to_file

    if "seed" in data:
        overrides["seed"] = data["seed"]

    for key in _CALLABLE_KEYS:
        reference = data.get(key)
        if reference is not None:
            overrides[key] = resolve_callable(_as_str(reference, key), key)

    return ManifestOptions(**overrides)


def resolve_callable(reference: str, option: str) -> Callable[..., Any]:
    """Import a ``module:attribute`` reference used for a function option."""
    if ":" not in reference:
        raise ConfigError(f"{option} must be a 'module:attribute' reference, got {reference!r}")
    entry = metadata.EntryPoint(name=option, value=reference, group="assetmanifest.options")
    try:
        loaded = entry.load()
    except (ImportError, AttributeError) as exc:
        raise ConfigError(f"Failed to load {option} from {reference!r}: {exc}") from exc
    if not callable(loaded):
        raise ConfigError(f"{option} reference {reference!r} is not callable")
    return loaded


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILE_NAME).resolve()
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


def _as_str(value: object, key: str) -> str:
    if isinstance(value, str):
        return value
    raise ConfigError(f"{key} must be a string")

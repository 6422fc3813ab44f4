"""Base classes for build-engine host adapters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, List, Optional

from ..models import AssetInfo, BuildSnapshot, ChunkInfo
from ..plugin import BuildLifecycle

PLUGIN_NAME = "AssetManifestPlugin"


class UnsupportedHostError(TypeError):
    """Raised when no adapter recognises the build engine object."""


class HostAdapter(ABC):
    """Translates one engine's native hook API into BuildLifecycle calls."""

    name: str = "host"

    @abstractmethod
    def supports(self, compiler: object) -> bool:
        """Return True when this adapter can attach to ``compiler``."""

    @abstractmethod
    def attach(self, compiler: object, lifecycle: BuildLifecycle) -> None:
        """Register engine hooks that forward to ``lifecycle``."""

    def output_path(self, compiler: object) -> str:
        """Engine-resolved output directory for ``compiler``."""
        path = lookup(output_options(compiler), "path")
        if not path:
            raise ValueError("Build engine does not define an output path")
        return str(path)


def lookup(obj: Any, key: str, default: Any = None) -> Any:
    """Read ``key`` from a mapping or attribute-style engine object."""
    if obj is None:
        return default
    if isinstance(obj, Mapping):
        return obj.get(key, default)
    return getattr(obj, key, default)


def output_options(owner: object) -> Any:
    return lookup(lookup(owner, "options"), "output")


def module_user_request(module: object) -> str:
    """Request string the module was imported by, e.g. './logo.png'."""
    request = lookup(module, "user_request") or lookup(module, "resource")
    if not request:
        raise ValueError(f"Module {module!r} does not expose a user request")
    return str(request)


def chunk_is_initial(chunk: object) -> bool:
    """Initial-chunk flag across engine generations."""
    is_only_initial = getattr(chunk, "is_only_initial", None)
    if callable(is_only_initial):
        return bool(is_only_initial())
    is_initial = getattr(chunk, "is_initial", None)
    if callable(is_initial):
        return bool(is_initial())
    return bool(lookup(chunk, "initial", False))


def snapshot_from_compilation(compilation: object) -> BuildSnapshot:
    """Read chunks, assets and output settings off an engine compilation."""
    chunks: List[ChunkInfo] = [
        ChunkInfo(
            name=lookup(chunk, "name"),
            files=list(lookup(chunk, "files", []) or []),
            is_initial=chunk_is_initial(chunk),
        )
        for chunk in lookup(compilation, "chunks", []) or []
    ]

    stats = compilation.get_stats().to_json()  # type: ignore[attr-defined]
    assets: List[AssetInfo] = [
        AssetInfo(name=asset["name"], chunks=list(asset.get("chunks") or []))
        for asset in stats.get("assets", [])
    ]

    output = output_options(compilation)
    public_path: Optional[str] = lookup(output, "public_path")
    assets_out = lookup(compilation, "assets")
    if assets_out is None:
        raise ValueError("Compilation does not expose an assets collection")

    return BuildSnapshot(
        chunks=chunks,
        assets=assets,
        output_path=str(lookup(output, "path", "")),
        public_path=public_path,
        assets_out=assets_out,
    )


__all__ = [
    "HostAdapter",
    "PLUGIN_NAME",
    "UnsupportedHostError",
    "chunk_is_initial",
    "lookup",
    "module_user_request",
    "output_options",
    "snapshot_from_compilation",
]

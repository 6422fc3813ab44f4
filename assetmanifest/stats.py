"""Drive a manifest cycle from a bundler stats JSON file."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, MutableMapping, Optional, Tuple

from .logging import get_logger
from .models import AssetInfo, BuildSnapshot, ChunkInfo
from .plugin import ManifestPlugin

_LOGGER = get_logger("stats")


@dataclass
class StatsRun:
    """Result of replaying one build from a stats file."""

    manifest: Any
    assets: MutableMapping[str, object]
    output_dir: Path


def load_stats(path: Path) -> Dict[str, Any]:
    """Read a stats file; the root must be a JSON object."""
    payload = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError(f"{path.name} must contain a JSON object at the root")
    return payload


def snapshot_from_stats(
    payload: Mapping[str, Any], output_dir: Optional[str] = None
) -> BuildSnapshot:
    output_path = output_dir or payload.get("outputPath")
    if not output_path:
        raise ValueError("Stats do not define outputPath; pass an output directory")

    chunks: List[ChunkInfo] = []
    for raw in payload.get("chunks", []):
        names = raw.get("names") or []
        name = raw.get("name") or (names[0] if names else None)
        chunks.append(
            ChunkInfo(
                name=name,
                files=[str(file) for file in raw.get("files", [])],
                is_initial=bool(raw.get("initial", raw.get("entry", False))),
            )
        )

    assets = [
        AssetInfo(name=str(raw["name"]), chunks=list(raw.get("chunks") or []))
        for raw in payload.get("assets", [])
    ]

    return BuildSnapshot(
        chunks=chunks,
        assets=assets,
        output_path=str(output_path),
        public_path=payload.get("publicPath"),
    )


def module_assets_from_stats(payload: Mapping[str, Any]) -> List[Tuple[str, str]]:
    """``(module request, emitted file)`` pairs for modules that emitted assets."""
    pairs: List[Tuple[str, str]] = []
    for module in payload.get("modules", []):
        request = module.get("name")
        if not request:
            continue
        for file in module.get("assets") or []:
            pairs.append((str(request), str(file)))
    return pairs


def run_stats(
    plugin: ManifestPlugin, stats_path: Path, output_dir: Optional[Path] = None
) -> StatsRun:
    """Replay one full cycle for ``plugin`` from the stats at ``stats_path``."""
    payload = load_stats(stats_path)
    snapshot = snapshot_from_stats(payload, str(output_dir) if output_dir else None)
    session = plugin.bind(snapshot.output_path)

    session.on_cycle_start()
    for request, file in module_assets_from_stats(payload):
        session.on_module_asset(request, file)
    manifest = session.on_assets_finalized(snapshot)
    _LOGGER.debug(
        "Replayed %d chunks and %d assets from %s",
        len(snapshot.chunks),
        len(snapshot.assets),
        stats_path,
    )
    return StatsRun(
        manifest=manifest,
        assets=snapshot.assets_out,
        output_dir=Path(snapshot.output_path),
    )


__all__ = [
    "StatsRun",
    "load_stats",
    "module_assets_from_stats",
    "run_stats",
    "snapshot_from_stats",
]

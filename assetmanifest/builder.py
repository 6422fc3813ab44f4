"""Folding of the final file list into a manifest value."""

from __future__ import annotations

import copy
import json
from collections.abc import Mapping
from typing import Any, Callable, Dict, Optional, Sequence


def build_manifest(
    seed: Any,
    files: Sequence[Any],
    generate: Optional[Callable[[Any, list], Any]] = None,
) -> Any:
    """Return the manifest for ``files``.

    A ``generate`` callable replaces the default fold entirely and receives
    ``(seed, files)``. Otherwise each file sets ``manifest[name] = path`` on a
    copy of the seed, so a later file wins over an earlier one with the same
    name.
    """
    initial = copy.deepcopy(seed) if seed is not None else {}
    if generate is not None:
        return generate(initial, list(files))

    manifest: Dict[str, Any] = dict(initial)
    for file in files:
        manifest[_field(file, "name")] = _field(file, "path")
    return manifest


def serialize_manifest(manifest: Any) -> str:
    """Default serializer: the manifest as 2-space indented JSON."""
    return json.dumps(manifest, indent=2)


def _field(item: Any, key: str) -> Any:
    # Entries may have been reshaped into plain mappings by a user map.
    if isinstance(item, Mapping):
        return item[key]
    return getattr(item, key)


__all__ = ["build_manifest", "serialize_manifest"]

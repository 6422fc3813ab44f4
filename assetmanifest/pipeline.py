"""Transform stages applied to classified file entries.

Stages run in a fixed order and each returns a new list; entries are
replaced, never mutated in place.
"""

from __future__ import annotations

import os
from dataclasses import replace
from functools import cmp_to_key
from typing import Any, Callable, List, Optional, Sequence

from .config import ManifestOptions
from .models import FileEntry

HOT_UPDATE_MARKER = "hot-update"


def drop_noise(
    files: Sequence[FileEntry],
    output_dir: str,
    is_manifest: Callable[[str], bool],
) -> List[FileEntry]:
    """Drop hot-update files and files that are themselves manifest outputs."""
    kept: List[FileEntry] = []
    for file in files:
        if HOT_UPDATE_MARKER in file.path:
            continue
        if is_manifest(os.path.abspath(os.path.join(output_dir, file.name))):
            continue
        kept.append(file)
    return kept


def prefix_names(files: Sequence[FileEntry], base_path: str) -> List[FileEntry]:
    if not base_path:
        return list(files)
    return [replace(file, name=base_path + file.name) for file in files]


def prefix_paths(files: Sequence[FileEntry], public_path: Optional[str]) -> List[FileEntry]:
    if not public_path:
        return list(files)
    return [replace(file, path=public_path + file.path) for file in files]


def normalize_separators(files: Sequence[FileEntry]) -> List[FileEntry]:
    """Rewrite backslashes to forward slashes in names and paths."""
    return [
        replace(file, name=file.name.replace("\\", "/"), path=file.path.replace("\\", "/"))
        for file in files
    ]


def run_pipeline(
    files: Sequence[FileEntry],
    options: ManifestOptions,
    *,
    output_dir: str,
    public_path: Optional[str],
    is_manifest: Callable[[str], bool],
) -> List[Any]:
    """Apply every stage, ending with the user filter, map and sort hooks."""
    staged: List[Any] = drop_noise(files, output_dir, is_manifest)
    staged = prefix_names(staged, options.base_path)
    staged = prefix_paths(staged, public_path)
    staged = normalize_separators(staged)

    if options.filter is not None:
        staged = [file for file in staged if options.filter(file)]
    if options.map is not None:
        staged = [options.map(file) for file in staged]
    if options.sort is not None:
        staged = sorted(staged, key=cmp_to_key(options.sort))
    return staged


__all__ = [
    "HOT_UPDATE_MARKER",
    "drop_noise",
    "normalize_separators",
    "prefix_names",
    "prefix_paths",
    "run_pipeline",
]

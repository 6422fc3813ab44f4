"""Classification of build output into manifest file entries."""

from __future__ import annotations

import posixpath
from typing import List, Mapping, Pattern, Set

from .config import DEFAULT_TRANSFORM_EXTENSIONS
from .models import BuildSnapshot, FileEntry


def get_file_type(
    path: str, transform_extensions: Pattern[str] = DEFAULT_TRANSFORM_EXTENSIONS
) -> str:
    """Return the type suffix used to build a named chunk's logical name.

    Query strings are ignored. Pass-through extensions keep the segment in
    front of them, so ``app.js.map`` has type ``js.map`` rather than ``map``.
    """
    bare = path.split("?", 1)[0]
    segments = bare.split(".")
    extension = segments.pop()
    if segments and transform_extensions.search(extension):
        extension = f"{segments.pop()}.{extension}"
    return extension


def module_asset_name(user_request: str, file: str) -> str:
    """Logical name for a file copied into the output by a source module.

    The request basename is kept whole, loader query included.
    """
    request = user_request.replace("\\", "/")
    directory = posixpath.dirname(file.replace("\\", "/"))
    return posixpath.normpath(posixpath.join(directory, posixpath.basename(request)))


def classify_files(
    snapshot: BuildSnapshot,
    module_assets: Mapping[str, str],
    transform_extensions: Pattern[str] = DEFAULT_TRANSFORM_EXTENSIONS,
) -> List[FileEntry]:
    """Turn a build snapshot into ordered entries: chunk files, then assets."""
    files: List[FileEntry] = []
    chunk_files: Set[str] = set()

    for chunk in snapshot.chunks:
        for path in chunk.files:
            if chunk.name:
                name = f"{chunk.name}.{get_file_type(path, transform_extensions)}"
            else:
                # Nameless chunks map their files directly.
                name = path
            files.append(
                FileEntry(
                    path=path,
                    name=name,
                    is_initial=chunk.is_initial,
                    is_chunk=True,
                    chunk=chunk,
                )
            )
            chunk_files.add(path)

    # Module assets are not reported per chunk, so they are picked up here.
    for asset in snapshot.assets:
        logical = module_assets.get(asset.name)
        if logical:
            files.append(FileEntry(path=asset.name, name=logical, is_module_asset=True))
            continue
        if asset.chunks or asset.name in chunk_files:
            continue
        files.append(FileEntry(path=asset.name, name=asset.name, is_asset=True))

    return files


__all__ = ["classify_files", "get_file_type", "module_asset_name"]

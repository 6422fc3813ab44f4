"""Core data models shared across assetmanifest components."""

from dataclasses import dataclass, field
from typing import List, MutableMapping, Optional


@dataclass
class ChunkInfo:
    """A compiled chunk and the output files it produced."""

    name: Optional[str]
    files: List[str]
    is_initial: bool = False


@dataclass
class AssetInfo:
    """An asset emitted by the build, with the chunks it belongs to."""

    name: str
    chunks: List[str] = field(default_factory=list)


class RawSource:
    """In-memory asset handed back to the build engine's assets collection."""

    def __init__(self, text: str) -> None:
        self._text = text

    def source(self) -> str:
        return self._text

    def size(self) -> int:
        return len(self._text)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RawSource):
            return NotImplemented
        return self._text == other._text

    def __repr__(self) -> str:
        return f"RawSource(size={self.size()})"


@dataclass
class BuildSnapshot:
    """Chunk and asset listing delivered when a build finalizes its assets."""

    chunks: List[ChunkInfo]
    assets: List[AssetInfo]
    output_path: str
    public_path: Optional[str] = None
    assets_out: MutableMapping[str, object] = field(default_factory=dict)


@dataclass
class FileEntry:
    """One output file flowing through the transform pipeline."""

    path: str
    name: str
    is_initial: bool = False
    is_chunk: bool = False
    is_asset: bool = False
    is_module_asset: bool = False
    chunk: Optional[ChunkInfo] = None

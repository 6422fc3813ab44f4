"""Asset manifest generation for bundler build output."""

from .config import ConfigError, ManifestOptions, load_config
from .emission import EmitRegistry, default_registry, reset_default_registry
from .models import AssetInfo, BuildSnapshot, ChunkInfo, FileEntry, RawSource
from .plugin import BuildLifecycle, ManifestPlugin, ManifestSession

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "AssetInfo",
    "BuildLifecycle",
    "BuildSnapshot",
    "ChunkInfo",
    "ConfigError",
    "EmitRegistry",
    "FileEntry",
    "ManifestOptions",
    "ManifestPlugin",
    "ManifestSession",
    "RawSource",
    "default_registry",
    "load_config",
    "reset_default_registry",
]

"""Host adapters for build engines and discovery utilities."""

from __future__ import annotations

from importlib import metadata
from typing import Callable, Iterable, List

from .base import HostAdapter, UnsupportedHostError
from .hooks import HooksHostAdapter
from .legacy import LegacyHostAdapter

_ENTRY_POINT_GROUP = "assetmanifest.hosts"

# Order matters: engines exposing both APIs are driven through hooks.
_BUILTIN_FACTORIES: dict[str, Callable[[], HostAdapter]] = {
    "hooks": HooksHostAdapter,
    "legacy": LegacyHostAdapter,
}


def discover_adapters() -> List[HostAdapter]:
    """Return built-in adapters followed by ones registered as entry points."""
    adapters: List[HostAdapter] = [factory() for factory in _BUILTIN_FACTORIES.values()]
    seen = set(_BUILTIN_FACTORIES)

    for entry in _iter_entry_points():
        if entry.name in seen:
            continue
        try:
            loaded = entry.load()
        except Exception as exc:  # pragma: no cover - defensive guard
            raise RuntimeError(f"Failed to load host adapter entry point '{entry.name}': {exc}") from exc
        adapters.append(_coerce_adapter(loaded))
        seen.add(entry.name)

    return adapters


def select_adapter(compiler: object) -> HostAdapter:
    """Return the first adapter that supports ``compiler``."""
    for adapter in discover_adapters():
        if adapter.supports(compiler):
            return adapter
    raise UnsupportedHostError(
        f"No host adapter supports build engine object of type {type(compiler).__name__}"
    )


def _coerce_adapter(obj: object) -> HostAdapter:
    if isinstance(obj, HostAdapter):
        return obj
    if isinstance(obj, type) and issubclass(obj, HostAdapter):
        return obj()
    if callable(obj):
        instance = obj()
        if isinstance(instance, HostAdapter):
            return instance
    raise TypeError("Host adapter entry point must be a HostAdapter subclass or factory")


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    entry_points = metadata.entry_points()
    if hasattr(entry_points, "select"):
        return entry_points.select(group=_ENTRY_POINT_GROUP)  # type: ignore[return-value]

    return entry_points.get(_ENTRY_POINT_GROUP, [])  # type: ignore[return-value]


__all__ = [
    "HooksHostAdapter",
    "HostAdapter",
    "LegacyHostAdapter",
    "UnsupportedHostError",
    "discover_adapters",
    "select_adapter",
]

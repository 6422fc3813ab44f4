"""Per-output emit counters shared by every manifest session in a process."""

from __future__ import annotations

import os
from typing import Dict, List, Optional


def resolve_output_file(output_dir: str, file_name: str) -> str:
    """Absolute, normalised path of a manifest written under ``output_dir``."""
    return os.path.abspath(os.path.join(output_dir, file_name))


class EmitRegistry:
    """Counts build cycles started but not yet emitted, keyed by output file.

    A key stays tracked after its count returns to zero so that other
    manifests can still recognise it as a manifest output.
    """

    def __init__(self) -> None:
        self._counts: Dict[str, int] = {}

    def begin(self, key: str) -> int:
        """Record a cycle start and return the pending count."""
        count = self._counts.get(key, 0) + 1
        self._counts[key] = count
        return count

    def finish(self, key: str) -> bool:
        """Record a cycle emit; True only when it was the last pending cycle."""
        # An emit without a matching start drives the count negative.
        count = self._counts.get(key, 0) - 1
        self._counts[key] = count
        return count == 0

    def count(self, key: str) -> Optional[int]:
        return self._counts.get(key)

    def is_tracked(self, key: str) -> bool:
        return key in self._counts

    def tracked(self) -> List[str]:
        return list(self._counts)

    def reset(self, key: str | None = None) -> None:
        """Forget one key, or every key when none is given."""
        if key is None:
            self._counts.clear()
        else:
            self._counts.pop(key, None)


_DEFAULT_REGISTRY = EmitRegistry()


def default_registry() -> EmitRegistry:
    """Return the process-wide registry used when none is injected."""
    return _DEFAULT_REGISTRY


def reset_default_registry() -> None:
    """Clear the process-wide registry, e.g. between tests or build sessions."""
    _DEFAULT_REGISTRY.reset()


__all__ = [
    "EmitRegistry",
    "default_registry",
    "reset_default_registry",
    "resolve_output_file",
]

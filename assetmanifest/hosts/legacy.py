"""Adapter for engines registering handlers with ``compiler.plugin(event, fn)``."""

from __future__ import annotations

from typing import Any, Callable, Optional

from ..logging import get_logger
from ..plugin import BuildLifecycle
from .base import HostAdapter, module_user_request, snapshot_from_compilation

AFTER_EMIT_EVENT = "manifest-after-emit"

Callback = Optional[Callable[..., None]]


class LegacyHostAdapter(HostAdapter):
    """Events: ``before-run``, ``watch-run``, ``compilation``/``module-asset``, ``emit``.

    Handlers follow the engine's callback convention: asynchronous events
    pass a trailing callback that must be invoked once the handler is done.
    """

    name = "legacy"

    def __init__(self) -> None:
        self.logger = get_logger("hosts.legacy")

    def supports(self, compiler: object) -> bool:
        return callable(getattr(compiler, "plugin", None))

    def attach(self, compiler: object, lifecycle: BuildLifecycle) -> None:
        def before_run(_compiler: Any, callback: Callback = None) -> None:
            lifecycle.on_cycle_start()
            if callback is not None:
                callback()

        def module_asset(module: Any, file: str) -> None:
            lifecycle.on_module_asset(module_user_request(module), file)

        def compilation(compilation: Any, *_args: Any) -> None:
            compilation.plugin("module-asset", module_asset)

        def emit(compilation: Any, callback: Callback = None) -> None:
            manifest = lifecycle.on_assets_finalized(snapshot_from_compilation(compilation))
            apply_async = getattr(compilation, "apply_plugins_async", None)
            if callable(apply_async):
                apply_async(AFTER_EMIT_EVENT, manifest, callback)
            elif callback is not None:
                callback()

        plugin = compiler.plugin  # type: ignore[attr-defined]
        plugin("compilation", compilation)
        plugin("emit", emit)
        plugin("before-run", before_run)
        plugin("watch-run", before_run)
        self.logger.debug("Attached to legacy plugin events")


__all__ = ["AFTER_EMIT_EVENT", "LegacyHostAdapter"]

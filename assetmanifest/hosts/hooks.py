"""Adapter for engines exposing tappable ``compiler.hooks``."""

from __future__ import annotations

from typing import Any, Callable, List, Tuple

from ..logging import get_logger
from ..plugin import BuildLifecycle
from .base import PLUGIN_NAME, HostAdapter, module_user_request, snapshot_from_compilation

AFTER_EMIT_HOOK = "manifest_after_emit"


class AfterEmitHook:
    """Waterfall hook carrying the manifest to handlers tapped on the engine.

    A handler that returns a value replaces the manifest seen by the next one.
    """

    def __init__(self) -> None:
        self.taps: List[Tuple[str, Callable[[Any], Any]]] = []

    def tap(self, name: str, handler: Callable[[Any], Any]) -> None:
        self.taps.append((name, handler))

    def call(self, manifest: Any) -> Any:
        for _, handler in self.taps:
            result = handler(manifest)
            if result is not None:
                manifest = result
        return manifest


class HooksHostAdapter(HostAdapter):
    """Hooks: ``run``, ``watch_run``, ``compilation``/``module_asset``, ``emit``."""

    name = "hooks"

    def __init__(self) -> None:
        self.logger = get_logger("hosts.hooks")

    def supports(self, compiler: object) -> bool:
        hooks = getattr(compiler, "hooks", None)
        return hooks is not None and hasattr(hooks, "emit")

    def attach(self, compiler: object, lifecycle: BuildLifecycle) -> None:
        hooks = compiler.hooks  # type: ignore[attr-defined]
        if getattr(hooks, AFTER_EMIT_HOOK, None) is None:
            setattr(hooks, AFTER_EMIT_HOOK, AfterEmitHook())

        def before_run(_compiler: Any, *_args: Any) -> None:
            lifecycle.on_cycle_start()

        def module_asset(module: Any, file: str) -> None:
            lifecycle.on_module_asset(module_user_request(module), file)

        def compilation(compilation: Any, *_args: Any) -> None:
            compilation.hooks.module_asset.tap(PLUGIN_NAME, module_asset)

        def emit(compilation: Any) -> None:
            manifest = lifecycle.on_assets_finalized(snapshot_from_compilation(compilation))
            getattr(hooks, AFTER_EMIT_HOOK).call(manifest)

        hooks.compilation.tap(PLUGIN_NAME, compilation)
        hooks.emit.tap(PLUGIN_NAME, emit)
        hooks.run.tap(PLUGIN_NAME, before_run)
        hooks.watch_run.tap(PLUGIN_NAME, before_run)
        self.logger.debug("Attached %s to compiler hooks", PLUGIN_NAME)


__all__ = ["AFTER_EMIT_HOOK", "AfterEmitHook", "HooksHostAdapter"]

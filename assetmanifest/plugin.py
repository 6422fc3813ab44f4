"""Manifest plugin: ties classification, transforms and emission together."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Protocol

from .builder import build_manifest
from .classifier import classify_files, module_asset_name
from .config import ManifestOptions
from .emission import EmitRegistry, default_registry, resolve_output_file
from .logging import manifest_logger
from .models import BuildSnapshot, RawSource
from .pipeline import run_pipeline

AfterEmitListener = Callable[[Any], None]


class BuildLifecycle(Protocol):
    """Notifications a host adapter forwards from the build engine."""

    def on_cycle_start(self) -> None:
        """A build attempt (initial run or watch re-trigger) is starting."""

    def on_module_asset(self, user_request: str, file: str) -> None:
        """A source module copied ``file`` into the build output."""

    def on_assets_finalized(self, snapshot: BuildSnapshot) -> Any:
        """The build listed its final chunks and assets."""


class ManifestSession:
    """Manifest state for one resolved output file; implements BuildLifecycle."""

    def __init__(
        self,
        options: ManifestOptions,
        output_dir: str,
        *,
        registry: EmitRegistry,
        listeners: List[AfterEmitListener],
    ) -> None:
        self.options = options
        self.output_dir = output_dir
        self.output_file = resolve_output_file(output_dir, options.file_name)
        self.output_name = os.path.relpath(self.output_file, os.path.abspath(output_dir))
        self.registry = registry
        self.module_assets: Dict[str, str] = {}
        self._listeners = listeners
        self.logger = manifest_logger(self.output_name)

    def on_cycle_start(self) -> None:
        pending = self.registry.begin(self.output_file)
        self.logger.debug("cycle started (%d pending)", pending)

    def on_module_asset(self, user_request: str, file: str) -> None:
        self.module_assets[file] = module_asset_name(user_request, file)

    def on_assets_finalized(self, snapshot: BuildSnapshot) -> Any:
        """Compute the manifest; write it only if this is the last pending cycle."""
        is_last = self.registry.finish(self.output_file)
        options = self.options
        public_path = (
            options.public_path if options.public_path is not None else snapshot.public_path
        )

        files = classify_files(snapshot, self.module_assets, options.transform_extensions)
        self.logger.debug("classified %d files", len(files))
        files = run_pipeline(
            files,
            options,
            output_dir=self.output_dir,
            public_path=public_path,
            is_manifest=self.registry.is_tracked,
        )
        manifest = build_manifest(options.seed, files, options.generate)

        if is_last:
            output = options.serialize(manifest)
            snapshot.assets_out[self.output_name] = RawSource(output)
            if options.write_to_file_emit:
                target = Path(self.output_file)
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(output, encoding="utf-8")
                self.logger.info("wrote %s", target)
        else:
            self.logger.debug(
                "skipping write; %s cycle(s) still pending",
                self.registry.count(self.output_file),
            )

        for listener in list(self._listeners):
            listener(manifest)
        return manifest


class ManifestPlugin:
    """Build-engine plugin that emits an asset manifest after each build."""

    def __init__(
        self,
        options: Optional[ManifestOptions] = None,
        *,
        registry: Optional[EmitRegistry] = None,
        **overrides: Any,
    ) -> None:
        base = options or ManifestOptions()
        self.options = base.merged(**overrides) if overrides else base
        self.registry = registry or default_registry()
        self._listeners: List[AfterEmitListener] = []

    def add_listener(self, listener: AfterEmitListener) -> None:
        """Register a callable that receives every computed manifest."""
        self._listeners.append(listener)

    def bind(self, output_dir: str) -> ManifestSession:
        """Create the session for manifests written under ``output_dir``."""
        return ManifestSession(
            self.options,
            output_dir,
            registry=self.registry,
            listeners=self._listeners,
        )

    def apply(self, compiler: object) -> ManifestSession:
        """Attach to a build engine through the first adapter that supports it."""
        from .hosts import select_adapter

        adapter = select_adapter(compiler)
        session = self.bind(adapter.output_path(compiler))
        adapter.attach(compiler, session)
        return session


__all__ = ["AfterEmitListener", "BuildLifecycle", "ManifestPlugin", "ManifestSession"]

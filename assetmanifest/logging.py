"""Logging for manifest builds.

Every component asks for a child of the ``assetmanifest`` logger: the
per-output session, the stats replay, the host adapters and the CLI. Console
lines name the component, and session lines also name the manifest they
belong to, so interleaved watch-mode cycles for several outputs stay readable.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, MutableMapping, Tuple

_LOGGER_NAME = "assetmanifest"
CONSOLE_FORMAT = "[assetmanifest:%(component)s] %(levelname)s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the logger for one component, e.g. ``session`` or ``hosts.hooks``."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


class ManifestLogAdapter(logging.LoggerAdapter):
    """Prefix messages with the manifest output they concern."""

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        return f"{self.extra['manifest']}: {msg}", kwargs


def manifest_logger(manifest: str) -> ManifestLogAdapter:
    return ManifestLogAdapter(get_logger("session"), {"manifest": manifest})


class _ComponentFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        component = record.name[len(_LOGGER_NAME) :].lstrip(".")
        record.component = component or "main"
        return super().format(record)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Route manifest build logs to stderr and, optionally, a log file.

    ``verbose`` turns on DEBUG, which reports every cycle start, every
    classification and every skipped write. Calling this again replaces the
    handlers installed by the previous call.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(_ComponentFormatter(CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        sink = logging.FileHandler(log_file, encoding="utf-8")
        sink.setLevel(level)
        sink.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(sink)

    return logger


__all__ = ["ManifestLogAdapter", "configure_logging", "get_logger", "manifest_logger"]

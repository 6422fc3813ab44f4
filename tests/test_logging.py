"""Tests for assetmanifest.logging."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from assetmanifest.logging import configure_logging, get_logger, manifest_logger


@pytest.fixture(autouse=True)
def restore_package_logger() -> Iterator[None]:
    yield
    logger = logging.getLogger("assetmanifest")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


def test_get_logger_uses_component_hierarchy() -> None:
    assert get_logger().name == "assetmanifest"
    assert get_logger("hosts.hooks").name == "assetmanifest.hosts.hooks"


def test_console_lines_name_the_component() -> None:
    logger = configure_logging(verbose=True)
    configure_logging(verbose=True)

    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    record = get_logger("stats").makeRecord(
        "assetmanifest.stats", logging.DEBUG, __file__, 1, "replayed %d chunks", (2,), None
    )
    line = logger.handlers[0].format(record)
    assert line == "[assetmanifest:stats] DEBUG replayed 2 chunks"


def test_session_messages_carry_manifest_name(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "build.log"
    logger = configure_logging(log_file=log_file)

    manifest_logger("meta/assets.json").info("wrote %s", "dist/meta/assets.json")
    manifest_logger("meta/assets.json").debug("cycle started (1 pending)")
    for handler in logger.handlers:
        handler.flush()

    text = log_file.read_text(encoding="utf-8")
    assert "INFO assetmanifest.session: meta/assets.json: wrote dist/meta/assets.json" in text
    assert "cycle started" not in text

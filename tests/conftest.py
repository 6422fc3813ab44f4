from __future__ import annotations

from typing import Iterator

import pytest

from assetmanifest.emission import reset_default_registry


@pytest.fixture(autouse=True)
def clean_registry() -> Iterator[None]:
    """Each test starts with no tracked manifest outputs."""
    reset_default_registry()
    yield
    reset_default_registry()

"""Tests for manifest folding and serialization."""

from __future__ import annotations

import pytest

from assetmanifest.builder import build_manifest, serialize_manifest
from assetmanifest.models import FileEntry


def test_build_manifest_last_entry_wins() -> None:
    files = [
        FileEntry(path="app.1111.js", name="app.js"),
        FileEntry(path="vendor.js", name="vendor.js"),
        FileEntry(path="app.2222.js", name="app.js"),
    ]

    manifest = build_manifest(None, files)

    assert manifest == {"app.js": "app.2222.js", "vendor.js": "vendor.js"}
    assert list(manifest) == ["app.js", "vendor.js"]


def test_build_manifest_folds_into_copy_of_seed() -> None:
    seed = {"version": "1.2.0"}

    first = build_manifest(seed, [FileEntry(path="a.js", name="a.js")])
    second = build_manifest(seed, [FileEntry(path="b.js", name="b.js")])

    assert first == {"version": "1.2.0", "a.js": "a.js"}
    assert second == {"version": "1.2.0", "b.js": "b.js"}
    assert seed == {"version": "1.2.0"}


def test_build_manifest_reads_mapping_entries() -> None:
    manifest = build_manifest({}, [{"name": "logo.png", "path": "/img/ab12.png"}])

    assert manifest == {"logo.png": "/img/ab12.png"}


def test_build_manifest_generate_overrides_fold() -> None:
    calls = []

    def generate(seed, files):
        calls.append((seed, files))
        return {"files": [file.path for file in files], **seed}

    files = [FileEntry(path="a.js", name="a.js")]
    manifest = build_manifest({"build": 7}, files, generate)

    assert manifest == {"files": ["a.js"], "build": 7}
    assert calls[0][0] == {"build": 7}


def test_build_manifest_propagates_generator_errors() -> None:
    def broken(seed, files):
        raise RuntimeError("bad generator")

    with pytest.raises(RuntimeError, match="bad generator"):
        build_manifest(None, [], broken)


def test_serialize_manifest_uses_two_space_indent() -> None:
    assert serialize_manifest({"main.js": "main.js"}) == '{\n  "main.js": "main.js"\n}'


def test_serialize_manifest_rejects_unserializable_seed() -> None:
    with pytest.raises(TypeError):
        serialize_manifest(build_manifest({"when": object()}, []))

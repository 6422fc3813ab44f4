"""Tests for the transform pipeline stages."""

from __future__ import annotations

import os

from assetmanifest.config import ManifestOptions
from assetmanifest.models import FileEntry
from assetmanifest.pipeline import (
    drop_noise,
    normalize_separators,
    prefix_names,
    prefix_paths,
    run_pipeline,
)


def _never(_path: str) -> bool:
    return False


def test_drop_noise_removes_hot_updates(tmp_path) -> None:
    files = [
        FileEntry(path="main.js", name="main.js"),
        FileEntry(path="main.4e1f.hot-update.js", name="main.4e1f.hot-update.js"),
    ]

    kept = drop_noise(files, str(tmp_path), _never)

    assert [file.path for file in kept] == ["main.js"]


def test_drop_noise_removes_tracked_manifests(tmp_path) -> None:
    tracked = {os.path.abspath(os.path.join(str(tmp_path), "manifest.json"))}
    files = [
        FileEntry(path="manifest.json", name="manifest.json", is_asset=True),
        FileEntry(path="app.js", name="app.js"),
    ]

    kept = drop_noise(files, str(tmp_path), tracked.__contains__)

    assert [file.name for file in kept] == ["app.js"]


def test_prefixes_touch_only_their_field() -> None:
    files = [FileEntry(path="app.3f2a.js", name="app.js")]

    named = prefix_names(files, "assets/")
    public = prefix_paths(named, "https://cdn.example.com/")

    assert named[0].name == "assets/app.js" and named[0].path == "app.3f2a.js"
    assert public[0].name == "assets/app.js"
    assert public[0].path == "https://cdn.example.com/app.3f2a.js"
    assert files[0].name == "app.js"


def test_normalize_separators_is_idempotent() -> None:
    files = [FileEntry(path="static\\img\\a1.png", name="static\\img\\logo.png")]

    once = normalize_separators(files)
    twice = normalize_separators(once)

    assert once[0].path == "static/img/a1.png"
    assert once[0].name == "static/img/logo.png"
    assert twice == once


def test_run_pipeline_applies_user_hooks_in_order(tmp_path) -> None:
    files = [
        FileEntry(path="b.js", name="b.js", is_chunk=True, is_initial=True),
        FileEntry(path="a.js", name="a.js", is_chunk=True, is_initial=True),
        FileEntry(path="lazy.js", name="lazy.js", is_chunk=True),
    ]
    seen = []

    def keep_initial(file: FileEntry) -> bool:
        seen.append(file.path)
        return file.is_initial

    options = ManifestOptions(
        public_path="/static/",
        filter=keep_initial,
        map=lambda file: {"name": file.name.upper(), "path": file.path},
        sort=lambda a, b: (a["name"] > b["name"]) - (a["name"] < b["name"]),
    )

    result = run_pipeline(
        files, options, output_dir=str(tmp_path), public_path="/static/", is_manifest=_never
    )

    # The filter sees public-path-prefixed paths.
    assert seen == ["/static/b.js", "/static/a.js", "/static/lazy.js"]
    assert result == [
        {"name": "A.JS", "path": "/static/a.js"},
        {"name": "B.JS", "path": "/static/b.js"},
    ]


def test_run_pipeline_sort_is_stable(tmp_path) -> None:
    files = [
        FileEntry(path="x1.js", name="x.js"),
        FileEntry(path="y.js", name="y.js"),
        FileEntry(path="x2.js", name="x.js"),
    ]
    options = ManifestOptions(sort=lambda a, b: (a.name > b.name) - (a.name < b.name))

    result = run_pipeline(
        files, options, output_dir=str(tmp_path), public_path=None, is_manifest=_never
    )

    assert [file.path for file in result] == ["x1.js", "x2.js", "y.js"]


def test_run_pipeline_excludes_self_before_base_path(tmp_path) -> None:
    output = os.path.abspath(os.path.join(str(tmp_path), "manifest.json"))
    files = [
        FileEntry(path="manifest.json", name="manifest.json", is_asset=True),
        FileEntry(path="app.js", name="app.js", is_asset=True),
    ]
    options = ManifestOptions(base_path="assets/")

    result = run_pipeline(
        files,
        options,
        output_dir=str(tmp_path),
        public_path=None,
        is_manifest=lambda path: path == output,
    )

    assert [file.name for file in result] == ["assets/app.js"]

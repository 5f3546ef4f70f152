"""Tests for ManifestStore loading/saving and the typed manifest views."""

import json
from pathlib import Path

import pytest

from _helpers import write_manifest
from media_mirror.exceptions import FilesystemError, ParseError
from media_mirror.models.manifest import BackgroundAsset, Manifest
from media_mirror.storage.manifest_store import ManifestStore


def test_load_normalizes_string_background(tmp_path: Path) -> None:
    path = write_manifest(
        tmp_path / "videos.json",
        {"videos": [], "background": "https://cdn.x/bg.png"},
    )

    manifest = ManifestStore().load(path)

    assert isinstance(manifest.background, BackgroundAsset)
    assert manifest.background.src == "https://cdn.x/bg.png"
    assert manifest.background.cached_src is None


def test_load_keeps_video_dicts_untouched(tmp_path: Path) -> None:
    video = {"title": "Intro", "src": "https://cdn.x/a.mp4", "thumbnailTime": 3}
    path = write_manifest(tmp_path / "videos.json", {"videos": [video]})

    manifest = ManifestStore().load(path)

    assert manifest.videos[0].id is None
    assert manifest.videos[0].as_dict() == video
    assert manifest.background is None


@pytest.mark.parametrize("background", [None, ""])
def test_empty_background_is_absent(tmp_path: Path, background) -> None:
    path = write_manifest(
        tmp_path / "videos.json", {"videos": [], "background": background}
    )
    assert ManifestStore().load(path).background is None


def test_missing_file_is_filesystem_error(tmp_path: Path) -> None:
    with pytest.raises(FilesystemError):
        ManifestStore().load(tmp_path / "nope.json")


def test_invalid_json_is_parse_error(tmp_path: Path) -> None:
    path = tmp_path / "videos.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ParseError):
        ManifestStore().load(path)


@pytest.mark.parametrize(
    "document",
    [
        [],
        {"videos": {"id": "v1"}},
        {"videos": ["https://cdn.x/a.mp4"]},
        {"videos": [{"src": 42}]},
        {"videos": [], "background": 7},
        {"videos": [], "background": {"src": ["x"]}},
    ],
)
def test_unexpected_shape_is_parse_error(tmp_path: Path, document) -> None:
    path = write_manifest(tmp_path / "videos.json", document)

    with pytest.raises(ParseError):
        ManifestStore().load(path)


@pytest.mark.parametrize(
    "document",
    [
        {"videos": [{"src": "https://cdn.x/a.mp4", "cachedSrc": None}]},
        {"videos": [{"id": None, "src": "https://cdn.x/a.mp4"}]},
        {"videos": [{"id": "v1", "src": None}]},
        {"videos": None},
        {"videos": [], "background": {"src": None, "cachedSrc": None}},
    ],
)
def test_null_fields_are_accepted(tmp_path: Path, document) -> None:
    path = write_manifest(tmp_path / "videos.json", document)

    manifest = ManifestStore().load(path)

    assert all(video.cached_src is None for video in manifest.videos)
    assert manifest.to_dict() == document


def test_save_preserves_order_and_unknown_fields(tmp_path: Path) -> None:
    original = {
        "title": "Lobby screen",
        "videos": [{"id": "v1", "src": "https://cdn.x/a.mp4", "title": "A"}],
        "background": {"src": "https://cdn.x/bg.png", "opacity": 0.5},
        "footer": {"text": "hello"},
    }
    path = write_manifest(tmp_path / "videos.json", original)
    store = ManifestStore()

    manifest = store.load(path)
    manifest.videos[0].cached_src = "/videos/a.mp4"
    manifest.background.cached_src = "/backgrounds/bg.png"
    store.save(path, manifest)

    text = path.read_text(encoding="utf-8")
    saved = json.loads(text)
    assert list(saved) == ["title", "videos", "background", "footer"]
    assert list(saved["videos"][0]) == ["id", "src", "title", "cachedSrc"]
    assert saved["background"] == {
        "src": "https://cdn.x/bg.png",
        "opacity": 0.5,
        "cachedSrc": "/backgrounds/bg.png",
    }
    assert saved["footer"] == {"text": "hello"}
    assert text.startswith('{\n  "title"')


def test_unmodified_string_background_is_written_back_as_string() -> None:
    manifest = Manifest({"videos": [], "background": "https://cdn.x/bg.png"})
    assert manifest.to_dict()["background"] == "https://cdn.x/bg.png"

    manifest.background.cached_src = "/backgrounds/bg.png"
    assert manifest.to_dict()["background"] == {
        "src": "https://cdn.x/bg.png",
        "cachedSrc": "/backgrounds/bg.png",
    }


def test_save_to_unwritable_location_is_filesystem_error(tmp_path: Path) -> None:
    manifest = Manifest({"videos": []})
    with pytest.raises(FilesystemError):
        ManifestStore().save(tmp_path / "missing" / "videos.json", manifest)

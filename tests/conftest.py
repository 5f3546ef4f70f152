"""
Shared pytest fixtures for the media_mirror test suite.

Provides:
  - a public directory layout (manifest + cache dirs) under tmp_path
  - a resolver bound to that layout
  - an environment scrubbed of object-store credentials
"""

from pathlib import Path

import pytest

from media_mirror.core.resolver import AssetResolver
from media_mirror.models.manifest import AssetKind

OBJECT_STORE_ENV_KEYS = (
    "AWS_REGION",
    "R2_ENDPOINT",
    "AWS_S3_FORCE_PATH_STYLE",
    "R2_BUCKET",
    "AWS_ACCESS_KEY_ID",
    "AWS_SECRET_ACCESS_KEY",
    "MEDIA_MIRROR_PUBLIC_DIR",
    "MEDIA_MIRROR_MANIFEST",
)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def clean_object_store_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keeps the developer's own credentials out of every test."""
    for key in OBJECT_STORE_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def public_dir(tmp_path: Path) -> Path:
    root = tmp_path / "public"
    (root / "videos").mkdir(parents=True)
    (root / "backgrounds").mkdir(parents=True)
    return root


@pytest.fixture
def resolver(public_dir: Path) -> AssetResolver:
    return AssetResolver(
        {
            AssetKind.VIDEOS: public_dir / "videos",
            AssetKind.BACKGROUNDS: public_dir / "backgrounds",
        }
    )

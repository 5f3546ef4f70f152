"""
Typed views over the decoded manifest document.

The views wrap the raw dictionaries rather than copying them, so fields this
application never reads (titles, thumbnail hints, unknown top-level keys) and
their key order survive a rewrite untouched.
"""

from enum import Enum
from typing import Any


class AssetKind(str, Enum):
    """A category of cached media. The value doubles as directory and URL prefix."""

    VIDEOS = "videos"
    BACKGROUNDS = "backgrounds"


class AssetRecord:
    """Common `src` / `cachedSrc` accessors for a manifest asset."""

    kind: AssetKind

    def __init__(self, data: dict[str, Any]):
        self._data = data

    @property
    def src(self) -> str | None:
        value = self._data.get("src")
        return value if isinstance(value, str) else None

    @property
    def cached_src(self) -> str | None:
        return self._data.get("cachedSrc")

    @cached_src.setter
    def cached_src(self, value: str) -> None:
        self._data["cachedSrc"] = value

    def as_dict(self) -> dict[str, Any]:
        return self._data

    @property
    def label(self) -> str:
        """A short name for log lines."""
        return self.src or "<no src>"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._data!r})"


class VideoAsset(AssetRecord):
    kind = AssetKind.VIDEOS

    @property
    def id(self) -> str | None:
        return self._data.get("id")

    @property
    def label(self) -> str:
        return f"{self.id} ({self.src})" if self.id else super().label


class BackgroundAsset(AssetRecord):
    """
    The background image. Stored either as a bare URL string or an object;
    always held here in object form.
    """

    kind = AssetKind.BACKGROUNDS

    def __init__(self, data: dict[str, Any]):
        super().__init__(data)
        self.modified = False

    @classmethod
    def from_raw(cls, raw: Any) -> "BackgroundAsset | None":
        """Normalizes a string-or-object background value. Empty values yield None."""
        if not raw:
            return None
        if isinstance(raw, str):
            return cls({"src": raw})
        if isinstance(raw, dict):
            return cls(dict(raw))
        raise TypeError(f"Unsupported background value: {raw!r}")

    @AssetRecord.cached_src.setter
    def cached_src(self, value: str) -> None:
        self._data["cachedSrc"] = value
        self.modified = True


class Manifest:
    """The persisted root record: a list of videos and an optional background."""

    def __init__(self, raw: dict[str, Any]):
        self._raw = raw
        self.videos = [VideoAsset(item) for item in raw.get("videos") or []]
        self.background = BackgroundAsset.from_raw(raw.get("background"))

    def assets(self) -> list[AssetRecord]:
        """All declared assets in processing order: videos, then the background."""
        assets: list[AssetRecord] = list(self.videos)
        if self.background is not None:
            assets.append(self.background)
        return assets

    def to_dict(self) -> dict[str, Any]:
        """
        Returns the document for persisting. Every top-level field is preserved; the
        background is written in object form only when it changed this run.
        """
        data = dict(self._raw)
        if self.background is not None and self.background.modified:
            data["background"] = self.background.as_dict()
        return data

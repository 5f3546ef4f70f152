"""
Maps remote asset URLs to their deterministic cache locations.
"""

import posixpath
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import unquote, urlsplit

from pathvalidate import ValidationError, validate_filename

from media_mirror.exceptions import MalformedUrlError
from media_mirror.models.manifest import AssetKind


@dataclass(frozen=True)
class ResolvedAsset:
    """Where a remote asset lives once cached."""

    file_name: str
    dest_path: Path
    public_path: str


class AssetResolver:
    """
    Derives cache keys from the percent-decoded basename of an asset URL.

    Two different URLs that share a basename resolve to the same cache entry.
    """

    def __init__(self, cache_dirs: dict[AssetKind, Path]):
        self.cache_dirs = cache_dirs

    def cache_dir(self, kind: AssetKind) -> Path:
        return self.cache_dirs[kind]

    def resolve(self, remote_url: str, kind: AssetKind) -> ResolvedAsset:
        """
        Resolves a remote URL for the given asset kind.

        Raises:
            MalformedUrlError: If the URL cannot be parsed, has an empty path, or
            does not end in a usable file name.
        """
        try:
            path = urlsplit(remote_url).path
        except ValueError as e:
            raise MalformedUrlError(f"Cannot parse URL '{remote_url}': {e}") from e

        # basename() of "/a/b/" is "b", so trailing slashes are ignored.
        file_name = unquote(posixpath.basename(path.rstrip("/")))
        if not file_name:
            raise MalformedUrlError(f"URL has no file name in its path: {remote_url}")
        if file_name in (".", "..") or "/" in file_name or "\x00" in file_name:
            raise MalformedUrlError(
                f"URL path does not decode to a single file name: {remote_url}"
            )
        try:
            validate_filename(file_name, platform="posix")
        except ValidationError as e:
            raise MalformedUrlError(
                f"URL '{remote_url}' decodes to an invalid file name: {e}"
            ) from e

        return ResolvedAsset(
            file_name=file_name,
            dest_path=self.cache_dir(kind) / file_name,
            public_path=f"/{kind.value}/{file_name}",
        )

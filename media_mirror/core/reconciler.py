"""
Reconciles the local cache directories with the assets declared in a manifest.
"""

import asyncio
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from rich.markup import escape

from media_mirror.exceptions import (
    ConfigurationError,
    FilesystemError,
    MalformedUrlError,
    NetworkError,
    StorageError,
)
from media_mirror.models.manifest import AssetKind, AssetRecord, Manifest
from media_mirror.models.stats import ReconcileStats
from media_mirror.utils.path import is_http_url

from .resolver import AssetResolver

log = logging.getLogger(__name__)

# Errors that fail a single asset without aborting the run.
ASSET_ERRORS = (
    MalformedUrlError,
    NetworkError,
    ConfigurationError,
    StorageError,
    OSError,
)


class AssetFetcher(Protocol):
    async def fetch(self, url: str) -> bytes: ...

    async def save(self, data: bytes, destination_path: Path) -> None: ...


@dataclass
class ReconcileResult:
    """What a run accumulated: the per-kind needed sets and the dirty flag."""

    needed: dict[AssetKind, set[Path]] = field(default_factory=dict)
    dirty: bool = False
    stats: ReconcileStats = field(default_factory=ReconcileStats)


class Reconciler:
    """
    Walks the manifest's assets strictly one at a time, in manifest order, then
    sweeps stale files out of every cache directory that is still in use.
    """

    def __init__(
        self,
        resolver: AssetResolver,
        fetcher: AssetFetcher,
        dry_run: bool = False,
    ):
        self.resolver = resolver
        self.fetcher = fetcher
        self.dry_run = dry_run

    async def run(self, manifest: Manifest) -> ReconcileResult:
        """
        Processes every asset, then prunes unreferenced cache files.

        Raises:
            FilesystemError: If a cache directory cannot be listed or pruned.
        """
        result = ReconcileResult(stats=ReconcileStats(dry_run=self.dry_run))

        for asset in manifest.assets():
            await self._process_asset(asset, result)

        for kind, needed in result.needed.items():
            if needed:
                await self._sweep(kind, needed, result.stats)

        result.stats.manifest_changed = result.dirty
        return result

    async def _process_asset(self, asset: AssetRecord, result: ReconcileResult):
        src = asset.src
        if not is_http_url(src):
            log.debug(f"Skipping non-HTTP source: {escape(asset.label)}")
            result.stats.skipped += 1
            return

        try:
            resolved = self.resolver.resolve(src, asset.kind)
        except MalformedUrlError as e:
            log.warning(
                f"[yellow]⚠ Skipping {escape(asset.label)}: {escape(str(e))}[/yellow]"
            )
            result.stats.record_failure(asset.label)
            return

        # Needed regardless of whether the download below succeeds.
        result.needed.setdefault(asset.kind, set()).add(resolved.dest_path)

        if await asyncio.to_thread(resolved.dest_path.exists):
            log.info(f"Already cached: {escape(resolved.public_path)}")
            result.stats.cache_hits += 1
        elif self.dry_run:
            log.info(
                f"[dim]Would download {escape(src)} -> "
                f"{escape(resolved.public_path)}[/dim]"
            )
            return
        else:
            log.info(f"Downloading {escape(src)} -> {escape(resolved.public_path)}")
            try:
                data = await self.fetcher.fetch(src)
                await self.fetcher.save(data, resolved.dest_path)
            except ASSET_ERRORS as e:
                kind_label = (
                    "background" if asset.kind is AssetKind.BACKGROUNDS else "video"
                )
                log.warning(
                    f"[yellow]⚠ Failed to download {kind_label} {escape(src)}: "
                    f"{escape(str(e))}[/yellow]"
                )
                result.stats.record_failure(asset.label)
                return
            result.stats.downloaded += 1
            result.stats.bytes_downloaded += len(data)

        if asset.cached_src != resolved.public_path:
            asset.cached_src = resolved.public_path
            result.dirty = True

    async def _sweep(
        self, kind: AssetKind, needed: set[Path], stats: ReconcileStats
    ) -> None:
        """Deletes regular, non-hidden files in the kind's cache dir not in `needed`."""
        cache_dir = self.resolver.cache_dir(kind)
        try:
            entries = await asyncio.to_thread(_list_regular_files, cache_dir)
        except OSError as e:
            raise FilesystemError(
                f"Cannot list cache directory '{cache_dir}': {e}"
            ) from e

        for entry in entries:
            if entry in needed:
                continue
            public_path = f"/{kind.value}/{entry.name}"
            if self.dry_run:
                log.info(
                    f"[dim]Would remove unused cached file: {escape(public_path)}[/dim]"
                )
                stats.record_removal(kind, entry.name)
                continue
            try:
                await asyncio.to_thread(entry.unlink)
            except OSError as e:
                raise FilesystemError(f"Cannot remove '{entry}': {e}") from e
            log.info(f"Removed unused cached file: {escape(public_path)}")
            stats.record_removal(kind, entry.name)


def _list_regular_files(directory: Path) -> list[Path]:
    """Lists non-hidden regular files (symlinks followed), sorted by name."""
    files = []
    with os.scandir(directory) as it:
        for entry in it:
            if entry.name.startswith("."):
                continue
            if not entry.is_file():
                continue
            files.append(directory / entry.name)
    return sorted(files)

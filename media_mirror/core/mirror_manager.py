"""
The top-level driver: loads the manifest, reconciles the cache, and persists the
manifest when the run changed it.
"""

import asyncio
import logging
import time

from rich.markup import escape

from media_mirror.exceptions import FilesystemError
from media_mirror.media.downloader import Fetcher
from media_mirror.media.object_store import (
    ObjectStoreReader,
    create_object_store_client,
)
from media_mirror.models.config import MirrorConfig
from media_mirror.models.manifest import AssetKind, Manifest
from media_mirror.models.stats import ReconcileStats
from media_mirror.storage.manifest_store import ManifestStore
from media_mirror.utils.path import create_dir

from .reconciler import AssetFetcher, Reconciler
from .resolver import AssetResolver

log = logging.getLogger(__name__)


class MirrorManager:
    """Orchestrates one full reconciliation pass."""

    def __init__(
        self,
        config: MirrorConfig,
        store: ManifestStore | None = None,
        fetcher: AssetFetcher | None = None,
    ):
        """
        Args:
            config: The validated run configuration.
            store: Manifest persistence. Defaults to a ManifestStore.
            fetcher: Asset downloader. When omitted, a Fetcher is built from the
            configured object-store settings and closed after the run.
        """
        self.config = config
        self.store = store or ManifestStore()
        self.fetcher = fetcher
        self.resolver = AssetResolver(
            {
                AssetKind.VIDEOS: config.videos_dir,
                AssetKind.BACKGROUNDS: config.backgrounds_dir,
            }
        )
        self.duration = 0.0

    def _build_fetcher(self) -> Fetcher:
        settings = self.config.object_store
        client = create_object_store_client(settings)
        reader = (
            ObjectStoreReader(client, settings.default_bucket)
            if client is not None
            else None
        )
        return Fetcher(object_store=reader)

    async def _reconcile(self, fetcher: AssetFetcher, manifest: Manifest):
        reconciler = Reconciler(self.resolver, fetcher, dry_run=self.config.dry_run)
        return await reconciler.run(manifest)

    async def run(self) -> ReconcileStats:
        """
        Runs the pass and returns its statistics.

        Raises:
            FilesystemError: If the manifest or a cache directory cannot be read or
            written.
            ParseError: If the manifest is malformed.
        """
        start_time = time.monotonic()
        manifest_path = self.config.manifest_path

        for cache_dir in self.resolver.cache_dirs.values():
            try:
                await asyncio.to_thread(create_dir, cache_dir)
            except OSError as e:
                raise FilesystemError(
                    f"Cannot create cache directory '{cache_dir}': {e}"
                ) from e

        manifest = await asyncio.to_thread(self.store.load, manifest_path)

        if self.fetcher is not None:
            result = await self._reconcile(self.fetcher, manifest)
        else:
            async with self._build_fetcher() as fetcher:
                result = await self._reconcile(fetcher, manifest)

        if not result.dirty:
            log.info(f"No changes to {escape(manifest_path.name)}.")
        elif self.config.dry_run:
            log.info(
                f"[dim]Would update {escape(manifest_path.name)} "
                "with cachedSrc paths.[/dim]"
            )
        else:
            await asyncio.to_thread(self.store.save, manifest_path, manifest)
            log.info(f"Updated {escape(manifest_path.name)} with cachedSrc paths.")

        self.duration = time.monotonic() - start_time
        return result.stats

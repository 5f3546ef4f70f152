"""
Handles the downloading of remote assets: an anonymous HTTP request first, and an
authenticated object-store read when that fails.
"""

import asyncio
import logging
import os
from pathlib import Path

import aiofiles
import aiohttp
from rich.markup import escape

from media_mirror.exceptions import ConfigurationError, NetworkError
from media_mirror.utils.path import partial_path

from .object_store import ObjectStoreReader

log = logging.getLogger(__name__)

ERROR_BODY_PREVIEW_CHARS = 200


class Fetcher:
    """
    A two-stage asset downloader. Each stage is tried at most once per call; there
    are no retries and no timeout policy beyond aiohttp's defaults.
    """

    CHUNK_SIZE = 262144  # 256 KB

    def __init__(
        self,
        object_store: ObjectStoreReader | None = None,
        session: aiohttp.ClientSession | None = None,
    ):
        """
        Args:
            object_store: Reader for the authenticated fallback, or None when no
            credentials are configured.
            session: An existing aiohttp session to use. When omitted, the Fetcher
            creates and owns one.
        """
        self.object_store = object_store
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> "Fetcher":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Gracefully closes the aiohttp session if this Fetcher created it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
            log.debug("Fetcher HTTP session closed.")

    async def fetch(self, url: str) -> bytes:
        """
        Downloads an asset and returns its bytes.

        Raises:
            ConfigurationError: If the HTTP request failed and no object store is
            configured.
            MalformedUrlError: If no object key can be parsed from the URL.
            StorageError: If the authenticated read fails.
        """
        try:
            return await self.fetch_via_http(url)
        except NetworkError as e:
            log.warning(
                f"[yellow]HTTP fetch failed for {escape(url)}: "
                f"{escape(str(e))}[/yellow]"
            )
            if self.object_store is None:
                log.warning(
                    "[yellow]No object store configured; "
                    "skipping authenticated retry.[/yellow]"
                )
                raise ConfigurationError(
                    "Object store client not configured "
                    "(missing credentials or endpoint)."
                ) from e

        log.info("Attempting authenticated object store download...")
        return await self.object_store.read_url(url)

    async def fetch_via_http(self, url: str) -> bytes:
        """Performs the anonymous GET. Non-2xx responses raise NetworkError."""
        session = await self._get_session()
        try:
            async with session.get(url, allow_redirects=True) as response:
                if response.status < 200 or response.status >= 300:
                    try:
                        body = await response.text(errors="replace")
                    except aiohttp.ClientError:
                        body = ""
                    raise NetworkError(
                        url,
                        status=response.status,
                        reason=response.reason or "",
                        body=body[:ERROR_BODY_PREVIEW_CHARS],
                    )
                return await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise NetworkError(url, reason=str(e) or type(e).__name__) from e

    async def save(self, data: bytes, destination_path: Path) -> None:
        """
        Writes downloaded bytes to their cache path. The data lands in a hidden
        partial file first, so a failed write never leaves a truncated cache entry.
        """
        tmp_path = partial_path(destination_path)
        try:
            async with aiofiles.open(tmp_path, "wb") as f:
                for start in range(0, len(data), self.CHUNK_SIZE):
                    await f.write(data[start : start + self.CHUNK_SIZE])
            await asyncio.to_thread(os.replace, tmp_path, destination_path)
        except OSError:
            await asyncio.to_thread(tmp_path.unlink, missing_ok=True)
            raise


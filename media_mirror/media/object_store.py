"""
Authenticated reads from an S3-compatible object store (e.g. Cloudflare R2).
"""

import asyncio
import logging
from typing import Any
from urllib.parse import unquote, urlsplit

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError
from rich.markup import escape

from media_mirror.exceptions import ConfigurationError, MalformedUrlError, StorageError
from media_mirror.models.config import ObjectStoreSettings

log = logging.getLogger(__name__)


def create_object_store_client(settings: ObjectStoreSettings) -> Any | None:
    """
    Builds a boto3 S3 client, or returns None when the endpoint or either
    credential is missing.
    """
    if not settings.is_configured:
        log.debug("Object store credentials incomplete; authenticated fallback off.")
        return None

    addressing_style = "path" if settings.force_path_style else "auto"
    client = boto3.client(
        "s3",
        region_name=settings.region,
        endpoint_url=settings.endpoint_url,
        aws_access_key_id=settings.access_key_id,
        aws_secret_access_key=settings.secret_access_key,
        config=BotoConfig(s3={"addressing_style": addressing_style}),
    )
    log.debug(
        f"Created object store client for {escape(settings.endpoint_url)} "
        f"(region={settings.region}, addressing={addressing_style})"
    )
    return client


def parse_object_location(url: str, default_bucket: str = "") -> tuple[str, str]:
    """
    Splits a URL path into (bucket, key).

    The first path segment is the bucket, except when a default bucket is set and
    the path has a single segment: then that segment is the key. The key is
    percent-decoded.
    """
    try:
        path = urlsplit(url).path
    except ValueError as e:
        raise MalformedUrlError(f"Cannot parse URL '{url}': {e}") from e

    parts = path.lstrip("/").split("/")
    if default_bucket and len(parts) == 1:
        bucket, key = default_bucket, parts[0]
    else:
        bucket, key = parts[0] or default_bucket, "/".join(parts[1:])

    if not bucket:
        raise ConfigurationError(
            "Bucket not specified; set R2_BUCKET or include the bucket in the URL."
        )
    if not key:
        raise MalformedUrlError(f"Unable to parse an object key from {url}")
    return bucket, unquote(key)


class ObjectStoreReader:
    """Reads whole objects through a boto3 client without blocking the event loop."""

    def __init__(self, client: Any, default_bucket: str = ""):
        self.client = client
        self.default_bucket = default_bucket

    async def read_url(self, url: str) -> bytes:
        """Reads the object addressed by an asset URL's path."""
        bucket, key = parse_object_location(url, self.default_bucket)
        return await self.read_object(bucket, key)

    async def read_object(self, bucket: str, key: str) -> bytes:
        try:
            return await asyncio.to_thread(self._read_object_sync, bucket, key)
        except (BotoCoreError, ClientError) as e:
            raise StorageError(
                f"Object store read failed for {bucket}/{key}: {e}"
            ) from e

    def _read_object_sync(self, bucket: str, key: str) -> bytes:
        response = self.client.get_object(Bucket=bucket, Key=key)
        body = response["Body"]
        try:
            return b"".join(body.iter_chunks())
        finally:
            body.close()

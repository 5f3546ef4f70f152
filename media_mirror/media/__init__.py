"""
Media Download Layer.

This package is responsible for retrieving remote assets, over anonymous HTTP
or from an authenticated S3-compatible object store.
"""

from .downloader import Fetcher
from .object_store import ObjectStoreReader, create_object_store_client

__all__ = ["Fetcher", "ObjectStoreReader", "create_object_store_client"]

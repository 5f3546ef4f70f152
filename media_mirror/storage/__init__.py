"""
Storage Layer.

This package handles configuration loading and persistence of the media
manifest.
"""

from .config_manager import ConfigManager
from .manifest_store import ManifestStore

__all__ = ["ConfigManager", "ManifestStore"]

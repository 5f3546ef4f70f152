"""
Data Models Layer.

This package contains the configuration models, the typed manifest views and
the run statistics used throughout the application.
"""

from .config import MirrorConfig, ObjectStoreSettings
from .manifest import AssetKind, BackgroundAsset, Manifest, VideoAsset
from .stats import ReconcileStats

__all__ = [
    "AssetKind",
    "BackgroundAsset",
    "Manifest",
    "MirrorConfig",
    "ObjectStoreSettings",
    "ReconcileStats",
    "VideoAsset",
]

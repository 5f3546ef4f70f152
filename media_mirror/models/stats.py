"""
Dataclass for tracking the statistics of a reconciliation run.
"""

from dataclasses import dataclass, field

from .manifest import AssetKind


@dataclass
class ReconcileStats:
    """Counts what a single pass over the manifest did."""

    cache_hits: int = 0
    downloaded: int = 0
    failed: int = 0
    skipped: int = 0
    removed: int = 0
    bytes_downloaded: int = 0
    manifest_changed: bool = False
    dry_run: bool = False
    failed_assets: list[str] = field(default_factory=list)
    removed_files: dict[AssetKind, list[str]] = field(default_factory=dict)

    def record_failure(self, label: str) -> None:
        self.failed += 1
        self.failed_assets.append(label)

    def record_removal(self, kind: AssetKind, file_name: str) -> None:
        self.removed += 1
        self.removed_files.setdefault(kind, []).append(file_name)

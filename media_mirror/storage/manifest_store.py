"""
Loads and persists the JSON media manifest.
"""

import json
import logging
from pathlib import Path

from rich.markup import escape

from media_mirror.exceptions import FilesystemError, ParseError
from media_mirror.models.manifest import Manifest
from media_mirror.utils.manifest_schema import validate_manifest_schema

log = logging.getLogger(__name__)


class ManifestStore:
    """Handles reading and writing of the manifest file."""

    def load(self, path: Path) -> Manifest:
        """
        Reads, validates and wraps the manifest.

        Raises:
            FilesystemError: If the file cannot be read.
            ParseError: If the file is not JSON or does not match the manifest schema.
        """
        try:
            with open(path, encoding="utf-8") as f:
                raw_text = f.read()
        except OSError as e:
            raise FilesystemError(f"Cannot read manifest '{path}': {e}") from e

        try:
            document = json.loads(raw_text)
        except json.JSONDecodeError as e:
            raise ParseError(f"Manifest '{path}' is not valid JSON: {e}") from e

        is_valid, errors = validate_manifest_schema(document)
        if not is_valid:
            details = "\n".join(f"  {message}" for message in errors)
            raise ParseError(f"Manifest '{path}' has an unexpected shape:\n{details}")

        manifest = Manifest(document)
        log.debug(
            f"Loaded manifest '{escape(str(path))}' with "
            f"{len(manifest.videos)} video(s) and "
            f"{'a' if manifest.background else 'no'} background."
        )
        return manifest

    def save(self, path: Path, manifest: Manifest) -> None:
        """
        Overwrites the manifest file with pretty-printed JSON, preserving key order.

        This is a direct overwrite, not a write-to-temp-then-rename commit.
        """
        payload = json.dumps(manifest.to_dict(), indent=2, ensure_ascii=False)
        try:
            with open(path, "w", encoding="utf-8") as f:
                f.write(payload)
        except OSError as e:
            raise FilesystemError(f"Failed to write manifest '{path}': {e}") from e

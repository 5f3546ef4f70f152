"""
Builds the run configuration from the environment, an optional .env file and
command-line overrides.
"""

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from dotenv import dotenv_values
from pydantic import ValidationError
from rich.markup import escape

from media_mirror.exceptions import ConfigurationError
from media_mirror.models.config import DEFAULT_PUBLIC_DIR, MirrorConfig

log = logging.getLogger(__name__)

# Environment key -> ObjectStoreSettings field
OBJECT_STORE_ENV_KEYS = {
    "AWS_REGION": "region",
    "R2_ENDPOINT": "endpoint_url",
    "AWS_S3_FORCE_PATH_STYLE": "force_path_style",
    "R2_BUCKET": "default_bucket",
    "AWS_ACCESS_KEY_ID": "access_key_id",
    "AWS_SECRET_ACCESS_KEY": "secret_access_key",
}

PUBLIC_DIR_ENV_KEY = "MEDIA_MIRROR_PUBLIC_DIR"
MANIFEST_ENV_KEY = "MEDIA_MIRROR_MANIFEST"


class ConfigManager:
    """Handles all operations related to assembling the application config."""

    def __init__(self, env_file_path: Path | None = None):
        self.env_file_path = env_file_path

    def load_config(
        self,
        cli_options: dict[str, Any] | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> MirrorConfig:
        """
        Loads configuration, applies CLI overrides, and validates it.

        Args:
            cli_options: A dictionary of options provided via the command line.
            environ: The process environment. Defaults to os.environ.

        Returns:
            A validated MirrorConfig object.

        Raises:
            ConfigurationError: If validation fails.
        """
        settings = self._read_environment(os.environ if environ is None else environ)

        # Override with CLI options
        if cli_options:
            settings.update(cli_options)

        try:
            return MirrorConfig(**settings)
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed:\n{e}") from e

    def _read_environment(self, environ: Mapping[str, str]) -> dict[str, Any]:
        """Merges the process environment over the .env file and maps keys."""
        merged: dict[str, str] = {}
        if self.env_file_path is not None:
            if self.env_file_path.is_file():
                file_values = dotenv_values(self.env_file_path)
                merged.update({k: v for k, v in file_values.items() if v is not None})
                log.debug(
                    f"Loaded {len(merged)} value(s) from "
                    f"'{escape(str(self.env_file_path))}'."
                )
            else:
                log.debug(
                    f"No env file at '{escape(str(self.env_file_path))}', skipping."
                )
        # Variables already set in the process win over the file.
        merged.update(environ)

        object_store = {
            field: merged[key]
            for key, field in OBJECT_STORE_ENV_KEYS.items()
            if merged.get(key)
        }
        settings: dict[str, Any] = {
            "public_dir": merged.get(PUBLIC_DIR_ENV_KEY) or DEFAULT_PUBLIC_DIR,
            "object_store": object_store,
        }
        if merged.get(MANIFEST_ENV_KEY):
            settings["manifest_path"] = merged[MANIFEST_ENV_KEY]
        return settings

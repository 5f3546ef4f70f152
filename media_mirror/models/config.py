"""
Pydantic models for application configuration.
Provides validation for all settings.
"""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator, model_validator

DEFAULT_PUBLIC_DIR = "public"
DEFAULT_MANIFEST_NAME = "videos.json"


class ObjectStoreSettings(BaseModel):
    """Settings for the authenticated, S3-compatible object-store fallback."""

    region: str = "auto"
    endpoint_url: str = ""
    force_path_style: bool = True
    default_bucket: str = ""
    access_key_id: str = ""
    secret_access_key: str = Field("", repr=False)

    class Config:
        """Pydantic model configuration."""

        validate_assignment = True
        str_strip_whitespace = True

    @field_validator("endpoint_url")
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        """Ensures the endpoint, when given, is an HTTP(S) URL."""
        if v and not v.lower().startswith(("http://", "https://")):
            raise ValueError(f"Endpoint URL must start with http:// or https://: {v}")
        return v

    @property
    def is_configured(self) -> bool:
        """True when an endpoint and both credential fields are present."""
        return bool(self.endpoint_url and self.access_key_id and self.secret_access_key)


class MirrorConfig(BaseModel):
    """A validated configuration model for one reconciliation run."""

    public_dir: Path = Path(DEFAULT_PUBLIC_DIR)
    manifest_path: Path | None = None
    dry_run: bool = False
    object_store: ObjectStoreSettings = Field(default_factory=ObjectStoreSettings)

    @field_validator("public_dir")
    @classmethod
    def validate_public_dir(cls, v: Path) -> Path:
        if not str(v).strip():
            raise ValueError("Public directory cannot be empty.")
        return v

    @model_validator(mode="after")
    def default_manifest_path(self) -> "MirrorConfig":
        """Places the manifest inside the public directory unless overridden."""
        if self.manifest_path is None:
            self.manifest_path = self.public_dir / DEFAULT_MANIFEST_NAME
        return self

    @property
    def videos_dir(self) -> Path:
        return self.public_dir / "videos"

    @property
    def backgrounds_dir(self) -> Path:
        return self.public_dir / "backgrounds"

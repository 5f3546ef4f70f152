"""
Defines custom exceptions for the application to allow for more specific error handling.
"""


class MirrorError(Exception):
    """Base exception for all application-specific errors."""


class ConfigurationError(MirrorError):
    """
    Raised for issues related to configuration loading or validation, and when the
    authenticated object-store fallback is needed but not configured.
    """


class ParseError(MirrorError):
    """Raised when the manifest is not valid JSON or does not match its schema."""


class FilesystemError(MirrorError):
    """Raised when reading, writing, listing or deleting local files fails."""


class MalformedUrlError(MirrorError):
    """Raised when an asset URL cannot be parsed or has no usable path."""


class NetworkError(MirrorError):
    """Raised when an anonymous HTTP download does not succeed."""

    def __init__(
        self,
        url: str,
        status: int | None = None,
        reason: str = "",
        body: str = "",
    ):
        self.url = url
        self.status = status
        self.reason = reason
        self.body = body
        if status is None:
            message = f"Request failed for {url}: {reason}"
        elif reason:
            message = f"HTTP {status} {reason} for {url}"
        else:
            message = f"HTTP {status} for {url}"
        if body:
            message += f" :: {body}"
        super().__init__(message)


class StorageError(MirrorError):
    """Raised when an authenticated object-store read fails."""

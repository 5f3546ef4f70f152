"""
Utilities for handling file paths and URL parsing.
"""

import re
from pathlib import Path

_HTTP_URL_RE = re.compile(r"^https?://", re.IGNORECASE)


def is_http_url(url: str | None) -> bool:
    """True for absolute http:// or https:// URLs (case-insensitive scheme)."""
    return bool(url) and bool(_HTTP_URL_RE.match(url))


def create_dir(directory_path: Path) -> None:
    """Creates a directory if it does not already exist."""
    directory_path.mkdir(parents=True, exist_ok=True)


def partial_path(dest_path: Path) -> Path:
    """The hidden sibling a download is written to before it is moved into place."""
    return dest_path.with_name(f".{dest_path.name}.part")

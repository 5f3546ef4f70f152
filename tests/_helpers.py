"""
Fakes and file helpers shared by the media_mirror tests.
"""

import json
from pathlib import Path


def write_manifest(path: Path, document) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(document, indent=2), encoding="utf-8")
    return path


def read_manifest(path: Path):
    return json.loads(path.read_text(encoding="utf-8"))


class FakeFetcher:
    """Serves bytes from a dict; URLs mapped to an exception raise it instead."""

    def __init__(self, responses: dict | None = None):
        self.responses = responses or {}
        self.calls: list[str] = []

    async def fetch(self, url: str) -> bytes:
        self.calls.append(url)
        response = self.responses.get(url, b"payload:" + url.encode())
        if isinstance(response, Exception):
            raise response
        return response

    async def save(self, data: bytes, destination_path: Path) -> None:
        destination_path.write_bytes(data)


class FakeStreamingBody:
    def __init__(self, data: bytes, chunk_size: int = 4):
        self.data = data
        self.chunk_size = chunk_size
        self.closed = False

    def iter_chunks(self):
        for start in range(0, len(self.data), self.chunk_size):
            yield self.data[start : start + self.chunk_size]

    def close(self):
        self.closed = True


class FakeS3Client:
    """Records get_object calls and returns canned bodies or raises."""

    def __init__(
        self, data: bytes = b"from-object-store", error: Exception | None = None
    ):
        self.data = data
        self.error = error
        self.calls: list[tuple[str, str]] = []

    def get_object(self, Bucket: str, Key: str):  # noqa: N803
        self.calls.append((Bucket, Key))
        if self.error is not None:
            raise self.error
        return {"Body": FakeStreamingBody(self.data)}


"""Tests for the human-readable formatting helpers."""

import pytest

from media_mirror.utils.formatting import format_duration, format_size, mask_secret


@pytest.mark.parametrize(
    ("num_bytes", "expected"),
    [
        (0, "0 B"),
        (512, "512 B"),
        (1536, "1.5 KB"),
        (145 * 1024 * 1024, "145.0 MB"),
        (3 * 1024**4, "3072.0 GB"),
    ],
)
def test_format_size(num_bytes: int, expected: str) -> None:
    assert format_size(num_bytes) == expected


@pytest.mark.parametrize(
    ("seconds", "expected"),
    [(0.42, "0.4s"), (12.34, "12.3s"), (125, "2m 05s"), (3725, "62m 05s")],
)
def test_format_duration(seconds: float, expected: str) -> None:
    assert format_duration(seconds) == expected


def test_mask_secret_keeps_last_four() -> None:
    assert mask_secret("AKIAEXAMPLE1234") == "***********1234"
    assert mask_secret("abc") == "***"
    assert mask_secret("") == ""

"""
Human-readable renderings for the summary and validation panels.
"""

_SIZE_UNITS = ("B", "KB", "MB", "GB")


def format_size(num_bytes: int) -> str:
    """Renders a byte count, e.g. '512 B' or '145.3 MB'. Caps out at gigabytes."""
    size = float(max(num_bytes, 0))
    for unit in _SIZE_UNITS:
        if size < 1024 or unit == _SIZE_UNITS[-1]:
            break
        size /= 1024
    if unit == "B":
        return f"{int(size)} B"
    return f"{size:.1f} {unit}"


def format_duration(seconds: float) -> str:
    """
    Renders a run time. Sub-minute runs keep one decimal ('0.4s', '12.3s');
    longer runs show whole minutes and zero-padded seconds ('2m 05s').
    """
    if seconds < 60:
        return f"{max(seconds, 0.0):.1f}s"
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes}m {secs:02d}s"


def mask_secret(value: str) -> str:
    """Hides all but the last four characters of a credential."""
    if not value:
        return ""
    if len(value) <= 4:
        return "*" * len(value)
    return "*" * (len(value) - 4) + value[-4:]

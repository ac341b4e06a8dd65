"""IO utilities shared across the codebase."""

from pathlib import Path


def file_non_empty(path: Path, *, min_bytes: int = 1) -> bool:
    """Return True if path is a file with at least min_bytes. Catches OSError."""
    try:
        return path.is_file() and path.stat().st_size >= min_bytes
    except OSError:
        return False


def mask_secret(value: str | None, *, visible: int = 4) -> str:
    """Return value with all but the last `visible` characters replaced by '*'; '(not set)' when empty."""
    if not value:
        return "(not set)"
    if len(value) <= visible:
        return "*" * len(value)
    return "*" * (len(value) - visible) + value[-visible:]

"""Utility functions — payload, object names, metadata, formatting."""

from __future__ import annotations

import random
import string

from s3putbench.config import (
    FILLER_BYTE,
    METADATA_KEY_PREFIX,
    OBJECT_NAME_PREFIX,
)

_LETTERS = string.ascii_lowercase + string.ascii_uppercase


def generate_payload(size: int) -> bytes:
    """Generate the shared upload payload.

    Args:
        size: Number of bytes to generate.

    Returns:
        ``size`` bytes of the filler byte.
    """
    return FILLER_BYTE * size


def object_names(count: int, node: str | None = None) -> list[str]:
    """Build one object name per upload.

    Names are derived from an index starting at 1. When a node
    identifier is given it prefixes every name so that several
    harness instances can write to the same bucket.

    Args:
        count: Number of names (the run's concurrency).
        node: Optional node identifier.

    Returns:
        List of ``count`` distinct object names.
    """
    prefix = f"{node}-" if node else ""
    return [
        f"{prefix}{OBJECT_NAME_PREFIX}{i}"
        for i in range(1, count + 1)
    ]


def random_string(length: int) -> str:
    """Random ASCII letters (non-cryptographic)."""
    return "".join(random.choice(_LETTERS) for _ in range(length))


def generate_metadata(count: int, size: int) -> dict[str, str]:
    """Generate the metadata mapping attached to every object.

    Args:
        count: Number of metadata entries.
        size: Length of each value.

    Returns:
        Mapping of ``test-metadata-key-<i>`` (i in 1..count) to a
        random string of ``size`` letters.
    """
    return {
        f"{METADATA_KEY_PREFIX}-{i}": random_string(size)
        for i in range(1, count + 1)
    }


def format_duration(seconds: float) -> str:
    """Format seconds into a short human-readable duration.

    Args:
        seconds: Duration in seconds.

    Returns:
        Human-readable duration string.
    """
    if seconds < 1:
        return f"{seconds * 1000:.1f}ms"
    elif seconds < 60:
        return f"{seconds:.3f}s"
    elif seconds < 3600:
        return f"{int(seconds) // 60}m{int(seconds) % 60}s"
    else:
        return f"{int(seconds) // 3600}h{int(seconds) % 3600 // 60}m"


def format_bytes(size: float) -> str:
    """Format bytes as human-readable string.

    Args:
        size: Size in bytes.

    Returns:
        Human-readable size string.
    """
    if size < 1024:
        return f"{size}B"
    elif size < 1024**2:
        return f"{size / 1024:.1f}KB"
    elif size < 1024**3:
        return f"{size / 1024**2:.1f}MB"
    else:
        return f"{size / 1024**3:.1f}GB"

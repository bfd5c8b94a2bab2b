"""Core S3 Operations — timed single uploads.

Uploads are never retried: a failed upload is reported as
``UploadError`` and invalidates the benchmark run.

Usage::

    from s3putbench.s3_ops import s3_upload

    latency_ms = s3_upload(client, key, data, metadata)
"""

from __future__ import annotations

import logging
import time
from typing import Any

__all__ = [
    "UploadError",
    "s3_upload",
]


class UploadError(RuntimeError):
    """An upload of a single object failed."""

    def __init__(self, key: str, cause: BaseException) -> None:
        super().__init__(f"upload of {key!r} failed: {cause}")
        self.key = key
        self.cause = cause


def s3_upload(
    client: Any,
    key: str,
    data: bytes,
    metadata: dict[str, str],
    logger: logging.Logger | logging.LoggerAdapter | None = None,
) -> float:
    """Upload one object and measure how long it took.

    Args:
        client: S3 client instance exposing ``upload``.
        key: Object key to write.
        data: Payload bytes.
        metadata: User metadata attached to the object.
        logger: Optional logger for per-object events.

    Returns:
        Upload latency in milliseconds.

    Raises:
        UploadError: If the client raised for any reason.
    """
    t0 = time.perf_counter()
    try:
        client.upload(key, data, metadata)
    except Exception as exc:
        raise UploadError(key, exc) from exc
    latency_ms = (time.perf_counter() - t0) * 1000
    if logger:
        logger.debug(
            f"uploaded {len(data)} bytes in {latency_ms:.1f}ms",
            extra={"key": key},
        )
    return latency_ms

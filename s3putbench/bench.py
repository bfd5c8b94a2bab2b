"""Benchmark driver — concurrent uploads joined by a single barrier.

One upload task per object, each on its own daemon thread, all launched
at once with no worker cap. The driver blocks until every task has
finished. The first failure ends the wait immediately and is re-raised to
the caller; uploads still in flight are abandoned, so a run is either
complete or invalid.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from queue import Queue
from threading import Event, Thread
from typing import Any, Callable

from s3putbench.config import BenchConfig
from s3putbench.logging_setup import get_logger
from s3putbench.s3_client import S3Client
from s3putbench.s3_ops import UploadError, s3_upload
from s3putbench.utils import (
    format_bytes,
    format_duration,
    generate_metadata,
    generate_payload,
    object_names,
)

MIB = 1024 * 1024

# Durations below this count as zero for rate computations
MIN_ELAPSED = 1e-9


def compute_throughput(concurrency: int, elapsed: float) -> float:
    """Objects per second; 0.0 for a zero-length run."""
    if elapsed < MIN_ELAPSED:
        return 0.0
    return concurrency / elapsed


def compute_bandwidth(concurrency: int, size: int, elapsed: float) -> float:
    """MB per second (binary megabytes); 0.0 for a zero-length run."""
    if elapsed < MIN_ELAPSED:
        return 0.0
    return concurrency * size / elapsed / MIB


@dataclass
class RunResult:
    """Outcome of one benchmark run."""

    concurrency: int
    size: int
    meta_count: int
    meta_size: int
    node: str | None
    started_at: datetime
    finished_at: datetime
    elapsed: float
    latencies_ms: list[float] = field(default_factory=list)

    @property
    def total_bytes(self) -> int:
        return self.concurrency * self.size

    @property
    def throughput(self) -> float:
        return compute_throughput(self.concurrency, self.elapsed)

    @property
    def bandwidth(self) -> float:
        return compute_bandwidth(self.concurrency, self.size, self.elapsed)

    def latency_percentiles(self) -> dict[str, float]:
        """Get p50/p95/p99/max upload latency in milliseconds.

        Returns:
            Dict like ``{"p50": 2.1, "p95": 15.3, ...}``, empty when
            no upload ran.
        """
        vals = sorted(self.latencies_ms)
        n = len(vals)
        if not n:
            return {}
        return {
            "p50": vals[int(n * 0.50)],
            "p95": vals[int(min(n * 0.95, n - 1))],
            "p99": vals[int(min(n * 0.99, n - 1))],
            "max": vals[-1],
            "count": n,
        }


def parallel_uploads(
    client_factory: Callable[[], Any],
    names: list[str],
    data: bytes,
    metadata: dict[str, str],
    logger: Any = None,
) -> list[float]:
    """Upload every object concurrently and wait for all of them.

    Each upload runs on its own daemon thread. On the first failure
    the wait ends at once: tasks that have not reached their upload
    skip it, and uploads already in flight are abandoned, so they
    never keep the process alive after the caller gives up.

    Args:
        client_factory: Zero-argument callable returning an S3
            client; called once per task.
        names: Object keys, one task each.
        data: Shared payload (read-only).
        metadata: Shared metadata mapping (read-only).
        logger: Optional logger.

    Returns:
        Per-object upload latencies in milliseconds, in completion
        order.

    Raises:
        UploadError: For the first upload that failed.
    """
    if not names:
        return []

    stop_event = Event()
    done: Queue[tuple[float | None, UploadError | None]] = Queue()

    def upload_one(key: str) -> None:
        if stop_event.is_set():
            done.put((None, None))
            return
        try:
            client = client_factory()
        except Exception as exc:
            done.put((None, UploadError(key, exc)))
            return
        latency: float | None = None
        error: UploadError | None = None
        try:
            if not stop_event.is_set():
                latency = s3_upload(client, key, data, metadata, logger)
        except UploadError as exc:
            error = exc
        finally:
            if hasattr(client, "close"):
                client.close()
        done.put((latency, error))

    for key in names:
        Thread(
            target=upload_one, args=(key,),
            name=f"upload-{key}", daemon=True,
        ).start()

    latencies: list[float] = []
    for _ in names:
        latency, error = done.get()
        if error is not None:
            stop_event.set()
            raise error
        if latency is not None:
            latencies.append(latency)
    return latencies


def run_benchmark(
    config: BenchConfig,
    client_factory: Callable[[], Any] | None = None,
    logger: Any = None,
) -> RunResult:
    """Run one upload benchmark.

    Args:
        config: Run configuration.
        client_factory: Override for client creation (default: an
            ``S3Client`` for ``config``).
        logger: Optional logger (default: context logger for the
            configured node).

    Returns:
        ``RunResult`` with timings for the whole fan-out.

    Raises:
        UploadError: If any upload failed.
    """
    if logger is None:
        logger = get_logger(node=config.node, op_type="PUT")
    if client_factory is None:
        def client_factory() -> Any:
            return S3Client(config)

    data = generate_payload(config.size)
    names = object_names(config.concurrency, config.node)
    metadata = generate_metadata(config.meta_count, config.meta_size)

    logger.info(
        f"Uploading {len(names)} objects of "
        f"{format_bytes(config.size)} to {config.endpoint_url}"
        f"/{config.bucket} ({config.meta_count} metadata entries "
        f"of {config.meta_size} bytes)"
    )

    started_at = datetime.now(timezone.utc)
    t0 = time.perf_counter()
    latencies = parallel_uploads(
        client_factory, names, data, metadata, logger,
    )
    elapsed = time.perf_counter() - t0
    finished_at = datetime.now(timezone.utc)

    logger.info(
        f"All {len(names)} uploads finished in "
        f"{format_duration(elapsed)}"
    )

    return RunResult(
        concurrency=config.concurrency,
        size=config.size,
        meta_count=config.meta_count,
        meta_size=config.meta_size,
        node=config.node,
        started_at=started_at,
        finished_at=finished_at,
        elapsed=elapsed,
        latencies_ms=latencies,
    )

"""Report formatting for a finished run.

Two layouts: a human-readable block, and a single semicolon-delimited
record for log collectors::

    PUT;node-1;10;10485760;1;1024;2.000;5.00;5.00;2024-01-01T00:00:00.000Z;...
"""

from __future__ import annotations

from datetime import datetime, timezone

from s3putbench.bench import RunResult

OP_TAG = "PUT"
RECORD_SEPARATOR = ";"


def format_timestamp(dt: datetime) -> str:
    """UTC timestamp with millisecond precision, e.g. ``...T12:00:00.123Z``."""
    dt = dt.astimezone(timezone.utc)
    return (
        dt.strftime("%Y-%m-%dT%H:%M:%S")
        + f".{dt.microsecond // 1000:03d}Z"
    )


def _format_latency_line(percentiles: dict[str, float]) -> str:
    return (
        f"p50={percentiles['p50']:.0f}ms "
        f"p95={percentiles['p95']:.0f}ms "
        f"p99={percentiles['p99']:.0f}ms "
        f"max={percentiles['max']:.0f}ms"
    )


def format_human(result: RunResult) -> str:
    lines = [
        f"Elapsed time : {result.elapsed:.3f}s",
        f"Speed        : {result.throughput:4.0f} objs/sec",
        f"Bandwidth    : {result.bandwidth:4.0f} MB/sec",
    ]
    percentiles = result.latency_percentiles()
    if percentiles:
        lines.append(f"Latency      : {_format_latency_line(percentiles)}")
    return "\n".join(lines)


def format_record(result: RunResult) -> str:
    fields = [
        OP_TAG,
        result.node or "-",
        str(result.concurrency),
        str(result.size),
        str(result.meta_count),
        str(result.meta_size),
        f"{result.elapsed:.3f}",
        f"{result.throughput:.2f}",
        f"{result.bandwidth:.2f}",
        format_timestamp(result.started_at),
        format_timestamp(result.finished_at),
    ]
    return RECORD_SEPARATOR.join(fields)


FORMATTERS = {
    "human": format_human,
    "record": format_record,
}


def format_result(result: RunResult, output_format: str = "human") -> str:
    """Render ``result`` in the requested layout (``human``/``record``)."""
    return FORMATTERS[output_format](result)

"""Configuration — Defaults and the per-run settings object.

Configuration is loaded from these sources (in priority order):
    1. Environment variables (highest priority)
    2. ``.env`` file in current working directory
    3. ``.env`` file in ``~/.s3putbench/``
    4. Built-in defaults

Per-run values are collected once into an immutable ``BenchConfig``
which is passed explicitly to the driver.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping


# ---------------------------------------------------------------------------
# Stdlib .env file loader (no external dependency)
# ---------------------------------------------------------------------------

def _load_dotenv() -> None:
    """Load KEY=VALUE pairs from a .env file into ``os.environ``.

    Searches the current working directory first, then
    ``~/.s3putbench/``. Only sets variables that are not already
    present in the environment (env vars take priority).
    """
    candidates = [
        Path.cwd() / ".env",
        Path.home() / ".s3putbench" / ".env",
    ]
    for env_path in candidates:
        if env_path.is_file():
            _parse_env_file(env_path)
            return


def _parse_env_file(path: Path) -> None:
    """Parse a .env file and inject into ``os.environ``."""
    try:
        with open(path) as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                if "=" not in line:
                    continue
                key, _, value = line.partition("=")
                key = key.strip()
                value = value.strip()
                if (
                    len(value) >= 2
                    and value[0] == value[-1]
                    and value[0] in ('"', "'")
                ):
                    value = value[1:-1]
                if key not in os.environ:
                    os.environ[key] = value
    except OSError:
        pass


_load_dotenv()


# ---------------------------------------------------------------------------
# Logging Configuration
# ---------------------------------------------------------------------------
DEFAULT_LOG_LEVEL = "INFO"

# ---------------------------------------------------------------------------
# Benchmark Defaults
# ---------------------------------------------------------------------------
DEFAULT_OBJECT_SIZE = 10 * 1024 * 1024
DEFAULT_META_COUNT = 1
DEFAULT_META_SIZE = 1024

# Multipart chunk size handed to the client library
PART_SIZE = 64 * 1024 * 1024

FILLER_BYTE = b"a"
METADATA_KEY_PREFIX = "test-metadata-key"
OBJECT_NAME_PREFIX = "object"

OUTPUT_FORMATS = ("human", "record")

# ---------------------------------------------------------------------------
# S3 Connection
# ---------------------------------------------------------------------------
DEFAULT_REGION = "us-east-1"

S3_BACKEND = os.environ.get("S3PUTBENCH_BACKEND", "boto3")


def _env_flag(value: str | None) -> bool:
    return (value or "").lower() in ("true", "1", "yes")


class ConfigError(ValueError):
    """Raised when the benchmark configuration is missing or invalid."""


@dataclass(frozen=True)
class BenchConfig:
    """Settings for a single benchmark run. Read once, never mutated."""

    concurrency: int
    endpoint: str
    bucket: str
    access_key: str = ""
    secret_key: str = ""
    size: int = DEFAULT_OBJECT_SIZE
    meta_count: int = DEFAULT_META_COUNT
    meta_size: int = DEFAULT_META_SIZE
    node: str | None = None
    region: str = DEFAULT_REGION
    part_size: int = PART_SIZE
    backend: str = S3_BACKEND
    verify_ssl: bool = False
    secure: bool = False
    output_format: str = "human"

    @property
    def endpoint_url(self) -> str:
        """Endpoint as a URL; ``host[:port]`` gets an http(s) scheme."""
        if "://" in self.endpoint:
            return self.endpoint
        scheme = "https" if self.secure else "http"
        return f"{scheme}://{self.endpoint}"


def parse_concurrency(raw: str | None) -> int:
    """Parse the ``CONCURRENCY`` value.

    Args:
        raw: Raw environment value (may be None).

    Returns:
        Number of parallel uploads (zero allowed).

    Raises:
        ConfigError: If the value is missing, not an integer,
            or negative.
    """
    if raw is None or not raw.strip():
        raise ConfigError("CONCURRENCY is not set")
    try:
        value = int(raw.strip())
    except ValueError:
        raise ConfigError(
            f"CONCURRENCY must be an integer, got {raw!r}"
        ) from None
    if value < 0:
        raise ConfigError(
            f"CONCURRENCY must not be negative, got {value}"
        )
    return value


def _non_negative(name: str, value: Any, default: int) -> int:
    if value is None:
        return default
    value = int(value)
    if value < 0:
        raise ConfigError(f"{name} must not be negative, got {value}")
    return value


def load_config(
    args: object,
    environ: Mapping[str, str] | None = None,
) -> BenchConfig:
    """Build the run configuration from CLI args and the environment.

    Args:
        args: Parsed CLI arguments with ``size``, ``meta_count``,
            ``meta_size``, ``output_format`` and ``backend``
            attributes (missing attributes fall back to defaults).
        environ: Environment mapping (default: ``os.environ``).

    Returns:
        Immutable ``BenchConfig``.

    Raises:
        ConfigError: On any missing or invalid setting.
    """
    if environ is None:
        environ = os.environ

    concurrency = parse_concurrency(environ.get("CONCURRENCY"))

    endpoint = environ.get("ENDPOINT", "").strip()
    if not endpoint:
        raise ConfigError("ENDPOINT is not set")
    bucket = environ.get("BUCKET", "").strip()
    if not bucket:
        raise ConfigError("BUCKET is not set")
    # Credentials must be set; an explicitly empty value is accepted
    for name in ("ACCESSKEY", "SECRETKEY"):
        if name not in environ:
            raise ConfigError(f"{name} is not set")

    output_format = getattr(args, "output_format", None) or "human"
    if output_format not in OUTPUT_FORMATS:
        raise ConfigError(f"Unknown output format: {output_format}")

    return BenchConfig(
        concurrency=concurrency,
        endpoint=endpoint,
        bucket=bucket,
        access_key=environ["ACCESSKEY"],
        secret_key=environ["SECRETKEY"],
        size=_non_negative(
            "size", getattr(args, "size", None), DEFAULT_OBJECT_SIZE,
        ),
        meta_count=_non_negative(
            "meta-count",
            getattr(args, "meta_count", None),
            DEFAULT_META_COUNT,
        ),
        meta_size=_non_negative(
            "meta-size",
            getattr(args, "meta_size", None),
            DEFAULT_META_SIZE,
        ),
        node=environ.get("NODE") or None,
        region=environ.get("REGION") or DEFAULT_REGION,
        backend=(
            getattr(args, "backend", None)
            or environ.get("S3PUTBENCH_BACKEND")
            or S3_BACKEND
        ),
        verify_ssl=_env_flag(environ.get("S3_VERIFY_SSL")),
        secure=_env_flag(environ.get("S3_SECURE")),
        output_format=output_format,
    )

"""S3 Client Factory — Creates S3 clients from the run configuration.

Usage::

    from s3putbench.s3_client import S3Client

    client = S3Client(config)                    # Backend from config
    client = S3Client(config, backend="minio")   # Use minio-py
"""

from __future__ import annotations

from typing import Any

from s3putbench.config import BenchConfig

_BACKEND_CACHE: dict[str, type] = {}


def _get_backend_class(backend_name: str) -> type:
    """Resolve backend name to class (cached).

    Args:
        backend_name: Backend identifier.

    Returns:
        The S3 client class for the requested backend.

    Raises:
        ValueError: If the backend name is not recognized.
    """
    name = backend_name.lower()
    if name in _BACKEND_CACHE:
        return _BACKEND_CACHE[name]

    from s3putbench.backends import S3ClientBoto3, S3ClientMinio

    mapping: dict[str, type] = {
        "boto3": S3ClientBoto3,
        "minio": S3ClientMinio,
    }

    cls = mapping.get(name)
    if cls is None:
        available = ", ".join(mapping.keys())
        raise ValueError(
            f"Unknown S3 backend '{name}'. "
            f"Available: {available}"
        )

    _BACKEND_CACHE[name] = cls
    return cls


def S3Client(
    config: BenchConfig,
    *,
    backend: str | None = None,
) -> Any:
    """Create an S3 client for the configured endpoint and bucket.

    Args:
        config: Run configuration.
        backend: Override backend (``boto3``, ``minio``).

    Returns:
        S3 client instance for the selected backend.
    """
    cls = _get_backend_class(backend or config.backend)
    return cls(
        bucket=config.bucket,
        endpoint_url=config.endpoint_url,
        access_key_id=config.access_key,
        secret_access_key=config.secret_key,
        region=config.region,
        part_size=config.part_size,
        verify_ssl=config.verify_ssl,
    )


def get_client_backend_name(config: BenchConfig) -> str:
    """Get the class name of the configured S3 client backend."""
    return _get_backend_class(config.backend).__name__

"""Put command — Run the concurrent upload benchmark.

Reads ``CONCURRENCY``, ``ENDPOINT``, ``BUCKET``, ``ACCESSKEY``,
``SECRETKEY`` and optionally ``NODE`` from the environment, uploads
``CONCURRENCY`` objects in parallel and prints the report to stdout.
"""

from __future__ import annotations

from s3putbench.bench import run_benchmark
from s3putbench.config import load_config
from s3putbench.logging_setup import get_logger, setup_logging
from s3putbench.report import format_result
from s3putbench.s3_client import get_client_backend_name
from s3putbench.s3_ops import UploadError


def cmd_put(args: object) -> int:
    """Run the upload benchmark once.

    Args:
        args: Parsed CLI arguments with ``size``, ``meta_count``,
            ``meta_size``, ``output_format``, ``backend`` and
            ``log_level`` attributes.

    Returns:
        Exit code (0 for success, 1 for a configuration or
        upload error).
    """
    setup_logging(level=getattr(args, "log_level", None))
    logger = get_logger(op_type="PUT")

    try:
        config = load_config(args)
        backend_name = get_client_backend_name(config)
    except ValueError as exc:
        # ConfigError, or an unknown backend name
        logger.error(f"Configuration error: {exc}")
        return 1

    logger = get_logger(node=config.node, op_type="PUT")
    logger.info(
        f"Concurrency: {config.concurrency}, backend: {backend_name}"
    )

    try:
        result = run_benchmark(config, logger=logger)
    except UploadError as exc:
        logger.error(f"Run aborted, results discarded: {exc}")
        return 1

    print(format_result(result, config.output_format), flush=True)
    return 0

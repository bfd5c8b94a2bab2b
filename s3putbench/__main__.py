#!/usr/bin/env python3
"""Entry point for s3putbench package.

Usage::

    CONCURRENCY=16 ENDPOINT=localhost:9000 BUCKET=bench s3putbench
    s3putbench -size 1048576 -meta-count 4 -meta-size 256
    s3putbench --format record
"""

from __future__ import annotations

import argparse
import sys

from s3putbench import __version__
from s3putbench.config import (
    DEFAULT_META_COUNT,
    DEFAULT_META_SIZE,
    DEFAULT_OBJECT_SIZE,
    OUTPUT_FORMATS,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="s3putbench",
        description="Concurrent S3 upload benchmark",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment:
  CONCURRENCY   Number of parallel uploads (required)
  ENDPOINT      S3 endpoint, host[:port] (required)
  BUCKET        Target bucket (required)
  ACCESSKEY     Access key
  SECRETKEY     Secret key
  NODE          Node identifier used to namespace object names

Examples:
  CONCURRENCY=32 ENDPOINT=localhost:9000 BUCKET=bench s3putbench
  s3putbench -size 1048576 -meta-count 4 -meta-size 256
  NODE=node-1 s3putbench --format record
""",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-size", "--size",
        type=int,
        default=DEFAULT_OBJECT_SIZE,
        help="Size of the object to upload in bytes",
    )
    parser.add_argument(
        "-meta-count", "--meta-count",
        dest="meta_count",
        type=int,
        default=DEFAULT_META_COUNT,
        help="Metadata entry count of the object to upload",
    )
    parser.add_argument(
        "-meta-size", "--meta-size",
        dest="meta_size",
        type=int,
        default=DEFAULT_META_SIZE,
        help="Metadata size of each entry of the object to upload",
    )
    parser.add_argument(
        "-format", "--format",
        dest="output_format",
        choices=list(OUTPUT_FORMATS),
        default="human",
        help="Report layout: human-readable or one ';'-delimited record",
    )
    parser.add_argument(
        "--backend",
        type=str,
        default=None,
        choices=["boto3", "minio"],
        help="S3 client backend (default: S3PUTBENCH_BACKEND or boto3)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse CLI arguments and run the benchmark."""
    args = build_parser().parse_args(argv)

    from s3putbench.cli import cmd_put

    try:
        return cmd_put(args) or 0
    except KeyboardInterrupt:
        print("\nInterrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())

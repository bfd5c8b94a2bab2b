from __future__ import annotations

# s3putbench - Concurrent S3 upload benchmark
"""
Usage:
    CONCURRENCY=32 ENDPOINT=localhost:9000 BUCKET=bench \\
        python -m s3putbench -size 1048576 -meta-count 4
"""

__version__ = "1.0.0"

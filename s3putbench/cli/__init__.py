"""CLI commands for s3putbench."""

from __future__ import annotations

from s3putbench.cli.put import cmd_put

__all__ = [
    "cmd_put",
]

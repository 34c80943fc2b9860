"""
Logging helpers for runai-ops.

Provides a single entrypoint `configure_logging`. All log output goes to
stderr so that job names printed on stdout stay pipe-friendly.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(level: int = logging.WARNING, use_rich: bool = True) -> None:
    """Configure application logging.

    Args:
        level: Root logging level (default: logging.WARNING).
        use_rich: If True, install a Rich handler on stderr with a concise
            format (no duplicated level text in messages).
    """
    # Remove any pre-existing handlers to avoid duplicate output
    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)

    root.setLevel(level)

    handler: logging.Handler
    if use_rich:
        handler = RichHandler(
            console=Console(stderr=True),
            show_time=True,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
            enable_link_path=False,
        )
    else:
        handler = logging.StreamHandler()

    handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(handler)

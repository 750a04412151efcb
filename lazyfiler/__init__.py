"""lazyfiler: a two-pane terminal file browser."""

from __future__ import annotations

import logging

__all__ = ["main"]

logging.getLogger(__name__).addHandler(logging.NullHandler())


def main(*args, **kwargs):
    """Lazily import the CLI entrypoint."""
    from .cli import main as _main

    return _main(*args, **kwargs)

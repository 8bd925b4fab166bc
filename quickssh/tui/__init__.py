"""Textual front-end for quickssh.

Only :func:`main` lives here. It pulls in ``quickssh.tui.app`` on first call,
so importing the package does not load Textual.
"""

from __future__ import annotations

from typing import Any

__all__ = ["main"]


def main(*args: Any, **kwargs: Any) -> Any:
    """Entry point used by the ``quickssh`` console script."""
    from .app import main as _app_main

    return _app_main(*args, **kwargs)

"""
Shared CLI utilities for dendroplot commands.

Provides common functionality used across CLI modules.
"""

from __future__ import annotations

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(verbose: bool = False, console: Console | None = None) -> None:
    """Route dendroplot log records through Rich.

    Args:
        verbose: If True, show DEBUG records; otherwise WARNING and above.
        console: Console to write to (stderr console by default).
    """
    package_logger = logging.getLogger("dendroplot")
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(h, RichHandler) for h in package_logger.handlers):
        package_logger.addHandler(
            RichHandler(console=console or Console(stderr=True), show_path=False)
        )


def parse_id_list(raw: str | None) -> list[str]:
    """Split a comma-separated list of node labels.

    Example:
        >>> parse_id_list("A, B,,C")
        ['A', 'B', 'C']
        >>> parse_id_list(None)
        []
    """
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


class QuietConsole:
    """Console wrapper that suppresses output in quiet mode.

    This class wraps a Rich Console instance and conditionally suppresses
    print output when quiet mode is enabled. All other console methods
    are delegated to the wrapped instance.
    """

    def __init__(self, console: Console, quiet: bool = False):
        self._console = console
        self._quiet = quiet

    @property
    def console(self) -> Console:
        """The wrapped Console, for output that must ignore quiet mode."""
        return self._console

    def print(self, *args: Any, **kwargs: Any) -> None:
        """Print to console unless quiet mode is enabled."""
        if not self._quiet:
            self._console.print(*args, **kwargs)

    def __getattr__(self, name: str) -> Any:
        return getattr(self._console, name)

"""Output rendering abstraction for the tomlschema CLI.

File: src/tomlschema/ui/render.py
Last updated: 2026-10-18

Purpose
- Provide a thin rendering layer for CLI output.
- Respect the NO_COLOR environment variable and the --no-color CLI flag.

Functional requirements
- Plain-text rendering must always work; color is only added on a TTY.
- OK/FAIL markers are styled through ``rich``; every other line is plain text.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING

from rich.console import Console
from rich.style import Style
from rich.text import Text

if TYPE_CHECKING:
    from collections.abc import Sequence

_S_OK = Style(color="green", bold=True)
_S_FAIL = Style(color="red", bold=True)


def _color_allowed(no_color_flag: bool) -> bool:
    """Check whether color output should be attempted."""

    if no_color_flag:
        return False
    if os.environ.get("NO_COLOR", ""):
        return False
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _format_status(marker: str, label: str, *, style: Style) -> Text:
    """Build an indented ``MARKER  label`` line with only the marker styled."""

    return Text.assemble("  ", (marker, style), f"  {label}")


class CLIRenderer:
    """Thin CLI output renderer producing deterministic plain text."""

    def __init__(
        self,
        *,
        no_color: bool = False,
        verbose: bool = False,
        console: Console | None = None,
    ) -> None:
        self.verbose = verbose
        self._console = console or Console(
            color_system="auto" if _color_allowed(no_color) else None,
            highlight=False,
            soft_wrap=True,
        )

    def text(self, line: str) -> None:
        """Print a plain text line."""

        print(line)

    def kv(self, key: str, value: object) -> None:
        """Print a key: value pair."""

        print(f"{key}: {value}")

    def items(self, entries: Sequence[str], *, prefix: str = "- ") -> None:
        """Print a bulleted list."""

        for entry in entries:
            print(f"  {prefix}{entry}")

    def trace(self, block: str, *, indent: str = "    ") -> None:
        """Print a multi-line error trace, indented under the previous line."""

        for line in block.splitlines():
            print(f"{indent}{line}")

    def ok(self, label: str) -> None:
        """Print a passing check."""

        self._status("OK", label, _S_OK)

    def fail(self, label: str) -> None:
        """Print a failing check."""

        self._status("FAIL", label, _S_FAIL)

    def _status(self, marker: str, label: str, style: Style) -> None:
        self._console.print(_format_status(marker, label, style=style))


def create_renderer(*, no_color: bool = False, verbose: bool = False) -> CLIRenderer:
    """Create a CLI renderer with the given settings."""

    return CLIRenderer(no_color=no_color, verbose=verbose)


__all__ = ["CLIRenderer", "create_renderer"]

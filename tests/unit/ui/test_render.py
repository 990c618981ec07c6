"""
tomlschema — unit tests for the CLI renderer

File: tests/unit/ui/test_render.py
Last updated: 2026-10-18

Purpose
- Verify OK/FAIL status lines in plain and styled output.

What this test file should cover
- Plain output carries no escape sequences when stdout is not a terminal.
- ``--no-color`` and ``NO_COLOR`` disable styling.
- A terminal console styles only the marker, never the label.
"""

from __future__ import annotations

import io

import pytest
from rich.console import Console

from tomlschema.ui.render import CLIRenderer, create_renderer


def _terminal_console(buffer: io.StringIO) -> Console:
    return Console(file=buffer, force_terminal=True, color_system="standard", width=200)


def test_plain_status_lines(capsys: pytest.CaptureFixture[str]) -> None:
    renderer = create_renderer()

    renderer.ok("a.toml")
    renderer.fail("b.toml (at package.name)")

    assert capsys.readouterr().out == "  OK  a.toml\n  FAIL  b.toml (at package.name)\n"


def test_status_and_plain_lines_keep_their_order(capsys: pytest.CaptureFixture[str]) -> None:
    renderer = create_renderer(no_color=True)

    renderer.text("header")
    renderer.fail("doc.toml (at <root>)")
    renderer.trace("missing required key 'name'")

    assert capsys.readouterr().out == (
        "header\n  FAIL  doc.toml (at <root>)\n    missing required key 'name'\n"
    )


def test_labels_are_not_parsed_as_markup(capsys: pytest.CaptureFixture[str]) -> None:
    create_renderer().fail("deps[0] [bold]x[/bold] :smile:")

    assert capsys.readouterr().out == "  FAIL  deps[0] [bold]x[/bold] :smile:\n"


def test_terminal_console_styles_the_marker() -> None:
    buffer = io.StringIO()
    renderer = CLIRenderer(console=_terminal_console(buffer))

    renderer.ok("a.toml")
    renderer.fail("b.toml")

    output = buffer.getvalue()
    assert "\x1b[" in output
    assert "OK" in output and "FAIL" in output
    assert output.rstrip().endswith("  b.toml")


@pytest.mark.parametrize("flag", [True, False])
def test_no_color_disables_styling(
    flag: bool, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    if not flag:
        monkeypatch.setenv("NO_COLOR", "1")

    create_renderer(no_color=flag).ok("a.toml")

    assert "\x1b[" not in capsys.readouterr().out

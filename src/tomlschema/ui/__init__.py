"""Command-line surface: argument routing and plain-text rendering."""

from tomlschema.ui.cli import CLIError, build_parser, run_cli
from tomlschema.ui.render import CLIRenderer, create_renderer

__all__ = ["CLIError", "CLIRenderer", "build_parser", "create_renderer", "run_cli"]

"""Command-line interface router for tomlschema."""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final, cast

from tomlschema.errors import SchemaError, format_path
from tomlschema.loader import DocumentFormat, load_document, load_schema
from tomlschema.matcher import validate
from tomlschema.model import SchemaNode, TableSchema
from tomlschema.observability.logging import LoggingConfig, setup_logging, shutdown_logging
from tomlschema.settings import LOG_FORMATS, Settings, SettingsError, resolve_settings
from tomlschema.ui.render import CLIRenderer, create_renderer
from tomlschema.values import to_jsonable

_DOCUMENT_FORMATS: Final[tuple[str, ...]] = ("toml", "yaml", "json")


@dataclass(frozen=True, slots=True)
class CLIError(RuntimeError):
    """Typed CLI failure with an explicit process exit code."""

    message: str
    exit_code: int = 2

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class DocumentReport:
    path: str
    error: SchemaError | None
    document: dict[str, Any]

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_payload(self, *, include_document: bool) -> dict[str, object]:
        payload: dict[str, object] = {"path": self.path, "ok": self.ok}
        if self.error is not None:
            payload["error_path"] = format_path(self.error.path)
            payload["error"] = self.error.to_dict()
        if include_document and self.ok:
            payload["document"] = to_jsonable(self.document)
        return payload


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse command router."""

    parser = argparse.ArgumentParser(
        prog="tomlschema",
        description=(
            "tomlschema — validate TOML documents against schemas written in TOML.\n\n"
            "Common workflows:\n"
            "  tomlschema compile schema.toml            Check that a schema compiles\n"
            "  tomlschema check schema.toml data.toml    Validate a document\n"
            "  tomlschema check --complete s.toml d.toml Validate and fill in defaults\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: $TOMLSCHEMA_LOG_LEVEL or WARNING).",
    )
    common.add_argument(
        "--log-format",
        choices=LOG_FORMATS,
        default=None,
        help="Log line format (default: $TOMLSCHEMA_LOG_FORMAT or text).",
    )
    common.add_argument(
        "--no-color",
        action="store_true",
        default=None,
        help="Disable colored output (also respects NO_COLOR env var).",
    )
    common.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        default=False,
        help="Show detailed output.",
    )
    common.add_argument("--json", action="store_true", help="Emit deterministic JSON output")

    subparsers = parser.add_subparsers(dest="command", required=True)

    compile_parser = subparsers.add_parser(
        "compile",
        parents=[common],
        help="Compile a schema document and report construction errors",
    )
    compile_parser.add_argument("schema_path", help="Path to the schema document")
    compile_parser.set_defaults(handler=_cmd_compile)

    check_parser = subparsers.add_parser(
        "check",
        parents=[common],
        help="Validate documents against a schema",
        description=(
            "Validate one or more documents against a schema.\n\n"
            "Examples:\n"
            "  tomlschema check schema.toml Cargo.toml\n"
            "  tomlschema check schema.toml a.toml b.yaml --json\n"
            "  tomlschema check schema.toml data.toml --complete\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    check_parser.add_argument("schema_path", help="Path to the schema document")
    check_parser.add_argument("documents", nargs="+", help="Documents to validate")
    check_parser.add_argument(
        "--complete",
        action="store_true",
        help="Insert schema defaults for absent entries and print the completed document",
    )
    check_parser.add_argument(
        "--format",
        dest="document_format",
        choices=_DOCUMENT_FORMATS,
        default=None,
        help="Document format (default: inferred from the file suffix).",
    )
    check_parser.set_defaults(handler=_cmd_check)

    return parser


def run_cli(argv: Sequence[str] | None = None) -> int:
    """Parse argv, route to a command handler, and return process exit code."""

    parser = build_parser()
    namespace = parser.parse_args(list(argv) if argv is not None else None)
    handler = getattr(namespace, "handler", None)
    if not callable(handler):
        parser.print_help(sys.stderr)
        return 2

    try:
        settings = _resolve_settings(namespace)
    except SettingsError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    setup_logging(LoggingConfig(level=settings.log_level, log_format=settings.log_format))
    try:
        result = handler(namespace, settings)
    except CLIError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return exc.exit_code
    finally:
        shutdown_logging()
    return int(result)


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


def _cmd_compile(args: argparse.Namespace, settings: Settings) -> int:
    schema_path = _require_file(args.schema_path)
    schema = load_schema(schema_path)

    payload: dict[str, object] = {
        "command": "compile",
        "schema": str(schema_path),
        "ok": True,
        "kind": schema.kind.type_name,
    }
    if isinstance(schema, TableSchema):
        payload["entries"] = sorted(schema.entries)
        payload["extras"] = len(schema.extras)

    if _flag(args, "json"):
        _emit_json(payload)
        return 0

    renderer = _get_renderer(args, settings)
    renderer.ok(f"{schema_path} compiled ({schema.kind.type_name} schema)")
    if renderer.verbose and isinstance(schema, TableSchema):
        renderer.items([f"entry {name!r}" for name in sorted(schema.entries)])
        renderer.kv("  extras patterns", len(schema.extras))
    return 0


def _cmd_check(args: argparse.Namespace, settings: Settings) -> int:
    schema = load_schema(_require_file(args.schema_path))
    complete = _flag(args, "complete")
    document_format = cast("DocumentFormat | None", args.document_format)

    reports = [
        _check_document(schema, _require_file(raw), complete, document_format)
        for raw in args.documents
    ]
    exit_code = 0 if all(report.ok for report in reports) else 1

    if _flag(args, "json"):
        _emit_json(
            {
                "command": "check",
                "complete": complete,
                "ok": exit_code == 0,
                "documents": [report.to_payload(include_document=complete) for report in reports],
            }
        )
        return exit_code

    renderer = _get_renderer(args, settings)
    for report in reports:
        if report.error is None:
            renderer.ok(report.path)
            if complete:
                renderer.text(
                    json.dumps(to_jsonable(report.document), indent=2, ensure_ascii=False)
                )
            continue
        renderer.fail(f"{report.path} (at {format_path(report.error.path)})")
        renderer.trace(report.error.render())
    return exit_code


def _check_document(
    schema: SchemaNode,
    path: Path,
    complete: bool,
    document_format: DocumentFormat | None,
) -> DocumentReport:
    document = load_document(path, document_format=document_format)
    result = validate(schema, document, complete=complete)
    return DocumentReport(path=str(path), error=result.error, document=document)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _resolve_settings(args: argparse.Namespace) -> Settings:
    return resolve_settings(
        log_level=getattr(args, "log_level", None),
        log_format=getattr(args, "log_format", None),
        no_color=getattr(args, "no_color", None),
    )


def _require_file(raw: str) -> Path:
    path = Path(raw)
    if not path.is_file():
        raise CLIError(f"file not found: {path}", exit_code=2)
    return path


def _emit_json(payload: Mapping[str, object]) -> None:
    """Emit a JSON payload to stdout with deterministic formatting."""

    print(json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False))


def _get_renderer(args: argparse.Namespace, settings: Settings) -> CLIRenderer:
    return create_renderer(no_color=settings.no_color, verbose=_flag(args, "verbose"))


def _flag(args: argparse.Namespace, name: str) -> bool:
    value = getattr(args, name, False)
    return bool(value)


__all__ = ["CLIError", "DocumentReport", "build_parser", "run_cli"]

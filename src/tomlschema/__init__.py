"""
tomlschema — validate TOML documents against schemas written in TOML.

File: src/tomlschema/__init__.py
Last updated: 2026-10-18

Purpose
- Package root. Re-exports the compile/check API, the schema node classes and
  the error taxonomy.

Functional requirements
- Must not have side effects at import time (no config loading, no logging init).
"""

from __future__ import annotations

from tomlschema.constructor import build_node, compile_schema
from tomlschema.errors import (
    AlternativeMiss,
    ArrayCount,
    ArrayMiss,
    AtKey,
    ExactMiss,
    FloatMiss,
    IntMiss,
    MissingKey,
    RegexMiss,
    SchemaConstructionError,
    SchemaError,
    TableCount,
    TableMiss,
    TypeMismatch,
    format_path,
)
from tomlschema.loader import DocumentLoadError, load_document, load_schema, loads_document
from tomlschema.matcher import MatchResult, check, check_and_complete, is_valid, validate
from tomlschema.model import (
    AlternativeSchema,
    AnythingSchema,
    ArraySchema,
    BoolSchema,
    DateSchema,
    ExactSchema,
    FloatSchema,
    IntegerSchema,
    LiteralEntry,
    SchemaNode,
    StringSchema,
    TableEntry,
    TableSchema,
)
from tomlschema.schema_type import SchemaType

__version__ = "0.1.0"

__all__ = [
    "AlternativeMiss",
    "AlternativeSchema",
    "AnythingSchema",
    "ArrayCount",
    "ArrayMiss",
    "ArraySchema",
    "AtKey",
    "BoolSchema",
    "DateSchema",
    "DocumentLoadError",
    "ExactMiss",
    "ExactSchema",
    "FloatMiss",
    "FloatSchema",
    "IntMiss",
    "IntegerSchema",
    "LiteralEntry",
    "MatchResult",
    "MissingKey",
    "RegexMiss",
    "SchemaConstructionError",
    "SchemaError",
    "SchemaNode",
    "SchemaType",
    "StringSchema",
    "TableCount",
    "TableEntry",
    "TableMiss",
    "TableSchema",
    "TypeMismatch",
    "__version__",
    "build_node",
    "check",
    "check_and_complete",
    "compile_schema",
    "format_path",
    "is_valid",
    "load_document",
    "load_schema",
    "loads_document",
    "validate",
]

"""Module entrypoint for ``python -m tomlschema``."""

from __future__ import annotations

from tomlschema.main import cli_entrypoint

if __name__ == "__main__":
    raise SystemExit(cli_entrypoint())

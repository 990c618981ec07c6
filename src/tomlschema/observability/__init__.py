"""Logging setup for the command line surface."""

from tomlschema.observability.logging import (
    LoggingConfig,
    setup_logging,
    shutdown_logging,
)

__all__ = ["LoggingConfig", "setup_logging", "shutdown_logging"]

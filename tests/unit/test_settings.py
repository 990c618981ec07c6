"""Unit tests for CLI runtime settings resolution."""

from __future__ import annotations

import logging

import pytest

from tomlschema.settings import Settings, SettingsError, resolve_settings


def test_defaults_without_flags_or_environment() -> None:
    settings = resolve_settings(environ={})

    assert settings == Settings(log_level="WARNING", log_format="text", no_color=False)
    assert settings.log_level_number == logging.WARNING


def test_environment_overrides_defaults() -> None:
    settings = resolve_settings(
        environ={
            "TOMLSCHEMA_LOG_LEVEL": "debug",
            "TOMLSCHEMA_LOG_FORMAT": "JSON",
            "TOMLSCHEMA_NO_COLOR": "yes",
        }
    )

    assert settings == Settings(log_level="DEBUG", log_format="json", no_color=True)


def test_flags_override_environment() -> None:
    settings = resolve_settings(
        log_level="error",
        log_format="text",
        no_color=False,
        environ={
            "TOMLSCHEMA_LOG_LEVEL": "debug",
            "TOMLSCHEMA_LOG_FORMAT": "json",
            "TOMLSCHEMA_NO_COLOR": "1",
        },
    )

    assert settings == Settings(log_level="ERROR", log_format="text", no_color=False)


@pytest.mark.parametrize(
    ("kwargs", "environ", "message"),
    [
        ({"log_level": "loud"}, {}, "unsupported log level 'loud'"),
        ({}, {"TOMLSCHEMA_LOG_FORMAT": "xml"}, "unsupported log format 'xml'"),
        ({}, {"TOMLSCHEMA_NO_COLOR": "maybe"}, "TOMLSCHEMA_NO_COLOR must be a boolean"),
    ],
)
def test_invalid_values_raise_settings_error(
    kwargs: dict[str, str], environ: dict[str, str], message: str
) -> None:
    with pytest.raises(SettingsError, match=message):
        resolve_settings(environ=environ, **kwargs)

"""Tests for configuration defaults and env overrides."""

from __future__ import annotations

import logging

from fieldcast.core.config import AppSettings, CasterSettings
from fieldcast.core.logging import configure_logging


def test_default_settings():
    settings = AppSettings()
    assert settings.environment == "dev"
    assert settings.source == "memory"
    assert settings.caster.number_max_chars == 8


def test_caster_settings_env_override(monkeypatch):
    monkeypatch.setenv("FIELDCAST_CASTER_NUMBER_MAX_CHARS", "12")
    assert CasterSettings().number_max_chars == 12


def test_configure_logging_sets_package_level():
    configure_logging(AppSettings(log_level="debug"))
    assert logging.getLogger("fieldcast").level == logging.DEBUG


def test_configure_logging_falls_back_to_info():
    configure_logging(AppSettings(log_level="chatty"))
    assert logging.getLogger("fieldcast").level == logging.INFO

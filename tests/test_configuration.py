"""Mini README: Tests for settings loading and logging helpers."""

from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from stopwise.configuration import StopwiseSettings
from stopwise.logging_utils import set_log_level


def test_settings_read_prefixed_environment(monkeypatch) -> None:
    """Environment variables override defaults and are normalised."""

    monkeypatch.setenv("STOPWISE_DEFAULT_TRAVEL_MODE", "  Walking ")
    monkeypatch.setenv("STOPWISE_OSRM_BASE_URL", "http://localhost:5000/")
    monkeypatch.setenv("STOPWISE_MAX_IMPROVEMENT_PASSES", "12")

    settings = StopwiseSettings()

    assert settings.default_travel_mode == "walking"
    assert settings.osrm_base_url == "http://localhost:5000"
    assert settings.max_improvement_passes == 12
    assert settings.default_dwell_seconds == 900.0


def test_settings_reject_invalid_values() -> None:
    with pytest.raises(ValidationError):
        StopwiseSettings(default_travel_mode="teleport")
    with pytest.raises(ValidationError):
        StopwiseSettings(interface_port=0)
    with pytest.raises(ValidationError):
        StopwiseSettings(straight_line_detour_factor=0.9)


def test_set_log_level_accepts_names() -> None:
    previous = logging.getLogger().level
    try:
        set_log_level("debug")
        assert logging.getLogger().level == logging.DEBUG
        with pytest.raises(ValueError):
            set_log_level("chatty")
    finally:
        logging.getLogger().setLevel(previous)

"""Tests for settings loading and logging setup."""

import logging

import pytest
from pydantic import ValidationError

from pathfinder.config import (
    ObservabilityConfig,
    OverpassConfig,
    RoutingConfig,
    configure_logging,
    get_config,
    reset_config,
)


def test_defaults():
    config = get_config()
    assert config.routing.corridor_threshold_m == 10_000
    assert config.routing.circle_radius_factor == 0.6
    assert config.overpass.base_url.startswith("https://")
    assert "residential" in config.overpass.highway_types


def test_config_is_cached_until_reset(monkeypatch):
    first = get_config()
    monkeypatch.setenv("PF_ROUTING_CORRIDOR_THRESHOLD_M", "20000")
    assert get_config() is first

    reset_config()
    assert get_config().routing.corridor_threshold_m == 20_000


def test_environment_overrides_overpass(monkeypatch):
    monkeypatch.setenv("PF_OVERPASS_BASE_URL", "https://overpass.example.org/api/interpreter")
    monkeypatch.setenv("PF_OVERPASS_MAX_RETRIES", "5")
    config = OverpassConfig()
    assert config.base_url == "https://overpass.example.org/api/interpreter"
    assert config.max_retries == 5


def test_negative_width_rejected():
    with pytest.raises(ValidationError):
        RoutingConfig(corridor_width_m=-1)


def test_configure_logging_sets_root_level():
    root = logging.getLogger()
    previous = root.level
    try:
        configure_logging(ObservabilityConfig(level="debug"))
        assert root.level == logging.DEBUG
    finally:
        root.setLevel(previous)

"""Centralized configuration using Pydantic Settings.

This module provides a single source of truth for routing thresholds,
the geodata service endpoint, map rendering and logging.

Configuration can be overridden via environment variables:
- PF_ROUTING_CORRIDOR_THRESHOLD_M=20000
- PF_ROUTING_MULTI_STOP_MAX_SPAN_M=80000
- PF_OVERPASS_BASE_URL=https://overpass.example.org/api/interpreter
- PF_LOG_LEVEL=DEBUG
- etc.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RoutingConfig(BaseSettings):
    """Routing and fetch-region configuration.

    Environment variables prefixed with PF_ROUTING_.
    """

    model_config = SettingsConfigDict(env_prefix="PF_ROUTING_")

    # endpoints closer than this are fetched as a circle, further as a corridor
    corridor_threshold_m: float = Field(default=10_000.0, gt=0)
    circle_radius_factor: float = Field(default=0.6, gt=0)
    min_circle_radius_m: float = Field(default=250.0, ge=0)
    corridor_width_m: float = Field(default=2_000.0, ge=0)
    corridor_padding_m: float = Field(default=1_000.0, ge=0)

    multi_stop_margin_m: float = Field(default=500.0, ge=0)
    multi_stop_max_span_m: float = Field(default=50_000.0, gt=0)

    median_tolerance: float = Field(default=1e-6, gt=0)
    median_max_iterations: int = Field(default=1000, gt=0)


class OverpassConfig(BaseSettings):
    """Geodata service configuration.

    Environment variables prefixed with PF_OVERPASS_.
    """

    model_config = SettingsConfigDict(env_prefix="PF_OVERPASS_")

    base_url: str = "https://overpass-api.de/api/interpreter"
    timeout_seconds: float = 60.0
    rate_limit_delay: float = 1.0
    max_retries: int = 2
    error_wait_seconds: float = 2.0
    cache_ttl_seconds: Optional[float] = 3600.0
    highway_types: tuple[str, ...] = (
        "motorway",
        "motorway_link",
        "trunk",
        "trunk_link",
        "primary",
        "primary_link",
        "secondary",
        "tertiary",
        "unclassified",
        "residential",
        "living_street",
    )


class RenderingConfig(BaseSettings):
    """Map rendering configuration.

    Environment variables prefixed with PF_MAP_.
    """

    model_config = SettingsConfigDict(env_prefix="PF_MAP_")

    tiles: str = "OpenStreetMap"
    zoom_start: int = 14
    route_color: str = "blue"
    corridor_color: str = "orange"


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Environment variables prefixed with PF_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="PF_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

        config = get_config()
        print(config.routing.corridor_threshold_m)
        print(config.overpass.base_url)

    Environment variables prefixed with PF_.
    """

    model_config = SettingsConfigDict(env_prefix="PF_")

    routing: RoutingConfig = Field(default_factory=RoutingConfig)
    overpass: OverpassConfig = Field(default_factory=OverpassConfig)
    rendering: RenderingConfig = Field(default_factory=RenderingConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache."""
    get_config.cache_clear()


def configure_logging(config: Optional[ObservabilityConfig] = None) -> None:
    """Apply the configured level and format to the root logger."""
    config = config or get_config().observability
    logging.basicConfig(level=config.level.upper(), format=config.format, force=True)

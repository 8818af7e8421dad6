"""Core data models for imagetiler."""

from .models import (
    RESAMPLING_METHODS,
    TILE_SIZE,
    ConfigError,
    RGBAColor,
    Tile,
    TileCoordinate,
    TilerConfig,
    TilingSummary,
    ZoomRange,
)

__all__ = [
    "RESAMPLING_METHODS",
    "TILE_SIZE",
    "ConfigError",
    "RGBAColor",
    "Tile",
    "TileCoordinate",
    "TilerConfig",
    "TilingSummary",
    "ZoomRange",
]

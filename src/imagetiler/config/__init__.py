"""Configuration loading utilities for imagetiler."""

from .loader import ConfigLoader, build_config, load_config, parse_color, parse_zoom_range

__all__ = ["ConfigLoader", "build_config", "load_config", "parse_color", "parse_zoom_range"]

"""Slice a raster image into a zoomable pyramid of square map tiles."""

from __future__ import annotations

import importlib
from typing import Any

__all__ = [
    "CanvasAlignmentError",
    "ConfigError",
    "ImageCodec",
    "ImageDecodeError",
    "PillowCodec",
    "RGBAColor",
    "TileCoordinate",
    "TilePartition",
    "TilerConfig",
    "TilingManager",
    "TilingSummary",
    "ZoomRange",
    "calc_side_length",
    "load_config",
    "native_res_zoom",
    "partition",
    "prepare_canvas",
]

_MODULE_MAP = {
    "CanvasAlignmentError": ("imagetiler.tiling", "CanvasAlignmentError"),
    "ConfigError": ("imagetiler.core", "ConfigError"),
    "ImageCodec": ("imagetiler.codec", "ImageCodec"),
    "ImageDecodeError": ("imagetiler.codec", "ImageDecodeError"),
    "PillowCodec": ("imagetiler.codec", "PillowCodec"),
    "RGBAColor": ("imagetiler.core", "RGBAColor"),
    "TileCoordinate": ("imagetiler.core", "TileCoordinate"),
    "TilePartition": ("imagetiler.tiling", "TilePartition"),
    "TilerConfig": ("imagetiler.core", "TilerConfig"),
    "TilingManager": ("imagetiler.tiling", "TilingManager"),
    "TilingSummary": ("imagetiler.core", "TilingSummary"),
    "ZoomRange": ("imagetiler.core", "ZoomRange"),
    "calc_side_length": ("imagetiler.tiling", "calc_side_length"),
    "load_config": ("imagetiler.config", "load_config"),
    "native_res_zoom": ("imagetiler.tiling", "native_res_zoom"),
    "partition": ("imagetiler.tiling", "partition"),
    "prepare_canvas": ("imagetiler.tiling", "prepare_canvas"),
}


def __getattr__(name: str) -> Any:
    if name not in _MODULE_MAP:
        raise AttributeError(f"module 'imagetiler' has no attribute '{name}'")
    module_name, attr = _MODULE_MAP[name]
    module = importlib.import_module(module_name)
    return getattr(module, attr)

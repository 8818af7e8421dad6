"""Tile generation interfaces for imagetiler."""

from .base import TileGenerator
from .canvas import calc_side_length, native_res_zoom, prepare_canvas
from .manager import TilingManager
from .partition import CanvasAlignmentError, TilePartition, partition

__all__ = [
    "CanvasAlignmentError",
    "TileGenerator",
    "TilePartition",
    "TilingManager",
    "calc_side_length",
    "native_res_zoom",
    "partition",
    "prepare_canvas",
]

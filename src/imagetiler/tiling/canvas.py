"""Square, zoom-aligned canvas preparation."""

from __future__ import annotations

import math
from typing import Any

from imagetiler.codec.base import ImageCodec
from imagetiler.core.models import TILE_SIZE, RGBAColor
from imagetiler.logging import get_logger

LOGGER = get_logger(__name__)


def calc_side_length(width: int, height: int, max_zoom: int) -> int:
    """Return the smallest multiple of ``2 ** max_zoom`` covering the long side.

    A canvas with this side divides evenly into ``2 ** z`` tiles for every
    ``z`` in ``0..max_zoom``.
    """

    if width <= 0 or height <= 0:
        raise ValueError(f"image dimensions must be positive, got {width}x{height}")
    if max_zoom < 0:
        raise ValueError(f"max_zoom must be non-negative, got {max_zoom}")
    long_side = max(width, height)
    factor = 2 ** max_zoom
    return -(-long_side // factor) * factor


def native_res_zoom(width: int, height: int, max_zoom: int, tile_size: int = TILE_SIZE) -> float:
    """Return the zoom at which one tile pixel roughly equals one source pixel.

    The result is fractional; round it up for the sharper level. It is never
    negative.
    """

    side_length = calc_side_length(width, height, max_zoom)
    zoom = math.log2(side_length) - math.log2(tile_size)
    return max(zoom, 0.0)


def prepare_canvas(codec: ImageCodec, image: Any, max_zoom: int, bg_color: RGBAColor) -> Any:
    """Pad ``image`` to the lower right with ``bg_color`` into a square canvas."""

    width, height = codec.size(image)
    side = calc_side_length(width, height, max_zoom)
    canvas = codec.canvas(side, side, bg_color)
    canvas = codec.composite(canvas, image, 0, 0)
    LOGGER.info(
        "prepared canvas",
        extra={"source": f"{width}x{height}", "side": side, "max_zoom": max_zoom},
    )
    return canvas

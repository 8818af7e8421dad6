"""Quadtree partitioning of a prepared canvas into fixed-size tiles."""

from __future__ import annotations

from typing import Any, Iterator

from imagetiler.codec.base import ImageCodec
from imagetiler.core.models import TILE_SIZE, Tile, TileCoordinate, ZoomRange
from imagetiler.logging import get_logger

LOGGER = get_logger(__name__)


class CanvasAlignmentError(ValueError):
    """Raised when a canvas cannot be split evenly at the requested zoom levels."""


class TilePartition:
    """Lazy, restartable sequence of tiles cut from a square canvas.

    Tiles come out ordered by zoom, then column, then row. Every call to
    ``iter()`` starts over from the first tile.
    """

    def __init__(
        self,
        codec: ImageCodec,
        canvas: Any,
        zoom_range: ZoomRange,
        tile_size: int = TILE_SIZE,
    ) -> None:
        if tile_size <= 0:
            raise ValueError(f"tile_size must be positive, got {tile_size}")
        width, height = codec.size(canvas)
        if width != height:
            raise CanvasAlignmentError(f"canvas must be square, got {width}x{height}")
        factor = 2 ** zoom_range.max_zoom
        if width % factor:
            raise CanvasAlignmentError(
                f"canvas side {width} is not divisible by {factor} (zoom {zoom_range.max_zoom})"
            )
        self._codec = codec
        self._canvas = canvas
        self._zoom_range = zoom_range
        self._tile_size = tile_size
        self._side = width

    @property
    def side(self) -> int:
        return self._side

    @property
    def zoom_range(self) -> ZoomRange:
        return self._zoom_range

    @property
    def tile_size(self) -> int:
        return self._tile_size

    def tile_length(self, zoom: int) -> int:
        """Edge length in canvas pixels of one tile at ``zoom``."""

        return self._side // 2 ** zoom

    def coordinates(self) -> Iterator[TileCoordinate]:
        """Yield every tile coordinate without touching pixel data."""

        for zoom in self._zoom_range:
            factor = 2 ** zoom
            for col in range(factor):
                for row in range(factor):
                    yield TileCoordinate(zoom, col, row)

    def __iter__(self) -> Iterator[Tile]:
        current_zoom = None
        for coordinate in self.coordinates():
            if coordinate.zoom != current_zoom:
                current_zoom = coordinate.zoom
                LOGGER.info(
                    "partitioning zoom level",
                    extra={
                        "zoom": current_zoom,
                        "tiles": 4 ** current_zoom,
                        "tile_length": self.tile_length(current_zoom),
                    },
                )
            yield self._cut(coordinate)

    def __len__(self) -> int:
        return sum(4 ** zoom for zoom in self._zoom_range)

    def _cut(self, coordinate: TileCoordinate) -> Tile:
        length = self.tile_length(coordinate.zoom)
        region = self._codec.crop(
            self._canvas,
            coordinate.column * length,
            coordinate.row * length,
            length,
            length,
        )
        image = self._codec.resample(region, self._tile_size, self._tile_size)
        return Tile(coordinate, image)


def partition(
    codec: ImageCodec,
    canvas: Any,
    zoom_range: ZoomRange,
    tile_size: int = TILE_SIZE,
) -> TilePartition:
    """Return the tiles of ``canvas`` for every zoom level in ``zoom_range``."""

    return TilePartition(codec, canvas, zoom_range, tile_size=tile_size)

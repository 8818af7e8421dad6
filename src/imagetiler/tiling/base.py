"""Protocol definitions for tile generation components."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol, Union

from imagetiler.core.models import TileCoordinate, TilingSummary

ImageSource = Union[str, Path, Any]


class TileGenerator(Protocol):
    """Interface for turning one raster into a tile pyramid on disk."""

    def make_tiles(self, source: ImageSource) -> TilingSummary:
        """Write every tile of the configured zoom range and summarize the run."""

    def calc_native_res_zoom(self, source: ImageSource) -> float:
        """Return the zoom level closest to the source's native resolution."""

    def tile_path(self, coordinate: TileCoordinate) -> Path:
        """Return the file path a tile is written to."""

"""Tile pyramid generation from a single source image."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Any, Optional

from imagetiler.codec.base import ImageCodec
from imagetiler.codec.pillow import PillowCodec
from imagetiler.core.models import TileCoordinate, TilerConfig, TilingSummary
from imagetiler.logging import get_logger

from .base import ImageSource, TileGenerator
from .canvas import native_res_zoom, prepare_canvas
from .partition import partition

LOGGER = get_logger(__name__)


class TilingManager(TileGenerator):
    """Pad a source image and write its tiles for every configured zoom level."""

    def __init__(
        self,
        config: TilerConfig,
        *,
        codec: Optional[ImageCodec] = None,
        dry_run: bool = False,
    ) -> None:
        self._config = config
        self._codec = codec or PillowCodec(resampling=config.resampling, quality=config.quality)
        self._dry_run = dry_run
        # fail on an unknown format before any image work
        self._codec.resolve_format(config.format)

    @property
    def config(self) -> TilerConfig:
        return self._config

    def tile_path(self, coordinate: TileCoordinate) -> Path:
        filename = (
            f"{self._config.prefix}_{coordinate.zoom}_{coordinate.column}_{coordinate.row}"
            f".{self._config.format}"
        )
        return self._config.output_dir / filename

    def make_tiles(self, source: ImageSource) -> TilingSummary:
        output_dir = self._config.output_dir
        self._ensure_output_dir(output_dir)

        image = self._load_image(source)
        width, height = self._codec.size(image)
        canvas = prepare_canvas(
            self._codec, image, self._config.max_zoom, self._config.bg_color
        )
        tiles = partition(
            self._codec, canvas, self._config.zoom_levels, tile_size=self._config.tile_size
        )
        summary = TilingSummary(
            output_dir=output_dir,
            source_size=(width, height),
            canvas_side=tiles.side,
            zoom_levels=self._config.zoom_levels,
            dry_run=self._dry_run,
        )

        LOGGER.info(
            "tiling step",
            extra={
                "description": "write tile pyramid",
                "zoom_levels": str(self._config.zoom_levels),
                "tiles": len(tiles),
                "output_dir": str(output_dir),
            },
        )
        start = time.perf_counter()
        if self._dry_run:
            summary.tile_paths.extend(self.tile_path(coordinate) for coordinate in tiles.coordinates())
        else:
            for tile in tiles:
                path = self.tile_path(tile.coordinate)
                path.write_bytes(self._codec.encode(tile.image, self._config.format))
                LOGGER.debug("wrote tile", extra={"path": str(path)})
                summary.tile_paths.append(path)
        duration = time.perf_counter() - start
        LOGGER.info(
            "tiling complete",
            extra={
                "tiles": summary.tile_count,
                "canvas_side": summary.canvas_side,
                "duration_s": f"{duration:.2f}",
                "dry_run": self._dry_run,
            },
        )
        return summary

    def calc_native_res_zoom(self, source: ImageSource) -> float:
        image = self._load_image(source)
        width, height = self._codec.size(image)
        return native_res_zoom(width, height, self._config.max_zoom, self._config.tile_size)

    def _ensure_output_dir(self, output_dir: Path) -> None:
        if output_dir.is_dir():
            return
        if not self._config.autocreate_dirs:
            raise FileNotFoundError(f"Output directory does not exist: {output_dir}")
        if self._dry_run:
            LOGGER.info("would create output directory", extra={"path": str(output_dir)})
            return
        output_dir.mkdir(parents=True, exist_ok=True)
        LOGGER.info("created output directory", extra={"path": str(output_dir)})

    def _load_image(self, source: ImageSource) -> Any:
        if isinstance(source, (str, Path)):
            path = Path(source)
            LOGGER.info("reading source image", extra={"path": str(path)})
            return self._codec.decode(path.read_bytes())
        return source

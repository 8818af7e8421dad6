"""Dataclasses describing core imagetiler entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator, Tuple

TILE_SIZE = 256

RESAMPLING_METHODS = ("nearest", "box", "bilinear", "hamming", "bicubic", "lanczos")


class ConfigError(ValueError):
    """Raised when a configuration value is missing or malformed."""


@dataclass(frozen=True)
class RGBAColor:
    """Background color with 8-bit components; alpha 0 is fully transparent."""

    red: int
    green: int
    blue: int
    alpha: int = 255

    def __post_init__(self) -> None:
        for name in ("red", "green", "blue", "alpha"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f"color component {name} must be an integer, got {value!r}")
            if not 0 <= value <= 255:
                raise ConfigError(f"color component {name} must be within 0..255, got {value}")

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return (self.red, self.green, self.blue, self.alpha)


@dataclass(frozen=True)
class ZoomRange:
    """Inclusive, ascending range of zoom levels."""

    min_zoom: int = 0
    max_zoom: int = 4

    def __post_init__(self) -> None:
        for name in ("min_zoom", "max_zoom"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f"{name} must be an integer, got {value!r}")
            if value < 0:
                raise ConfigError(f"{name} must be non-negative, got {value}")
        if self.min_zoom > self.max_zoom:
            raise ConfigError(
                f"min_zoom ({self.min_zoom}) must not exceed max_zoom ({self.max_zoom})"
            )

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.min_zoom, self.max_zoom + 1))

    def __len__(self) -> int:
        return self.max_zoom - self.min_zoom + 1

    def __str__(self) -> str:
        return f"{self.min_zoom}..{self.max_zoom}"


@dataclass(frozen=True, order=True)
class TileCoordinate:
    """Position of one tile in the pyramid."""

    zoom: int
    column: int
    row: int

    def __post_init__(self) -> None:
        if self.zoom < 0:
            raise ValueError(f"zoom must be non-negative, got {self.zoom}")
        limit = 2 ** self.zoom
        if not (0 <= self.column < limit and 0 <= self.row < limit):
            raise ValueError(
                f"column/row ({self.column}, {self.row}) outside 0..{limit - 1} at zoom {self.zoom}"
            )


@dataclass(frozen=True)
class Tile:
    """A resampled tile image tagged with its coordinate."""

    coordinate: TileCoordinate
    image: Any


@dataclass
class TilerConfig:
    """Options that control a tiling run."""

    output_dir: Path = Path(".")
    format: str = "png"
    zoom_levels: ZoomRange = field(default_factory=ZoomRange)
    bg_color: RGBAColor = field(default_factory=lambda: RGBAColor(255, 255, 255, 0))
    prefix: str = "tile"
    autocreate_dirs: bool = True
    tile_size: int = TILE_SIZE
    resampling: str = "lanczos"
    quality: int = 95

    def __post_init__(self) -> None:
        self.output_dir = Path(self.output_dir)
        if not isinstance(self.zoom_levels, ZoomRange):
            raise ConfigError("zoom_levels must be a ZoomRange")
        if not isinstance(self.bg_color, RGBAColor):
            raise ConfigError("bg_color must be an RGBAColor")
        if not isinstance(self.format, str) or not self.format.strip(". "):
            raise ConfigError(f"format must be a non-empty string, got {self.format!r}")
        self.format = self.format.strip(". ").lower()
        if not isinstance(self.prefix, str) or not self.prefix:
            raise ConfigError("prefix must be a non-empty string")
        if not isinstance(self.autocreate_dirs, bool):
            raise ConfigError(f"autocreate_dirs must be a boolean, got {self.autocreate_dirs!r}")
        if isinstance(self.tile_size, bool) or not isinstance(self.tile_size, int) or self.tile_size <= 0:
            raise ConfigError(f"tile_size must be a positive integer, got {self.tile_size!r}")
        if self.resampling not in RESAMPLING_METHODS:
            raise ConfigError(
                f"resampling must be one of {', '.join(RESAMPLING_METHODS)}, got {self.resampling!r}"
            )
        if isinstance(self.quality, bool) or not isinstance(self.quality, int) or not 1 <= self.quality <= 100:
            raise ConfigError(f"quality must be an integer within 1..100, got {self.quality!r}")

    @property
    def max_zoom(self) -> int:
        return self.zoom_levels.max_zoom


@dataclass
class TilingSummary:
    """Record of what a tiling run produced."""

    output_dir: Path
    source_size: Tuple[int, int]
    canvas_side: int
    zoom_levels: ZoomRange
    tile_paths: list[Path] = field(default_factory=list)
    dry_run: bool = False

    @property
    def tile_count(self) -> int:
        return len(self.tile_paths)

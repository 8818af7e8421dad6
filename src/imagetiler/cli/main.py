"""CLI entry point for imagetiler."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, Iterable

from imagetiler.codec import ImageDecodeError, UnsupportedFormatError
from imagetiler.config import ConfigLoader, build_config
from imagetiler.core.models import RESAMPLING_METHODS, ConfigError, TilerConfig
from imagetiler.logging import LOG_LEVELS, configure_logging, get_logger
from imagetiler.tiling import TilingManager

LOGGER = get_logger(__name__)

_EPILOG = "Example: imagetiler tile -o ./tiles -z 2..5 -b 255,255,255,0 ./input_files/map.jpg"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Image tiler for slippy map viewers")
    parser.add_argument("--log-json", action="store_true", help="Emit logs in JSON format")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default="INFO",
        help="Logging level (default: INFO)",
    )
    parser.add_argument("--log-file", default=None, help="Also write logs to this file")
    subcommands = parser.add_subparsers(dest="command", required=True)

    tile = subcommands.add_parser("tile", help="Cut an image into a tile pyramid", epilog=_EPILOG)
    tile.add_argument(
        "images",
        nargs="+",
        type=Path,
        metavar="IMAGE_FILE",
        help="Source image; only the first file is tiled",
    )
    tile.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Directory where the tiles will be created",
    )
    tile.add_argument(
        "-f",
        "--format",
        default=None,
        help="Tile image format (png, jpg, gif, webp...). Is png by default",
    )
    tile.add_argument(
        "-z",
        "--zoom-levels",
        default=None,
        metavar="ZOOM_RANGE",
        help="Range of zoom levels to generate, as MIN..MAX. Is 0..4 by default",
    )
    tile.add_argument(
        "-b",
        "--background",
        default=None,
        metavar="R,G,B,A",
        help="Background color components (0-255). Is transparent white by default",
    )
    tile.add_argument(
        "-p",
        "--prefix",
        default=None,
        help="Prefix of tile file names. Is 'tile' by default",
    )
    tile.add_argument(
        "--no-autocreate",
        dest="autocreate_dirs",
        action="store_false",
        default=None,
        help="Fail instead of creating a missing output directory",
    )
    tile.add_argument("--tile-size", type=int, default=None, help="Tile edge in pixels (default: 256)")
    tile.add_argument(
        "--resampling",
        choices=RESAMPLING_METHODS,
        default=None,
        help="Resampling filter used to resize tiles (default: lanczos)",
    )
    tile.add_argument(
        "--quality",
        type=int,
        default=None,
        help="Compression quality for JPEG/WEBP tiles (default: 95)",
    )
    tile.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a tiler configuration file (YAML or JSON)",
    )
    tile.add_argument(
        "--dry-run",
        action="store_true",
        help="List the tiles that would be written without writing them",
    )

    native = subcommands.add_parser(
        "native-zoom",
        help="Estimate the zoom level closest to the image's native resolution",
    )
    native.add_argument("image", type=Path, metavar="IMAGE_FILE", help="Source image")
    native.add_argument(
        "-z",
        "--zoom-levels",
        default=None,
        metavar="ZOOM_RANGE",
        help="Zoom range whose maximum determines the padding (default: 0..4)",
    )
    native.add_argument("--tile-size", type=int, default=None, help="Tile edge in pixels (default: 256)")
    return parser


def main(argv: Iterable[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    configure_logging(level=args.log_level, json_logs=args.log_json, log_file=args.log_file)

    if args.command == "tile":
        return _handle_tile(args, parser)
    if args.command == "native-zoom":
        return _handle_native_zoom(args)
    parser.error("Unknown command")
    return 1


def _build_config(payload: Dict[str, Any], *, base_dir: Path | None = None) -> TilerConfig:
    try:
        return build_config(payload, base_dir=base_dir)
    except ConfigError as exc:
        raise SystemExit(f"Invalid configuration: {exc}") from exc


def _resolve_input(path: Path) -> Path:
    resolved = path.resolve()
    if not resolved.is_file():
        raise SystemExit(f"Input image not found: {resolved}")
    return resolved


def _handle_tile(args: argparse.Namespace, parser: argparse.ArgumentParser) -> int:
    payload: Dict[str, Any] = {}
    base_dir: Path | None = None
    if args.config is not None:
        config_path = args.config.resolve()
        if not config_path.exists():
            raise SystemExit(f"Configuration file not found: {config_path}")
        try:
            payload = ConfigLoader().load_payload(config_path)
        except ConfigError as exc:
            raise SystemExit(f"Invalid configuration: {exc}") from exc
        base_dir = config_path.parent

    overrides = {
        "output_dir": args.output.resolve() if args.output is not None else None,
        "format": args.format,
        "zoom_levels": args.zoom_levels,
        "bg_color": args.background,
        "prefix": args.prefix,
        "autocreate_dirs": args.autocreate_dirs,
        "tile_size": args.tile_size,
        "resampling": args.resampling,
        "quality": args.quality,
    }
    payload.update({key: value for key, value in overrides.items() if value is not None})
    if payload.get("output_dir") is None:
        parser.error("No output directory defined (-o, --output)")

    config = _build_config(payload, base_dir=base_dir)
    try:
        manager = TilingManager(config, dry_run=args.dry_run)
    except UnsupportedFormatError as exc:
        raise SystemExit(f"Invalid configuration: {exc}") from exc

    source_path = _resolve_input(args.images[0])
    if len(args.images) > 1:
        LOGGER.warning(
            "ignoring extra input files",
            extra={"ignored": [str(path) for path in args.images[1:]]},
        )

    try:
        summary = manager.make_tiles(source_path)
    except ImageDecodeError as exc:
        LOGGER.error("Unable to read source image %s: %s", source_path, exc)
        return 1

    LOGGER.info(
        "tiling outputs",
        extra={
            "output_dir": str(summary.output_dir),
            "tiles": summary.tile_count,
            "canvas_side": summary.canvas_side,
        },
    )
    if args.dry_run:
        for path in summary.tile_paths:
            print(path)
    return 0


def _handle_native_zoom(args: argparse.Namespace) -> int:
    payload = {"zoom_levels": args.zoom_levels, "tile_size": args.tile_size}
    config = _build_config({key: value for key, value in payload.items() if value is not None})
    source_path = _resolve_input(args.image)
    manager = TilingManager(config, dry_run=True)
    try:
        zoom = manager.calc_native_res_zoom(source_path)
    except ImageDecodeError as exc:
        LOGGER.error("Unable to read source image %s: %s", source_path, exc)
        return 1
    print(f"{zoom:.4f}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())

"""Configuration management with YAML and JSON support."""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from imagetiler.core.models import ConfigError, RGBAColor, TilerConfig, ZoomRange

_ZOOM_RANGE_RE = re.compile(r"^\s*(\d+)\s*(?:\.\.\s*(\d+))?\s*$")
_COLOR_RE = re.compile(r"^\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*$")
_INT_RE = re.compile(r"^\s*[+-]?\d+\s*$")

_FIELDS = frozenset(
    {
        "output_dir",
        "format",
        "zoom_levels",
        "bg_color",
        "prefix",
        "autocreate_dirs",
        "tile_size",
        "resampling",
        "quality",
    }
)


def parse_zoom_range(value: Any) -> ZoomRange:
    """Parse ``"A..B"``, ``"A"``, an integer, a pair or a min/max mapping."""

    if isinstance(value, ZoomRange):
        return value
    if isinstance(value, bool):
        raise ConfigError(f"invalid zoom range: {value!r}")
    if isinstance(value, int):
        return ZoomRange(value, value)
    if isinstance(value, str):
        match = _ZOOM_RANGE_RE.match(value)
        if match is None:
            raise ConfigError(f"invalid zoom range {value!r}; expected MIN..MAX")
        start, finish = match.groups()
        return ZoomRange(int(start), int(finish if finish is not None else start))
    if isinstance(value, (list, tuple)):
        if len(value) != 2:
            raise ConfigError("zoom_levels must contain exactly two values")
        return ZoomRange(_parse_int("min_zoom", value[0]), _parse_int("max_zoom", value[1]))
    if isinstance(value, Mapping):
        missing = {"min_zoom", "max_zoom"} - set(value)
        if missing:
            raise ConfigError("zoom_levels mapping needs integer min_zoom and max_zoom")
        return ZoomRange(
            _parse_int("min_zoom", value["min_zoom"]),
            _parse_int("max_zoom", value["max_zoom"]),
        )
    raise ConfigError(f"invalid zoom range: {value!r}")


def parse_color(value: Any) -> RGBAColor:
    """Parse ``"R,G,B,A"`` or a four-item sequence into an :class:`RGBAColor`."""

    if isinstance(value, RGBAColor):
        return value
    if isinstance(value, str):
        match = _COLOR_RE.match(value)
        if match is None:
            raise ConfigError(f"invalid color {value!r}; expected R,G,B,A")
        return RGBAColor(*(int(component) for component in match.groups()))
    if isinstance(value, (list, tuple)):
        if len(value) != 4:
            raise ConfigError("bg_color must have exactly four components")
        return RGBAColor(*value)
    raise ConfigError(f"invalid color: {value!r}")


def _parse_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in {"true", "yes", "1", "false", "no", "0"}:
        return value.strip().lower() in {"true", "yes", "1"}
    raise ConfigError(f"{key} must be a boolean, got {value!r}")


def _parse_int(key: str, value: Any) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and _INT_RE.match(value):
        return int(value)
    raise ConfigError(f"{key} must be an integer, got {value!r}")


def build_config(payload: Mapping[str, Any], *, base_dir: Optional[Path] = None) -> TilerConfig:
    """Validate a raw option mapping and return a :class:`TilerConfig`.

    Relative ``output_dir`` values are resolved against ``base_dir`` when given.
    """

    unknown = sorted(set(payload) - _FIELDS)
    if unknown:
        raise ConfigError(f"unknown configuration keys: {', '.join(unknown)}")

    data: Dict[str, Any] = {}
    if payload.get("output_dir") is not None:
        output_dir = Path(payload["output_dir"])
        if base_dir is not None and not output_dir.is_absolute():
            output_dir = base_dir / output_dir
        data["output_dir"] = output_dir
    if payload.get("zoom_levels") is not None:
        data["zoom_levels"] = parse_zoom_range(payload["zoom_levels"])
    if payload.get("bg_color") is not None:
        data["bg_color"] = parse_color(payload["bg_color"])
    if payload.get("autocreate_dirs") is not None:
        data["autocreate_dirs"] = _parse_bool("autocreate_dirs", payload["autocreate_dirs"])
    for key in ("tile_size", "quality"):
        if payload.get(key) is not None:
            data[key] = _parse_int(key, payload[key])
    for key in ("format", "prefix", "resampling"):
        if payload.get(key) is not None:
            data[key] = str(payload[key])
    if "resampling" in data:
        data["resampling"] = data["resampling"].lower()
    return TilerConfig(**data)


class ConfigLoader:
    """Load tiler configuration files in YAML or JSON format."""

    def __init__(self, base_dir: Optional[Path] = None) -> None:
        self._base_dir = base_dir or Path.cwd()

    def load(self, path: Path | str) -> TilerConfig:
        """Parse a configuration file and return a validated dataclass."""

        config_path = self._resolve_path(Path(path))
        payload = self.load_payload(config_path)
        return build_config(payload, base_dir=config_path.parent)

    def load_payload(self, path: Path | str) -> Dict[str, Any]:
        """Return the raw mapping stored in a configuration file."""

        config_path = self._resolve_path(Path(path))
        suffix = config_path.suffix.lower()
        if suffix in {".yaml", ".yml"}:
            with config_path.open("r", encoding="utf-8") as handle:
                try:
                    payload = yaml.safe_load(handle)
                except yaml.YAMLError as exc:
                    raise ConfigError(f"invalid YAML in {config_path}: {exc}") from exc
        elif suffix == ".json":
            with config_path.open("r", encoding="utf-8") as handle:
                try:
                    payload = json.load(handle)
                except json.JSONDecodeError as exc:
                    raise ConfigError(f"invalid JSON in {config_path}: {exc}") from exc
        else:
            raise ConfigError(f"Unsupported configuration format: {suffix}")
        if payload is None:
            payload = {}
        if not isinstance(payload, dict):
            raise ConfigError(f"configuration root must be a mapping: {config_path}")
        return payload

    def _resolve_path(self, path: Path) -> Path:
        if path.is_absolute():
            return path
        return (self._base_dir / path).resolve()


def load_config(path: Path | str, *, base_dir: Optional[Path] = None) -> TilerConfig:
    """Convenience wrapper around :class:`ConfigLoader`."""

    loader = ConfigLoader(base_dir=base_dir)
    return loader.load(path)

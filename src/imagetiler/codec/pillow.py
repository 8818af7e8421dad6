"""Image codec backed by Pillow."""

from __future__ import annotations

import io
from typing import Tuple

from PIL import Image, UnidentifiedImageError

from imagetiler.core.models import RESAMPLING_METHODS, RGBAColor
from imagetiler.logging import get_logger

from .base import ImageCodec, ImageDecodeError, UnsupportedFormatError

LOGGER = get_logger(__name__)

_RESAMPLING_FILTERS = {
    "nearest": Image.Resampling.NEAREST,
    "box": Image.Resampling.BOX,
    "bilinear": Image.Resampling.BILINEAR,
    "hamming": Image.Resampling.HAMMING,
    "bicubic": Image.Resampling.BICUBIC,
    "lanczos": Image.Resampling.LANCZOS,
}

# Encoders that cannot store an alpha channel.
_OPAQUE_FORMATS = {"JPEG", "BMP", "PPM"}
_QUALITY_FORMATS = {"JPEG", "WEBP"}


class PillowCodec(ImageCodec):
    """Decode, crop, resample and encode images with Pillow."""

    def __init__(self, *, resampling: str = "lanczos", quality: int = 95) -> None:
        if resampling not in RESAMPLING_METHODS:
            raise ValueError(f"Unsupported resampling method: {resampling}")
        self._resampling = resampling
        self._filter = _RESAMPLING_FILTERS[resampling]
        self._quality = quality

    @property
    def resampling(self) -> str:
        return self._resampling

    def decode(self, data: bytes) -> Image.Image:
        try:
            image = Image.open(io.BytesIO(data))
            image.load()
        except (UnidentifiedImageError, OSError, SyntaxError) as exc:
            raise ImageDecodeError(f"Unable to decode image: {exc}") from exc
        return image

    def resolve_format(self, format: str) -> str:
        extension = "." + format.strip(". ").lower()
        name = Image.registered_extensions().get(extension)
        if name is None or name not in Image.SAVE:
            raise UnsupportedFormatError(f"Unsupported tile format: {format}")
        return name

    def encode(self, image: Image.Image, format: str) -> bytes:
        name = self.resolve_format(format)
        params = {}
        if name in _QUALITY_FORMATS:
            params["quality"] = self._quality
        if name in _OPAQUE_FORMATS and image.mode not in {"RGB", "L"}:
            LOGGER.debug("dropping alpha channel", extra={"format": name, "mode": image.mode})
            image = image.convert("RGB")
        buffer = io.BytesIO()
        image.save(buffer, format=name, **params)
        return buffer.getvalue()

    def size(self, image: Image.Image) -> Tuple[int, int]:
        return image.size

    def crop(self, image: Image.Image, x: int, y: int, width: int, height: int) -> Image.Image:
        return image.crop((x, y, x + width, y + height))

    def resample(self, image: Image.Image, width: int, height: int) -> Image.Image:
        if image.size == (width, height):
            return image.copy()
        return image.resize((width, height), resample=self._filter)

    def canvas(self, width: int, height: int, color: RGBAColor) -> Image.Image:
        return Image.new("RGBA", (width, height), color.as_tuple())

    def composite(self, base: Image.Image, overlay: Image.Image, x: int, y: int) -> Image.Image:
        if overlay.mode != base.mode:
            overlay = overlay.convert(base.mode)
        # paste without a mask copies pixels verbatim, alpha included
        base.paste(overlay, (x, y))
        return base

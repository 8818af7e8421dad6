"""Protocol definitions for image codec components."""

from __future__ import annotations

from typing import Any, Protocol, Tuple

from imagetiler.core.models import RGBAColor


class ImageDecodeError(RuntimeError):
    """Raised when source bytes cannot be decoded into an image."""


class UnsupportedFormatError(ValueError):
    """Raised when an output format is not known to the codec."""


class ImageCodec(Protocol):
    """Interface for decoding, transforming and encoding raster images."""

    def decode(self, data: bytes) -> Any:
        """Return an image decoded from encoded bytes."""

    def encode(self, image: Any, format: str) -> bytes:
        """Return the image encoded in the requested format."""

    def resolve_format(self, format: str) -> str:
        """Return the codec's canonical name for a format or raise UnsupportedFormatError."""

    def size(self, image: Any) -> Tuple[int, int]:
        """Return ``(width, height)`` in pixels."""

    def crop(self, image: Any, x: int, y: int, width: int, height: int) -> Any:
        """Return the rectangle with top-left ``(x, y)`` as a new image."""

    def resample(self, image: Any, width: int, height: int) -> Any:
        """Return the image resized to exactly ``width`` by ``height`` pixels."""

    def canvas(self, width: int, height: int, color: RGBAColor) -> Any:
        """Return a new image filled with ``color``."""

    def composite(self, base: Any, overlay: Any, x: int, y: int) -> Any:
        """Copy ``overlay`` onto ``base`` at ``(x, y)`` and return ``base``."""

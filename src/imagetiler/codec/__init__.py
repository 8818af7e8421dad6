"""Image codec interfaces for imagetiler."""

from .base import ImageCodec, ImageDecodeError, UnsupportedFormatError
from .pillow import PillowCodec

__all__ = ["ImageCodec", "ImageDecodeError", "PillowCodec", "UnsupportedFormatError"]

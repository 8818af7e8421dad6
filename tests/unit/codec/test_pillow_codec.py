import io

import pytest
from PIL import Image

from imagetiler.codec import ImageDecodeError, PillowCodec, UnsupportedFormatError
from imagetiler.core.models import RGBAColor


@pytest.fixture()
def codec() -> PillowCodec:
    return PillowCodec()


def _png_bytes(width: int = 10, height: int = 10) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), (12, 34, 56)).save(buffer, format="PNG")
    return buffer.getvalue()


def test_decode_reads_png(codec: PillowCodec) -> None:
    image = codec.decode(_png_bytes(12, 7))

    assert codec.size(image) == (12, 7)


def test_decode_rejects_garbage(codec: PillowCodec) -> None:
    with pytest.raises(ImageDecodeError):
        codec.decode(b"\x00\x01 definitely not an image")


def test_decode_rejects_truncated_png(codec: PillowCodec) -> None:
    data = _png_bytes(64, 64)

    with pytest.raises(ImageDecodeError):
        codec.decode(data[: len(data) // 2])


@pytest.mark.parametrize("name,expected", [("png", "PNG"), ("jpg", "JPEG"), ("JPEG", "JPEG"), (".gif", "GIF")])
def test_resolve_format(codec: PillowCodec, name: str, expected: str) -> None:
    assert codec.resolve_format(name) == expected


def test_resolve_format_rejects_unknown(codec: PillowCodec) -> None:
    with pytest.raises(UnsupportedFormatError):
        codec.resolve_format("bogus")


def test_encode_jpeg_flattens_alpha(codec: PillowCodec) -> None:
    image = Image.new("RGBA", (8, 8), (255, 255, 255, 0))

    data = codec.encode(image, "jpg")

    with Image.open(io.BytesIO(data)) as decoded:
        assert decoded.format == "JPEG"
        assert decoded.mode == "RGB"


def test_encode_png_keeps_alpha(codec: PillowCodec) -> None:
    image = Image.new("RGBA", (4, 4), (9, 8, 7, 0))

    decoded = codec.decode(codec.encode(image, "png"))

    assert decoded.mode == "RGBA"
    assert decoded.getpixel((0, 0)) == (9, 8, 7, 0)


def test_encode_is_deterministic(codec: PillowCodec) -> None:
    image = Image.effect_noise((32, 32), 40).convert("RGBA")

    assert codec.encode(image, "png") == codec.encode(image, "png")


def test_crop_uses_origin_and_size(codec: PillowCodec) -> None:
    image = Image.new("L", (20, 20), 0)
    image.putpixel((5, 6), 200)

    region = codec.crop(image, 5, 6, 4, 3)

    assert region.size == (4, 3)
    assert region.getpixel((0, 0)) == 200


def test_resample_same_size_returns_copy(codec: PillowCodec) -> None:
    image = Image.new("RGB", (16, 16), (1, 2, 3))

    result = codec.resample(image, 16, 16)

    assert result is not image
    assert result.tobytes() == image.tobytes()


def test_resample_changes_size(codec: PillowCodec) -> None:
    result = codec.resample(Image.new("RGB", (76, 76)), 256, 256)

    assert result.size == (256, 256)


def test_canvas_is_filled_with_color(codec: PillowCodec) -> None:
    canvas = codec.canvas(6, 6, RGBAColor(1, 2, 3, 4))

    assert canvas.mode == "RGBA"
    assert set(canvas.getdata()) == {(1, 2, 3, 4)}


def test_composite_copies_pixels_verbatim(codec: PillowCodec) -> None:
    base = codec.canvas(4, 4, RGBAColor(255, 255, 255, 255))
    overlay = Image.new("RGBA", (2, 2), (10, 20, 30, 0))

    result = codec.composite(base, overlay, 0, 0)

    assert result.getpixel((1, 1)) == (10, 20, 30, 0)
    assert result.getpixel((2, 2)) == (255, 255, 255, 255)


def test_unknown_resampling_rejected() -> None:
    with pytest.raises(ValueError):
        PillowCodec(resampling="sharpest")

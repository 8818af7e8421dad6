import pytest
from PIL import Image

from imagetiler.codec import PillowCodec
from imagetiler.core.models import RGBAColor
from imagetiler.tiling.canvas import calc_side_length, native_res_zoom, prepare_canvas

BACKGROUND = RGBAColor(255, 255, 255, 0)


@pytest.fixture()
def codec() -> PillowCodec:
    return PillowCodec()


def test_side_length_rounds_long_side_up_to_zoom_factor() -> None:
    assert calc_side_length(300, 200, 2) == 304
    assert calc_side_length(200, 300, 2) == 304


def test_side_length_keeps_aligned_square() -> None:
    assert calc_side_length(512, 512, 1) == 512


def test_side_length_at_zoom_zero_only_squares() -> None:
    assert calc_side_length(301, 17, 0) == 301


@pytest.mark.parametrize("width,height", [(1, 1), (255, 3), (300, 200), (1023, 1025), (4097, 10)])
@pytest.mark.parametrize("max_zoom", [0, 1, 3, 6])
def test_side_length_divides_for_every_zoom(width: int, height: int, max_zoom: int) -> None:
    side = calc_side_length(width, height, max_zoom)

    assert side >= max(width, height)
    assert side - max(width, height) < 2 ** max_zoom
    for zoom in range(max_zoom + 1):
        assert side % 2 ** zoom == 0


def test_side_length_is_exact_for_large_values() -> None:
    # float division would round 2**53 + 1 down
    assert calc_side_length(2 ** 53 + 1, 1, 1) == 2 ** 53 + 2


@pytest.mark.parametrize("width,height,max_zoom", [(0, 10, 1), (10, -1, 1), (10, 10, -1)])
def test_side_length_rejects_invalid_arguments(width: int, height: int, max_zoom: int) -> None:
    with pytest.raises(ValueError):
        calc_side_length(width, height, max_zoom)


def test_native_res_zoom_matches_log_ratio() -> None:
    assert native_res_zoom(512, 512, 1) == pytest.approx(1.0)
    assert native_res_zoom(300, 200, 2) == pytest.approx(0.24792751, rel=1e-6)


def test_native_res_zoom_clamps_small_images_to_zero() -> None:
    assert native_res_zoom(100, 50, 0) == 0.0


def test_native_res_zoom_honours_tile_size() -> None:
    assert native_res_zoom(1024, 1024, 0, tile_size=128) == pytest.approx(3.0)


def test_prepare_canvas_pads_to_lower_right(codec: PillowCodec) -> None:
    source = Image.new("RGB", (300, 200), (255, 0, 0))

    canvas = prepare_canvas(codec, source, 2, BACKGROUND)

    assert canvas.size == (304, 304)
    assert canvas.getpixel((0, 0)) == (255, 0, 0, 255)
    assert canvas.getpixel((299, 199)) == (255, 0, 0, 255)
    assert canvas.getpixel((300, 0)) == BACKGROUND.as_tuple()
    assert canvas.getpixel((0, 200)) == BACKGROUND.as_tuple()
    assert canvas.getpixel((303, 303)) == BACKGROUND.as_tuple()


def test_prepare_canvas_leaves_source_untouched(codec: PillowCodec) -> None:
    source = Image.new("RGB", (30, 20), (0, 0, 255))

    prepare_canvas(codec, source, 3, BACKGROUND)

    assert source.size == (30, 20)
    assert source.mode == "RGB"


def test_prepare_canvas_on_aligned_square_is_a_copy(codec: PillowCodec) -> None:
    source = Image.new("RGBA", (64, 64), (10, 20, 30, 40))
    source.putpixel((5, 7), (1, 2, 3, 0))

    canvas = prepare_canvas(codec, source, 2, RGBAColor(0, 0, 0, 255))

    assert canvas.size == (64, 64)
    assert canvas is not source
    assert canvas.tobytes() == source.tobytes()

import numpy as np
import pytest

from pano2cube.transforms import ImageBuffer, InvalidDimensions


def test_blank_is_zeroed_rgba():
    buffer = ImageBuffer.blank(5, 3)
    assert buffer.data.shape == (5 * 3 * 4,)
    assert buffer.data.dtype == np.uint8
    assert not buffer.data.any()


@pytest.mark.parametrize("width, height", [(0, 4), (4, 0), (-1, 2)])
def test_blank_rejects_empty_dimensions(width, height):
    with pytest.raises(InvalidDimensions):
        ImageBuffer.blank(width, height)


def test_length_must_match_dimensions():
    with pytest.raises(InvalidDimensions):
        ImageBuffer(4, 2, np.zeros(4 * 2 * 3, dtype=np.uint8))


def test_store_must_be_uint8():
    with pytest.raises(InvalidDimensions):
        ImageBuffer(2, 2, np.zeros(16, dtype=np.float32))


def test_from_rgb_array_adds_opaque_alpha():
    rgb = np.arange(2 * 3 * 3, dtype=np.uint8).reshape(2, 3, 3)
    buffer = ImageBuffer.from_array(rgb)
    assert (buffer.width, buffer.height) == (3, 2)
    np.testing.assert_array_equal(buffer.rgb(), rgb)
    assert np.all(buffer.pixels[..., 3] == 255)


def test_from_gray_array_repeats_channel():
    gray = np.array([[10, 20], [30, 40]], dtype=np.uint8)
    buffer = ImageBuffer.from_array(gray)
    for channel in range(3):
        np.testing.assert_array_equal(buffer.pixels[..., channel], gray)


def test_from_rgba_array_keeps_alpha():
    rgba = np.full((2, 2, 4), 9, dtype=np.uint8)
    buffer = ImageBuffer.from_array(rgba)
    assert np.all(buffer.pixels == 9)


def test_from_array_copies_input():
    rgb = np.zeros((2, 2, 3), dtype=np.uint8)
    buffer = ImageBuffer.from_array(rgb)
    rgb[...] = 50
    assert not buffer.rgb().any()


def test_row_major_layout():
    rgb = np.zeros((2, 3, 3), dtype=np.uint8)
    rgb[1, 2] = (1, 2, 3)
    buffer = ImageBuffer.from_array(rgb)
    offset = 4 * (1 * 3 + 2)
    assert list(buffer.data[offset:offset + 4]) == [1, 2, 3, 255]


def test_pixels_is_a_view():
    buffer = ImageBuffer.blank(2, 2)
    buffer.pixels[0, 1, 2] = 77
    assert buffer.data[4 + 2] == 77


def test_unsupported_array_shape():
    with pytest.raises(InvalidDimensions):
        ImageBuffer.from_array(np.zeros((2, 2, 2), dtype=np.uint8))


def test_buffers_compare_by_identity():
    buffer = ImageBuffer.blank(2, 2)
    assert buffer == buffer
    assert buffer != ImageBuffer.blank(2, 2)

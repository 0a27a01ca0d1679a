import numpy as np
import pytest

from pano2cube.transforms import (
    ImageBuffer, InterpolationMode, copy_pixel_bilinear, copy_pixel_nearest, get_sampler, sample
)


def source_from_rows(rows):
    return ImageBuffer.from_array(np.array(rows, dtype=np.uint8))


@pytest.fixture
def small_source():
    rng = np.random.default_rng(3)
    return ImageBuffer.from_array(rng.integers(0, 256, (6, 8, 3), dtype=np.uint8))


def sampled_rgb(copy_pixel, source, x, y):
    dest = ImageBuffer.blank(1, 1)
    copy_pixel(source, dest, x, y, 0)
    return tuple(int(v) for v in dest.data[:3])


def source_rgb(source, x, y):
    return tuple(int(v) for v in source.pixels[y, x, :3])


@pytest.mark.parametrize("name, expected", [
    ("linear", InterpolationMode.BILINEAR),
    ("bilinear", InterpolationMode.BILINEAR),
    ("nearest", InterpolationMode.NEAREST),
    ("cubic", InterpolationMode.CUBIC),
    ("lanczos", InterpolationMode.LANCZOS),
    ("anything", InterpolationMode.NEAREST),
    (None, InterpolationMode.NEAREST),
    (InterpolationMode.BILINEAR, InterpolationMode.BILINEAR),
])
def test_mode_from_name(name, expected):
    assert InterpolationMode.from_name(name) is expected


@pytest.mark.parametrize("mode, expected", [
    ("linear", copy_pixel_bilinear),
    ("nearest", copy_pixel_nearest),
    ("cubic", copy_pixel_nearest),
    ("lanczos", copy_pixel_nearest),
    ("bogus", copy_pixel_nearest),
])
def test_get_sampler_falls_back_to_nearest(mode, expected):
    assert get_sampler(mode) is expected


@pytest.mark.parametrize("copy_pixel", [copy_pixel_nearest, copy_pixel_bilinear])
def test_integer_coordinates_copy_exact_pixel(small_source, copy_pixel):
    for x, y in [(0, 0), (3, 2), (7, 5), (7, 0)]:
        assert sampled_rgb(copy_pixel, small_source, float(x), float(y)) == source_rgb(small_source, x, y)


def test_nearest_rounds_half_to_even():
    source = source_from_rows([[[0, 0, 0], [10, 10, 10], [20, 20, 20], [30, 30, 30], [40, 40, 40]]])
    assert sampled_rgb(copy_pixel_nearest, source, 2.5, 0.0) == (20, 20, 20)
    assert sampled_rgb(copy_pixel_nearest, source, 1.5, 0.0) == (20, 20, 20)
    assert sampled_rgb(copy_pixel_nearest, source, 2.6, 0.0) == (30, 30, 30)


def test_nearest_clamps_out_of_range(small_source):
    assert sampled_rgb(copy_pixel_nearest, small_source, -3.0, -9.0) == source_rgb(small_source, 0, 0)
    assert sampled_rgb(copy_pixel_nearest, small_source, 42.0, 17.0) == source_rgb(small_source, 7, 5)


def test_bilinear_left_edge_is_unweighted_corner():
    source = source_from_rows([
        [[10, 20, 30], [200, 200, 200]],
        [[40, 50, 60], [250, 250, 250]],
    ])
    assert sampled_rgb(copy_pixel_bilinear, source, -0.5, 0.0) == (10, 20, 30)
    assert sampled_rgb(copy_pixel_bilinear, source, -0.5, 1.0) == (40, 50, 60)


def test_bilinear_right_and_bottom_edges(small_source):
    assert sampled_rgb(copy_pixel_bilinear, small_source, 7.5, 5.0) == source_rgb(small_source, 7, 5)
    assert sampled_rgb(copy_pixel_bilinear, small_source, 7.0, 5.5) == source_rgb(small_source, 7, 5)


def test_bilinear_rounds_up():
    source = source_from_rows([[[10, 0, 100], [11, 100, 100]]])
    # 10.5 -> 11, 50.0 -> 50
    assert sampled_rgb(copy_pixel_bilinear, source, 0.5, 0.0) == (11, 50, 100)
    # 10.25 -> 11
    assert sampled_rgb(copy_pixel_bilinear, source, 0.25, 0.0)[0] == 11


def test_bilinear_blends_both_axes():
    source = source_from_rows([
        [[0, 0, 0], [100, 0, 0]],
        [[100, 0, 0], [200, 0, 0]],
    ])
    assert sampled_rgb(copy_pixel_bilinear, source, 0.5, 0.5)[0] == 100


def test_bilinear_never_wraps_white():
    source = source_from_rows([[[255, 255, 255]] * 3] * 3)
    for x, y in [(0.3, 0.7), (1.1, 0.9), (0.123, 1.987)]:
        assert sampled_rgb(copy_pixel_bilinear, source, x, y) == (255, 255, 255)


@pytest.mark.parametrize("copy_pixel", [copy_pixel_nearest, copy_pixel_bilinear])
def test_writes_only_rgb_at_offset(small_source, copy_pixel):
    dest = ImageBuffer.blank(3, 1)
    dest.data[:] = 7
    copy_pixel(small_source, dest, 2.0, 3.0, 4)
    assert list(dest.data[:4]) == [7, 7, 7, 7]
    assert tuple(int(v) for v in dest.data[4:7]) == source_rgb(small_source, 2, 3)
    assert list(dest.data[7:]) == [7] * 5


@pytest.mark.parametrize("copy_pixel", [copy_pixel_nearest, copy_pixel_bilinear])
def test_array_form_matches_single_pixels(small_source, copy_pixel):
    rng = np.random.default_rng(4)
    count = 40
    xs = rng.uniform(-0.5, 7.5, count)
    ys = rng.uniform(-0.5, 5.5, count)
    offsets = 4 * np.arange(count)

    batched = ImageBuffer.blank(count, 1)
    copy_pixel(small_source, batched, xs, ys, offsets)

    single = ImageBuffer.blank(count, 1)
    for i in range(count):
        copy_pixel(small_source, single, float(xs[i]), float(ys[i]), int(offsets[i]))

    np.testing.assert_array_equal(batched.data, single.data)


def test_sample_unknown_mode_matches_nearest(small_source):
    explicit = ImageBuffer.blank(1, 1)
    fallback = ImageBuffer.blank(1, 1)
    sample(small_source, explicit, 3.4, 1.6, 0, "nearest")
    sample(small_source, fallback, 3.4, 1.6, 0, "mystery")
    np.testing.assert_array_equal(explicit.data, fallback.data)


def test_sampling_leaves_source_untouched(small_source):
    before = small_source.data.copy()
    sample(small_source, ImageBuffer.blank(1, 1), 2.3, 4.1, 0, "linear")
    np.testing.assert_array_equal(small_source.data, before)

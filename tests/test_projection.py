import math

import numpy as np
import pytest

from pano2cube.transforms import Vector3, project, to_source_coords, wrap_angle

TWO_PI = 2 * math.pi


def test_wrap_angle_negative_input():
    assert wrap_angle(-3.0) == pytest.approx(TWO_PI - 3.0)
    assert 0 <= wrap_angle(-3.0) < TWO_PI


@pytest.mark.parametrize("angle", [0.0, 1.0, TWO_PI, -TWO_PI, 7 * math.pi, -100.0, 1e-18, -1e-18])
def test_wrap_angle_range(angle):
    wrapped = wrap_angle(angle)
    assert 0 <= wrapped < TWO_PI
    assert math.cos(wrapped) == pytest.approx(math.cos(angle))
    assert math.sin(wrapped) == pytest.approx(math.sin(angle), abs=1e-9)


def test_longitude_normalized_from_negative_atan2():
    cube = Vector3(math.cos(-3.0), math.sin(-3.0), 0.0)
    longitude, latitude = project(cube, 0.0)
    assert longitude == pytest.approx(TWO_PI - 3.0)
    assert latitude == pytest.approx(math.pi / 2)


def test_projection_ranges_for_any_rotation():
    rng = np.random.default_rng(2)
    points = rng.uniform(-1, 1, (200, 3))
    points[:, 0] = np.sign(points[:, 0]) + (points[:, 0] == 0)  # keep off the origin
    for rotation in (-20.0, -math.pi, 0.0, 0.5, 3 * math.pi, 1000.0):
        longitude, latitude = project(Vector3(*points.T), rotation)
        assert np.all((longitude >= 0) & (longitude < TWO_PI))
        assert np.all((latitude >= 0) & (latitude <= math.pi))


def test_rotation_shifts_longitude():
    cube = Vector3(-1.0, 0.3, -0.2)
    base, latitude = project(cube, 0.0)
    rotated, rotated_latitude = project(cube, 1.25)
    assert rotated == pytest.approx(wrap_angle(base + 1.25))
    assert rotated_latitude == latitude


def test_poles():
    assert project(Vector3(0.0, 0.0, 1.0))[1] == 0.0
    assert project(Vector3(0.0, 0.0, -1.0))[1] == pytest.approx(math.pi)


def test_to_source_coords_half_pixel_shift():
    assert to_source_coords(0.0, 0.0, 1024, 512) == (-0.5, -0.5)
    src_x, src_y = to_source_coords(math.pi, math.pi / 2, 1024, 512)
    assert src_x == pytest.approx(511.5)
    assert src_y == pytest.approx(255.5)

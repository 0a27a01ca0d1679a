"""
Spherical Projection
Projects cube surface points onto the unit sphere and converts the resulting
spherical coordinates to continuous equirectangular pixel coordinates.

All functions accept plain floats or numpy arrays of matching shape.
"""

import math
from typing import Tuple

import numpy as np

from .faces import Vector3

TWO_PI = 2.0 * math.pi


def wrap_angle(angle, period=TWO_PI):
    """
    Normalize an angle into [0, period).

    Truncated remainder is applied twice since a single fmod keeps the sign
    of a negative input.
    """
    return np.fmod(np.fmod(angle, period) + period, period)


def project(cube: Vector3, rotation: float = 0.0) -> Tuple[object, object]:
    """
    Convert a cube point to spherical coordinates

    Args:
        cube: Point on the cube surface (never the origin)
        rotation: Horizontal rotation in radians, any real value

    Returns:
        (longitude, latitude): longitude in [0, 2π), latitude in [0, π]
    """
    x, y, z = cube
    radius = np.sqrt(x * x + y * y + z * z)
    longitude = wrap_angle(np.arctan2(y, x) + rotation)
    latitude = np.arccos(z / radius)
    return longitude, latitude


def to_source_coords(longitude, latitude, width: int, height: int) -> Tuple[object, object]:
    """
    Convert spherical coordinates to continuous source pixel coordinates.

    Pixel centers sit at integer coordinates, hence the half pixel shift.
    """
    src_x = width * longitude / math.pi / 2 - 0.5
    src_y = height * latitude / math.pi - 0.5
    return src_x, src_y

"""
Cube Face Orientation
Maps face-local coordinates to points on the surface of a cube.

The cube is centered at the origin with a side length of 2, so face-local
x and y both run from -1 to 1 and every returned point has one component
equal to +1 or -1.
"""

from enum import Enum
from typing import Callable, NamedTuple, Union

from .errors import InvalidFaceIdentifier


class Vector3(NamedTuple):
    """3D point; components are floats or broadcastable numpy arrays"""
    x: object
    y: object
    z: object


class CubeFace(Enum):
    """The six cube map faces, valued by their output file stem"""
    POSITIVE_Z = "pz"
    NEGATIVE_Z = "nz"
    POSITIVE_X = "px"
    NEGATIVE_X = "nx"
    POSITIVE_Y = "py"
    NEGATIVE_Y = "ny"

    @classmethod
    def from_name(cls, face: Union['CubeFace', str]) -> 'CubeFace':
        """
        Resolve a face from a member or its string value.

        Raises:
            InvalidFaceIdentifier: If the name matches no face
        """
        if isinstance(face, cls):
            return face
        try:
            return cls(face)
        except ValueError:
            raise InvalidFaceIdentifier(face) from None


OrientationFunction = Callable[[object, object], Vector3]


def _positive_z(x, y):
    return Vector3(-1.0, -x, -y)


def _negative_z(x, y):
    return Vector3(1.0, x, -y)


def _positive_x(x, y):
    return Vector3(x, -1.0, -y)


def _negative_x(x, y):
    return Vector3(-x, 1.0, -y)


def _positive_y(x, y):
    return Vector3(-y, -x, 1.0)


def _negative_y(x, y):
    return Vector3(y, -x, -1.0)


_ORIENTATIONS = {
    CubeFace.POSITIVE_Z: _positive_z,
    CubeFace.NEGATIVE_Z: _negative_z,
    CubeFace.POSITIVE_X: _positive_x,
    CubeFace.NEGATIVE_X: _negative_x,
    CubeFace.POSITIVE_Y: _positive_y,
    CubeFace.NEGATIVE_Y: _negative_y,
}


def get_orientation(face: Union[CubeFace, str]) -> OrientationFunction:
    """
    Get the function placing face-local (x, y) on the given cube face.

    Args:
        face: CubeFace member or one of 'pz', 'nz', 'px', 'nx', 'py', 'ny'

    Returns:
        Callable (x, y) -> Vector3

    Raises:
        InvalidFaceIdentifier: For any other face name
    """
    return _ORIENTATIONS[CubeFace.from_name(face)]


def orientation(face: Union[CubeFace, str], x, y) -> Vector3:
    """Point on the given cube face for face-local coordinates x, y in [-1, 1]"""
    return get_orientation(face)(x, y)

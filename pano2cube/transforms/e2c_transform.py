"""
Equirectangular to Cube Map (E2C) Transformation Engine
Renders the six faces of a cube map from a 2:1 equirectangular panorama.

For every output pixel of a face:
1. Face-local coordinates (-1..1) are placed on the cube surface (faces.py)
2. The cube point is projected onto the sphere, rotated around the
   vertical axis and converted to source pixel coordinates (projection.py)
3. The source is sampled with the requested filter (interpolation.py)

There is no dependency between pixels, so each step runs over the whole
pixel grid at once with numpy.

Face size is tied to the panorama: a face spans a quarter of the horizontal
sweep, so its side is source_width // 4 (optionally capped by max_width).
"""

import logging
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple, Union

import numpy as np

from ..config.defaults import CUBE_FACE_NAMES, CUBE_FACE_ROLES
from .errors import InvalidDimensions
from .faces import CubeFace, get_orientation
from .image_buffer import ImageBuffer
from .interpolation import InterpolationMode, get_sampler, read_index
from .projection import project, to_source_coords

logger = logging.getLogger(__name__)


class CubemapLayout(Enum):
    """Cubemap output layout formats"""
    CROSS_HORIZONTAL = "cross_horizontal"  # 4:3 aspect
    CROSS_VERTICAL = "cross_vertical"      # 3:4 aspect
    STRIP_HORIZONTAL = "strip_horizontal"  # 6:1 aspect
    SEPARATE = "separate"                  # 6 individual face images


def compute_face_size(source_width: int, max_width: Optional[int] = None) -> int:
    """
    Side length of a cube face rendered from a panorama of the given width.

    Raises:
        InvalidDimensions: If max_width is not positive or the panorama is
            narrower than 4 pixels
    """
    if max_width is not None and max_width <= 0:
        raise InvalidDimensions(f"max_width must be a positive integer, got {max_width}")

    face_width = source_width // 4
    if max_width is not None:
        face_width = min(max_width, face_width)

    if face_width <= 0:
        raise InvalidDimensions(f"Source width {source_width} is too small for a cube face")
    return face_width


def generate_source_map(face: Union[CubeFace, str], rotation: float, source_width: int,
                        source_height: int, face_width: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Compute the source coordinate of every pixel of a face.

    Args:
        face: Cube face to render
        rotation: Horizontal rotation in radians
        source_width, source_height: Panorama dimensions
        face_width: Side of the square face

    Returns:
        src_x, src_y: (face_width, face_width) float64 arrays, indexed [row, column]
    """
    cube_orientation = get_orientation(face)

    rows, cols = np.indices((face_width, face_width), dtype=np.float64)

    # cube is centered at the origin with a side length of 2
    cube = cube_orientation(2 * (cols + 0.5) / face_width - 1,
                            2 * (rows + 0.5) / face_width - 1)

    longitude, latitude = project(cube, rotation)
    return to_source_coords(longitude, latitude, source_width, source_height)


def _render_from_map(source: ImageBuffer, src_x: np.ndarray, src_y: np.ndarray,
                     face_width: int, copy_pixel) -> ImageBuffer:
    write = ImageBuffer.blank(face_width, face_width)

    rows, cols = np.indices((face_width, face_width))
    to = read_index(cols, rows, face_width)

    # fill alpha channel
    write.data[to + 3] = 255

    copy_pixel(source, write, src_x, src_y, to)
    return write


def render_face(source: ImageBuffer, face: Union[CubeFace, str], rotation: float = 0.0,
                interpolation: Union[InterpolationMode, str] = 'linear',
                max_width: Optional[int] = None) -> ImageBuffer:
    """
    Render one cube face from an equirectangular panorama.

    Args:
        source: Panorama as an RGBA buffer (read only)
        face: 'pz', 'nz', 'px', 'nx', 'py', 'ny' or a CubeFace
        rotation: Horizontal cube rotation in radians
        interpolation: 'linear' for bilinear, anything else nearest-neighbor
        max_width: Upper bound on the face side, None for unbounded

    Returns:
        Fresh square RGBA buffer, fully opaque

    Raises:
        InvalidFaceIdentifier: Unknown face name (nothing is rendered)
        InvalidDimensions: Malformed source buffer or unusable face size
    """
    face = CubeFace.from_name(face)
    source.validate()
    face_width = compute_face_size(source.width, max_width)
    copy_pixel = get_sampler(interpolation)

    src_x, src_y = generate_source_map(face, rotation, source.width, source.height, face_width)
    return _render_from_map(source, src_x, src_y, face_width, copy_pixel)


class E2CTransform:
    """Equirectangular to Cube Map transformation class with source map caching"""

    def __init__(self):
        self.cache = {}  # Cache for source coordinate maps

    def render_face(self, source: ImageBuffer, face: Union[CubeFace, str], rotation: float = 0.0,
                    interpolation: Union[InterpolationMode, str] = 'linear',
                    max_width: Optional[int] = None) -> ImageBuffer:
        """Same as the module level render_face, reusing cached coordinate maps"""
        face = CubeFace.from_name(face)
        source.validate()
        face_width = compute_face_size(source.width, max_width)
        copy_pixel = get_sampler(interpolation)

        cache_key = (face, rotation, source.width, source.height, face_width)
        if cache_key in self.cache:
            src_x, src_y = self.cache[cache_key]
            logger.debug(f"Using cached source map for face={face.value}")
        else:
            logger.debug(f"Generating new source map for face={face.value}, rotation={rotation:.4f}")
            src_x, src_y = generate_source_map(face, rotation, source.width, source.height, face_width)
            self.cache[cache_key] = (src_x, src_y)

        return _render_from_map(source, src_x, src_y, face_width, copy_pixel)

    def equirect_to_cubemap(self, source: ImageBuffer, faces: Optional[Iterable[str]] = None,
                            rotation: float = 0.0,
                            interpolation: Union[InterpolationMode, str] = 'linear',
                            max_width: Optional[int] = None) -> Dict[str, ImageBuffer]:
        """
        Render cube faces one after another.

        Args:
            source: Panorama as an RGBA buffer
            faces: Face names to render (default: all six)
            rotation: Horizontal rotation in radians
            interpolation: Filter name
            max_width: Upper bound on the face side

        Returns:
            Dictionary face name -> face buffer, in request order
        """
        face_names = self.get_cube_face_names() if faces is None else list(faces)

        # reject bad names before rendering anything
        resolved = [CubeFace.from_name(name) for name in face_names]

        cube_faces = {}
        for face in resolved:
            cube_faces[face.value] = self.render_face(source, face, rotation, interpolation, max_width)
            logger.debug(f"Generated {face.value} face ({cube_faces[face.value].width}px)")

        return cube_faces

    def get_cube_face_names(self) -> List[str]:
        """Face names in output order"""
        return list(CUBE_FACE_NAMES)

    def _face_arrays(self, faces: Dict[str, ImageBuffer]) -> Tuple[int, Dict[str, np.ndarray]]:
        missing = [name for name in CUBE_FACE_ROLES.values() if name not in faces]
        if missing:
            raise InvalidDimensions(f"Layout needs all six faces, missing: {', '.join(missing)}")

        arrays = {role: faces[name].pixels for role, name in CUBE_FACE_ROLES.items()}
        face_size = arrays['front'].shape[0]
        for role, array in arrays.items():
            if array.shape[:2] != (face_size, face_size):
                raise InvalidDimensions(f"Face '{role}' is {array.shape[1]}x{array.shape[0]}, expected {face_size}px")
        return face_size, arrays

    def create_cubemap_cross_horizontal(self, faces: Dict[str, ImageBuffer]) -> ImageBuffer:
        """
        Arrange 6 faces into horizontal cross layout (4:3 aspect).

        Layout:
                [Top]
        [Left] [Front] [Right] [Back]
               [Bottom]
        """
        face_size, f = self._face_arrays(faces)
        cross = np.zeros((face_size * 3, face_size * 4, 4), dtype=np.uint8)

        cross[0:face_size, face_size:face_size*2] = f['top']

        cross[face_size:face_size*2, 0:face_size] = f['left']
        cross[face_size:face_size*2, face_size:face_size*2] = f['front']
        cross[face_size:face_size*2, face_size*2:face_size*3] = f['right']
        cross[face_size:face_size*2, face_size*3:face_size*4] = f['back']

        cross[face_size*2:face_size*3, face_size:face_size*2] = f['bottom']

        return ImageBuffer.from_array(cross)

    def create_cubemap_cross_vertical(self, faces: Dict[str, ImageBuffer]) -> ImageBuffer:
        """
        Arrange 6 faces into vertical cross layout (3:4 aspect).

        Layout:
               [Top]
              [Front]
        [Left][Back][Right]
              [Bottom]
        """
        face_size, f = self._face_arrays(faces)
        cross = np.zeros((face_size * 4, face_size * 3, 4), dtype=np.uint8)

        cross[0:face_size, face_size:face_size*2] = f['top']
        cross[face_size:face_size*2, face_size:face_size*2] = f['front']

        cross[face_size*2:face_size*3, 0:face_size] = f['left']
        cross[face_size*2:face_size*3, face_size:face_size*2] = f['back']
        cross[face_size*2:face_size*3, face_size*2:face_size*3] = f['right']

        cross[face_size*3:face_size*4, face_size:face_size*2] = f['bottom']

        return ImageBuffer.from_array(cross)

    def create_cubemap_strip(self, faces: Dict[str, ImageBuffer]) -> ImageBuffer:
        """
        Arrange 6 faces into horizontal strip (6:1 aspect).

        Layout: [Right][Left][Top][Bottom][Front][Back]  (px nx py ny pz nz)
        """
        _, f = self._face_arrays(faces)
        order = ['right', 'left', 'top', 'bottom', 'front', 'back']
        strip = np.concatenate([f[role] for role in order], axis=1)
        return ImageBuffer.from_array(strip)

    def compose_layout(self, faces: Dict[str, ImageBuffer],
                       layout: Union[CubemapLayout, str]) -> Optional[ImageBuffer]:
        """Compose faces into a single image, None for the separate layout"""
        layout = CubemapLayout(layout)
        if layout is CubemapLayout.CROSS_HORIZONTAL:
            return self.create_cubemap_cross_horizontal(faces)
        if layout is CubemapLayout.CROSS_VERTICAL:
            return self.create_cubemap_cross_vertical(faces)
        if layout is CubemapLayout.STRIP_HORIZONTAL:
            return self.create_cubemap_strip(faces)
        return None

    def clear_cache(self):
        """Clear the source map cache"""
        cache_size = len(self.cache)
        self.cache.clear()
        logger.info(f"Cleared cubemap cache ({cache_size} entries)")

    def get_cache_size(self):
        """Return number of cached source maps"""
        return len(self.cache)

"""
Transform Engines Module
Provides the equirectangular to cube map renderer and its building blocks.
"""

from .errors import (
    ConverterError, InvalidFaceIdentifier, InvalidDimensions, ImageReadError, ImageWriteError
)
from .image_buffer import ImageBuffer
from .faces import CubeFace, Vector3, get_orientation, orientation
from .projection import project, to_source_coords, wrap_angle
from .interpolation import (
    InterpolationMode, copy_pixel_bilinear, copy_pixel_nearest, get_sampler, sample
)
from .e2c_transform import (
    CubemapLayout, E2CTransform, compute_face_size, generate_source_map, render_face
)

__all__ = [
    'ConverterError', 'InvalidFaceIdentifier', 'InvalidDimensions',
    'ImageReadError', 'ImageWriteError',
    'ImageBuffer',
    'CubeFace', 'Vector3', 'get_orientation', 'orientation',
    'project', 'to_source_coords', 'wrap_angle',
    'InterpolationMode', 'copy_pixel_bilinear', 'copy_pixel_nearest', 'get_sampler', 'sample',
    'CubemapLayout', 'E2CTransform', 'compute_face_size', 'generate_source_map', 'render_face',
]

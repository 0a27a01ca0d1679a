"""
pano2cube
Converts equirectangular panoramas into the six faces of a cube map.
"""

from .config.defaults import APP_VERSION as __version__
from .transforms import (
    CubeFace, ConverterError, ImageBuffer, InterpolationMode,
    InvalidDimensions, InvalidFaceIdentifier, render_face
)

__all__ = [
    'CubeFace', 'ConverterError', 'ImageBuffer', 'InterpolationMode',
    'InvalidDimensions', 'InvalidFaceIdentifier', 'render_face',
]

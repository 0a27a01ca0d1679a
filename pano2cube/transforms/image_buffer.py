"""
RGBA Image Buffer
Flat 8-bit RGBA pixel store shared by the renderer, the samplers and image I/O.

Layout: row-major, 4 bytes per pixel, row stride = width * 4.
"""

import logging
from dataclasses import dataclass

import numpy as np

from .errors import InvalidDimensions

logger = logging.getLogger(__name__)

CHANNELS = 4


@dataclass(eq=False)
class ImageBuffer:
    """RGBA image backed by a contiguous uint8 numpy array of width*height*4 bytes"""

    width: int
    height: int
    data: np.ndarray

    def __post_init__(self):
        self.validate()

    def validate(self):
        """
        Check the size invariant.

        Raises:
            InvalidDimensions: If a dimension is not positive or the store
                length differs from width * height * 4
        """
        if self.width <= 0 or self.height <= 0:
            raise InvalidDimensions(f"Image dimensions must be positive, got {self.width}x{self.height}")

        expected = self.width * self.height * CHANNELS
        if self.data.ndim != 1 or self.data.size != expected:
            raise InvalidDimensions(
                f"Buffer holds {self.data.size} bytes, expected {expected} for {self.width}x{self.height} RGBA"
            )
        if self.data.dtype != np.uint8:
            raise InvalidDimensions(f"Buffer must be uint8, got {self.data.dtype}")

    @classmethod
    def blank(cls, width: int, height: int) -> 'ImageBuffer':
        """Create a zero-initialised (transparent black) buffer"""
        if width <= 0 or height <= 0:
            raise InvalidDimensions(f"Image dimensions must be positive, got {width}x{height}")
        return cls(width, height, np.zeros(width * height * CHANNELS, dtype=np.uint8))

    @classmethod
    def from_array(cls, array: np.ndarray) -> 'ImageBuffer':
        """
        Build a buffer from an image array in RGB channel order.

        Args:
            array: HxW (gray), HxWx3 (RGB) or HxWx4 (RGBA) uint8 array

        Returns:
            ImageBuffer with its own copy of the pixels
        """
        array = np.asarray(array)
        if array.ndim == 2:
            array = array[..., np.newaxis]
        if array.ndim != 3 or array.shape[2] not in (1, 3, 4):
            raise InvalidDimensions(f"Unsupported image array shape {array.shape}")
        if array.dtype != np.uint8:
            raise InvalidDimensions(f"Image array must be uint8, got {array.dtype}")

        height, width, channels = array.shape
        rgba = np.empty((height, width, CHANNELS), dtype=np.uint8)
        if channels == 4:
            rgba[...] = array
        else:
            # gray broadcasts into all three color channels
            rgba[..., :3] = array
            rgba[..., 3] = 255

        return cls(width, height, rgba.reshape(-1))

    @property
    def pixels(self) -> np.ndarray:
        """HxWx4 view onto the store (writes go through to the buffer)"""
        return self.data.reshape(self.height, self.width, CHANNELS)

    def rgb(self) -> np.ndarray:
        """HxWx3 copy without the alpha channel"""
        return self.pixels[..., :3].copy()

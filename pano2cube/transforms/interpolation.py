"""
Pixel Samplers
Copies RGB values from a continuous source coordinate into a destination
buffer using nearest-neighbor or bilinear interpolation.

Samplers take either a single coordinate and byte offset or whole arrays of
them, so one call can fill an entire cube face. Integer coordinates are
clamped to the source bounds before any read; sampling cannot go out of
range.
"""

import logging
from enum import Enum
from typing import Callable, Union

import numpy as np

from .image_buffer import ImageBuffer

logger = logging.getLogger(__name__)

COLOR_CHANNELS = 3


class InterpolationMode(Enum):
    """Interpolation filters (CUBIC and LANCZOS are reserved, not implemented)"""
    NEAREST = "nearest"
    BILINEAR = "linear"
    CUBIC = "cubic"
    LANCZOS = "lanczos"

    @classmethod
    def from_name(cls, name: Union['InterpolationMode', str, None]) -> 'InterpolationMode':
        """
        Parse a filter name. Unrecognized names mean nearest-neighbor.

        Args:
            name: Mode member, 'linear'/'bilinear', 'nearest', 'cubic', 'lanczos'
                or anything else

        Returns:
            InterpolationMode member
        """
        if isinstance(name, cls):
            return name
        if isinstance(name, str):
            key = name.strip().lower()
            if key == 'bilinear':
                return cls.BILINEAR
            for mode in cls:
                if mode.value == key:
                    return mode
        logger.debug(f"Unrecognized interpolation {name!r}, using nearest-neighbor")
        return cls.NEAREST

    @property
    def is_supported(self) -> bool:
        return self in (InterpolationMode.NEAREST, InterpolationMode.BILINEAR)


CopyPixelFunction = Callable[[ImageBuffer, ImageBuffer, object, object, object], None]


def read_index(x, y, width: int):
    """Byte offset of pixel (x, y) in a row-major RGBA store"""
    return 4 * (y * width + x)


def _clamp(value, lower: int, upper: int):
    return np.clip(value, lower, upper)


def copy_pixel_nearest(read: ImageBuffer, write: ImageBuffer, x_from, y_from, to):
    """Copy the RGB of the source pixel closest to (x_from, y_from)"""
    # np.rint rounds halves to even
    x = _clamp(np.rint(x_from).astype(np.intp), 0, read.width - 1)
    y = _clamp(np.rint(y_from).astype(np.intp), 0, read.height - 1)
    nearest = read_index(x, y, read.width)

    for channel in range(COLOR_CHANNELS):
        write.data[to + channel] = read.data[nearest + channel]


def copy_pixel_bilinear(read: ImageBuffer, write: ImageBuffer, x_from, y_from, to):
    """
    Blend the four source pixels around (x_from, y_from).

    Blended values are rounded up (ceiling), not to nearest. At the image
    border both neighbours clamp to the same pixel, so the blend degenerates
    to a single-axis or plain copy.
    """
    xl = _clamp(np.floor(x_from).astype(np.intp), 0, read.width - 1)
    xr = _clamp(np.ceil(x_from).astype(np.intp), 0, read.width - 1)
    xf = x_from - xl

    yl = _clamp(np.floor(y_from).astype(np.intp), 0, read.height - 1)
    yr = _clamp(np.ceil(y_from).astype(np.intp), 0, read.height - 1)
    yf = y_from - yl

    p00 = read_index(xl, yl, read.width)
    p10 = read_index(xr, yl, read.width)
    p01 = read_index(xl, yr, read.width)
    p11 = read_index(xr, yr, read.width)

    for channel in range(COLOR_CHANNELS):
        p0 = read.data[p00 + channel] * (1 - xf) + read.data[p10 + channel] * xf
        p1 = read.data[p01 + channel] * (1 - xf) + read.data[p11 + channel] * xf
        # saturate: ceil of 255 plus float error must not wrap to 0
        value = np.clip(np.ceil(p0 * (1 - yf) + p1 * yf), 0, 255)
        write.data[to + channel] = value.astype(np.uint8)


def get_sampler(mode: Union[InterpolationMode, str, None]) -> CopyPixelFunction:
    """
    Select the copy function for an interpolation mode.

    Only BILINEAR selects the bilinear filter; every other mode, including
    the reserved CUBIC and LANCZOS, samples nearest-neighbor.
    """
    mode = InterpolationMode.from_name(mode)
    if mode is InterpolationMode.BILINEAR:
        return copy_pixel_bilinear
    if not mode.is_supported:
        logger.warning(f"Interpolation '{mode.value}' is not implemented, using nearest-neighbor")
    return copy_pixel_nearest


def sample(source: ImageBuffer, dest: ImageBuffer, src_x, src_y, dest_offset,
           mode: Union[InterpolationMode, str, None] = InterpolationMode.NEAREST):
    """
    Write the RGB channels sampled at (src_x, src_y) into dest at dest_offset.

    Args:
        source: Buffer to read from (never modified)
        dest: Buffer to write into
        src_x, src_y: Continuous source coordinates (scalars or arrays)
        dest_offset: Byte offset(s) of the destination pixel(s)
        mode: Interpolation mode or name
    """
    get_sampler(mode)(source, dest, src_x, src_y, dest_offset)

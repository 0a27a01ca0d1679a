"""
Image I/O
Decodes panoramas into RGBA buffers and encodes rendered faces to disk.

OpenCV reads every input format; PNG output goes through PIL (prevents
corrupted alpha on some OpenCV builds), JPEG output through cv2.
"""

import logging
from pathlib import Path
from typing import Union

import cv2
import numpy as np
from PIL import Image

from ..config.defaults import JPEG_QUALITY, PNG_COMPRESSION_LEVEL, SUPPORTED_IMAGE_FORMATS
from ..transforms.errors import ImageReadError, ImageWriteError
from ..transforms.image_buffer import ImageBuffer

logger = logging.getLogger(__name__)


def load_image(path: Union[str, Path]) -> ImageBuffer:
    """
    Load an image file as an RGBA buffer.

    Args:
        path: Image file (.jpg, .png, .tiff, ...)

    Returns:
        ImageBuffer in RGBA channel order

    Raises:
        ImageReadError: If the file is missing or cannot be decoded
    """
    path = Path(path)
    if not path.exists():
        raise ImageReadError(f"Input image not found: {path}")

    img = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    if img is None:
        raise ImageReadError(f"Failed to load {path}")

    # 16-bit sources are scaled down to 8 bits per channel
    if img.dtype == np.uint16:
        img = (img >> 8).astype(np.uint8)

    if img.ndim == 2:
        rgba = cv2.cvtColor(img, cv2.COLOR_GRAY2RGBA)
    elif img.shape[2] == 4:
        rgba = cv2.cvtColor(img, cv2.COLOR_BGRA2RGBA)
    else:
        rgba = cv2.cvtColor(img, cv2.COLOR_BGR2RGBA)

    height, width = rgba.shape[:2]
    if width != 2 * height:
        logger.warning(f"{path.name} is {width}x{height}, not a 2:1 equirectangular panorama")

    logger.debug(f"Loaded {path.name} ({width}x{height})")
    return ImageBuffer.from_array(rgba)


def save_image(image: Union[ImageBuffer, np.ndarray], path: Union[str, Path],
               image_format: str = 'png') -> Path:
    """
    Save an RGBA buffer (or HxWx4 RGBA array) to disk.

    Args:
        image: Pixels to write
        path: Output file path
        image_format: 'png', 'jpg' or 'jpeg'

    Returns:
        Path of the written file

    Raises:
        ImageWriteError: If the format is unsupported or the write fails
    """
    path = Path(path)
    extension = image_format.lower()
    if extension not in SUPPORTED_IMAGE_FORMATS:
        raise ImageWriteError(f"Unsupported output format: {image_format}")

    rgba = image.pixels if isinstance(image, ImageBuffer) else np.ascontiguousarray(image)
    path.parent.mkdir(parents=True, exist_ok=True)

    # Save image - use PIL for PNG, cv2 for JPEG
    success = False
    if extension == 'png':
        try:
            Image.fromarray(rgba).save(str(path), 'PNG', compress_level=PNG_COMPRESSION_LEVEL)
            success = True
        except (OSError, ValueError) as e:
            logger.warning(f"PIL PNG save failed for {path.name}: {e}, falling back to cv2")
            bgra = cv2.cvtColor(rgba, cv2.COLOR_RGBA2BGRA)
            success = cv2.imwrite(str(path), bgra, [cv2.IMWRITE_PNG_COMPRESSION, PNG_COMPRESSION_LEVEL])
    else:
        # JPEG has no alpha channel
        bgr = cv2.cvtColor(rgba, cv2.COLOR_RGBA2BGR)
        success = cv2.imwrite(str(path), bgr, [cv2.IMWRITE_JPEG_QUALITY, JPEG_QUALITY])

    if not success:
        raise ImageWriteError(f"Failed to save {path}")

    logger.debug(f"Saved {path}")
    return path

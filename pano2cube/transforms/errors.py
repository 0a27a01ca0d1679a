"""
Converter Errors
Exceptions raised by the cube map transforms and their I/O collaborators.
"""


class ConverterError(ValueError):
    """Base class for all pano2cube errors"""


class InvalidFaceIdentifier(ConverterError):
    """Raised when a face name is not one of pz, nz, px, nx, py, ny"""

    def __init__(self, face):
        self.face = face
        super().__init__(f"Unknown cube face identifier: {face!r}")


class InvalidDimensions(ConverterError):
    """Raised for empty images, mismatched buffer lengths or bad face sizes"""


class ImageReadError(ConverterError):
    """Raised when an input image cannot be decoded"""


class ImageWriteError(ConverterError):
    """Raised when an output image cannot be encoded or written"""

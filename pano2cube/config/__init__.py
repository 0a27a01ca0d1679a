"""
pano2cube Configuration Module
Provides access to default settings and saved conversion presets.
"""

from .defaults import *
from .config_manager import ConfigManager

__all__ = [
    # Export all defaults
    'CUBE_FACE_NAMES', 'CUBE_FACE_ROLES',
    'DEFAULT_ROTATION', 'INTERPOLATION_MODES', 'DEFAULT_INTERPOLATION',
    'DEFAULT_MAX_WIDTH', 'SUPPORTED_IMAGE_FORMATS', 'DEFAULT_OUTPUT_FORMAT',
    'PNG_COMPRESSION_LEVEL', 'JPEG_QUALITY',
    'CUBEMAP_LAYOUTS', 'DEFAULT_LAYOUT', 'DEFAULT_MAX_WORKERS',
    'CONFIG_DIR_NAME', 'CONFIG_FILE_VERSION', 'DEFAULT_CONVERSION_CONFIG',
    'APP_NAME', 'APP_VERSION', 'APP_DESCRIPTION',
    'ConfigManager',
]

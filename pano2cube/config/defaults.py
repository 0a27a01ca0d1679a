"""
pano2cube - Default Configuration Parameters
Central location for all default conversion settings.
"""

# ============================================================================
# CUBE FACES
# ============================================================================

# Output order; each name doubles as the output file stem (pz.png, ...)
CUBE_FACE_NAMES = ['pz', 'nz', 'px', 'nx', 'py', 'ny']

# Face roles used by the composed layouts
CUBE_FACE_ROLES = {
    'front': 'pz',
    'back': 'nz',
    'left': 'nx',
    'right': 'px',
    'top': 'py',
    'bottom': 'ny'
}

# ============================================================================
# RENDERING DEFAULTS
# ============================================================================

# Horizontal cube rotation in degrees (converted to radians before rendering)
DEFAULT_ROTATION = 0.0

# Interpolation: 'linear' is bilinear, anything else nearest-neighbor
INTERPOLATION_MODES = {
    'linear': 'Bilinear',
    'nearest': 'Nearest Neighbor'
}
DEFAULT_INTERPOLATION = 'linear'

# Face side cap in pixels (None = source_width // 4)
DEFAULT_MAX_WIDTH = None

# ============================================================================
# OUTPUT DEFAULTS
# ============================================================================

SUPPORTED_IMAGE_FORMATS = ['png', 'jpg', 'jpeg']
DEFAULT_OUTPUT_FORMAT = 'png'

PNG_COMPRESSION_LEVEL = 6
JPEG_QUALITY = 95

CUBEMAP_LAYOUTS = {
    'separate': 'Separate face files',
    'cross_horizontal': 'Cross Horizontal (4:3)',
    'cross_vertical': 'Cross Vertical (3:4)',
    'strip_horizontal': 'Strip (6:1)'
}
DEFAULT_LAYOUT = 'separate'

# ============================================================================
# PROCESSING
# ============================================================================

# One worker per face
DEFAULT_MAX_WORKERS = 6

# Saved conversion presets live under ~/CONFIG_DIR_NAME/configs
CONFIG_DIR_NAME = '.pano2cube'
CONFIG_FILE_VERSION = '1.0'

DEFAULT_CONVERSION_CONFIG = {
    'rotation': DEFAULT_ROTATION,
    'interpolation': DEFAULT_INTERPOLATION,
    'max_width': DEFAULT_MAX_WIDTH,
    'faces': list(CUBE_FACE_NAMES),
    'output_format': DEFAULT_OUTPUT_FORMAT,
    'layout': DEFAULT_LAYOUT,
    'max_workers': DEFAULT_MAX_WORKERS,
}

# ============================================================================
# APPLICATION INFO
# ============================================================================

APP_NAME = 'pano2cube'
APP_VERSION = '1.0.0'
APP_DESCRIPTION = 'Equirectangular panorama to cube map converter'

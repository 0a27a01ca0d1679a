"""
pano2cube - Command Line Entry Point
Converts an equirectangular panorama (or a folder of them) to cube map faces.
"""

import argparse
import logging
import sys
from pathlib import Path

from .config import (
    APP_DESCRIPTION, APP_NAME, APP_VERSION, CUBE_FACE_NAMES, CUBEMAP_LAYOUTS,
    DEFAULT_INTERPOLATION, INTERPOLATION_MODES, SUPPORTED_IMAGE_FORMATS, ConfigManager
)
from .pipeline import CubemapOrchestrator

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description=f"{APP_DESCRIPTION} (writes pz, nz, px, nx, py, ny faces)"
    )
    parser.add_argument("--input", "-i", required=True, help="Input panorama or folder of panoramas (.jpg, .png, .tiff)")
    parser.add_argument("--output", "-o", required=True, help="Output directory for cube faces")
    parser.add_argument("--config", type=Path, help="Load conversion settings from a saved JSON preset")
    parser.add_argument("--save-config", type=Path, help="Save the effective settings to a JSON preset")
    parser.add_argument("--rotation", type=float, help="Horizontal cube rotation in degrees (default: 0)")
    parser.add_argument("--interpolation",
                        help=f"Interpolation filter: {', '.join(INTERPOLATION_MODES)}; any other value samples nearest-neighbor (default: {DEFAULT_INTERPOLATION})")
    parser.add_argument("--max-width", type=int, help="Maximum face size in pixels (default: panorama width / 4)")
    parser.add_argument("--faces", nargs="+", choices=CUBE_FACE_NAMES, help="Faces to render (default: all six)")
    parser.add_argument("--format", dest="output_format", choices=SUPPORTED_IMAGE_FORMATS, help="Output image format (default: png)")
    parser.add_argument("--layout", choices=list(CUBEMAP_LAYOUTS), help="Also write a composed cubemap image (default: separate)")
    parser.add_argument("--prefix", dest="file_prefix", help="Prefix for output file names")
    parser.add_argument("--workers", dest="max_workers", type=int, help="Parallel face renders (default: 6)")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    # Setup logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    config_manager = ConfigManager()

    preset = None
    if args.config is not None:
        preset = config_manager.load_config(args.config)
        if preset is None:
            logger.error(f"Could not load configuration preset {args.config}")
            return 1

    config = config_manager.merge_with_defaults(preset)

    # Command line values override the preset
    for key in ('rotation', 'interpolation', 'max_width', 'faces', 'output_format',
                'layout', 'file_prefix', 'max_workers'):
        value = getattr(args, key)
        if value is not None:
            config[key] = value

    is_valid, errors = config_manager.validate_config(config)
    if not is_valid:
        for message in errors:
            logger.error(f"Invalid configuration: {message}")
        return 1

    if args.save_config is not None:
        config_manager.save_config(config, filepath=args.save_config)

    config['input_file'] = args.input
    config['output_dir'] = args.output

    orchestrator = CubemapOrchestrator(max_workers=config['max_workers'])

    def on_progress(current, total, message):
        logger.info(f"[{current}/{total}] {message}")

    result = orchestrator.run(config, progress_callback=on_progress)

    if result.get('success', False):
        logger.info(f"Wrote {len(result['output_files'])} files to {result['output_dir']}")
        return 0

    logger.error(f"Conversion failed: {result.get('error', 'Unknown error')}")
    return 1


if __name__ == '__main__':
    sys.exit(main())

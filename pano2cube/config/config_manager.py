"""
Configuration Manager for pano2cube
Handles saving/loading conversion presets as JSON files
"""

import json
import logging
from pathlib import Path
from typing import Dict, Any, Optional
from datetime import datetime

from .defaults import (
    CONFIG_DIR_NAME, CONFIG_FILE_VERSION, CUBE_FACE_NAMES, CUBEMAP_LAYOUTS,
    DEFAULT_CONVERSION_CONFIG, SUPPORTED_IMAGE_FORMATS
)

logger = logging.getLogger(__name__)


class ConfigManager:
    """
    Manages conversion presets (rotation, interpolation, face size, output
    format, layout) so a setup can be saved once and replayed later.
    """

    DEFAULT_CONFIG_DIR = Path.home() / CONFIG_DIR_NAME / 'configs'

    def __init__(self, config_dir: Optional[Path] = None):
        """
        Initialize configuration manager

        Args:
            config_dir: Directory for saved presets (default: ~/.pano2cube/configs)
        """
        self.config_dir = Path(config_dir) if config_dir is not None else self.DEFAULT_CONFIG_DIR
        self.current_config: Dict[str, Any] = {}

    def save_config(self, config: Dict[str, Any], filepath: Optional[Path] = None,
                    config_name: Optional[str] = None) -> bool:
        """
        Save conversion configuration to JSON file.

        Args:
            config: Configuration dictionary to save
            filepath: Optional custom file path (if None, uses config directory)
            config_name: Optional config name (used if filepath is None)

        Returns:
            True if save successful, False otherwise
        """
        try:
            if filepath is None:
                if config_name is None:
                    timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
                    config_name = f"config_{timestamp}"

                filepath = self.config_dir / f"{config_name}.json"

            filepath = Path(filepath)
            save_data = {
                'metadata': {
                    'saved_at': datetime.now().isoformat(),
                    'version': CONFIG_FILE_VERSION,
                    'config_name': config_name or filepath.stem
                },
                'conversion_config': config
            }

            filepath.parent.mkdir(parents=True, exist_ok=True)
            with open(filepath, 'w', encoding='utf-8') as f:
                json.dump(save_data, f, indent=2)

            logger.info(f"Configuration saved to: {filepath}")
            self.current_config = config
            return True

        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to save configuration: {e}")
            return False

    def load_config(self, filepath: Path) -> Optional[Dict[str, Any]]:
        """
        Load conversion configuration from JSON file.

        Args:
            filepath: Path to configuration file

        Returns:
            Configuration dictionary, or None if load failed
        """
        filepath = Path(filepath)
        try:
            if not filepath.exists():
                logger.error(f"Configuration file not found: {filepath}")
                return None

            with open(filepath, 'r', encoding='utf-8') as f:
                data = json.load(f)

            if isinstance(data, dict) and 'conversion_config' in data:
                config = data['conversion_config']
                metadata = data.get('metadata', {})
                logger.info(f"Configuration loaded: {metadata.get('config_name', filepath.stem)}")
                logger.debug(f"Saved at: {metadata.get('saved_at', 'Unknown')}")
            else:
                # Plain dict without metadata
                config = data
                logger.info(f"Configuration loaded (legacy format): {filepath.stem}")

            if not isinstance(config, dict):
                logger.error(f"Configuration in {filepath} is not a JSON object")
                return None

            self.current_config = config
            return config

        except (OSError, ValueError) as e:
            logger.error(f"Failed to load configuration: {e}")
            return None

    def list_saved_configs(self) -> list:
        """
        List all saved configurations in the config directory.

        Returns:
            List of tuples: (filepath, config_name, saved_date), newest first
        """
        configs = []

        if not self.config_dir.exists():
            return configs

        for json_file in self.config_dir.glob('*.json'):
            try:
                with open(json_file, 'r', encoding='utf-8') as f:
                    data = json.load(f)

                metadata = data.get('metadata', {})
                config_name = metadata.get('config_name', json_file.stem)
                saved_at = metadata.get('saved_at', 'Unknown')

                configs.append((json_file, config_name, saved_at))

            except (OSError, ValueError) as e:
                logger.warning(f"Could not read config {json_file}: {e}")

        configs.sort(key=lambda x: x[2], reverse=True)
        return configs

    def delete_config(self, filepath: Path) -> bool:
        """
        Delete a saved configuration file.

        Returns:
            True if deletion successful, False otherwise
        """
        filepath = Path(filepath)
        try:
            if filepath.exists():
                filepath.unlink()
                logger.info(f"Configuration deleted: {filepath}")
                return True
            else:
                logger.warning(f"Configuration file not found: {filepath}")
                return False

        except OSError as e:
            logger.error(f"Failed to delete configuration: {e}")
            return False

    def get_default_config(self) -> Dict[str, Any]:
        """Get a fresh copy of the default conversion configuration"""
        config = dict(DEFAULT_CONVERSION_CONFIG)
        config['faces'] = list(CUBE_FACE_NAMES)
        return config

    def merge_with_defaults(self, config: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """Fill keys missing from config with their defaults"""
        merged = self.get_default_config()
        if config:
            merged.update(config)
        return merged

    def validate_config(self, config: Dict[str, Any]) -> tuple:
        """
        Validate configuration for completeness and correctness.

        Returns:
            Tuple of (is_valid, list_of_errors)
        """
        errors = []

        max_width = config.get('max_width')
        if max_width is not None and (isinstance(max_width, bool) or not isinstance(max_width, int)
                                      or max_width <= 0):
            errors.append("Max width must be a positive integer")

        try:
            float(config.get('rotation', 0.0))
        except (TypeError, ValueError):
            errors.append("Rotation must be a number of degrees")

        faces = config.get('faces', [])
        if not isinstance(faces, list):
            errors.append("Faces must be a list of face names")
        else:
            unknown_faces = [name for name in faces if name not in CUBE_FACE_NAMES]
            if unknown_faces:
                errors.append(f"Unknown faces: {', '.join(map(str, unknown_faces))}")

        if not isinstance(config.get('output_format', 'png'), str) \
                or config.get('output_format', 'png') not in SUPPORTED_IMAGE_FORMATS:
            errors.append(f"Output format must be one of {', '.join(SUPPORTED_IMAGE_FORMATS)}")

        if not isinstance(config.get('layout', 'separate'), str) \
                or config.get('layout', 'separate') not in CUBEMAP_LAYOUTS:
            errors.append(f"Layout must be one of {', '.join(CUBEMAP_LAYOUTS)}")

        max_workers = config.get('max_workers', 1)
        if isinstance(max_workers, bool) or not isinstance(max_workers, int) or max_workers < 1:
            errors.append("Worker count must be at least 1")

        is_valid = len(errors) == 0
        return is_valid, errors


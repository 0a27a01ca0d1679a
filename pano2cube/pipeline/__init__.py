"""
Pipeline Module
Batch orchestration and image file I/O.
"""

from .batch_orchestrator import CubemapOrchestrator
from .image_io import load_image, save_image

__all__ = ['CubemapOrchestrator', 'load_image', 'save_image']

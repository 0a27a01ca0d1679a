"""
Batch Orchestrator for pano2cube
Renders the faces of a cube map in parallel and writes them to disk.

Faces do not depend on each other: every face only reads the shared source
panorama and writes its own fresh buffer, so the six renders run on a thread
pool and are joined at the end.
"""

import logging
import math
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional

from ..config.defaults import (
    CUBE_FACE_NAMES, DEFAULT_INTERPOLATION, DEFAULT_LAYOUT, DEFAULT_MAX_WIDTH,
    DEFAULT_MAX_WORKERS, DEFAULT_OUTPUT_FORMAT, DEFAULT_ROTATION
)
from ..transforms import CubeFace, E2CTransform, ImageBuffer, compute_face_size
from ..transforms.e2c_transform import CubemapLayout
from .image_io import load_image, save_image

logger = logging.getLogger(__name__)

INPUT_EXTENSIONS = ('.jpg', '.jpeg', '.png', '.tif', '.tiff')

ProgressCallback = Callable[[int, int, str], None]


class CubemapOrchestrator:
    """
    Runs cube map conversions.

    Use render_faces() for in-memory conversion and run() for the
    load -> render -> save pipeline driven by a config dictionary.
    """

    def __init__(self, max_workers: int = DEFAULT_MAX_WORKERS, transform: Optional[E2CTransform] = None):
        self.max_workers = max(1, int(max_workers))
        self.e2c_transform = transform if transform is not None else E2CTransform()
        self._cancel_event = threading.Event()
        self._source_size = None

    @property
    def is_cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def cancel(self):
        """Stop rendering further faces; faces already written stay intact"""
        self._cancel_event.set()
        logger.info("Cubemap conversion cancellation requested")

    def reset(self):
        """Clear a previous cancellation so the orchestrator can be reused"""
        self._cancel_event.clear()

    def render_faces(self, source: ImageBuffer, faces: Optional[Iterable[str]] = None,
                     rotation: float = 0.0, interpolation: str = DEFAULT_INTERPOLATION,
                     max_width: Optional[int] = DEFAULT_MAX_WIDTH,
                     progress_callback: Optional[ProgressCallback] = None) -> Dict[str, ImageBuffer]:
        """
        Render cube faces concurrently.

        Args:
            source: Panorama as an RGBA buffer (shared read-only by all workers)
            faces: Face names to render (default: all six)
            rotation: Horizontal rotation in radians
            interpolation: 'linear' for bilinear, anything else nearest-neighbor
            max_width: Upper bound on the face side
            progress_callback: Called with (current, total, message) per finished face

        Returns:
            Dictionary face name -> face buffer in request order. After a
            cancel() only the faces finished so far are returned.

        Raises:
            InvalidFaceIdentifier: If any requested face is unknown (nothing is rendered)
            InvalidDimensions: If the source or max_width is unusable
        """
        requested = CUBE_FACE_NAMES if faces is None else faces
        face_names = list(dict.fromkeys(CubeFace.from_name(name).value for name in requested))
        if not face_names:
            return {}

        # fail before any worker starts
        source.validate()
        face_size = compute_face_size(source.width, max_width)

        total = len(face_names)
        logger.info(f"Rendering {total} cube faces ({face_size}x{face_size}) with {min(self.max_workers, total)} workers")

        rendered = {}
        with ThreadPoolExecutor(max_workers=min(self.max_workers, total)) as executor:
            futures = {}
            for name in face_names:
                if self.is_cancelled:
                    break
                future = executor.submit(self.e2c_transform.render_face, source, name,
                                         rotation, interpolation, max_width)
                futures[future] = name

            for future in as_completed(futures):
                name = futures[future]
                rendered[name] = future.result()
                logger.debug(f"Generated {name} face ({face_size}x{face_size})")

                if progress_callback:
                    progress_callback(len(rendered), total, f"Rendered face {name} ({len(rendered)}/{total})")

                if self.is_cancelled:
                    for pending in futures:
                        pending.cancel()
                    logger.info(f"Cubemap rendering cancelled after {len(rendered)}/{total} faces")
                    break

        return {name: rendered[name] for name in face_names if name in rendered}

    def run(self, config: Dict, progress_callback: Optional[ProgressCallback] = None) -> Dict:
        """
        Load a panorama (or a folder of them), render its faces and save them.

        Config keys:
            input_file: Panorama file or folder of panoramas (required)
            output_dir: Output directory (required)
            rotation: Horizontal rotation in DEGREES (default 0)
            interpolation: 'linear' or 'nearest' (default 'linear')
            max_width: Face side cap in pixels (default None)
            faces: Face names to render (default all six)
            output_format: 'png', 'jpg' or 'jpeg' (default 'png')
            layout: 'separate', 'cross_horizontal', 'cross_vertical' or
                'strip_horizontal' (default 'separate')
            file_prefix: Prepended to every output file name (default '')

        Returns:
            {'success': True, 'output_files', 'output_dir', 'face_size', 'panorama_count'}
            or {'success': False, 'error'}
        """
        try:
            input_path = Path(config['input_file'])
            output_dir = Path(config['output_dir'])

            if input_path.is_dir():
                panoramas = sorted(p for p in input_path.iterdir() if p.suffix.lower() in INPUT_EXTENSIONS)
                if not panoramas:
                    return {'success': False, 'error': f"No panoramas found in {input_path}"}
                targets = [(p, output_dir / p.stem) for p in panoramas]
            else:
                targets = [(input_path, output_dir)]

            output_files = []
            face_size = None
            for index, (panorama, target_dir) in enumerate(targets):
                if self.is_cancelled:
                    return {'success': False, 'error': 'Cancelled by user'}

                logger.info(f"Converting {panorama.name} ({index + 1}/{len(targets)})")
                files, face_size = self._convert_one(panorama, target_dir, config, progress_callback)
                output_files.extend(files)

            if self.is_cancelled:
                return {'success': False, 'error': 'Cancelled by user'}

            logger.info(f"Generated {len(output_files)} cubemap files in {output_dir}")

            return {
                'success': True,
                'output_files': output_files,
                'output_dir': str(output_dir),
                'face_size': face_size,
                'panorama_count': len(targets)
            }

        except Exception as e:
            logger.error(f"Cubemap conversion error: {e}", exc_info=True)
            return {'success': False, 'error': str(e)}

    def _convert_one(self, panorama: Path, output_dir: Path, config: Dict,
                     progress_callback: Optional[ProgressCallback]) -> tuple:
        rotation = math.radians(float(config.get('rotation', DEFAULT_ROTATION)))
        image_format = str(config.get('output_format', DEFAULT_OUTPUT_FORMAT)).lower()
        layout = CubemapLayout(config.get('layout', DEFAULT_LAYOUT))
        prefix = config.get('file_prefix', '')

        source = load_image(panorama)
        # Cached maps are only reusable for panoramas of the same size
        if (source.width, source.height) != self._source_size:
            if self.e2c_transform.get_cache_size():
                self.e2c_transform.clear_cache()
            self._source_size = (source.width, source.height)

        faces = self.render_faces(
            source,
            faces=config.get('faces'),
            rotation=rotation,
            interpolation=config.get('interpolation', DEFAULT_INTERPOLATION),
            max_width=config.get('max_width', DEFAULT_MAX_WIDTH),
            progress_callback=progress_callback
        )

        output_files: List[str] = []
        for name, face in faces.items():
            if self.is_cancelled:
                break
            output_path = output_dir / f"{prefix}{name}.{image_format}"
            output_files.append(str(save_image(face, output_path, image_format)))

        if layout is not CubemapLayout.SEPARATE and not self.is_cancelled:
            if len(faces) == len(CUBE_FACE_NAMES):
                composed = self.e2c_transform.compose_layout(faces, layout)
                output_path = output_dir / f"{prefix}cubemap_{layout.value}.{image_format}"
                output_files.append(str(save_image(composed, output_path, image_format)))
            else:
                logger.warning(f"Layout '{layout.value}' needs all six faces, skipping composed image")

        face_size = next(iter(faces.values())).width if faces else None
        return output_files, face_size

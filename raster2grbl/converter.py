"""Host adapter: settings + image in, G-code file and status dict out.

This is the seam a host application (image editor plugin, CLI, web
service) calls. It builds the LaserProfile once from the settings store,
resolves the output path, runs the encoder, and reports a dict instead of
raising, so the host only has to show ``message``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional, Union

from .encoder import ProgressCallback, RasterEncoder
from .errors import Raster2GrblError
from .image_source import RasterImage
from .settings import SettingsStore
from .sink import SinkBase, sink_for

logger = logging.getLogger(__name__)


def _failure(message: str) -> Dict:
    return {
        "ok": False,
        "message": message,
        "output": "",
        "width": 0,
        "height": 0,
        "bytes_per_pixel": 0,
        "stats": {},
    }


class GrblRasterConverter:
    """Converts images to GRBL programs using one settings store.

    Methods are synchronous and return simple dictionaries. Callers must
    not run two conversions to the same output path at once.
    """

    def __init__(self, settings: Optional[SettingsStore] = None, base_dir: Optional[Union[str, Path]] = None):
        self.settings = settings if settings is not None else SettingsStore.load_or_default()
        self.base_dir = Path(base_dir) if base_dir is not None else None

    def output_path(self) -> Path:
        return self.settings.output_path(self.base_dir)

    def convert(
        self,
        source: Union[str, Path, RasterImage],
        output: Optional[Union[str, Path, SinkBase]] = None,
        progress: Optional[ProgressCallback] = None,
    ) -> Dict:
        """Convert one image.

        Args:
            source: Image path or an already adapted RasterImage
            output: Output path or sink (default: settings ``outfilename``)
            progress: Called with the fraction of rows done

        Returns:
            Dict with 'ok', 'message', 'output', 'width', 'height',
            'bytes_per_pixel', 'stats'
        """
        try:
            profile = self.settings.to_profile()
            image = source if isinstance(source, RasterImage) else RasterImage.open(source)
        except Raster2GrblError as exc:
            logger.error("Conversion failed: %s", exc)
            return _failure(str(exc))
        except OSError as exc:
            # Pillow raises OSError for unreadable or unsupported images
            logger.error("Cannot read image %s: %s", source, exc)
            return _failure(f"Cannot read image {source}: {exc}")

        try:
            sink = sink_for(output if output is not None else self.output_path())
            logger.info("Opening '%s'", sink.name)
            result = RasterEncoder(profile).encode(image, sink, progress=progress)
        except Raster2GrblError as exc:
            logger.error("Conversion failed: %s", exc)
            return _failure(str(exc))

        return result.to_dict()

    def save_settings(self, path: Optional[Union[str, Path]] = None) -> Dict:
        """Persist the current settings ("Save Config")."""
        try:
            saved = self.settings.save(path)
        except Raster2GrblError as exc:
            logger.error("Saving settings failed: %s", exc)
            return {"ok": False, "message": str(exc)}
        return {"ok": True, "message": f"Config Saved: {saved}"}

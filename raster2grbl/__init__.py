"""raster2grbl - grayscale raster images to GRBL laser G-code.

Pure-Python encoder with pluggable pixel sources and output sinks.
Host integration (settings file, CLI) lives in thin adapters on top.
"""

from .encoder import EncodeResult, RasterEncoder, encode
from .image_source import RasterImage
from .profile import LaserProfile
from .settings import SettingsStore
from .sink import FileSink, MemorySink
from .converter import GrblRasterConverter

__all__ = [
    "EncodeResult",
    "RasterEncoder",
    "encode",
    "RasterImage",
    "LaserProfile",
    "SettingsStore",
    "FileSink",
    "MemorySink",
    "GrblRasterConverter",
]
__version__ = "0.1.0"

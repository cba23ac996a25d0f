"""Exception hierarchy for raster2grbl."""


class Raster2GrblError(Exception):
    """Base class for raster2grbl errors."""


class EncodeError(Raster2GrblError):
    """Raised when a G-code program cannot be produced."""


class RowAllocationError(EncodeError):
    """Raised when the scanline buffer cannot be allocated."""


class OutputOpenError(EncodeError):
    """Raised when the output file cannot be created or written."""


class InvalidImageDimensionsError(EncodeError):
    """Raised for images with zero width or height."""


class InvalidPowerRangeError(EncodeError):
    """Raised when power_min exceeds power_max."""


class InvalidKerfError(EncodeError):
    """Raised when the laser width is not a positive number."""


class SettingsError(Raster2GrblError):
    """Raised when a settings file or value cannot be used."""

"""Small raster math helpers

Keep pure functions here for easy testing and reuse.
"""

import numpy as np

from .constants import GrblDefaults

MAX_INTENSITY = GrblDefaults.MAX_INTENSITY


def px_to_mm(px: int, kerf_width: float) -> float:
    """Convert a pixel index to millimetres.

    Computed in single precision, so with ``%.2f`` a kerf of 0.075 mm
    prints as 0.08, not 0.07.
    """
    return float(np.float32(px) * np.float32(kerf_width))



def intensity_level(sample: int) -> int:
    """Burn level of a sample: white (255) -> 0, black (0) -> 255."""
    return MAX_INTENSITY - sample


def laser_power(level: int, power_min: int, power_max: int) -> int:
    """Map a burn level 0..255 linearly onto power_min..power_max.

    Level 0 gives power_min, level 255 gives power_max. The result is
    truncated toward zero.
    """
    return int(power_min + (power_max - power_min) / 255.0 * level)


def power_table(power_min: int, power_max: int) -> np.ndarray:
    """Lookup table of laser power indexed by sample value (0..255).

    Entry ``v`` equals ``laser_power(intensity_level(v), power_min, power_max)``.
    """
    levels = MAX_INTENSITY - np.arange(MAX_INTENSITY + 1, dtype=np.float64)
    powers = power_min + (power_max - power_min) / 255.0 * levels
    # astype truncates toward zero, same as int()
    return powers.astype(np.int64)

"""Laser profile: the immutable settings consumed by the encoder.

A profile is built once per conversion (usually from a ``SettingsStore``)
and never mutated afterwards. String fields are emitted verbatim into the
program preamble and postamble.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict

from .constants import GrblDefaults
from .errors import InvalidKerfError, InvalidPowerRangeError


@dataclass(frozen=True)
class LaserProfile:
    """Laser power range, pixel size, and the GRBL commands to emit."""

    power_min: int = GrblDefaults.POWER_MIN
    power_max: int = GrblDefaults.POWER_MAX
    kerf_width: float = GrblDefaults.KERF_WIDTH_MM
    feed_rate: str = GrblDefaults.SPEED
    unit_mode: str = GrblDefaults.DIMENSION
    coord_mode: str = GrblDefaults.ABSCOORDS
    laser_on_cmd: str = GrblDefaults.LASER_ON
    laser_off_cmd: str = GrblDefaults.LASER_OFF

    def validate(self) -> "LaserProfile":
        """Check numeric invariants; returns self so calls can be chained.

        Raises:
            InvalidPowerRangeError: power_min > power_max
            InvalidKerfError: kerf_width <= 0
        """
        if self.power_min > self.power_max:
            raise InvalidPowerRangeError(
                f"power_min ({self.power_min}) must not exceed power_max ({self.power_max})"
            )
        if not self.kerf_width > 0:
            raise InvalidKerfError(f"kerf_width must be positive (got {self.kerf_width})")
        return self

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

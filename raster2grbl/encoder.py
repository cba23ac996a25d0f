"""Raster encoder: grayscale image -> GRBL laser program.

Rows are scanned from the bottom of the picture (last source row) to the
top, alternating direction every row. Within a row, runs of constant power
collapse into one ``G01`` move that ends where the power changes. Each
move is stamped with the power held *before* the change, so a move reads
"burn at S up to this X".

A synthetic white sample past the last pixel ends every row with a
transition to ``power_min``. Between rows a travel move (tagged ``;u``)
climbs one laser width at the current X.

The power held at the end of one row carries into the next row; it is
never reset per row.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

import numpy as np

from .commands import GcodeBuilder, GcodeLine, Program
from .constants import GrblDefaults
from .errors import EncodeError, InvalidImageDimensionsError, RowAllocationError
from .image_source import RasterImage
from .processing import power_table, px_to_mm
from .profile import LaserProfile
from .sink import SinkBase

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[float], None]


@dataclass
class ScanState:
    """Per-image scan state, carried across rows."""

    forward: bool = True
    last_power: int = 0


@dataclass
class EncodeResult:
    ok: bool
    message: str
    output: str = ""
    width: int = 0
    height: int = 0
    bytes_per_pixel: int = 1
    stats: Dict[str, int] = field(default_factory=dict)
    error: Optional[Exception] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ok": self.ok,
            "message": self.message,
            "output": self.output,
            "width": self.width,
            "height": self.height,
            "bytes_per_pixel": self.bytes_per_pixel,
            "stats": dict(self.stats),
        }


class RasterEncoder:
    """Encodes one image per call using a fixed laser profile.

    Raises EncodeError subclasses on failure; use ``encode()`` for a
    non-raising variant that returns an EncodeResult with ``ok=False``.
    """

    def __init__(self, profile: LaserProfile):
        self.profile = profile.validate()
        self._powers = power_table(profile.power_min, profile.power_max)

    def encode(
        self,
        image: RasterImage,
        sink: SinkBase,
        progress: Optional[ProgressCallback] = None,
    ) -> EncodeResult:
        width, height = image.width, image.height
        if width < 1 or height < 1:
            raise InvalidImageDimensionsError(
                f"Image must be at least 1x1 px (got {width}x{height})"
            )

        # Scanline plus one overscan sample, reused for every row
        try:
            scanline = np.empty(width + 1, dtype=np.uint8)
        except MemoryError as exc:
            raise RowAllocationError(f"Cannot allocate scanline of {width + 1} px") from exc

        program = Program(description=image.name or sink.name, keep_lines=False)

        def emit(line: GcodeLine):
            program.add(line)
            sink.write_line(line.text)

        sink.open()
        try:
            for line in GcodeBuilder.build_header(
                width, height, self.profile.kerf_width, image.name
            ):
                emit(line)
            for line in GcodeBuilder.build_setup(self.profile):
                emit(line)
            emit(GcodeBuilder.build_origin())

            state = ScanState()
            for y in range(height - 1, -1, -1):
                emit(GcodeBuilder.build_direction(state.forward))
                self._encode_row(image.row(y), y, height, scanline, state, emit)
                state.forward = not state.forward
                if progress is not None:
                    progress((height - y) / height)

            for line in GcodeBuilder.build_postamble(self.profile):
                emit(line)
        finally:
            sink.close()

        logger.info(
            "Encoded %dx%d px -> %s (%d cut, %d travel moves)",
            width,
            height,
            sink.name,
            program.stats["cut_moves"],
            program.stats["travel_moves"],
        )
        message = (
            "Creating Gcode\n"
            f"Width: {width}\n"
            f"Height: {height}\n"
            f"Byte per Px: {image.bytes_per_pixel}\n"
            f"{sink.name}"
        )
        return EncodeResult(
            ok=True,
            message=message,
            output=sink.name,
            width=width,
            height=height,
            bytes_per_pixel=image.bytes_per_pixel,
            stats=dict(program.stats),
        )

    def _encode_row(
        self,
        samples: np.ndarray,
        y: int,
        height: int,
        scanline: np.ndarray,
        state: ScanState,
        emit: Callable[[GcodeLine], None],
    ):
        """Emit the moves for source row ``y`` and update ``state``."""
        width = scanline.size - 1
        kerf = self.profile.kerf_width

        scanline[:width] = samples
        scanline[width] = GrblDefaults.MAX_INTENSITY  # overscan: white

        # Visiting order: index x = 0..width maps to column x (forward) or
        # width - x (backward). x == width is the end of the row.
        if state.forward:
            cols = np.arange(width + 1)
        else:
            cols = np.arange(width, -1, -1)

        powers = self._powers[scanline[cols]]
        held = np.empty_like(powers)
        held[0] = state.last_power
        held[1:] = powers[:-1]

        emit_at = (cols > 0) & (powers != held)
        emit_at[-1] = True

        y_mm = px_to_mm(height - y - 1, kerf)
        for i in np.flatnonzero(emit_at):
            emit(GcodeBuilder.build_cut(px_to_mm(int(cols[i]), kerf), y_mm, int(held[i])))

        if y > 0:
            emit(
                GcodeBuilder.build_travel(
                    px_to_mm(int(cols[-1]), kerf), px_to_mm(height - y, kerf), self.profile.power_min
                )
            )

        state.last_power = int(powers[-1])
        logger.debug(
            "row %d (%s): last power %d", y, ">" if state.forward else "<", state.last_power
        )


def encode(
    image: RasterImage,
    profile: LaserProfile,
    sink: SinkBase,
    progress: Optional[ProgressCallback] = None,
) -> EncodeResult:
    """Encode ``image`` into ``sink``; never raises EncodeError.

    Returns:
        EncodeResult with ``ok`` and a diagnostic ``message``
    """
    try:
        return RasterEncoder(profile).encode(image, sink, progress=progress)
    except EncodeError as exc:
        logger.error("Encoding failed: %s", exc)
        return EncodeResult(
            ok=False,
            message=str(exc),
            output=sink.name,
            width=image.width,
            height=image.height,
            bytes_per_pixel=image.bytes_per_pixel,
            error=exc,
        )

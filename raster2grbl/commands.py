"""G-code line abstraction for GRBL raster programs

Separates line generation from writing to enable:
- Preview/inspection without touching the filesystem
- Unit testing of every emitted line
- Per-kind statistics (cut moves, travel moves, rows)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from .processing import px_to_mm
from .profile import LaserProfile


class LineKind(Enum):
    """Role of a line in the program"""
    COMMENT = "comment"
    SETUP = "setup"
    RAPID = "rapid"
    CUT = "cut"
    TRAVEL = "travel"
    DIRECTION = "direction"


@dataclass(frozen=True)
class GcodeLine:
    """A single rendered program line plus what it is for."""
    kind: LineKind
    text: str

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value, "text": self.text}

    def __str__(self) -> str:
        return self.text


def _comment(text: str = "") -> GcodeLine:
    return GcodeLine(LineKind.COMMENT, f"; {text}" if text else ";")


class GcodeBuilder:
    """Builds program lines without writing them.

    Each method returns a GcodeLine (or a list of them) that can be
    inspected, counted, or written to a sink.
    """

    PROGRAM_ID = "raster2grbl for Laser (grbl 1.1)"
    TRAVEL_TAG = ";u"

    @staticmethod
    def coord(value: float) -> str:
        """Coordinate format used for every X/Y word."""
        return f"{value:0.2f}"

    @classmethod
    def build_header(
        cls, width: int, height: int, kerf_width: float, source_name: str = ""
    ) -> List[GcodeLine]:
        """Human-readable header: size in px and mm, orientation, source."""
        return [
            _comment(cls.PROGRAM_ID),
            _comment(f"Width: {width} [px], Height: {height} [px]"),
            _comment(f"Laserwidth: {cls.coord(px_to_mm(1, kerf_width))} [mm]"),
            _comment("{Width[mm] = laserwidth * PXwidth, Height[mm] = laserwidth * PXheight}"),
            _comment(
                f"Width: {cls.coord(px_to_mm(width, kerf_width))} [mm], "
                f"Height: {cls.coord(px_to_mm(height, kerf_width))} [mm]"
            ),
            _comment("Bottom Left corner of pic is Pos 0|0 for the laser."),
            _comment("Laser plot direction is picture bottom up."),
            _comment(f"File: {source_name}"),
            _comment(),
            _comment(),
        ]

    @classmethod
    def build_setup(cls, profile: LaserProfile) -> List[GcodeLine]:
        """Units, coordinates, power off, laser on, feed; then two spacer comments."""
        return [
            GcodeLine(LineKind.SETUP, f"{profile.unit_mode} ; Set units to mm"),
            GcodeLine(LineKind.SETUP, f"{profile.coord_mode} ; Use absolute coordinates"),
            GcodeLine(LineKind.SETUP, "S0  ; Power off laser i.e. PWM=0"),
            GcodeLine(LineKind.SETUP, f"{profile.laser_on_cmd}  ; Activate Laser with dynamics"),
            GcodeLine(LineKind.SETUP, f"{profile.feed_rate} ; Set speed"),
            _comment(),
            _comment(),
        ]

    @classmethod
    def build_origin(cls, comment: Optional[str] = None) -> GcodeLine:
        """Rapid move to 0|0 with the laser at zero power."""
        text = "G00 X0 Y0 S0"
        if comment:
            text += f" ; {comment}"
        return GcodeLine(LineKind.RAPID, text)

    @classmethod
    def build_direction(cls, forward: bool) -> GcodeLine:
        return GcodeLine(LineKind.DIRECTION, f";--{'>' if forward else '<'}--")

    @classmethod
    def build_cut(cls, x_mm: float, y_mm: float, power: int) -> GcodeLine:
        """Move with power to (x, y)."""
        return GcodeLine(
            LineKind.CUT, f"G01 X{cls.coord(x_mm)} Y{cls.coord(y_mm)} S{power}"
        )

    @classmethod
    def build_travel(cls, x_mm: float, y_mm: float, power: int) -> GcodeLine:
        """Move to the next scanline, tagged as repositioning."""
        return GcodeLine(
            LineKind.TRAVEL,
            f"G01 X{cls.coord(x_mm)} Y{cls.coord(y_mm)} S{power} {cls.TRAVEL_TAG}",
        )

    @classmethod
    def build_postamble(cls, profile: LaserProfile) -> List[GcodeLine]:
        return [
            _comment(),
            _comment(),
            GcodeLine(LineKind.SETUP, f"{profile.laser_off_cmd} ; Laser Off"),
            cls.build_origin(comment="Return to origin"),
        ]


class Program:
    """An ordered, append-only sequence of program lines with stats.

    With ``keep_lines=False`` only the stats are tracked, which is what the
    encoder uses while streaming lines straight to a sink.
    """

    def __init__(self, description: str = "", keep_lines: bool = True):
        self.lines: List[GcodeLine] = []
        self.keep_lines = keep_lines
        self.description = description
        self.stats = {
            "total_lines": 0,
            "cut_moves": 0,
            "travel_moves": 0,
            "rows": 0,
        }

    def add(self, line: GcodeLine) -> GcodeLine:
        """Append a line and update stats"""
        if self.keep_lines:
            self.lines.append(line)
        self.stats["total_lines"] += 1
        if line.kind is LineKind.CUT:
            self.stats["cut_moves"] += 1
        elif line.kind is LineKind.TRAVEL:
            self.stats["travel_moves"] += 1
        elif line.kind is LineKind.DIRECTION:
            self.stats["rows"] += 1
        return line

    def extend(self, lines: List[GcodeLine]) -> None:
        for line in lines:
            self.add(line)

    def text_lines(self) -> List[str]:
        return [line.text for line in self.lines]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for JSON records"""
        return {
            "description": self.description,
            "stats": dict(self.stats),
        }

    def summary(self) -> str:
        """Human-readable summary"""
        return "\n".join(
            [
                f"Job: {self.description}",
                f"Lines: {self.stats['total_lines']}",
                f"Rows: {self.stats['rows']}",
                f"Cut moves: {self.stats['cut_moves']}",
                f"Travel moves: {self.stats['travel_moves']}",
            ]
        )

"""Pattern generation for power calibration and alignment"""

import numpy as np
from PIL import Image, ImageDraw


class PatternService:
    """Generate grayscale test patterns sized in millimetres"""

    PATTERNS = ("ramp", "grid", "frame")

    @staticmethod
    def generate(pattern: str, kerf_width: float = 0.15, size_mm: float = 20.0,
                 steps: int = 16) -> Image.Image:
        """Generate a calibration pattern.

        Args:
            pattern: Pattern type (ramp, grid, frame)
            kerf_width: mm per pixel (laser width)
            size_mm: Pattern size in millimetres
            steps: Number of gray bands for the ramp

        Returns:
            PIL Image in mode "L" (255 = no burn)
        """
        if kerf_width <= 0:
            raise ValueError(f"kerf_width must be positive (got {kerf_width})")

        def mm_to_px(mm: float) -> int:
            return max(1, int(round(mm / kerf_width)))

        if pattern == "ramp":
            return PatternService._ramp(mm_to_px, size_mm, steps)
        elif pattern == "grid":
            return PatternService._grid(mm_to_px, size_mm)
        elif pattern == "frame":
            return PatternService._frame(mm_to_px, size_mm)
        else:
            raise ValueError(f"Unknown pattern: {pattern}")

    @staticmethod
    def _ramp(mm_to_px, size_mm: float, steps: int) -> Image.Image:
        """Vertical bands from black (left) to white (right)."""
        if steps < 2:
            raise ValueError(f"steps must be >= 2 (got {steps})")
        width_px = mm_to_px(size_mm)
        height_px = mm_to_px(size_mm / 4)

        levels = np.linspace(0, 255, steps).round().astype(np.uint8)
        band = np.minimum(np.arange(width_px) * steps // width_px, steps - 1)
        row = levels[band]
        return Image.fromarray(np.tile(row, (height_px, 1)))

    @staticmethod
    def _grid(mm_to_px, size_mm: float) -> Image.Image:
        size_px = mm_to_px(size_mm)
        spacing_px = mm_to_px(size_mm / 8)
        img = Image.new("L", (size_px, size_px), 255)
        draw = ImageDraw.Draw(img)

        for x in range(0, size_px, spacing_px):
            draw.line((x, 0, x, size_px - 1), fill=0, width=1)
        for y in range(0, size_px, spacing_px):
            draw.line((0, y, size_px - 1, y), fill=0, width=1)

        draw.rectangle((0, 0, size_px - 1, size_px - 1), outline=0, width=1)
        return img

    @staticmethod
    def _frame(mm_to_px, size_mm: float) -> Image.Image:
        size_px = mm_to_px(size_mm)
        img = Image.new("L", (size_px, size_px), 255)
        draw = ImageDraw.Draw(img)
        draw.rectangle((0, 0, size_px - 1, size_px - 1), outline=0, width=1)
        return img

"""Shared GRBL raster defaults used across settings, encoder, and CLI."""


class GrblDefaults:
    """Single source of truth for default settings and file naming."""

    # Settings file layout
    SECTION = "settings"
    CONFIG_FILE = "raster2grbl.conf"

    # Recognized keys (in file order)
    KEY_ABSCOORDS = "abscoords"
    KEY_DIMENSION = "dimension"
    KEY_LASERON = "laseron"
    KEY_LASEROFF = "laseroff"
    KEY_LASERMAX = "lasermax"
    KEY_LASERMIN = "lasermin"
    KEY_SPEED = "speed"
    KEY_WIDTH = "width"
    KEY_OUTFILENAME = "outfilename"

    # Default values for grbl 1.1
    ABSCOORDS = "G90"
    DIMENSION = "G21"
    LASER_ON = "M4"
    LASER_OFF = "M5"
    POWER_MAX = 400
    POWER_MIN = 50
    SPEED = "F1500"
    KERF_WIDTH_MM = 0.15
    OUTFILENAME = "raster2grbl.ngc"

    # Pixel intensity range (8-bit grayscale)
    MAX_INTENSITY = 255

    # Comments shown above each key when a settings file is written
    KEY_COMMENTS = {
        KEY_ABSCOORDS: "absolute coordinates",
        KEY_DIMENSION: "set units to mm",
        KEY_LASERON: "Laser on with dynamics (grbl 1.1)",
        KEY_LASEROFF: "Laser off",
        KEY_LASERMAX: "Laser Max PWM",
        KEY_LASERMIN: "Laser Min PWM",
        KEY_SPEED: "Base speed [mm/min]",
        KEY_WIDTH: "Laser Width [mm]",
        KEY_OUTFILENAME: "NGC filename",
    }

    @classmethod
    def as_settings(cls) -> dict:
        """Default settings as ordered key -> string value."""
        return {
            cls.KEY_ABSCOORDS: cls.ABSCOORDS,
            cls.KEY_DIMENSION: cls.DIMENSION,
            cls.KEY_LASERON: cls.LASER_ON,
            cls.KEY_LASEROFF: cls.LASER_OFF,
            cls.KEY_LASERMAX: str(cls.POWER_MAX),
            cls.KEY_LASERMIN: str(cls.POWER_MIN),
            cls.KEY_SPEED: cls.SPEED,
            cls.KEY_WIDTH: str(cls.KERF_WIDTH_MM),
            cls.KEY_OUTFILENAME: cls.OUTFILENAME,
        }

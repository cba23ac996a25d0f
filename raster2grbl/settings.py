"""Settings store: the key-value file behind a conversion.

The file is INI style with a single ``[settings]`` section::

    [settings]
    # absolute coordinates
    abscoords = G90
    ...

Values stay strings in the store; ``to_profile()`` parses and validates
them into an immutable LaserProfile once per conversion.
"""

from __future__ import annotations

import configparser
import logging
import os
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Union

from .constants import GrblDefaults
from .errors import SettingsError
from .profile import LaserProfile
from .validators import safe_float, safe_int, safe_str

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def home_dir() -> Path:
    """$HOME if set, otherwise the platform home directory."""
    home = os.environ.get("HOME")
    return Path(home) if home else Path.home()


def default_config_path() -> Path:
    return home_dir() / GrblDefaults.CONFIG_FILE


def _parser() -> configparser.ConfigParser:
    parser = configparser.ConfigParser(
        interpolation=None,
        allow_no_value=True,
        comment_prefixes=("#", ";"),
    )
    # keep key case as written
    parser.optionxform = str
    return parser


class SettingsStore:
    """Ordered mapping of setting keys to string values."""

    def __init__(self, values: Optional[Dict[str, str]] = None, path: Optional[PathLike] = None):
        self._values: Dict[str, str] = dict(values) if values is not None else {}
        self.path = Path(path) if path is not None else None

    @classmethod
    def defaults(cls) -> "SettingsStore":
        return cls(GrblDefaults.as_settings())

    @classmethod
    def load(cls, path: PathLike) -> "SettingsStore":
        """Read a settings file.

        Raises:
            SettingsError: If the file cannot be read or has no [settings] section
        """
        path = Path(path)
        parser = _parser()
        try:
            with open(path, "r", encoding="utf-8") as f:
                parser.read_file(f)
        except OSError as exc:
            raise SettingsError(f"Cannot read settings file {path}: {exc}") from exc
        except configparser.Error as exc:
            raise SettingsError(f"Malformed settings file {path}: {exc}") from exc

        if not parser.has_section(GrblDefaults.SECTION):
            raise SettingsError(f"{path} has no [{GrblDefaults.SECTION}] section")

        values = {
            key: (value if value is not None else "")
            for key, value in parser.items(GrblDefaults.SECTION)
        }
        logger.debug("Loaded %d settings from %s", len(values), path)
        return cls(values, path=path)

    @classmethod
    def load_or_default(cls, path: Optional[PathLike] = None) -> "SettingsStore":
        """Read ``path`` if it exists, otherwise return the defaults.

        Defaults are not written to disk; call ``save()`` for that.
        """
        path = Path(path) if path is not None else default_config_path()
        if path.exists():
            return cls.load(path)
        logger.info("No settings file at %s, using defaults", path)
        store = cls.defaults()
        store.path = path
        return store

    def save(self, path: Optional[PathLike] = None) -> Path:
        """Write the settings (with a comment above each known key).

        Raises:
            SettingsError: If no path is known or the file cannot be written
        """
        target = Path(path) if path is not None else self.path
        if target is None:
            raise SettingsError("No settings file path given")

        parser = _parser()
        parser.add_section(GrblDefaults.SECTION)
        for key, value in self._values.items():
            comment = GrblDefaults.KEY_COMMENTS.get(key)
            if comment:
                parser.set(GrblDefaults.SECTION, f"# {comment}", None)
            parser.set(GrblDefaults.SECTION, key, value)

        try:
            with open(target, "w", encoding="utf-8") as f:
                parser.write(f)
        except OSError as exc:
            raise SettingsError(f"Cannot write settings file {target}: {exc}") from exc

        self.path = target
        logger.info("Config saved to %s", target)
        return target

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._values.get(key, default)

    def set(self, key: str, value) -> None:
        self._values[key] = str(value)

    def keys(self) -> List[str]:
        return list(self._values)

    def as_dict(self) -> Dict[str, str]:
        return dict(self._values)

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __contains__(self, key: str) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    @property
    def output_filename(self) -> str:
        return safe_str(self.get(GrblDefaults.KEY_OUTFILENAME), GrblDefaults.KEY_OUTFILENAME)

    def output_path(self, base_dir: Optional[PathLike] = None) -> Path:
        """Output file path; relative names resolve against ``base_dir`` (default $HOME)."""
        name = Path(self.output_filename)
        if name.is_absolute():
            return name
        base = Path(base_dir) if base_dir is not None else home_dir()
        return base / name

    def to_profile(self) -> LaserProfile:
        """Parse the numeric settings and build a validated LaserProfile.

        Raises:
            SettingsError: missing or malformed values
            InvalidPowerRangeError / InvalidKerfError: out-of-range values
        """
        d = GrblDefaults
        profile = LaserProfile(
            power_min=safe_int(self.get(d.KEY_LASERMIN), d.KEY_LASERMIN),
            power_max=safe_int(self.get(d.KEY_LASERMAX), d.KEY_LASERMAX),
            kerf_width=safe_float(self.get(d.KEY_WIDTH), d.KEY_WIDTH),
            feed_rate=safe_str(self.get(d.KEY_SPEED), d.KEY_SPEED),
            unit_mode=safe_str(self.get(d.KEY_DIMENSION), d.KEY_DIMENSION),
            coord_mode=safe_str(self.get(d.KEY_ABSCOORDS), d.KEY_ABSCOORDS),
            laser_on_cmd=safe_str(self.get(d.KEY_LASERON), d.KEY_LASERON),
            laser_off_cmd=safe_str(self.get(d.KEY_LASEROFF), d.KEY_LASEROFF),
        )
        return profile.validate()

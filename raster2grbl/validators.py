"""Parsing helpers for values read from the settings file"""

from typing import Optional, Any

from .errors import SettingsError


def safe_int(value: Any, key: str, default: Optional[int] = None) -> int:
    """Parse an integer setting.

    Args:
        value: Raw value (usually a string from the settings file)
        key: Setting name for error messages
        default: Value used when ``value`` is None (raises if not provided)

    Returns:
        Parsed integer

    Raises:
        SettingsError: If value is missing or not an integer
    """
    if value is None:
        if default is not None:
            return default
        raise SettingsError(f"{key} is required")

    if isinstance(value, str):
        value = value.strip()
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise SettingsError(f"{key} must be an integer (got {value!r})") from exc


def safe_float(value: Any, key: str, default: Optional[float] = None) -> float:
    """Parse a float setting.

    Args:
        value: Raw value (usually a string from the settings file)
        key: Setting name for error messages
        default: Value used when ``value`` is None (raises if not provided)

    Returns:
        Parsed float

    Raises:
        SettingsError: If value is missing or not a number
    """
    if value is None:
        if default is not None:
            return default
        raise SettingsError(f"{key} is required")

    if isinstance(value, str):
        value = value.strip()
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise SettingsError(f"{key} must be a number (got {value!r})") from exc


def safe_str(value: Any, key: str, default: Optional[str] = None) -> str:
    """Return a stripped, non-empty string setting."""
    if value is None or not str(value).strip():
        if default is not None:
            return default
        raise SettingsError(f"{key} is required")
    return str(value).strip()

#!/usr/bin/env python3
"""Simple test runner that does not require pytest.

This is a minimal harness to validate the encoder in environments
where pytest isn't available (like a workshop PC next to the laser).
"""

import sys
import os
import tempfile
from pathlib import Path

# Ensure repo root is on sys.path so 'raster2grbl' can be imported
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from raster2grbl import processing, LaserProfile, RasterImage, MemorySink, encode
from raster2grbl.settings import SettingsStore


def test_processing():
    if processing.laser_power(0, 50, 400) != 50:
        raise AssertionError("white pixel should map to power_min")
    if processing.laser_power(255, 50, 400) != 400:
        raise AssertionError("black pixel should map to power_max")
    if processing.intensity_level(255) != 0:
        raise AssertionError("intensity_level(255) != 0")


def test_encoder():
    img = RasterImage.from_array([[0, 255], [255, 0]])
    sink = MemorySink()
    result = encode(img, LaserProfile(kerf_width=1.0), sink)
    if not result.ok:
        raise AssertionError(f"encode failed: {result.message}")
    markers = [line for line in sink.lines if line.startswith(";--")]
    if markers != [";-->--", ";--<--"]:
        raise AssertionError(f"unexpected scan directions {markers}")
    travels = [line for line in sink.lines if line.endswith(";u")]
    if len(travels) != 1:
        raise AssertionError("expected one travel move")


def run_settings_test(tmpdir):
    path = Path(tmpdir) / "r.conf"
    SettingsStore.defaults().save(path)
    if not path.exists():
        raise AssertionError("Settings file missing")
    if SettingsStore.load(path).to_profile() != LaserProfile():
        raise AssertionError("Settings roundtrip changed the profile")


def main():
    for name, fn in (("processing", test_processing), ("encoder", test_encoder)):
        try:
            fn()
            print(f"{name}: ok")
        except AssertionError as e:
            print(f"{name}: FAILED -", e)
            sys.exit(2)

    td = tempfile.mkdtemp(prefix="raster2grbl_")
    try:
        run_settings_test(td)
        print("settings: ok")
    except AssertionError as e:
        print("settings: FAILED -", e)
        sys.exit(2)

    print("ALL TESTS OK")


if __name__ == "__main__":
    main()

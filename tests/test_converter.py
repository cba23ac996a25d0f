"""Tests for GrblRasterConverter (host adapter)."""

import pytest
from PIL import Image

from raster2grbl.constants import GrblDefaults
from raster2grbl.converter import GrblRasterConverter
from raster2grbl.errors import OutputOpenError
from raster2grbl.image_source import RasterImage
from raster2grbl.settings import SettingsStore
from raster2grbl.sink import MemorySink


@pytest.fixture
def test_image(tmp_path):
    """Small grayscale image with a black square."""
    img = Image.new("L", (8, 6), color=255)
    for y in range(2, 4):
        for x in range(2, 6):
            img.putpixel((x, y), 0)
    path = tmp_path / "square.png"
    img.save(path)
    return str(path)


def test_convert_default_output(tmp_path, test_image):
    conv = GrblRasterConverter(SettingsStore.defaults(), base_dir=tmp_path)
    out = conv.convert(test_image)

    assert out["ok"] is True
    assert out["width"] == 8
    assert out["height"] == 6
    assert out["stats"]["rows"] == 6
    assert out["stats"]["travel_moves"] == 5

    target = tmp_path / GrblDefaults.OUTFILENAME
    assert out["output"] == str(target)
    text = target.read_text().splitlines()
    assert text[0] == "; raster2grbl for Laser (grbl 1.1)"
    assert f"; File: {test_image}" in text
    assert text[-1] == "G00 X0 Y0 S0 ; Return to origin"


def test_convert_explicit_output_and_progress(tmp_path, test_image):
    seen = []
    conv = GrblRasterConverter(SettingsStore.defaults(), base_dir=tmp_path)
    out = conv.convert(test_image, output=tmp_path / "x.ngc", progress=seen.append)
    assert out["ok"] is True
    assert (tmp_path / "x.ngc").exists()
    assert seen[-1] == 1.0


def test_convert_to_sink():
    sink = MemorySink()
    conv = GrblRasterConverter(SettingsStore.defaults())
    out = conv.convert(RasterImage.from_array([[0, 255]]), output=sink)
    assert out["ok"] is True
    assert sink.lines[-2] == "M5 ; Laser Off"


def test_convert_unwritable_output(tmp_path, test_image):
    conv = GrblRasterConverter(SettingsStore.defaults(), base_dir=tmp_path / "missing")
    out = conv.convert(test_image)
    assert out["ok"] is False
    assert "Cannot open output file" in out["message"]
    assert not (tmp_path / "missing").exists()


def test_convert_bad_settings(tmp_path, test_image):
    store = SettingsStore.defaults()
    store.set("lasermin", 900)
    conv = GrblRasterConverter(store, base_dir=tmp_path)
    out = conv.convert(test_image)
    assert out["ok"] is False
    assert "power_min" in out["message"]
    assert not (tmp_path / GrblDefaults.OUTFILENAME).exists()


def test_convert_missing_image(tmp_path):
    conv = GrblRasterConverter(SettingsStore.defaults(), base_dir=tmp_path)
    out = conv.convert(tmp_path / "nope.png")
    assert out["ok"] is False
    assert "Cannot read image" in out["message"]


def test_save_settings(tmp_path):
    conv = GrblRasterConverter(SettingsStore.defaults())
    out = conv.save_settings(tmp_path / "s.conf")
    assert out["ok"] is True
    assert SettingsStore.load(tmp_path / "s.conf")["laseron"] == "M4"

    bad = conv.save_settings(tmp_path / "missing" / "s.conf")
    assert bad["ok"] is False


class _CloseFails(MemorySink):
    def close(self):
        super().close()
        raise OutputOpenError("Cannot write output file out.ngc: No space left on device")


def test_convert_write_failure_on_close(tmp_path, test_image):
    conv = GrblRasterConverter(SettingsStore.defaults(), base_dir=tmp_path)
    out = conv.convert(test_image, output=_CloseFails())

    assert out["ok"] is False
    assert "No space left" in out["message"]
    assert "Cannot read image" not in out["message"]

import pytest

from raster2grbl.patterns import PatternService


def test_ramp_black_to_white():
    img = PatternService.generate("ramp", kerf_width=0.5, size_mm=16.0, steps=4)
    assert img.mode == "L"
    assert img.size == (32, 8)
    assert img.getpixel((0, 0)) == 0
    assert img.getpixel((31, 7)) == 255
    row = [img.getpixel((x, 0)) for x in range(32)]
    assert row == sorted(row)
    assert len(set(row)) == 4


@pytest.mark.parametrize("name", ["grid", "frame"])
def test_square_patterns(name):
    img = PatternService.generate(name, kerf_width=0.25, size_mm=10.0)
    assert img.mode == "L"
    assert img.size == (40, 40)
    assert img.getpixel((0, 0)) == 0


def test_unknown_pattern():
    with pytest.raises(ValueError):
        PatternService.generate("spiral")


def test_bad_kerf():
    with pytest.raises(ValueError):
        PatternService.generate("frame", kerf_width=0)

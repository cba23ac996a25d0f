import numpy as np
import pytest
from PIL import Image

from raster2grbl.errors import InvalidImageDimensionsError
from raster2grbl.image_source import RasterImage


def test_from_array_rows_top_first():
    img = RasterImage.from_array([[1, 2, 3], [4, 5, 6]])
    assert img.size == (3, 2)
    assert img.row(0).tolist() == [1, 2, 3]
    assert img.row(1).tolist() == [4, 5, 6]


def test_pixels_are_read_only_copy():
    src = np.zeros((2, 2), dtype=np.uint8)
    img = RasterImage.from_array(src)
    src[0, 0] = 9
    assert img.row(0)[0] == 0
    with pytest.raises(ValueError):
        img.pixels[0, 0] = 1


@pytest.mark.parametrize("shape", [(0, 3), (3, 0)])
def test_empty_image_rejected(shape):
    with pytest.raises(InvalidImageDimensionsError):
        RasterImage.from_array(np.zeros(shape, dtype=np.uint8))


def test_from_buffer_uses_first_byte():
    # 3x2 image, 2 bytes per pixel; second byte is noise
    data = bytes([10, 99, 20, 99, 30, 99, 40, 99, 50, 99, 60, 99])
    img = RasterImage.from_buffer(data, width=3, height=2, bytes_per_pixel=2)
    assert img.row(0).tolist() == [10, 20, 30]
    assert img.row(1).tolist() == [40, 50, 60]
    assert img.bytes_per_pixel == 2


def test_from_buffer_validation():
    with pytest.raises(InvalidImageDimensionsError):
        RasterImage.from_buffer(b"", width=0, height=1)
    with pytest.raises(ValueError):
        RasterImage.from_buffer(b"\x00", width=2, height=2)
    with pytest.raises(ValueError):
        RasterImage.from_buffer(b"\x00" * 4, width=2, height=2, bytes_per_pixel=0)


def test_from_pil_gray_alpha_uses_gray_band():
    pil = Image.new("LA", (3, 2), (100, 7))
    img = RasterImage.from_pil(pil)
    assert img.pixels.tolist() == [[100] * 3] * 2
    assert img.bytes_per_pixel == 2


def test_from_pil_rgb_converted():
    pil = Image.new("RGB", (2, 2), (255, 255, 255))
    img = RasterImage.from_pil(pil, name="white")
    assert img.pixels.tolist() == [[255, 255], [255, 255]]
    assert img.name == "white"


def test_open_file(tmp_path):
    path = tmp_path / "gray.png"
    Image.new("L", (4, 3), 128).save(path)
    img = RasterImage.open(path)
    assert img.size == (4, 3)
    assert img.name == str(path)
    assert int(img.row(2)[3]) == 128
    assert img.to_pil().size == (4, 3)


def test_row_is_a_copy():
    img = RasterImage.from_array([[1, 2], [3, 4]])
    row = img.row(0)
    row[0] = 99
    assert img.row(0).tolist() == [1, 2]


@pytest.mark.parametrize(
    "mode, data, expected",
    [
        ("I;16", bytes([0x34, 0x12, 0x78, 0x56]), [0x34, 0x78]),
        ("I;16B", bytes([0x12, 0x34, 0x56, 0x78]), [0x12, 0x56]),
    ],
)
def test_from_pil_16bit_uses_first_stored_byte(mode, data, expected):
    pil = Image.frombytes(mode, (2, 1), data)
    img = RasterImage.from_pil(pil)
    assert img.row(0).tolist() == expected
    assert img.bytes_per_pixel == 2

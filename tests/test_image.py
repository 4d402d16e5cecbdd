import copy

import numpy as np
import pytest
from PIL import Image as PILImage

from skyburst.image import Image, Pixel


def test_new_image_dimensions_and_black():
    img = Image(5, 3)
    assert (img.width, img.height, img.channels) == (5, 3, 3)
    assert img.get(2, 4) == Pixel(0, 0, 0)


def test_negative_size_rejected():
    with pytest.raises(ValueError):
        Image(-1, 2)


def test_pixel_range_validated():
    with pytest.raises(ValueError):
        Pixel(0, 256, 0)


def test_set_get_round_trip():
    img = Image(4, 4)
    img.set(1, 2, Pixel(10, 20, 30))
    assert img.get(1, 2) == Pixel(10, 20, 30)
    assert img.get(2, 1) == Pixel(0, 0, 0)


def test_set_vec3_full_intensity_is_255():
    img = Image(2, 2)
    img.set_vec3(0, 0, [1.0, 0.0, 1.0])
    assert img.get(0, 0) == Pixel(255, 0, 255)


def test_vec3_round_trip_is_close():
    img = Image(2, 2)
    colour = np.array([0.2, 0.5, 0.8])
    img.set_vec3(1, 1, colour)
    assert np.allclose(img.get_vec3(1, 1), colour, atol=1 / 255)


def test_get_vec3_of_set_pixel_in_unit_range():
    img = Image(1, 1)
    img.set(0, 0, Pixel(255, 0, 51))
    v = img.get_vec3(0, 0)
    assert v[0] == pytest.approx(1.0)
    assert v[1] == pytest.approx(0.0)
    assert 0.0 < v[2] < 1.0


@pytest.mark.parametrize("row, col", [(-1, 0), (0, -1), (3, 0), (0, 4)])
def test_out_of_bounds_access(row, col):
    img = Image(4, 3)
    with pytest.raises(IndexError):
        img.get(row, col)
    with pytest.raises(IndexError):
        img.set(row, col, Pixel(1, 1, 1))
    with pytest.raises(IndexError):
        img.set_vec3(row, col, [0.0, 0.0, 0.0])


def test_save_then_load_flips_rows(tmp_path):
    img = Image(3, 2)
    img.set(0, 0, Pixel(200, 10, 10))
    img.set(1, 2, Pixel(5, 6, 7))
    path = tmp_path / "out.png"
    img.save(path)
    loaded = Image.load(path)
    assert (loaded.width, loaded.height, loaded.channels) == (3, 2, 3)
    for row in range(img.height):
        for col in range(img.width):
            assert loaded.get(img.height - 1 - row, col) == img.get(row, col)


def test_load_keeps_alpha_channel(tmp_path):
    path = tmp_path / "alpha.png"
    array = np.zeros((2, 2, 4), dtype=np.uint8)
    array[0, 0] = (1, 2, 3, 4)
    PILImage.fromarray(array).save(path)
    loaded = Image.load(path)
    assert loaded.channels == 4
    assert loaded.get(1, 0) == Pixel(1, 2, 3)
    assert int(loaded.data[1, 0, 3]) == 4


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        Image.load(tmp_path / "missing.png")


def test_copy_is_independent():
    img = Image(2, 2)
    img.set(0, 0, Pixel(9, 9, 9))
    duplicate = copy.copy(img)
    duplicate.set(0, 0, Pixel(1, 1, 1))
    assert img.get(0, 0) == Pixel(9, 9, 9)
    assert duplicate.get(0, 0) == Pixel(1, 1, 1)
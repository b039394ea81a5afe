import cv2
import numpy as np
import pytest

from src_stereo_nccr.errors import InputError
from utils.image_processing import ImageProcessor


def _write_png(path, image):
    assert cv2.imwrite(str(path), image)
    return path


def test_load_grayscale_roundtrip(tmp_path, texture):
    image = texture(20, 30)
    path = _write_png(tmp_path / "left.png", image)
    loaded = ImageProcessor.load_grayscale_image(path)
    assert loaded.dtype == np.uint8
    assert np.array_equal(loaded, image)


def test_color_file_decoded_as_grayscale(tmp_path):
    color = np.zeros((10, 12, 3), dtype=np.uint8)
    color[..., 1] = 200
    path = _write_png(tmp_path / "color.png", color)
    loaded = ImageProcessor.load_grayscale_image(path)
    assert loaded.shape == (10, 12)


def test_missing_file(tmp_path):
    with pytest.raises(InputError, match="not found"):
        ImageProcessor.load_grayscale_image(tmp_path / "absent.png")


def test_undecodable_file(tmp_path):
    path = tmp_path / "fake.png"
    path.write_bytes(b"this is not an image")
    with pytest.raises(InputError, match="Could not decode"):
        ImageProcessor.load_grayscale_image(path)


def test_load_stereo_pair(tmp_path, texture):
    left = _write_png(tmp_path / "l.png", texture(20, 30, seed=1))
    right = _write_png(tmp_path / "r.png", texture(20, 30, seed=2))
    left_image, right_image = ImageProcessor.load_stereo_pair(left, right)
    assert left_image.shape == right_image.shape == (20, 30)


def test_load_stereo_pair_mismatch(tmp_path, texture):
    left = _write_png(tmp_path / "l.png", texture(20, 30))
    right = _write_png(tmp_path / "r.png", texture(20, 31))
    with pytest.raises(InputError, match="shapes don't match"):
        ImageProcessor.load_stereo_pair(left, right)


def test_validate_image_pair_rejects_none(texture):
    with pytest.raises(InputError):
        ImageProcessor.validate_image_pair(texture(5, 5), None)


def test_get_image_info(texture):
    image = np.array([[0, 10], [20, 30]], dtype=np.uint8)
    info = ImageProcessor.get_image_info(image)
    assert info['width'] == 2
    assert info['height'] == 2
    assert info['min_value'] == 0
    assert info['max_value'] == 30
    assert info['mean_value'] == 15.0

import numpy as np
import pytest


def make_texture(height, width, seed=0):
    """Random but fixed grayscale texture."""
    rng = np.random.default_rng(seed)
    return rng.integers(1, 256, size=(height, width), dtype=np.uint8)


@pytest.fixture
def texture():
    return make_texture


@pytest.fixture
def shifted_pair():
    """Stereo pair whose right image is the left image moved 5 columns to the left."""
    left = make_texture(60, 100, seed=1)
    right = make_texture(60, 100, seed=2)
    right[:, :-5] = left[:, 5:]
    return left, right


@pytest.fixture
def periodic_image():
    """Texture repeating every 10 columns."""
    tile = make_texture(40, 10, seed=3)
    return np.tile(tile, (1, 8))

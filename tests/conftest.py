"""Shared fixtures: synthetic panoramas built with numpy."""

import cv2
import numpy as np
import pytest

from pano2cube.transforms import ImageBuffer


def make_gradient(width, height):
    """Red rises left to right, green top to bottom, blue constant"""
    image = np.zeros((height, width, 3), dtype=np.uint8)
    image[..., 0] = (np.arange(width) * 255 // max(width - 1, 1))[np.newaxis, :]
    image[..., 1] = (np.arange(height) * 255 // max(height - 1, 1))[:, np.newaxis]
    image[..., 2] = 128
    return ImageBuffer.from_array(image)


def make_random(width, height, seed=0):
    rng = np.random.default_rng(seed)
    return ImageBuffer.from_array(rng.integers(0, 256, (height, width, 3), dtype=np.uint8))


@pytest.fixture
def gradient_panorama():
    return make_gradient(64, 32)


@pytest.fixture
def random_panorama():
    return make_random(64, 32)


@pytest.fixture
def panorama_file(tmp_path):
    """A 64x32 gradient panorama saved as PNG"""
    source = make_gradient(64, 32)
    path = tmp_path / "pano.png"
    cv2.imwrite(str(path), cv2.cvtColor(source.pixels, cv2.COLOR_RGBA2BGR))
    return path

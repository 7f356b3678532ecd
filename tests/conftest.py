"""Shared fixtures: synthetic strip images built with NumPy."""

import numpy as np
import pytest


def noise_image(width, height, low=100, high=110, seed=0):
    """RGBA image of low-amplitude uniform noise."""
    rng = np.random.default_rng(seed)
    img = np.empty((height, width, 4), dtype=np.uint8)
    img[:, :, :3] = rng.integers(low, high, size=(height, width, 3), dtype=np.uint8)
    img[:, :, 3] = 255
    return img


def solid_image(width, height, color=(200, 120, 40)):
    img = np.empty((height, width, 4), dtype=np.uint8)
    img[:, :, :3] = color
    img[:, :, 3] = 255
    return img


@pytest.fixture
def banded_image():
    """100x300 noise with a solid white band on rows 100-104."""
    img = noise_image(100, 300)
    img[100:105, :, :3] = 255
    return img


@pytest.fixture
def striped_image():
    """Noise page with four horizontal lines of increasing contrast."""
    img = noise_image(120, 400, seed=3)
    for row, value in ((60, 125), (150, 165), (240, 225), (330, 255)):
        img[row:row + 2, :, :3] = value
    return img


@pytest.fixture
def tall_gradient():
    """200-row RGBA gradient, each row a distinct gray level."""
    rows = np.arange(200, dtype=np.uint8)
    img = np.zeros((200, 30, 4), dtype=np.uint8)
    img[:, :, :3] = rows[:, None, None]
    img[:, :, 3] = 255
    return img

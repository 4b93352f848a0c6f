"""Shared test fixtures."""

import os

os.environ.setdefault("MPLBACKEND", "Agg")

import numpy as np
import pytest


def uniform_image(height, width, color):
    img = np.zeros((height, width, 3), dtype=np.uint8)
    img[:, :] = color
    return img


@pytest.fixture
def make_uniform():
    return uniform_image


@pytest.fixture
def two_halves():
    """4x4 image, left two columns (100,100,100), right two (103,104,100): distance 5."""
    img = uniform_image(4, 4, (100, 100, 100))
    img[:, 2:] = (103, 104, 100)
    return img


@pytest.fixture
def random_image():
    rng = np.random.default_rng(7)
    return rng.integers(0, 256, size=(12, 15, 3), dtype=np.uint8)

"""Pytest fixtures for shapesnap tests."""

import tempfile

import numpy as np
import pytest


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def rng():
    """Seeded random generator for reproducible tests."""
    return np.random.default_rng(1234)


@pytest.fixture
def red_image():
    """4x4 uniform opaque red image."""
    img = np.zeros((4, 4, 4), dtype=np.uint8)
    img[:, :] = (255, 0, 0, 255)
    return img


@pytest.fixture
def noise_pair(rng):
    """Random opaque target and canvas of the same size."""
    target = rng.integers(0, 255, size=(24, 32, 4), dtype=np.uint8, endpoint=True)
    current = rng.integers(0, 255, size=(24, 32, 4), dtype=np.uint8, endpoint=True)
    target[:, :, 3] = 255
    current[:, :, 3] = 255
    return target, current


@pytest.fixture
def gradient_image():
    """Horizontal gradient with a dark block, as an RGB image."""
    img = np.zeros((20, 30, 3), dtype=np.uint8)
    img[:, :, 0] = np.linspace(0, 255, 30, dtype=np.uint8)[None, :]
    img[:, :, 2] = 200
    img[5:12, 8:20] = (10, 20, 30)
    return img


@pytest.fixture
def small_search():
    """Search settings small enough for fast tests."""
    from shapesnap.config import SearchConfig
    return SearchConfig(
        amount_of_shapes=3,
        amount_of_attempts=3,
        max_mutations=40,
        patience=15,
        alpha=128,
        seed=7,
    )

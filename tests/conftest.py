"""
conftest.py
~~~~~~~~~~~

Shared fixtures for the nn_gym test suite.
"""

import os
import sys

import numpy as np
import pytest

# Ensure project root is importable when running from a plain checkout
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from nn_gym import Matrix, Network


@pytest.fixture
def rng():
    """Seeded generator so random matrices are reproducible."""
    return np.random.default_rng(1234)


@pytest.fixture
def or_data():
    """Logical OR as a single batch."""
    inputs = [[0.0, 0.0], [1.0, 0.0], [0.0, 1.0], [1.0, 1.0]]
    targets = [[0.0], [1.0], [1.0], [1.0]]
    return [Matrix.from_rows(inputs)], [Matrix.from_rows(targets)]


@pytest.fixture
def scale_data():
    """y = 2x, one sample per batch."""
    inputs = [[[0.0]], [[5.0]], [[0.0]], [[1.0]]]
    targets = [[[0.0]], [[10.0]], [[0.0]], [[2.0]]]
    return inputs, targets


@pytest.fixture
def image_network():
    """Architecture used to learn an image from pixel coordinates."""
    return Network(
        [(2, "identity"), (15, "relu"), (15, "relu"), (1, "sigmoid")],
        learning_rate=0.001,
        rng=42,
    )


@pytest.fixture
def weights_path(tmp_path):
    """Location for a weight file inside a fresh temporary directory."""
    return str(tmp_path / "weights" / "network.json")

"""
test_data.py
~~~~~~~~~~~~

Unit tests for batching helpers.
"""

import pytest

from nn_gym import Matrix
from nn_gym.data import chunk, make_batches
from nn_gym.errors import DimensionMismatchError


@pytest.mark.unit
class TestChunk:
    """Test splitting rows into consecutive slices."""

    def test_even_split(self):
        assert chunk(range(6), 3) == [[0, 1, 2], [3, 4, 5]]

    def test_last_chunk_holds_leftovers(self):
        assert chunk(range(5), 2) == [[0, 1], [2, 3], [4]]

    def test_batch_larger_than_rows(self):
        assert chunk([1, 2], 20) == [[1, 2]]

    def test_empty_rows(self):
        assert chunk([], 4) == []

    def test_invalid_batch_size(self):
        with pytest.raises(ValueError):
            chunk([1, 2, 3], 0)


@pytest.mark.unit
class TestMakeBatches:
    """Test pairing samples into input and target matrices."""

    def test_batches_are_matrices(self):
        inputs = [[x / 5, 0.0] for x in range(5)]
        targets = [[float(x % 2)] for x in range(5)]

        input_batches, target_batches = make_batches(inputs, targets, 2)

        assert [b.shape for b in input_batches] == [(2, 2), (2, 2), (1, 2)]
        assert [b.shape for b in target_batches] == [(2, 1), (2, 1), (1, 1)]
        assert target_batches[1] == Matrix.from_rows([[0.0], [1.0]])

    def test_order_is_preserved(self):
        inputs = [[float(i)] for i in range(4)]

        input_batches, _ = make_batches(inputs, inputs, 3)

        assert input_batches[0].tolist() == [[0.0], [1.0], [2.0]]
        assert input_batches[1].tolist() == [[3.0]]

    def test_mismatched_sample_counts_fail(self):
        with pytest.raises(DimensionMismatchError):
            make_batches([[0.0], [1.0]], [[0.0]], 1)

"""
persistence.py
~~~~~~~~~~~~~~

JSON weight files for nn_gym networks.

A weight file holds exactly two fields, ``weights`` and ``biases``, each a
list with one 2D array per layer transition. Layer specs and the learning
rate are not stored; the loading network supplies the architecture and the
file must match it.
"""

import json
import logging
import os
from typing import Any, List, Sequence, Tuple

import numpy as np

from .errors import ShapeError, WeightsFormatError, WeightsIOError
from .matrix import Matrix

# Configure module logger
logger = logging.getLogger(__name__)

Shape = Tuple[int, int]


class MatrixEncoder(json.JSONEncoder):
    """Custom JSON encoder that handles matrices and numpy arrays."""

    def default(self, obj: Any) -> Any:
        """
        Convert matrices and numpy arrays to nested lists.

        Args:
            obj: Object to serialize

        Returns:
            JSON-serializable representation
        """
        if isinstance(obj, Matrix):
            return obj.tolist()
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        if isinstance(obj, np.floating):
            return float(obj)
        return super().default(obj)


def save_weights(
    path: str,
    weights: Sequence[Matrix],
    biases: Sequence[Matrix]
) -> None:
    """
    Write weights and biases to a JSON weight file.

    Args:
        path: Destination file; parent directories are created
        weights: One weight matrix per layer transition
        biases: One bias matrix per layer transition

    Raises:
        WeightsIOError: If the file cannot be written
    """
    payload = {'weights': list(weights), 'biases': list(biases)}

    try:
        directory = os.path.dirname(path)
        if directory and not os.path.exists(directory):
            os.makedirs(directory)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(payload, f, cls=MatrixEncoder)
    except OSError as e:
        logger.error(f"Could not write weight file '{path}': {e}")
        raise WeightsIOError(f"Unable to write weight file '{path}': {e}") from e

    logger.info(
        f"Saved {len(payload['weights'])} weight matrices to '{path}'"
    )


def load_weights(
    path: str,
    expected_shapes: Sequence[Tuple[Shape, Shape]]
) -> Tuple[List[Matrix], List[Matrix]]:
    """
    Read a JSON weight file and check it against an architecture.

    Args:
        path: Weight file to read
        expected_shapes: For every layer transition, the pair
            (weight shape, bias shape) the live network uses

    Returns:
        tuple: (weights, biases) as lists of Matrix

    Raises:
        WeightsIOError: If the file cannot be opened or read
        WeightsFormatError: If the content is not a weight file for this
            architecture
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            raw = f.read()
    except OSError as e:
        logger.error(f"Could not read weight file '{path}': {e}")
        raise WeightsIOError(f"Unable to open weight file '{path}': {e}") from e
    except UnicodeDecodeError as e:
        raise WeightsFormatError(f"'{path}' is not a UTF-8 text file: {e}") from e

    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as e:
        raise WeightsFormatError(f"'{path}' is not valid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise WeightsFormatError(f"'{path}' must hold a JSON object")

    weights = _read_matrices(payload, 'weights', [w for w, _ in expected_shapes], path)
    biases = _read_matrices(payload, 'biases', [b for _, b in expected_shapes], path)

    logger.info(f"Loaded {len(weights)} weight matrices from '{path}'")
    return weights, biases


def _read_matrices(
    payload: dict,
    field: str,
    shapes: List[Shape],
    path: str
) -> List[Matrix]:
    """Parse one field of a weight file and validate every shape."""
    if field not in payload:
        raise WeightsFormatError(f"'{path}' has no '{field}' field")

    entries = payload[field]
    if not isinstance(entries, list):
        raise WeightsFormatError(f"'{field}' in '{path}' must be a list")
    if len(entries) != len(shapes):
        raise WeightsFormatError(
            f"'{path}' has {len(entries)} {field} matrices, "
            f"network expects {len(shapes)}"
        )

    matrices = []
    for i, (entry, shape) in enumerate(zip(entries, shapes)):
        if not isinstance(entry, list) or not all(isinstance(row, list) for row in entry):
            raise WeightsFormatError(f"{field}[{i}] in '{path}' is not a 2D array")
        if not all(_is_number(v) for row in entry for v in row):
            raise WeightsFormatError(f"{field}[{i}] in '{path}' holds non-numeric values")
        try:
            matrix = Matrix.from_rows(entry)
        except ShapeError as e:
            raise WeightsFormatError(f"{field}[{i}] in '{path}': {e}") from e

        if matrix.shape != tuple(shape):
            raise WeightsFormatError(
                f"{field}[{i}] in '{path}' has shape {matrix.shape}, "
                f"network expects {tuple(shape)}"
            )
        matrices.append(matrix)

    return matrices


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a valid weight
    return isinstance(value, (int, float)) and not isinstance(value, bool)

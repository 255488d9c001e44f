"""
Helpers for turning flat sample lists into training batches.
"""
from .errors import DimensionMismatchError
from .matrix import Matrix


def chunk(rows, batch_size):
    """
    Split rows into consecutive slices of at most batch_size rows.
    The last slice holds whatever is left over.
    """
    if batch_size < 1:
        raise ValueError(f"batch_size must be >= 1, got {batch_size}")
    rows = list(rows)
    return [rows[start:start + batch_size] for start in range(0, len(rows), batch_size)]


def make_batches(inputs, targets, batch_size):
    """
    Pair up samples and group them into batches.

    Args:
        inputs: Sequence of input rows
        targets: Sequence of target rows, one per input
        batch_size: Maximum rows per batch

    Returns:
        tuple: (input_batches, target_batches), lists of Matrix
    """
    inputs = list(inputs)
    targets = list(targets)
    if len(inputs) != len(targets):
        raise DimensionMismatchError(
            f"Got {len(inputs)} input samples but {len(targets)} targets"
        )

    input_batches = [Matrix.from_rows(b) for b in chunk(inputs, batch_size)]
    target_batches = [Matrix.from_rows(b) for b in chunk(targets, batch_size)]
    return input_batches, target_batches

"""
Dense feedforward network built on Matrix.
Forward evaluation, mean squared error, backpropagation, batch training and
weight persistence.
"""
import logging
import numbers
from collections import namedtuple

import numpy as np

from .activations import get_activation
from .errors import (
    DimensionMismatchError,
    InvalidArchitectureError,
    NNGymError,
    ShapeError,
)
from .matrix import Matrix
from .optim import SGD
from . import persistence

logger = logging.getLogger(__name__)


LayerSpec = namedtuple('LayerSpec', ['width', 'activation'])
LayerSpec.__doc__ = """
One layer of a network: its neuron count and the activation applied to its
output. The activation of the first (input) layer is never evaluated.
"""


def layer_spec(spec):
    """Normalize a (width, activation) pair; activation may be a name."""
    try:
        width, activation = spec
    except (TypeError, ValueError):
        raise InvalidArchitectureError(
            f"Layer spec must be a (width, activation) pair, got {spec!r}"
        ) from None

    if isinstance(width, bool) or not isinstance(width, numbers.Integral) or width < 1:
        raise InvalidArchitectureError(f"Layer width must be a positive integer, got {width!r}")

    return LayerSpec(int(width), get_activation(activation))


class Network:
    """
    Stack of fully connected layers: a[i+1] = f(a[i] . W[i] + b[i])

    Args:
        layers: Sequence of (width, activation) pairs, input layer first
        learning_rate: Default gradient descent step size
        rng: numpy Generator or integer seed used to draw the initial
            weights and biases from U[-1, 1]; unseeded if None

    Attributes:
        weights: weights[i] has shape (width[i], width[i+1])
        biases: biases[i] has shape (1, width[i+1])
        data: activations cached by the last feed_forward, input first
        current_error: mean error of the most recent epoch
        history: mean error of every epoch trained so far
    """

    def __init__(self, layers, learning_rate=0.01, rng=None):
        specs = tuple(layer_spec(spec) for spec in layers)
        if len(specs) < 2:
            raise InvalidArchitectureError(
                f"A network needs at least 2 layers, got {len(specs)}"
            )

        self.layers = specs
        self.optimizer = SGD(learning_rate=learning_rate)

        rng = np.random.default_rng(rng)
        self.weights = []
        self.biases = []
        for current, following in zip(specs, specs[1:]):
            self.weights.append(Matrix.random(current.width, following.width, -1.0, 1.0, rng=rng))
            self.biases.append(Matrix.random(1, following.width, -1.0, 1.0, rng=rng))

        self.data = []
        self._sums = []
        self.current_error = None
        self.history = []

        logger.debug(f"Created {self}")

    @property
    def learning_rate(self):
        return self.optimizer.learning_rate

    @learning_rate.setter
    def learning_rate(self, value):
        self.optimizer.learning_rate = value

    @property
    def widths(self):
        """Neuron count of every layer, input first"""
        return [spec.width for spec in self.layers]

    def parameters(self):
        """Return list of all weight matrices followed by all bias matrices"""
        return list(self.weights) + list(self.biases)

    # ------------------------------------------------------------------
    # Forward pass
    # ------------------------------------------------------------------

    def _forward(self, inputs):
        inputs = _as_batch(inputs)
        if inputs.cols != self.layers[0].width:
            raise DimensionMismatchError(
                f"Expected input rows of width {self.layers[0].width}, got {inputs.cols}"
            )

        activations = [inputs]
        sums = []
        current = inputs
        for i, spec in enumerate(self.layers[1:]):
            summed = current.dot_product(self.weights[i]).add(self.biases[i])
            current = summed.apply(spec.activation.evaluate)
            sums.append(summed)
            activations.append(current)
        return activations, sums

    def feed_forward(self, inputs):
        """
        Evaluate a batch and cache every layer's activations for the
        following back_propagate call.

        Args:
            inputs: Matrix or sequence of rows, each layers[0].width wide

        Returns:
            Matrix of shape (batch_size, layers[-1].width)
        """
        self.data, self._sums = self._forward(inputs)
        return self.data[-1]

    def predict(self, inputs):
        """Evaluate a batch without touching the training cache."""
        activations, _ = self._forward(inputs)
        return activations[-1]

    def __call__(self, inputs):
        return self.predict(inputs)

    # ------------------------------------------------------------------
    # Loss and backward pass
    # ------------------------------------------------------------------

    def calculate_error(self, outputs, targets):
        """Mean squared error over every element of the batch."""
        outputs = _as_batch(outputs)
        errors = _as_batch(targets).subtract(outputs)
        return errors.square().collect_sum() / errors.count()

    def back_propagate(self, outputs, targets, learning_rate=None):
        """
        Update weights and biases in place from the last forward pass.

        Gradients are summed over the batch rows. The gradient handed to the
        previous layer is computed with the weights as they were before this
        call updated them.

        Args:
            outputs: Result of the preceding feed_forward
            targets: Expected outputs, same shape as `outputs`
            learning_rate: Step size for this call; network default if None
        """
        outputs = _as_batch(outputs)
        targets = _as_batch(targets)

        if targets.cols != self.layers[-1].width:
            raise DimensionMismatchError(
                f"Expected target rows of width {self.layers[-1].width}, got {targets.cols}"
            )
        if not self.data:
            raise NNGymError("back_propagate needs a preceding feed_forward")
        if outputs.shape != self.data[-1].shape:
            raise DimensionMismatchError(
                f"Outputs {outputs.shape} do not match the cached forward pass {self.data[-1].shape}"
            )

        # dE/dOutput
        gradient = outputs.subtract(targets)

        for i in reversed(range(len(self.weights))):
            activation = self.layers[i + 1].activation
            delta = gradient.scalar_multiplication(self._sums[i].apply(activation.derivative))

            weight_gradient = self.data[i].transpose().dot_product(delta)
            bias_gradient = delta.sum_by_axis(0)
            gradient = delta.dot_product(self.weights[i].transpose())

            self.weights[i] = self.optimizer.step(self.weights[i], weight_gradient, learning_rate)
            self.biases[i] = self.optimizer.step(self.biases[i], bias_gradient, learning_rate)

    # ------------------------------------------------------------------
    # Training loops
    # ------------------------------------------------------------------

    def train_one_epoch(self, input_batches, target_batches, learning_rate=None):
        """
        Run feed_forward / calculate_error / back_propagate over every batch
        pair in order. Each batch sees the updates made by the ones before it.

        Returns:
            Mean error across the batches
        """
        input_batches = list(input_batches)
        target_batches = list(target_batches)
        if len(input_batches) != len(target_batches):
            raise DimensionMismatchError(
                f"Got {len(input_batches)} input batches but {len(target_batches)} target batches"
            )
        if not input_batches:
            raise ShapeError("Cannot train on zero batches")

        error = 0.0
        for inputs, targets in zip(input_batches, target_batches):
            outputs = self.feed_forward(inputs)
            error += self.calculate_error(outputs, targets)
            self.back_propagate(outputs, targets, learning_rate)

        self.current_error = error / len(input_batches)
        self.history.append(self.current_error)
        return self.current_error

    def train(self, input_batches, target_batches, epochs, learning_rate=None, observer=None):
        """
        Train for a number of epochs, reporting progress every epoch when
        epochs < 100 and every epochs // 20 epochs otherwise.

        Args:
            input_batches: Sequence of input batches
            target_batches: Sequence of target batches, paired by position
            epochs: Number of epochs to run
            learning_rate: Step size; network default if None
            observer: Optional callable(epoch, epochs, error) called at the
                reporting cadence

        Returns:
            list: Mean error of every epoch run by this call
        """
        input_batches = list(input_batches)
        target_batches = list(target_batches)
        every = 1 if epochs < 100 else epochs // 20

        errors = []
        for epoch in range(1, epochs + 1):
            error = self.train_one_epoch(input_batches, target_batches, learning_rate)
            errors.append(error)
            if epoch % every == 0:
                logger.info(f"Loss: {error:.7f}, Epoch {epoch} of {epochs}")
                if observer is not None:
                    observer(epoch, epochs, error)
        return errors

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, path):
        """Write weights and biases (not layers or learning rate) to `path`."""
        persistence.save_weights(path, self.weights, self.biases)

    def load(self, path):
        """
        Replace weights and biases with the ones stored at `path`.

        Raises:
            WeightsIOError: if the file cannot be read
            WeightsFormatError: if it does not fit this network's layers
        """
        shapes = [(w.shape, b.shape) for w, b in zip(self.weights, self.biases)]
        self.weights, self.biases = persistence.load_weights(path, shapes)
        self.data = []
        self._sums = []

    def __str__(self):
        parts = [str(self.layers[0].width)]
        parts += [f"{spec.width} ({spec.activation.name})" for spec in self.layers[1:]]
        return f"Network({' -> '.join(parts)})"

    def __repr__(self):
        return f"Network(layers={list(self.layers)!r}, learning_rate={self.learning_rate!r})"


def _as_batch(value):
    return value if isinstance(value, Matrix) else Matrix.from_rows(value)

"""
Activation functions for nn_gym layers.

Each activation is a small stateless object exposing `evaluate(x)` and
`derivative(x)`, both taking the pre-activation value. They work on whole
numpy arrays and on plain scalars alike. The set is closed: layers refer to
one of the module-level instances, or to it by name.
"""
import numpy as np

from .errors import UnknownActivationError


def _result(values):
    """0-d results come back as numpy scalars, everything else as arrays."""
    return values[()] if values.ndim == 0 else values


class Activation:
    """Base class for all activations"""

    name = None

    def evaluate(self, x):
        """Forward nonlinearity - to be implemented by subclasses"""
        raise NotImplementedError

    def derivative(self, x):
        """d evaluate / dx - to be implemented by subclasses"""
        raise NotImplementedError

    def __eq__(self, other):
        return isinstance(other, Activation) and self.name == other.name

    def __hash__(self):
        return hash(self.name)

    def __repr__(self):
        return f"{self.__class__.__name__}()"


class Identity(Activation):
    """f(x) = x"""

    name = 'identity'

    def evaluate(self, x):
        return _result(np.asarray(x, dtype=np.float64))

    def derivative(self, x):
        return _result(np.ones_like(np.asarray(x, dtype=np.float64)))


class Sigmoid(Activation):
    """Sigmoid activation: 1 / (1 + exp(-x))"""

    name = 'sigmoid'

    def evaluate(self, x):
        x = np.asarray(x, dtype=np.float64)
        # For numerical stability: exp of a non-positive value never overflows
        e = np.exp(-np.abs(x))
        return _result(np.where(x >= 0, 1.0 / (1.0 + e), e / (1.0 + e)))

    def derivative(self, x):
        s = self.evaluate(x)
        return s * (1.0 - s)


class ReLU(Activation):
    """ReLU activation: max(0, x)"""

    name = 'relu'

    def evaluate(self, x):
        return _result(np.maximum(0.0, np.asarray(x, dtype=np.float64)))

    def derivative(self, x):
        return _result((np.asarray(x) > 0).astype(np.float64))


class LeakyReLU(Activation):
    """
    Leaky ReLU: x for x > 0, slope * x otherwise.

    Args:
        slope: Gradient for negative inputs (default: 0.01)
    """

    name = 'leaky_relu'

    def __init__(self, slope=0.01):
        self.slope = slope

    def evaluate(self, x):
        x = np.asarray(x, dtype=np.float64)
        return _result(np.where(x > 0, x, self.slope * x))

    def derivative(self, x):
        x = np.asarray(x, dtype=np.float64)
        return _result(np.where(x > 0, 1.0, self.slope))

    def __eq__(self, other):
        return isinstance(other, LeakyReLU) and self.slope == other.slope

    def __hash__(self):
        return hash((self.name, self.slope))

    def __repr__(self):
        return f"LeakyReLU(slope={self.slope})"


class Tanh(Activation):
    """Hyperbolic tangent activation"""

    name = 'tanh'

    def evaluate(self, x):
        return _result(np.tanh(np.asarray(x, dtype=np.float64)))

    def derivative(self, x):
        return 1.0 - self.evaluate(x) ** 2


IDENTITY = Identity()
SIGMOID = Sigmoid()
RELU = ReLU()
LEAKY_RELU = LeakyReLU()
TANH = Tanh()

ACTIVATIONS = {a.name: a for a in (IDENTITY, SIGMOID, RELU, LEAKY_RELU, TANH)}


def get_activation(activation):
    """
    Resolve an activation given by name (case-insensitive) or instance.

    Raises:
        UnknownActivationError: if the name is not one of ACTIVATIONS
    """
    if isinstance(activation, Activation):
        return activation
    try:
        return ACTIVATIONS[str(activation).lower()]
    except KeyError:
        raise UnknownActivationError(
            f"Unknown activation {activation!r}; choose from {sorted(ACTIVATIONS)}"
        ) from None

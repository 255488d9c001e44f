"""
test_activations.py
~~~~~~~~~~~~~~~~~~~

Unit tests for activation functions and their lookup.
"""

import math
import warnings

import numpy as np
import pytest

from nn_gym.activations import (
    ACTIVATIONS,
    IDENTITY,
    LEAKY_RELU,
    RELU,
    SIGMOID,
    TANH,
    LeakyReLU,
    get_activation,
)
from nn_gym.errors import UnknownActivationError


@pytest.mark.unit
class TestActivations:
    """Test forward values and derivatives."""

    def test_identity(self):
        assert IDENTITY.evaluate(-3.5) == -3.5
        assert IDENTITY.derivative(-3.5) == 1.0

    def test_sigmoid(self):
        assert SIGMOID.evaluate(0.0) == 0.5
        assert SIGMOID.derivative(0.0) == 0.25
        assert SIGMOID.evaluate(2.0) == pytest.approx(1 / (1 + math.exp(-2.0)))

    def test_sigmoid_is_stable_for_large_inputs(self):
        """Test that extreme inputs saturate instead of overflowing."""
        assert SIGMOID.evaluate(1000.0) == 1.0
        assert SIGMOID.evaluate(-1000.0) == 0.0

    def test_relu(self):
        assert RELU.evaluate(2.0) == 2.0
        assert RELU.evaluate(-2.0) == 0.0
        assert RELU.derivative(2.0) == 1.0
        assert RELU.derivative(-2.0) == 0.0
        assert RELU.derivative(0.0) == 0.0

    def test_leaky_relu(self):
        assert LEAKY_RELU.evaluate(-2.0) == pytest.approx(-0.02)
        assert LEAKY_RELU.derivative(-2.0) == 0.01
        assert LeakyReLU(slope=0.2).derivative(-1.0) == 0.2

    def test_tanh(self):
        assert TANH.evaluate(0.0) == 0.0
        assert TANH.derivative(0.0) == 1.0

    @pytest.mark.parametrize("name", sorted(ACTIVATIONS))
    def test_derivative_matches_finite_difference(self, name):
        """Test every derivative against a central difference."""
        activation = ACTIVATIONS[name]
        eps = 1e-6
        for x in (-1.3, 0.4, 2.2):
            numeric = (activation.evaluate(x + eps) - activation.evaluate(x - eps)) / (2 * eps)
            assert activation.derivative(x) == pytest.approx(numeric, rel=1e-5, abs=1e-7)


@pytest.mark.unit
class TestArrayInputs:
    """Test activations applied to whole arrays."""

    @pytest.mark.parametrize("name", sorted(ACTIVATIONS))
    def test_array_matches_scalars(self, name):
        activation = ACTIVATIONS[name]
        xs = np.array([[-1.3, 0.0], [0.4, 2.2]])

        values = activation.evaluate(xs)
        slopes = activation.derivative(xs)

        assert values.shape == (2, 2)
        assert slopes.shape == (2, 2)
        for (i, j), x in np.ndenumerate(xs):
            assert values[i, j] == pytest.approx(activation.evaluate(float(x)))
            assert slopes[i, j] == pytest.approx(activation.derivative(float(x)))

    def test_sigmoid_of_mixed_signs(self):
        values = SIGMOID.evaluate(np.array([-1.0, 1.0]))

        assert values[0] == pytest.approx(1 / (1 + math.exp(1.0)))
        assert values[0] + values[1] == pytest.approx(1.0)

    def test_sigmoid_large_array_does_not_warn(self):
        """Test that saturating a whole array emits no overflow warning."""
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            values = SIGMOID.evaluate(np.array([-1000.0, 1000.0]))
            slopes = SIGMOID.derivative(np.array([-1000.0, 1000.0]))

        assert values.tolist() == [0.0, 1.0]
        assert slopes.tolist() == [0.0, 0.0]

    def test_scalar_in_scalar_out(self):
        assert np.ndim(RELU.evaluate(-2.0)) == 0
        assert np.ndim(TANH.derivative(0.5)) == 0

@pytest.mark.unit
class TestLookup:
    """Test resolving activations by name."""

    def test_lookup_by_name(self):
        assert get_activation("sigmoid") is SIGMOID
        assert get_activation("ReLU") is RELU

    def test_instance_passes_through(self):
        custom = LeakyReLU(slope=0.3)
        assert get_activation(custom) is custom

    def test_unknown_name_fails(self):
        with pytest.raises(UnknownActivationError):
            get_activation("softplus")

    def test_unknown_name_is_key_error(self):
        with pytest.raises(KeyError):
            get_activation("swish")

    def test_equality_by_name(self):
        assert get_activation("tanh") == TANH
        assert SIGMOID != RELU

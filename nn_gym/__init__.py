"""
nn_gym: a minimal dense feedforward neural network engine.

This library implements a shape-checked matrix type, activation functions,
gradient descent backpropagation, batch training and weight persistence
using only NumPy.
"""

from .matrix import Matrix
from .network import Network, LayerSpec
from .activations import IDENTITY, SIGMOID, RELU, LEAKY_RELU, TANH, get_activation
from .config import TrainingConfig
from . import activations
from . import errors
from . import optim

__version__ = '0.1.0'
__all__ = [
    'Matrix', 'Network', 'LayerSpec', 'TrainingConfig',
    'IDENTITY', 'SIGMOID', 'RELU', 'LEAKY_RELU', 'TANH', 'get_activation',
    'activations', 'errors', 'optim',
]

"""
Exceptions raised by nn_gym.
All of them signal a programming or configuration error in the caller.
"""


class NNGymError(Exception):
    """Base class for every error raised by nn_gym"""


class ShapeError(NNGymError, ValueError):
    """A matrix (or batch set) could not be built from malformed data"""


class DimensionMismatchError(NNGymError, ValueError):
    """Operands of a matrix or network operation have incompatible shapes"""


class InvalidAxisError(NNGymError, ValueError):
    """Reduction requested over an axis other than 0 or 1"""


class InvalidArchitectureError(NNGymError, ValueError):
    """Layer specification cannot describe a network"""


class WeightsIOError(NNGymError, OSError):
    """A weight file could not be opened, read or written"""


class WeightsFormatError(NNGymError, ValueError):
    """A weight file does not hold weights matching the network"""


class UnknownActivationError(NNGymError, KeyError):
    """Activation name is not one of the known kinds"""

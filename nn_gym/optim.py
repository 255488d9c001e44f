"""
Gradient descent update rule for nn_gym networks.
"""


class Optimizer:
    """Base class for update rules"""

    def __init__(self, learning_rate=0.01):
        self.learning_rate = learning_rate

    def step(self, param, grad, learning_rate=None):
        """Return the updated parameter - to be implemented by subclasses"""
        raise NotImplementedError


class SGD(Optimizer):
    """
    Plain gradient descent: param <- param - learning_rate * grad

    Args:
        learning_rate (or lr): Default step size
    """

    def __init__(self, learning_rate=0.01, lr=None):
        super().__init__(lr if lr is not None else learning_rate)

    def step(self, param, grad, learning_rate=None):
        """
        Args:
            param: Matrix holding the current parameter value
            grad: Matrix of the same shape holding dE/dparam
            learning_rate: Overrides the default step size for this call

        Returns:
            A new Matrix; `param` itself is left untouched.
        """
        lr = self.learning_rate if learning_rate is None else learning_rate
        return param.subtract(grad.scale(lr))

"""
Dense Layer
===========

One fully-connected layer: an affine transform followed by an activation.

    weighted_sum = W · x + b
    output       = f(weighted_sum)

The layer keeps the intermediates of its most recent forward pass so that
the matching backward pass can compute gradients:

    g      = output_gradient * f'(weighted_sum)
    dL/db  = g
    dL/dW  = outer(g, x)
    dL/dx  = W^T · g          (returned to the previous layer)

Parameters are updated with plain gradient descent, no momentum or
regularization.
"""

from typing import Optional, Union

import numpy as np

from .activations import Activation, get_activation, get_functions
from .errors import DimensionMismatchError, NetworkConfigError


class DenseLayer:
    """
    Fully-connected layer with a per-call cache for backpropagation.

    Attributes:
        input_size: Length of the input vector
        output_size: Length of the output vector
        weights: Matrix of shape (output_size, input_size)
        biases: Vector of length output_size
        activation: Activation tag applied to the weighted sum

    Example:
        >>> layer = DenseLayer(9, 64, 'relu', rng=np.random.default_rng(0))
        >>> out = layer.forward(np.zeros(9))
        >>> grad_in = layer.backward(np.ones(64))
        >>> layer.update(0.001)
    """

    def __init__(
        self,
        input_size: int,
        output_size: int,
        activation: Union[str, Activation] = 'relu',
        rng: Optional[np.random.Generator] = None
    ):
        """
        Initialize the layer with He-scaled normal weights and zero biases.

        Args:
            input_size: Number of inputs (positive)
            output_size: Number of outputs (positive)
            activation: Activation name or tag
            rng: Random source for weight initialization

        Raises:
            NetworkConfigError: If a size is not a positive integer
            UnknownActivationError: If the activation is not registered
        """
        for label, size in (('input_size', input_size), ('output_size', output_size)):
            if isinstance(size, bool) or not isinstance(size, (int, np.integer)) or size <= 0:
                raise NetworkConfigError(f"{label} must be a positive integer, got {size!r}")

        self.input_size = int(input_size)
        self.output_size = int(output_size)
        self.activation = get_activation(activation)
        self._activation_fn, self._derivative_fn = get_functions(self.activation)

        rng = rng if rng is not None else np.random.default_rng()
        scale = np.sqrt(2.0 / self.input_size)
        self.weights = rng.standard_normal((self.output_size, self.input_size)) * scale
        self.biases = np.zeros(self.output_size)

        self._clear_cache()

    def _clear_cache(self) -> None:
        """Drop the intermediates of the last forward/backward pass."""
        self.last_input: Optional[np.ndarray] = None
        self.weighted_sum: Optional[np.ndarray] = None
        self.last_output: Optional[np.ndarray] = None
        self.weight_gradient: Optional[np.ndarray] = None
        self.bias_gradient: Optional[np.ndarray] = None
        self.input_gradient: Optional[np.ndarray] = None

    def forward(self, x: np.ndarray) -> np.ndarray:
        """
        Compute the layer output and cache the intermediates.

        Args:
            x: Input vector of length input_size

        Returns:
            Output vector of length output_size

        Raises:
            DimensionMismatchError: If x has the wrong shape
        """
        x = np.array(x, dtype=np.float64)
        if x.shape != (self.input_size,):
            raise DimensionMismatchError(
                f"Expected input of shape ({self.input_size},), got {x.shape}"
            )

        self.last_input = x
        self.weighted_sum = self.weights @ x + self.biases
        self.last_output = self._activation_fn(self.weighted_sum)
        return self.last_output

    def backward(self, output_gradient: np.ndarray) -> np.ndarray:
        """
        Backpropagate through the layer.

        Must follow a forward() call on this layer; the gradient has to
        belong to that same pass.

        Args:
            output_gradient: dL/d(output), length output_size

        Returns:
            dL/d(input), length input_size

        Raises:
            RuntimeError: If forward() has not been called
            DimensionMismatchError: If the gradient has the wrong shape
        """
        if self.weighted_sum is None or self.last_input is None:
            raise RuntimeError("backward() called before forward() on this layer")

        output_gradient = np.asarray(output_gradient, dtype=np.float64)
        if output_gradient.shape != (self.output_size,):
            raise DimensionMismatchError(
                f"Expected gradient of shape ({self.output_size},), got {output_gradient.shape}"
            )

        gradient = output_gradient * self._derivative_fn(self.weighted_sum)

        self.bias_gradient = gradient
        self.weight_gradient = np.outer(gradient, self.last_input)
        self.input_gradient = self.weights.T @ gradient
        return self.input_gradient

    def update(self, learning_rate: float) -> None:
        """
        Apply one gradient descent step using the gradients from backward().

        Raises:
            RuntimeError: If backward() has not been called since the last update
        """
        if self.weight_gradient is None or self.bias_gradient is None:
            raise RuntimeError("update() called before backward() on this layer")

        self.weights -= learning_rate * self.weight_gradient
        self.biases -= learning_rate * self.bias_gradient

        # Each gradient is applied once
        self.weight_gradient = None
        self.bias_gradient = None

    def clone(self) -> 'DenseLayer':
        """Return an independent copy with the same parameters and no cache."""
        layer = DenseLayer.__new__(DenseLayer)
        layer.input_size = self.input_size
        layer.output_size = self.output_size
        layer.activation = self.activation
        layer._activation_fn = self._activation_fn
        layer._derivative_fn = self._derivative_fn
        layer.weights = self.weights.copy()
        layer.biases = self.biases.copy()
        layer._clear_cache()
        return layer

    def count_parameters(self) -> int:
        return self.weights.size + self.biases.size

    def __repr__(self) -> str:
        return (f"DenseLayer({self.input_size} -> {self.output_size}, "
                f"activation={self.activation.value})")

"""
Feedforward Network
===================

An ordered stack of dense layers trained one example at a time.

Theory:
    predict:  y = f_n(... f_2(f_1(x)))
    train:    L = sum_i (y_i - t_i)^2
              dL/dy_i = 2 * (y_i - t_i)
              backpropagate from the last layer to the first,
              then step every layer's parameters against its gradient

The same class serves as the DQN's Q-function approximator:

    Input:  Board state vector
    Output: Q-value for each cell

and as a plain regressor (see the XOR demo in main.py).
"""

from typing import Any, Dict, List, Optional, Sequence, Union

import numpy as np

from .activations import Activation
from .errors import DimensionMismatchError, NetworkConfigError
from .layer import DenseLayer


class FeedforwardNetwork:
    """
    Multi-layer perceptron built from DenseLayer objects.

    Architecture:
        Input -> Hidden Layers (activation) -> Output Layer (output_activation)

    Attributes:
        layers: The network's layers, owned exclusively by this network

    Example:
        >>> net = FeedforwardNetwork(2, [2], 1, activation='sigmoid')
        >>> net.predict(np.array([0.0, 1.0])).shape
        (1,)
        >>> loss = net.train([0.0, 1.0], [1.0], learning_rate=0.01)
    """

    def __init__(
        self,
        input_size: int,
        hidden_layers: Sequence[int],
        output_size: int,
        activation: Union[str, Activation] = 'relu',
        output_activation: Union[str, Activation] = 'none',
        rng: Optional[np.random.Generator] = None
    ):
        """
        Build the network.

        Args:
            input_size: Length of the input vector
            hidden_layers: Sizes of the hidden layers (may be empty)
            output_size: Length of the output vector
            activation: Activation for every hidden layer
            output_activation: Activation for the output layer
            rng: Random source for weight initialization

        Raises:
            NetworkConfigError: If any size is invalid
            UnknownActivationError: If an activation is not registered
        """
        rng = rng if rng is not None else np.random.default_rng()

        layers = []
        current_size = input_size
        for hidden_size in hidden_layers:
            layers.append(DenseLayer(current_size, hidden_size, activation, rng))
            current_size = hidden_size
        layers.append(DenseLayer(current_size, output_size, output_activation, rng))

        self.layers: List[DenseLayer] = layers

    @classmethod
    def from_layers(cls, layers: Sequence[DenseLayer]) -> 'FeedforwardNetwork':
        """
        Assemble a network from existing layers.

        Raises:
            NetworkConfigError: If the list is empty or adjacent sizes disagree
        """
        if not layers:
            raise NetworkConfigError("A network needs at least one layer")
        for i, (layer, nxt) in enumerate(zip(layers, layers[1:])):
            if layer.output_size != nxt.input_size:
                raise NetworkConfigError(
                    f"Layer {i} outputs {layer.output_size} values but "
                    f"layer {i + 1} expects {nxt.input_size}"
                )

        network = cls.__new__(cls)
        network.layers = list(layers)
        return network

    @property
    def input_size(self) -> int:
        return self.layers[0].input_size

    @property
    def output_size(self) -> int:
        return self.layers[-1].output_size

    def predict(self, x: np.ndarray) -> np.ndarray:
        """
        Forward pass through every layer.

        Refreshes each layer's cache, which the next train() relies on.

        Args:
            x: Input vector of length input_size

        Returns:
            A copy of the output vector (length output_size)

        Raises:
            DimensionMismatchError: If x has the wrong length
        """
        output = x
        for layer in self.layers:
            output = layer.forward(output)
        return output.copy()

    def train(self, x: np.ndarray, target: np.ndarray, learning_rate: float) -> float:
        """
        One stochastic gradient descent step on a single example.

        Args:
            x: Input vector
            target: Desired output vector
            learning_rate: Step size

        Returns:
            Mean squared error of the prediction made before the update

        Raises:
            DimensionMismatchError: If x or target has the wrong length
        """
        target = np.asarray(target, dtype=np.float64)
        if target.shape != (self.output_size,):
            raise DimensionMismatchError(
                f"Expected target of shape ({self.output_size},), got {target.shape}"
            )

        predicted = self.predict(x)
        error = predicted - target

        # Derivative of the squared error per output unit
        gradient = 2.0 * error
        for layer in reversed(self.layers):
            gradient = layer.backward(gradient)

        for layer in self.layers:
            layer.update(learning_rate)

        return float(np.mean(error ** 2))

    def clone(self) -> 'FeedforwardNetwork':
        """Deep copy; training either network never affects the other."""
        return FeedforwardNetwork.from_layers([layer.clone() for layer in self.layers])

    def get_layer_info(self) -> List[Dict[str, Any]]:
        """
        Describe each layer.

        Returns:
            List of dicts with layer metadata
        """
        info: List[Dict[str, Any]] = [{
            'name': 'Input',
            'neurons': self.input_size,
            'type': 'input',
        }]

        for i, layer in enumerate(self.layers[:-1]):
            info.append({
                'name': f'Hidden {i + 1}',
                'neurons': layer.output_size,
                'type': 'hidden',
                'activation': layer.activation.value,
            })

        info.append({
            'name': 'Output',
            'neurons': self.output_size,
            'type': 'output',
            'activation': self.layers[-1].activation.value,
        })
        return info

    def count_parameters(self) -> int:
        """Return total number of trainable parameters."""
        return sum(layer.count_parameters() for layer in self.layers)

    def __repr__(self) -> str:
        sizes = [self.input_size] + [layer.output_size for layer in self.layers]
        return f"FeedforwardNetwork({' -> '.join(map(str, sizes))})"

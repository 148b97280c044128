"""
Activation Functions
====================

Stateless activation functions and their derivatives, applied elementwise
to numpy arrays.

Every derivative takes the *pre-activation* value (the layer's weighted sum),
which is what the dense layer caches for its backward pass:

    sigmoid'(x)  = sigmoid(x) * (1 - sigmoid(x))
    relu'(x)     = 1 if x > 0 else 0
    identity'(x) = 1

Layers refer to activations by an enumerated tag. The dispatch table maps
each tag to its (function, derivative) pair, so cloned networks can share
the functions freely.
"""

from enum import Enum
from typing import Callable, Dict, Tuple, Union

import numpy as np

from .errors import UnknownActivationError


ArrayFn = Callable[[np.ndarray], np.ndarray]

# exp() overflows float64 just past 709
_SIGMOID_CLIP = 500.0


class Activation(Enum):
    """Activation tags understood by DenseLayer."""
    SIGMOID = 'sigmoid'
    RELU = 'relu'
    IDENTITY = 'identity'


def sigmoid(x: np.ndarray) -> np.ndarray:
    """Logistic function 1 / (1 + e^-x)."""
    return 1.0 / (1.0 + np.exp(-np.clip(x, -_SIGMOID_CLIP, _SIGMOID_CLIP)))


def sigmoid_derivative(x: np.ndarray) -> np.ndarray:
    s = sigmoid(x)
    return s * (1.0 - s)


def relu(x: np.ndarray) -> np.ndarray:
    """Rectified linear unit max(0, x)."""
    return np.maximum(0.0, x)


def relu_derivative(x: np.ndarray) -> np.ndarray:
    # Subgradient at exactly 0 is 0
    return (np.asarray(x) > 0).astype(np.float64)


def identity(x: np.ndarray) -> np.ndarray:
    """Linear output, used for raw Q-values."""
    return np.asarray(x, dtype=np.float64)


def identity_derivative(x: np.ndarray) -> np.ndarray:
    return np.ones_like(x, dtype=np.float64)


ACTIVATIONS: Dict[Activation, Tuple[ArrayFn, ArrayFn]] = {
    Activation.SIGMOID: (sigmoid, sigmoid_derivative),
    Activation.RELU: (relu, relu_derivative),
    Activation.IDENTITY: (identity, identity_derivative),
}

# "none" is what output layers were historically configured with
_ALIASES: Dict[str, Activation] = {
    'sigmoid': Activation.SIGMOID,
    'relu': Activation.RELU,
    'identity': Activation.IDENTITY,
    'linear': Activation.IDENTITY,
    'none': Activation.IDENTITY,
}


def get_activation(name: Union[str, Activation]) -> Activation:
    """
    Resolve an activation name to its tag.

    Args:
        name: 'sigmoid', 'relu', 'identity' (or 'none'/'linear'), or an
            Activation member

    Returns:
        The matching Activation

    Raises:
        UnknownActivationError: If the name is not registered
    """
    if isinstance(name, Activation):
        return name
    if isinstance(name, str):
        tag = _ALIASES.get(name.lower())
        if tag is not None:
            return tag
    raise UnknownActivationError(
        f"Unknown activation function: {name!r} "
        f"(expected one of {sorted(_ALIASES)})"
    )


def get_functions(activation: Union[str, Activation]) -> Tuple[ArrayFn, ArrayFn]:
    """Return the (function, derivative) pair for an activation."""
    return ACTIVATIONS[get_activation(activation)]

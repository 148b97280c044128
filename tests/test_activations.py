"""
Tests for the activation functions.

These tests verify:
    - Function values
    - Derivatives taken at the pre-activation value
    - Name resolution and rejection of unknown names
"""

import pytest
import numpy as np
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from tictactoe_dqn.ai.activations import (
    Activation, get_activation, get_functions,
    sigmoid, sigmoid_derivative, relu, relu_derivative,
    identity, identity_derivative,
)
from tictactoe_dqn.ai.errors import UnknownActivationError, NetworkConfigError


class TestSigmoid:
    """Test the logistic function."""

    def test_value_at_zero(self):
        assert sigmoid(np.array([0.0]))[0] == pytest.approx(0.5)

    def test_symmetry(self):
        x = np.array([-3.0, -0.5, 0.7, 2.0])
        np.testing.assert_allclose(sigmoid(x) + sigmoid(-x), 1.0)

    def test_derivative_uses_pre_activation(self):
        """Derivative should equal s(x) * (1 - s(x)) for the raw input x."""
        x = np.array([-2.0, 0.0, 1.5])
        s = 1.0 / (1.0 + np.exp(-x))
        np.testing.assert_allclose(sigmoid_derivative(x), s * (1 - s))

    def test_extreme_inputs_stay_finite(self):
        x = np.array([-1e4, 1e4])
        with np.errstate(over='raise'):
            out = sigmoid(x)
        assert np.all(np.isfinite(out))
        assert out[0] == pytest.approx(0.0)
        assert out[1] == pytest.approx(1.0)


class TestRelu:
    """Test the rectified linear unit."""

    def test_values(self):
        np.testing.assert_array_equal(relu(np.array([-2.0, 0.0, 3.0])), [0.0, 0.0, 3.0])

    def test_derivative(self):
        """Derivative is 1 for positive inputs and 0 otherwise, including at 0."""
        np.testing.assert_array_equal(
            relu_derivative(np.array([-1.0, 0.0, 0.5])), [0.0, 0.0, 1.0]
        )


class TestIdentity:
    """Test the linear activation."""

    def test_passthrough(self):
        x = np.array([-1.5, 0.0, 4.2])
        np.testing.assert_array_equal(identity(x), x)

    def test_derivative_is_one(self):
        np.testing.assert_array_equal(identity_derivative(np.array([-7.0, 3.0])), [1.0, 1.0])


class TestActivationLookup:
    """Test name resolution."""

    @pytest.mark.parametrize("name,expected", [
        ('sigmoid', Activation.SIGMOID),
        ('relu', Activation.RELU),
        ('identity', Activation.IDENTITY),
        ('none', Activation.IDENTITY),
        ('ReLU', Activation.RELU),
        (Activation.SIGMOID, Activation.SIGMOID),
    ])
    def test_known_names(self, name, expected):
        assert get_activation(name) is expected

    def test_unknown_name_raises(self):
        with pytest.raises(UnknownActivationError):
            get_activation('tanh')

    def test_unknown_name_is_config_error(self):
        """Unknown activations are a configuration error and a ValueError."""
        with pytest.raises(NetworkConfigError):
            get_activation('softmax')
        with pytest.raises(ValueError):
            get_activation('softmax')

    def test_functions_pair(self):
        fn, derivative = get_functions('relu')
        assert fn is relu
        assert derivative is relu_derivative

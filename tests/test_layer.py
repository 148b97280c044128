"""
Tests for the dense layer.

These tests verify:
    - Construction and validation
    - Forward pass and caching
    - Backward pass against numerical gradients
    - Gradient descent update
    - Precondition failures
"""

import pytest
import numpy as np
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from tictactoe_dqn.ai.layer import DenseLayer
from tictactoe_dqn.ai.activations import Activation
from tictactoe_dqn.ai.errors import (
    DimensionMismatchError, NetworkConfigError, UnknownActivationError,
)


@pytest.fixture
def layer(rng):
    """Create a small sigmoid layer."""
    return DenseLayer(3, 2, 'sigmoid', rng=rng)


class TestLayerInitialization:
    """Test layer construction."""

    def test_shapes(self, layer):
        assert layer.weights.shape == (2, 3)
        assert layer.biases.shape == (2,)

    def test_biases_start_at_zero(self, layer):
        np.testing.assert_array_equal(layer.biases, 0.0)

    def test_activation_tag(self, layer):
        assert layer.activation is Activation.SIGMOID

    def test_cache_empty(self, layer):
        assert layer.last_input is None
        assert layer.weighted_sum is None
        assert layer.weight_gradient is None

    def test_seeded_init_is_reproducible(self):
        a = DenseLayer(4, 3, rng=np.random.default_rng(5))
        b = DenseLayer(4, 3, rng=np.random.default_rng(5))
        np.testing.assert_array_equal(a.weights, b.weights)

    def test_unknown_activation_fails_construction(self, rng):
        with pytest.raises(UnknownActivationError):
            DenseLayer(3, 2, 'swish', rng=rng)

    @pytest.mark.parametrize("input_size,output_size", [(0, 2), (3, -1), (2.5, 2)])
    def test_invalid_sizes(self, input_size, output_size, rng):
        with pytest.raises(NetworkConfigError):
            DenseLayer(input_size, output_size, rng=rng)


class TestForward:
    """Test forward pass."""

    def test_output_matches_formula(self, layer):
        x = np.array([0.5, -1.0, 2.0])
        expected = 1.0 / (1.0 + np.exp(-(layer.weights @ x + layer.biases)))
        np.testing.assert_allclose(layer.forward(x), expected)

    def test_caches_intermediates(self, layer):
        x = np.array([0.5, -1.0, 2.0])
        out = layer.forward(x)
        np.testing.assert_array_equal(layer.last_input, x)
        np.testing.assert_allclose(layer.weighted_sum, layer.weights @ x)
        np.testing.assert_array_equal(layer.last_output, out)

    def test_wrong_input_length(self, layer):
        with pytest.raises(DimensionMismatchError):
            layer.forward(np.zeros(4))

    def test_cached_input_is_a_copy(self, layer):
        x = np.array([1.0, 2.0, 3.0])
        layer.forward(x)
        x[0] = 100.0
        assert layer.last_input[0] == 1.0


class TestBackward:
    """Test backward pass."""

    def test_backward_before_forward(self, layer):
        with pytest.raises(RuntimeError):
            layer.backward(np.ones(2))

    def test_wrong_gradient_length(self, layer):
        layer.forward(np.zeros(3))
        with pytest.raises(DimensionMismatchError):
            layer.backward(np.ones(3))

    def test_returns_input_gradient(self, layer):
        layer.forward(np.array([0.2, 0.4, -0.6]))
        grad = layer.backward(np.array([1.0, -2.0]))
        assert grad.shape == (3,)

    def test_gradients_match_numerical(self, rng):
        """Analytic gradients of L = sum(g * forward(x)) should match finite differences."""
        layer = DenseLayer(3, 2, 'sigmoid', rng=rng)
        layer.biases[:] = rng.standard_normal(2)
        x = np.array([0.3, -0.7, 1.1])
        upstream = np.array([0.8, -1.3])

        def loss(w, b, inp):
            z = w @ inp + b
            return float(np.sum(upstream / (1.0 + np.exp(-z))))

        layer.forward(x)
        input_grad = layer.backward(upstream)

        eps = 1e-6
        num_w = np.zeros_like(layer.weights)
        for i in range(2):
            for j in range(3):
                w_plus = layer.weights.copy()
                w_minus = layer.weights.copy()
                w_plus[i, j] += eps
                w_minus[i, j] -= eps
                num_w[i, j] = (loss(w_plus, layer.biases, x) - loss(w_minus, layer.biases, x)) / (2 * eps)

        num_b = np.zeros(2)
        for i in range(2):
            b_plus = layer.biases.copy()
            b_minus = layer.biases.copy()
            b_plus[i] += eps
            b_minus[i] -= eps
            num_b[i] = (loss(layer.weights, b_plus, x) - loss(layer.weights, b_minus, x)) / (2 * eps)

        num_x = np.zeros(3)
        for j in range(3):
            x_plus = x.copy()
            x_minus = x.copy()
            x_plus[j] += eps
            x_minus[j] -= eps
            num_x[j] = (loss(layer.weights, layer.biases, x_plus)
                        - loss(layer.weights, layer.biases, x_minus)) / (2 * eps)

        np.testing.assert_allclose(layer.weight_gradient, num_w, atol=1e-6)
        np.testing.assert_allclose(layer.bias_gradient, num_b, atol=1e-6)
        np.testing.assert_allclose(input_grad, num_x, atol=1e-6)

    def test_relu_blocks_gradient_for_inactive_units(self, rng):
        layer = DenseLayer(2, 2, 'relu', rng=rng)
        layer.weights[:] = [[1.0, 0.0], [-1.0, 0.0]]
        layer.forward(np.array([1.0, 0.0]))  # Unit 0 active, unit 1 inactive
        layer.backward(np.array([1.0, 1.0]))
        np.testing.assert_array_equal(layer.bias_gradient, [1.0, 0.0])


class TestUpdate:
    """Test gradient descent update."""

    def test_update_before_backward(self, layer):
        layer.forward(np.zeros(3))
        with pytest.raises(RuntimeError):
            layer.update(0.1)

    def test_update_applies_sgd(self, layer):
        layer.forward(np.array([1.0, 2.0, 3.0]))
        layer.backward(np.array([0.5, -0.5]))
        weights = layer.weights.copy()
        biases = layer.biases.copy()
        weight_gradient = layer.weight_gradient.copy()
        bias_gradient = layer.bias_gradient.copy()

        layer.update(0.1)

        np.testing.assert_allclose(layer.weights, weights - 0.1 * weight_gradient)
        np.testing.assert_allclose(layer.biases, biases - 0.1 * bias_gradient)

    def test_gradient_applied_once(self, rng):
        """A second update needs a fresh backward pass."""
        layer = DenseLayer(2, 1, 'identity', rng=rng)
        layer.weights[:] = 0.0
        layer.forward(np.array([1.0, 1.0]))
        layer.backward(np.array([1.0]))
        layer.update(0.1)

        with pytest.raises(RuntimeError):
            layer.update(0.1)
        np.testing.assert_allclose(layer.weights, [[-0.1, -0.1]])

    def test_update_after_new_backward(self, rng):
        layer = DenseLayer(2, 1, 'identity', rng=rng)
        layer.weights[:] = 0.0
        for _ in range(2):
            layer.forward(np.array([1.0, 1.0]))
            layer.backward(np.array([1.0]))
            layer.update(0.1)
        np.testing.assert_allclose(layer.weights, [[-0.2, -0.2]])


class TestClone:
    """Test layer copies."""

    def test_clone_is_independent(self, layer):
        copy = layer.clone()
        np.testing.assert_array_equal(copy.weights, layer.weights)
        copy.weights[0, 0] += 1.0
        copy.biases[0] += 1.0
        assert copy.weights[0, 0] != layer.weights[0, 0]
        assert copy.biases[0] != layer.biases[0]

    def test_clone_has_empty_cache(self, layer):
        layer.forward(np.ones(3))
        assert layer.clone().last_input is None

    def test_count_parameters(self, layer):
        assert layer.count_parameters() == 2 * 3 + 2

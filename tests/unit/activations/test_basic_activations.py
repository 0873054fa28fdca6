"""
Unit tests for basic activation functions.

Tests the functions in src/evosnake/activations/basic_activations.py
"""

import pytest
import numpy as np
from evosnake.activations.basic_activations import relu_activation


# Fixtures
@pytest.fixture
def sample_1d_array():
    """Standard 1D array for testing."""
    return np.array([-2.0, -1.0, 0.0, 1.0, 2.0])


@pytest.fixture
def sample_2d_array():
    """Standard 2D array for testing."""
    return np.array([[-1.0, 0.0, 1.0], [2.0, -3.0, 4.0]])


class TestReluActivation:
    """Test relu_activation function."""

    def test_scalar_negative(self):
        assert relu_activation(-0.5) == 0.0

    def test_scalar_zero(self):
        assert relu_activation(0.0) == 0.0

    def test_scalar_positive(self):
        assert relu_activation(3.5) == 3.5

    def test_1d_array(self, sample_1d_array):
        """Test that negative entries are floored at zero."""
        np.testing.assert_array_equal(relu_activation(sample_1d_array),
                                      np.array([0.0, 0.0, 0.0, 1.0, 2.0]))

    def test_2d_array_shape_preserved(self, sample_2d_array):
        """Test relu keeps the input shape."""
        result = relu_activation(sample_2d_array)
        assert result.shape == sample_2d_array.shape
        assert np.all(result >= 0.0)

    def test_does_not_modify_input(self, sample_1d_array):
        original = sample_1d_array.copy()
        relu_activation(sample_1d_array)
        np.testing.assert_array_equal(sample_1d_array, original)

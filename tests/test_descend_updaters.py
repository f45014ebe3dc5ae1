"""
Test descend updaters.
"""

import pytest
import numpy as np

from pyglm import (
    DescendUpdater,
    GradientDescendUpdater,
    InvalidArgumentError,
)


class TestGradientDescendUpdater:

    def test_plain_step(self):
        updater = GradientDescendUpdater()
        new = updater.update_variable(np.array([1.0, -2.0]), np.array([0.5, 1.0]), 0.1)
        np.testing.assert_allclose(new, [0.95, -2.1])

    def test_params_not_modified(self):
        params = np.array([1.0, 2.0, 3.0])
        GradientDescendUpdater().update_variable(params, np.ones(3), 1.0)
        np.testing.assert_array_equal(params, [1.0, 2.0, 3.0])

    def test_length_mismatch(self):
        with pytest.raises(InvalidArgumentError, match="Gradient length"):
            GradientDescendUpdater().update_variable(np.zeros(3), np.zeros(2), 0.1)

    @pytest.mark.parametrize("lr", [0.0, -1.0])
    def test_learning_rate_must_be_positive(self, lr):
        with pytest.raises(InvalidArgumentError, match="learning_rate"):
            GradientDescendUpdater().update_variable(np.zeros(2), np.zeros(2), lr)

    def test_is_descend_updater(self):
        assert isinstance(GradientDescendUpdater(), DescendUpdater)
        assert GradientDescendUpdater().name == "gradient"


def test_minimizes_quadratic():
    """Repeated steps on f(x) = ||x - c||² approach c."""
    c = np.array([3.0, -1.0])
    updater = GradientDescendUpdater()
    x = np.zeros(2)
    for _ in range(200):
        x = updater.update_variable(x, 2 * (x - c), 0.05)
    np.testing.assert_allclose(x, c, atol=1e-6)

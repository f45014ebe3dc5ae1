"""
Descend updaters.

An updater turns a gradient into a parameter step. The capability set
is fixed: ``update_variable(params, gradient, learning_rate)``.
"""

import numpy as np
from abc import ABC, abstractmethod

from .._utils import InvalidArgumentError, check_vector


class DescendUpdater(ABC):
    """Base class for gradient-descent style update rules."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Updater name."""
        pass

    def update_variable(
        self,
        params: np.ndarray,
        gradient: np.ndarray,
        learning_rate: float
    ) -> np.ndarray:
        """
        Return updated parameters (``params`` is not modified).

        Parameters
        ----------
        params : ndarray, shape (k,)
            Current parameters
        gradient : ndarray, shape (k,)
            Gradient of the objective being minimized
        learning_rate : float
            Step size, must be positive

        Returns
        -------
        ndarray, shape (k,)
        """
        params = check_vector(params, name='params')
        gradient = check_vector(gradient, name='gradient')
        if len(params) != len(gradient):
            raise InvalidArgumentError(
                f"Gradient length {len(gradient)} does not match "
                f"parameter length {len(params)}"
            )
        if not learning_rate > 0:
            raise InvalidArgumentError("learning_rate must be positive")

        return params - self._descend_direction(gradient, learning_rate)

    @abstractmethod
    def _descend_direction(self, gradient, learning_rate) -> np.ndarray:
        """Amount subtracted from the parameters."""
        pass

    def __repr__(self):
        return f"{type(self).__name__}()"


class GradientDescendUpdater(DescendUpdater):
    """Plain gradient step: params - learning_rate * gradient."""

    @property
    def name(self) -> str:
        return "gradient"

    def _descend_direction(self, gradient, learning_rate):
        return learning_rate * gradient


__all__ = [
    "DescendUpdater",
    "GradientDescendUpdater",
]

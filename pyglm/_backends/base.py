"""
Abstract base classes for backends.

Defines the interface all likelihood evaluators must implement.
"""

from abc import ABC, abstractmethod
import numpy as np
from dataclasses import dataclass


# Lower bound applied to lambda before taking its logarithm
LAMBDA_EPS = np.finfo(np.float64).eps


@dataclass
class LikelihoodTerms:
    """Per-sample intermediate quantities (all numpy arrays)."""
    eta: np.ndarray         # Linear predictors
    lam: np.ndarray         # Softplus of eta
    log_lam: np.ndarray     # log(lambda), clamped
    n_clamped: int          # Samples whose lambda hit LAMBDA_EPS


class BackendBase(ABC):
    """Abstract base class for all backends."""

    @abstractmethod
    def likelihood_terms(
        self,
        X: np.ndarray,
        beta: np.ndarray,
        beta0: float
    ) -> LikelihoodTerms:
        """
        Compute eta, lambda and log(lambda) for every sample.

        Inputs are validated float64 numpy arrays; backends convert
        to their native types internally and return numpy arrays.
        """
        pass

    @abstractmethod
    def log_likelihood(
        self,
        X: np.ndarray,
        y: np.ndarray,
        beta: np.ndarray,
        beta0: float
    ) -> float:
        """
        Sum of y_i * log(lambda_i) - lambda_i over samples.

        Parameters
        ----------
        X : ndarray, shape (n, d)
            Feature matrix, one row per sample
        y : ndarray, shape (n,)
            Labels
        beta : ndarray, shape (d,)
            Weight vector
        beta0 : float
            Bias

        Returns
        -------
        float
        """
        pass

    @abstractmethod
    def log_likelihood_gradient(
        self,
        X: np.ndarray,
        y: np.ndarray,
        beta: np.ndarray,
        beta0: float
    ) -> np.ndarray:
        """
        Gradient vector of length d + 1.

        Slots 0..d-1 hold sum_i (y_i - s_i) * X[i, j] and the last
        slot holds sum(s) - sum(y * s), with s = sigmoid(eta).
        """
        pass

    @abstractmethod
    def get_device_info(self) -> dict:
        """Get backend information."""
        pass

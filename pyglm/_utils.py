"""
Utility functions.
"""

import numpy as np


class InvalidArgumentError(ValueError):
    """Raised when evaluator inputs violate their shape or value contract."""


def check_array(X, name='X', dtype=np.float64):
    """Validate array input."""
    X = np.asarray(X, dtype=dtype)
    if X.ndim != 2:
        raise InvalidArgumentError(f"{name} must be 2-dimensional")
    if not np.all(np.isfinite(X)):
        raise InvalidArgumentError(f"{name} contains NaN or Inf")
    return X


def check_vector(y, name='y', dtype=np.float64):
    """Validate vector input."""
    y = np.asarray(y, dtype=dtype)
    if y.ndim != 1:
        raise InvalidArgumentError(f"{name} must be 1-dimensional")
    if not np.all(np.isfinite(y)):
        raise InvalidArgumentError(f"{name} contains NaN or Inf")
    return y


def check_inputs(X, y, beta, beta0):
    """
    Validate the inputs shared by the likelihood evaluators.

    Returns
    -------
    (X, y, beta, beta0)
        Float64 arrays and a float bias.

    Raises
    ------
    InvalidArgumentError
        If there are no samples, or lengths disagree.
    """
    X = check_array(X, name='X')
    y = check_vector(y, name='y')
    beta = check_vector(beta, name='beta')

    n, d = X.shape
    if n <= 0:
        raise InvalidArgumentError("X must contain at least one feature vector")
    if len(y) != n:
        raise InvalidArgumentError(
            f"Label count {len(y)} does not match feature vector count {n}"
        )
    if len(beta) != d:
        raise InvalidArgumentError(
            f"Weight vector length {len(beta)} does not match feature dimension {d}"
        )

    beta0 = float(beta0)
    if not np.isfinite(beta0):
        raise InvalidArgumentError("beta0 must be finite")

    return X, y, beta, beta0

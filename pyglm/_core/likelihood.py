"""
Log-likelihood and gradient evaluators.

Validates inputs and delegates the arithmetic to a backend.
"""

import numpy as np

from .._utils import check_array, check_inputs


def _resolve(backend):
    from .._backends import get_backend
    return get_backend('cpu' if backend is None else backend)


def log_likelihood(X, y, beta, beta0=0.0, backend=None) -> float:
    """
    Log-likelihood under the softplus link.

    For each sample ``eta = X[i] @ beta + beta0`` and
    ``lambda = log(1 + exp(eta))``; the result is
    ``sum(y * log(lambda) - lambda)``.

    Parameters
    ----------
    X : array_like, shape (n, d)
        Feature matrix, one row per sample
    y : array_like, shape (n,)
        Labels
    beta : array_like, shape (d,)
        Weight vector
    beta0 : float, default=0.0
        Bias
    backend : str or BackendBase, optional
        Computational backend (default: 'cpu')

    Returns
    -------
    float

    Raises
    ------
    InvalidArgumentError
        If n == 0 or the lengths of y/beta disagree with X.

    Warns
    -----
    RuntimeWarning
        If lambda underflowed and log(lambda) was clamped.
    """
    X, y, beta, beta0 = check_inputs(X, y, beta, beta0)
    return _resolve(backend).log_likelihood(X, y, beta, beta0)


def log_likelihood_gradient(X, y, beta, beta0=0.0, backend=None) -> np.ndarray:
    """
    Gradient used by the descend updater.

    Returns
    -------
    ndarray, shape (d + 1,)
        ``grad[j] = sum_i (y_i - s_i) * X[i, j]`` for the weights and
        ``grad[d] = sum(s) - sum(y * s)`` for the bias, where
        ``s = sigmoid(X @ beta + beta0)``.
    """
    X, y, beta, beta0 = check_inputs(X, y, beta, beta0)
    return _resolve(backend).log_likelihood_gradient(X, y, beta, beta0)


def likelihood_terms(X, beta, beta0=0.0, backend=None):
    """Per-sample eta, lambda and log(lambda) (see LikelihoodTerms)."""
    X = check_array(X, name='X')
    X, _, beta, beta0 = check_inputs(X, np.zeros(X.shape[0]), beta, beta0)
    return _resolve(backend).likelihood_terms(X, beta, beta0)

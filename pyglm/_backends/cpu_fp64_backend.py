"""
CPU backend using NumPy + SciPy.

This is the reference implementation of the likelihood evaluators.
"""

import warnings

import numpy as np
from scipy.special import expit

from .base import BackendBase, LikelihoodTerms, LAMBDA_EPS


class CPUBackendFP64(BackendBase):
    """
    CPU backend using NumPy + SciPy.

    Always uses FP64 precision.
    """

    def __init__(self):
        self.name = "cpu_fp64"
        self.precision = "fp64"

    def likelihood_terms(self, X, beta, beta0):
        eta = X @ beta + beta0

        # log(1 + exp(eta)) without overflow for large eta
        lam = np.logaddexp(0.0, eta)

        clamped = lam < LAMBDA_EPS
        n_clamped = int(np.count_nonzero(clamped))
        log_lam = np.log(np.maximum(lam, LAMBDA_EPS))

        return LikelihoodTerms(
            eta=eta,
            lam=lam,
            log_lam=log_lam,
            n_clamped=n_clamped
        )

    def log_likelihood(self, X, y, beta, beta0):
        terms = self.likelihood_terms(X, beta, beta0)
        if terms.n_clamped:
            warnings.warn(
                f"lambda fell below {LAMBDA_EPS:.3g} for {terms.n_clamped} "
                f"sample(s); log(lambda) was clamped",
                RuntimeWarning
            )
        return float(np.sum(y * terms.log_lam - terms.lam))

    def log_likelihood_gradient(self, X, y, beta, beta0):
        d = X.shape[1]
        z = X @ beta + beta0
        s = expit(z)

        grad = np.empty(d + 1, dtype=np.float64)
        grad[:d] = X.T @ (y - s)
        grad[d] = np.sum(s) - np.sum(y * s)
        return grad

    def get_device_info(self) -> dict:
        """Get backend information."""
        import scipy
        return {
            'backend': 'cpu',
            'precision': 'fp64',
            'library': f'NumPy {np.__version__}, SciPy {scipy.__version__}',
        }

"""
GPU backend using PyTorch with FP64 precision.

Mirrors the CPU evaluators on CUDA devices.
"""

import numpy as np
import warnings
from typing import Optional

from .base import BackendBase, LikelihoodTerms, LAMBDA_EPS


class PyTorchBackendFP64(BackendBase):
    """
    PyTorch backend with FP64 precision.

    Falls back to the torch CPU device when no CUDA GPU is present.
    """

    def __init__(self, device: Optional[str] = None):
        """Initialize PyTorch FP64 backend."""
        self.name = "pytorch_fp64"
        self.precision = "fp64"

        try:
            import torch
            self.torch = torch
        except ImportError:
            raise ImportError(
                "PyTorch required for GPU backend. "
                "Install: pip install torch"
            )

        # No FP64 on Metal
        if device == 'mps':
            raise RuntimeError(
                "FP64 not supported on Apple Metal. "
                "Use the CPU backend."
            )

        if device is None:
            if torch.cuda.is_available():
                device = 'cuda'
            else:
                warnings.warn("No CUDA GPU available, using CPU")
                device = 'cpu'

        self.device = torch.device(device)

    def _to_device(self, a):
        return self.torch.tensor(np.asarray(a), dtype=self.torch.float64, device=self.device)

    def _eta(self, X, beta, beta0):
        X_gpu = self._to_device(X)
        beta_gpu = self._to_device(beta)
        return X_gpu @ beta_gpu + beta0

    def _terms(self, X, beta, beta0):
        torch = self.torch
        eta = self._eta(X, beta, beta0)

        lam = torch.logaddexp(torch.zeros_like(eta), eta)

        n_clamped = int(torch.count_nonzero(lam < LAMBDA_EPS).item())
        log_lam = torch.log(torch.clamp(lam, min=LAMBDA_EPS))
        return eta, lam, log_lam, n_clamped

    def likelihood_terms(self, X, beta, beta0):
        eta, lam, log_lam, n_clamped = self._terms(X, beta, beta0)
        return LikelihoodTerms(
            eta=eta.cpu().numpy(),
            lam=lam.cpu().numpy(),
            log_lam=log_lam.cpu().numpy(),
            n_clamped=n_clamped
        )

    def log_likelihood(self, X, y, beta, beta0):
        torch = self.torch
        _, lam, log_lam, n_clamped = self._terms(X, beta, beta0)
        if n_clamped:
            warnings.warn(
                f"lambda fell below {LAMBDA_EPS:.3g} for {n_clamped} "
                f"sample(s); log(lambda) was clamped",
                RuntimeWarning
            )
        y_gpu = self._to_device(y)
        return float(torch.sum(y_gpu * log_lam - lam).item())

    def log_likelihood_gradient(self, X, y, beta, beta0):
        torch = self.torch
        d = X.shape[1]

        X_gpu = self._to_device(X)
        y_gpu = self._to_device(y)
        z = X_gpu @ self._to_device(beta) + beta0
        s = torch.sigmoid(z)

        grad = torch.empty(d + 1, dtype=torch.float64, device=self.device)
        grad[:d] = X_gpu.T @ (y_gpu - s)
        grad[d] = torch.sum(s) - torch.sum(y_gpu * s)
        return grad.cpu().numpy()

    def get_device_info(self) -> dict:
        """Get backend information."""
        torch = self.torch
        info = {
            'backend': 'gpu' if self.device.type == 'cuda' else 'cpu',
            'precision': 'fp64',
            'device': str(self.device),
            'library': f'PyTorch {torch.__version__}',
        }
        if self.device.type == 'cuda':
            info['device_name'] = torch.cuda.get_device_name(self.device)
        return info

"""
Backend selection and management.

Provides a unified interface for the NumPy CPU evaluator and the
optional PyTorch evaluator.
"""

from .base import BackendBase, LikelihoodTerms, LAMBDA_EPS
from .cpu_fp64_backend import CPUBackendFP64

# CPU backend only needs numpy/scipy, which are hard dependencies
CPU_AVAILABLE = True

# Try importing PyTorch (optional)
try:
    import torch
    PYTORCH_AVAILABLE = True
    CUDA_AVAILABLE = torch.cuda.is_available()
except ImportError:
    PYTORCH_AVAILABLE = False
    CUDA_AVAILABLE = False

if PYTORCH_AVAILABLE:
    from .gpu_fp64_backend import PyTorchBackendFP64


def get_backend(backend='auto') -> BackendBase:
    """
    Get computational backend.

    Parameters
    ----------
    backend : str or BackendBase
        Backend selection:
        - 'auto': PyTorch on CUDA if a GPU is present, else CPU
        - 'cpu': CPU with NumPy/SciPy (FP64, reference)
        - 'pytorch': Force PyTorch (CUDA if available, else torch CPU)
        An existing backend instance is returned unchanged.

    Returns
    -------
    BackendBase
        Backend instance

    Examples
    --------
    >>> backend = get_backend('cpu')
    >>> backend.name
    'cpu_fp64'
    """
    if isinstance(backend, BackendBase):
        return backend

    if backend == 'auto':
        if PYTORCH_AVAILABLE and CUDA_AVAILABLE:
            return PyTorchBackendFP64(device='cuda')
        return CPUBackendFP64()

    elif backend == 'cpu':
        return CPUBackendFP64()

    elif backend == 'pytorch':
        if not PYTORCH_AVAILABLE:
            raise RuntimeError(
                "PyTorch backend unavailable.\n"
                "Install: pip install torch"
            )
        return PyTorchBackendFP64()

    else:
        raise ValueError(
            f"Unknown backend: '{backend}'\n"
            f"Valid options: 'auto', 'cpu', 'pytorch'"
        )


def list_available_backends() -> list:
    """List names of available backends."""
    backends = []
    if CPU_AVAILABLE:
        backends.append('cpu')
    if PYTORCH_AVAILABLE:
        backends.append('pytorch')
    return backends


__all__ = [
    'get_backend',
    'list_available_backends',
    'BackendBase',
    'LikelihoodTerms',
    'LAMBDA_EPS',
    'CPU_AVAILABLE',
    'PYTORCH_AVAILABLE',
    'CUDA_AVAILABLE',
]

"""
Test backend implementations.

The CPU backend is always tested. PyTorch tests run when torch is
installed (on CUDA if present, otherwise on the torch CPU device).
"""

import warnings

import pytest
import numpy as np

from pyglm import log_likelihood, log_likelihood_gradient
from pyglm._backends import (
    get_backend,
    list_available_backends,
    BackendBase,
    PYTORCH_AVAILABLE,
    CUDA_AVAILABLE,
)


def make_data(n=50, d=3, seed=42):
    rng = np.random.default_rng(seed)
    X = rng.normal(size=(n, d))
    beta = rng.normal(scale=0.5, size=d)
    y = rng.poisson(np.logaddexp(0.0, X @ beta + 0.2)).astype(float)
    return X, y, beta, 0.2


class TestBackendSelection:
    """Test backend lookup and availability."""

    def test_list_backends(self):
        backends = list_available_backends()
        assert isinstance(backends, list)
        assert 'cpu' in backends  # CPU always available
        assert ('pytorch' in backends) == PYTORCH_AVAILABLE

    def test_unknown_backend(self):
        with pytest.raises(ValueError, match="Unknown backend"):
            get_backend('tpu')

    def test_auto_backend(self):
        backend = get_backend('auto')
        assert isinstance(backend, BackendBase)
        if not CUDA_AVAILABLE:
            assert backend.name == 'cpu_fp64'

    def test_instance_passthrough(self):
        backend = get_backend('cpu')
        assert get_backend(backend) is backend

    @pytest.mark.skipif(PYTORCH_AVAILABLE, reason="PyTorch installed")
    def test_pytorch_unavailable(self):
        with pytest.raises(RuntimeError, match="PyTorch backend unavailable"):
            get_backend('pytorch')


class TestCPUBackend:
    """Test CPU backend (always available)."""

    def test_cpu_backend_creation(self):
        backend = get_backend('cpu')
        assert backend.name == 'cpu_fp64'
        assert backend.precision == 'fp64'

    def test_cpu_device_info(self):
        info = get_backend('cpu').get_device_info()
        assert info['backend'] == 'cpu'
        assert info['precision'] == 'fp64'
        assert 'NumPy' in info['library']

    def test_cpu_matches_module_functions(self):
        X, y, beta, beta0 = make_data()
        backend = get_backend('cpu')
        assert backend.log_likelihood(X, y, beta, beta0) == log_likelihood(X, y, beta, beta0)
        np.testing.assert_array_equal(
            backend.log_likelihood_gradient(X, y, beta, beta0),
            log_likelihood_gradient(X, y, beta, beta0)
        )

    def test_cpu_terms(self):
        X, _, beta, beta0 = make_data(n=10)
        terms = get_backend('cpu').likelihood_terms(X, beta, beta0)
        np.testing.assert_allclose(terms.eta, X @ beta + beta0)
        np.testing.assert_allclose(terms.lam, np.log1p(np.exp(terms.eta)))
        np.testing.assert_allclose(terms.log_lam, np.log(terms.lam))
        assert terms.n_clamped == 0


@pytest.mark.skipif(not PYTORCH_AVAILABLE, reason="PyTorch not installed")
class TestPyTorchBackend:
    """PyTorch backend must agree with the CPU reference."""

    @pytest.fixture
    def backend(self):
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", UserWarning)
            return get_backend('pytorch')

    def test_pytorch_backend_creation(self, backend):
        assert backend.name == 'pytorch_fp64'
        assert backend.precision == 'fp64'

    def test_pytorch_device_info(self, backend):
        info = backend.get_device_info()
        assert info['precision'] == 'fp64'
        assert 'PyTorch' in info['library']

    def test_pytorch_rejects_mps(self):
        from pyglm._backends.gpu_fp64_backend import PyTorchBackendFP64
        with pytest.raises(RuntimeError, match="Apple Metal"):
            PyTorchBackendFP64(device='mps')

    def test_warns_without_cuda(self):
        if CUDA_AVAILABLE:
            pytest.skip("CUDA available")
        with pytest.warns(UserWarning, match="No CUDA GPU"):
            get_backend('pytorch')

    def test_pytorch_vs_cpu_log_likelihood(self, backend):
        X, y, beta, beta0 = make_data()
        np.testing.assert_allclose(
            log_likelihood(X, y, beta, beta0, backend=backend),
            log_likelihood(X, y, beta, beta0, backend='cpu'),
            rtol=1e-12
        )

    def test_pytorch_vs_cpu_gradient(self, backend):
        X, y, beta, beta0 = make_data()
        np.testing.assert_allclose(
            log_likelihood_gradient(X, y, beta, beta0, backend=backend),
            log_likelihood_gradient(X, y, beta, beta0, backend='cpu'),
            rtol=1e-10, atol=1e-12
        )

    def test_pytorch_zero_features(self, backend):
        grad = log_likelihood_gradient(np.empty((2, 0)), [1.0, 0.0], np.empty(0), 0.0,
                                       backend=backend)
        np.testing.assert_allclose(grad, [0.5])

    def test_pytorch_clamps(self, backend):
        with pytest.warns(RuntimeWarning, match="clamped"):
            ll = log_likelihood([[1.0]], [1.0], [-800.0], 0.0, backend=backend)
        assert np.isfinite(ll)

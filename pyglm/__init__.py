"""
pyglm: generalized linear model likelihoods with NumPy and optional PyTorch backends.
"""

__version__ = "1.0.0"

# Import main user-facing API
from .glm import glm, GLM, GLMEvaluation
from .linear_machine import LinearMachine
from .parameters import ParameterDescriptor, ParameterProperties
from ._core import (
    log_likelihood,
    log_likelihood_gradient,
    likelihood_terms,
    DistributionFamily,
    LinkFunction,
    DescendUpdater,
    GradientDescendUpdater,
)
from ._utils import InvalidArgumentError

# Import backend utilities (for advanced users)
from ._backends import get_backend, list_available_backends

__all__ = [
    'glm',
    'GLM',
    'GLMEvaluation',
    'LinearMachine',
    'ParameterDescriptor',
    'ParameterProperties',
    'log_likelihood',
    'log_likelihood_gradient',
    'likelihood_terms',
    'DistributionFamily',
    'LinkFunction',
    'DescendUpdater',
    'GradientDescendUpdater',
    'InvalidArgumentError',
    'get_backend',
    'list_available_backends',
]

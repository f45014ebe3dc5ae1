"""
Core algorithms (backend-agnostic).
"""

from .likelihood import log_likelihood, log_likelihood_gradient, likelihood_terms
from .families import DistributionFamily, LinkFunction
from .descend_updaters import (
    DescendUpdater,
    GradientDescendUpdater,
)

__all__ = [
    "log_likelihood",
    "log_likelihood_gradient",
    "likelihood_terms",
    "DistributionFamily",
    "LinkFunction",
    "DescendUpdater",
    "GradientDescendUpdater",
]

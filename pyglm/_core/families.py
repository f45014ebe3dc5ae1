"""
Distribution families and link functions.

Both are closed sets of tagged variants. Each LinkFunction member
resolves to a Link object providing the transform, its inverse and
the derivative of the inverse.
"""

import numpy as np
from abc import ABC, abstractmethod
from enum import Enum


class Link(ABC):
    """Base class for link transforms."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Link name."""
        pass

    @abstractmethod
    def linkfun(self, mu: np.ndarray) -> np.ndarray:
        """Link function: η = g(μ)"""
        pass

    @abstractmethod
    def linkinv(self, eta: np.ndarray) -> np.ndarray:
        """Inverse link: μ = g⁻¹(η)"""
        pass

    @abstractmethod
    def mu_eta(self, eta: np.ndarray) -> np.ndarray:
        """Derivative: dμ/dη"""
        pass


class IdentityLink(Link):

    @property
    def name(self) -> str:
        return "identity"

    def linkfun(self, mu):
        return mu

    def linkinv(self, eta):
        return eta

    def mu_eta(self, eta):
        return np.ones_like(eta)


class LogLink(Link):

    @property
    def name(self) -> str:
        return "log"

    def linkfun(self, mu):
        return np.log(mu)

    def linkinv(self, eta):
        return np.exp(eta)

    def mu_eta(self, eta):
        return np.exp(eta)


class LogitLink(Link):
    """
    Logit link with the inverse thresholded at ±30.

    Keeps μ strictly inside (0, 1) so downstream logs stay finite.
    """

    THRESH = 30.0
    MTHRESH = -30.0
    EPS = np.finfo(np.float64).eps

    @property
    def name(self) -> str:
        return "logit"

    def linkfun(self, mu):
        """Logit link: η = log(μ/(1-μ))"""
        return np.log(mu / (1 - mu))

    def linkinv(self, eta):
        """Inverse logit: μ = 1/(1 + exp(-η)), clipped to [ε, 1-ε]"""
        eta = np.asarray(eta, dtype=np.float64)
        mu = np.empty_like(eta)

        mu[eta < self.MTHRESH] = self.EPS
        mu[eta > self.THRESH] = 1 - self.EPS

        mask = (eta >= self.MTHRESH) & (eta <= self.THRESH)
        mu[mask] = 1.0 / (1.0 + np.exp(-eta[mask]))

        return mu

    def mu_eta(self, eta):
        """Derivative: dμ/dη = exp(η)/(1 + exp(η))²"""
        eta = np.asarray(eta, dtype=np.float64)
        d = np.empty_like(eta)

        outside = (eta < self.MTHRESH) | (eta > self.THRESH)
        d[outside] = self.EPS

        inside = ~outside
        exp_eta = np.exp(eta[inside])
        d[inside] = exp_eta / (1.0 + exp_eta) ** 2

        return d


class InverseLink(Link):

    @property
    def name(self) -> str:
        return "inverse"

    def linkfun(self, mu):
        return 1.0 / mu

    def linkinv(self, eta):
        return 1.0 / eta

    def mu_eta(self, eta):
        return -1.0 / (eta ** 2)


class LinkFunction(Enum):
    """Link function tag."""
    LOG = "log"
    LOGIT = "logit"
    IDENTITY = "identity"
    INVERSE = "inverse"

    @property
    def link(self) -> Link:
        return _LINKS[self]()


_LINKS = {
    LinkFunction.LOG: LogLink,
    LinkFunction.LOGIT: LogitLink,
    LinkFunction.IDENTITY: IdentityLink,
    LinkFunction.INVERSE: InverseLink,
}


class DistributionFamily(Enum):
    """Response distribution tag."""
    POISSON = "poisson"
    BINOMIAL = "binomial"
    NORMAL = "normal"
    EXPONENTIAL = "exponential"
    GAMMA = "gamma"

    @property
    def canonical_link(self) -> LinkFunction:
        return _CANONICAL_LINKS[self]

    def variance(self, mu: np.ndarray) -> np.ndarray:
        """Variance function: V(μ)"""
        mu = np.asarray(mu, dtype=np.float64)
        if self is DistributionFamily.POISSON:
            return mu
        if self is DistributionFamily.BINOMIAL:
            return mu * (1 - mu)
        if self is DistributionFamily.NORMAL:
            return np.ones_like(mu)
        # Exponential is gamma with unit shape
        return mu ** 2


_CANONICAL_LINKS = {
    DistributionFamily.POISSON: LinkFunction.LOG,
    DistributionFamily.BINOMIAL: LinkFunction.LOGIT,
    DistributionFamily.NORMAL: LinkFunction.IDENTITY,
    DistributionFamily.EXPONENTIAL: LinkFunction.INVERSE,
    DistributionFamily.GAMMA: LinkFunction.INVERSE,
}


def resolve_family(family) -> DistributionFamily:
    """Accept a DistributionFamily or its (case-insensitive) name."""
    if isinstance(family, DistributionFamily):
        return family
    if isinstance(family, str):
        try:
            return DistributionFamily(family.lower())
        except ValueError:
            pass
    valid = ', '.join(f"'{f.value}'" for f in DistributionFamily)
    raise ValueError(f"Unknown distribution family: {family!r}\nValid options: {valid}")


def resolve_link(link_fn) -> LinkFunction:
    """Accept a LinkFunction or its (case-insensitive) name."""
    if isinstance(link_fn, LinkFunction):
        return link_fn
    if isinstance(link_fn, str):
        try:
            return LinkFunction(link_fn.lower())
        except ValueError:
            pass
    valid = ', '.join(f"'{l.value}'" for l in LinkFunction)
    raise ValueError(f"Unknown link function: {link_fn!r}\nValid options: {valid}")


__all__ = [
    "Link",
    "IdentityLink",
    "LogLink",
    "LogitLink",
    "InverseLink",
    "LinkFunction",
    "DistributionFamily",
    "resolve_family",
    "resolve_link",
]

"""
Test link functions and distribution family tags.
"""

import pytest
import numpy as np

from pyglm import DistributionFamily, LinkFunction
from pyglm._core.families import LogitLink, resolve_family, resolve_link


ETA = np.array([-2.0, -0.5, 0.0, 0.5, 2.0])


@pytest.mark.parametrize("link_fn", list(LinkFunction))
def test_linkfun_inverts_linkinv(link_fn):
    link = link_fn.link
    eta = ETA if link_fn is not LinkFunction.INVERSE else ETA + 3.0
    np.testing.assert_allclose(link.linkfun(link.linkinv(eta)), eta, rtol=1e-10)


@pytest.mark.parametrize("link_fn", list(LinkFunction))
def test_mu_eta_matches_finite_difference(link_fn):
    link = link_fn.link
    eta = ETA if link_fn is not LinkFunction.INVERSE else ETA + 3.0
    h = 1e-6
    numeric = (link.linkinv(eta + h) - link.linkinv(eta - h)) / (2 * h)
    np.testing.assert_allclose(link.mu_eta(eta), numeric, rtol=1e-6)


def test_logit_thresholds():
    link = LogitLink()
    mu = link.linkinv(np.array([-50.0, 50.0]))
    np.testing.assert_array_equal(mu, [LogitLink.EPS, 1 - LogitLink.EPS])
    np.testing.assert_array_equal(link.mu_eta(np.array([-50.0, 50.0])), [LogitLink.EPS] * 2)


def test_link_names():
    for link_fn in LinkFunction:
        assert link_fn.link.name == link_fn.value


@pytest.mark.parametrize("family,link_fn", [
    (DistributionFamily.POISSON, LinkFunction.LOG),
    (DistributionFamily.BINOMIAL, LinkFunction.LOGIT),
    (DistributionFamily.NORMAL, LinkFunction.IDENTITY),
    (DistributionFamily.GAMMA, LinkFunction.INVERSE),
    (DistributionFamily.EXPONENTIAL, LinkFunction.INVERSE),
])
def test_canonical_links(family, link_fn):
    assert family.canonical_link is link_fn


def test_variance():
    mu = np.array([0.2, 0.5])
    np.testing.assert_allclose(DistributionFamily.POISSON.variance(mu), mu)
    np.testing.assert_allclose(DistributionFamily.BINOMIAL.variance(mu), [0.16, 0.25])
    np.testing.assert_allclose(DistributionFamily.NORMAL.variance(mu), [1.0, 1.0])
    np.testing.assert_allclose(DistributionFamily.GAMMA.variance(mu), [0.04, 0.25])


def test_resolve():
    assert resolve_family('POISSON') is DistributionFamily.POISSON
    assert resolve_link(LinkFunction.LOGIT) is LinkFunction.LOGIT
    with pytest.raises(ValueError):
        resolve_family(3)
    with pytest.raises(ValueError):
        resolve_link('cloglog')

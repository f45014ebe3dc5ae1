"""
Generalized linear model API.

Main user-facing interface for GLM likelihood evaluation.
"""

import numpy as np
import pandas as pd
from typing import Optional, Union
from dataclasses import dataclass

from ._backends import get_backend
from ._core.descend_updaters import DescendUpdater
from ._core.families import (
    DistributionFamily,
    LinkFunction,
    resolve_family,
    resolve_link,
)
from ._core.likelihood import log_likelihood, log_likelihood_gradient
from ._utils import InvalidArgumentError, check_array, check_vector
from .linear_machine import LinearMachine
from .parameters import ParameterProperties


@dataclass
class GLMEvaluation:
    """Objective values at the model's current weights."""
    log_likelihood: float
    penalized_log_likelihood: float
    gradient: pd.Series             # Weights first, bias last
    penalized_gradient: pd.Series
    n_obs: int
    n_features: int
    model: "GLM"


class GLM(LinearMachine):
    """
    Generalized linear model with a softplus-link likelihood.

    The estimator only evaluates the objective and its gradient and can
    take single descend steps; driving the iterations is left to the
    caller.

    Examples
    --------
    >>> import numpy as np
    >>> from pyglm import GLM, GradientDescendUpdater
    >>>
    >>> model = GLM(GradientDescendUpdater(), 'poisson', 'log', tau=0.1)
    >>> X = np.array([[0.5, 1.0], [1.5, -0.5], [0.0, 2.0]])
    >>> y = np.array([1.0, 0.0, 2.0])
    >>>
    >>> model.log_likelihood(X, y)
    >>> model.log_likelihood_derivative(X, y)   # length 3: w0, w1, bias
    >>> model.descend_step(X, y, learning_rate=0.05)
    """

    def __init__(
        self,
        descend_updater: Optional[DescendUpdater] = None,
        family: Union[str, DistributionFamily] = DistributionFamily.POISSON,
        link_fn: Union[str, LinkFunction] = LinkFunction.LOG,
        tau: float = 0.0,
        backend: str = 'cpu'
    ):
        """
        Parameters
        ----------
        descend_updater : DescendUpdater, optional
            Update rule used by ``descend_step``
        family : DistributionFamily or str, default=POISSON
            Response distribution
        link_fn : LinkFunction or str, default=LOG
            Link used by ``predict``
        tau : float, default=0.0
            L2 regularization strength (>= 0)
        backend : str, default='cpu'
            Computational backend: 'auto', 'cpu', 'pytorch'
        """
        super().__init__()
        self.tau = tau
        self.descend_updater = descend_updater
        self.family = family
        self.link_fn = link_fn
        self.backend = get_backend(backend)

        self._register("tau", "L2 Regularization parameter",
                       ParameterProperties.SETTING)
        self._register("descend_updater", "Descend Updater used for updating weights",
                       ParameterProperties.SETTING)
        self._register("family", "Distribution Family used",
                       ParameterProperties.SETTING)
        self._register("link_fn", "Link function used",
                       ParameterProperties.SETTING)

    @property
    def tau(self) -> float:
        return self._tau

    @tau.setter
    def tau(self, value):
        value = float(value)
        if not np.isfinite(value) or value < 0:
            raise InvalidArgumentError(f"tau must be a finite value >= 0, got {value}")
        self._tau = value

    @property
    def descend_updater(self) -> Optional[DescendUpdater]:
        return self._descend_updater

    @descend_updater.setter
    def descend_updater(self, value):
        if value is not None and not isinstance(value, DescendUpdater):
            raise TypeError(
                f"descend_updater must be a DescendUpdater, got {type(value).__name__}"
            )
        self._descend_updater = value

    @property
    def family(self) -> DistributionFamily:
        return self._family

    @family.setter
    def family(self, value):
        self._family = resolve_family(value)

    @property
    def link_fn(self) -> LinkFunction:
        return self._link_fn

    @link_fn.setter
    def link_fn(self, value):
        self._link_fn = resolve_link(value)

    def _prepare(self, X, y):
        if isinstance(X, pd.DataFrame):
            self.feature_names = [str(c) for c in X.columns]
            X = X.values
        if isinstance(y, pd.Series):
            y = y.values
        X = check_array(X, name='X')
        y = check_vector(y, name='y')
        self._ensure_weights(X.shape[1])
        return X, y

    def log_likelihood(self, X, y) -> float:
        """
        Log-likelihood at the current weights and bias.

        Parameters
        ----------
        X : ndarray or DataFrame, shape (n, d)
            Feature matrix
        y : ndarray or Series, shape (n,)
            Labels

        Returns
        -------
        float
        """
        X, y = self._prepare(X, y)
        return log_likelihood(X, y, self.w, self.bias, backend=self.backend)

    def log_likelihood_derivative(self, X, y) -> np.ndarray:
        """Gradient of length d + 1 (weights, then bias)."""
        X, y = self._prepare(X, y)
        return log_likelihood_gradient(X, y, self.w, self.bias, backend=self.backend)

    def penalized_log_likelihood(self, X, y) -> float:
        """Log-likelihood minus tau/2 * ||w||²; the bias is not penalized."""
        ll = self.log_likelihood(X, y)
        return ll - 0.5 * self.tau * float(self.w @ self.w)

    def penalized_log_likelihood_derivative(self, X, y) -> np.ndarray:
        grad = self.log_likelihood_derivative(X, y)
        grad[:-1] -= self.tau * self.w
        return grad

    def descend_step(self, X, y, learning_rate: float = 0.01) -> "GLM":
        """
        Apply one update of [w, bias] with the configured descend updater.

        The updater minimizes, so it receives the negated penalized
        gradient. Updates the model in place and returns it.

        Raises
        ------
        RuntimeError
            If no descend updater was configured
        """
        if self.descend_updater is None:
            raise RuntimeError("No descend_updater configured for this GLM")

        grad = self.penalized_log_likelihood_derivative(X, y)
        params = np.append(self.w, self.bias)
        new_params = self.descend_updater.update_variable(params, -grad, learning_rate)

        self.w = new_params[:-1]
        self.bias = new_params[-1]
        return self

    def evaluate(self, X, y) -> GLMEvaluation:
        """Evaluate every objective quantity at the current parameters."""
        X, y = self._prepare(X, y)
        grad = self.log_likelihood_derivative(X, y)
        pgrad = grad.copy()
        pgrad[:-1] -= self.tau * self.w
        ll = self.log_likelihood(X, y)

        index = list(self.coef.index[1:]) + ['Intercept']
        return GLMEvaluation(
            log_likelihood=ll,
            penalized_log_likelihood=ll - 0.5 * self.tau * float(self.w @ self.w),
            gradient=pd.Series(grad, index=index),
            penalized_gradient=pd.Series(pgrad, index=index),
            n_obs=X.shape[0],
            n_features=X.shape[1],
            model=self,
        )

    def predict(self, newdata: Union[pd.DataFrame, np.ndarray]) -> np.ndarray:
        """
        Mean response under the configured link.

        Parameters
        ----------
        newdata : DataFrame or array
            - If DataFrame with known feature names: columns are selected by name
            - Otherwise: must have as many columns as the weight vector

        Returns
        -------
        array
            ``link_fn.link.linkinv(X @ w + bias)``
        """
        if isinstance(newdata, pd.DataFrame):
            if self.feature_names is not None:
                X_new = newdata[self.feature_names].values
            else:
                X_new = newdata.values
        else:
            X_new = np.asarray(newdata)

        eta = self.compute_linear_predictor(X_new)
        return self.link_fn.link.linkinv(eta)

    def __repr__(self):
        return (f"GLM(family={self.family.value}, link_fn={self.link_fn.value}, "
                f"tau={self.tau}, descend_updater={self.descend_updater!r})")


def glm(y, X, data=None, w=None, bias=0.0, **kwargs) -> GLMEvaluation:
    """
    Evaluate a GLM on a dataset (convenience function).

    Parameters
    ----------
    y : str or array
        Labels
        - If string: column name in data
        - If array: numeric values
    X : list of str or array
        Features
        - If list of strings: column names in data
        - If array: numeric matrix (n × d)
    data : DataFrame, optional
        Dataset containing y and X variables
    w : array, optional
        Weight vector (default: zeros)
    bias : float, default=0.0
        Bias
    **kwargs
        Additional arguments passed to GLM

    Returns
    -------
    GLMEvaluation

    Examples
    --------
    >>> result = glm(y='visits', X=['age', 'income'], data=df, tau=0.5)
    >>> result.log_likelihood
    >>> result.gradient['age']
    """
    if isinstance(y, str):
        if data is None:
            raise ValueError("Must provide data when y is a string")
        y_values = data[y].values
    else:
        y_values = np.asarray(y)

    if isinstance(X, list) and all(isinstance(x, str) for x in X):
        if data is None:
            raise ValueError("Must provide data when X is list of strings")
        X_values = data[X]
    else:
        X_values = X

    model = GLM(**kwargs)
    if w is not None:
        model.w = w
    model.bias = bias
    return model.evaluate(X_values, y_values)

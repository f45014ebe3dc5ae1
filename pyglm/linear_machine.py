"""
Linear machine base.

Owns the weight vector and bias that the GLM evaluators read.
"""

import numpy as np
import pandas as pd
from typing import List, Optional

from ._utils import InvalidArgumentError, check_array, check_vector
from .parameters import ParameterRegistry, ParameterProperties


class LinearMachine(ParameterRegistry):
    """
    Model of the form ``eta = X @ w + bias``.

    ``w`` and ``bias`` are plain state: an optimizer mutates them between
    evaluations, evaluators only read them.
    """

    def __init__(self):
        self.w = np.zeros(0, dtype=np.float64)
        self.bias = 0.0
        self.feature_names: Optional[List[str]] = None

        self._register("w", "Parameter vector w", ParameterProperties.MODEL)
        self._register("bias", "Bias b", ParameterProperties.MODEL)

    @property
    def w(self) -> np.ndarray:
        return self._w

    @w.setter
    def w(self, value):
        self._w = check_vector(value, name='w')

    @property
    def bias(self) -> float:
        return self._bias

    @bias.setter
    def bias(self, value):
        value = float(value)
        if not np.isfinite(value):
            raise InvalidArgumentError("bias must be finite")
        self._bias = value

    def get_w(self) -> np.ndarray:
        return self.w

    def set_w(self, w):
        self.w = w

    def get_bias(self) -> float:
        return self.bias

    def set_bias(self, bias):
        self.bias = bias

    @property
    def n_features(self) -> int:
        return len(self.w)

    def _ensure_weights(self, n_features: int):
        """Zero-initialize weights the first time a D-column matrix is seen."""
        if len(self.w) == 0 and n_features > 0:
            self.w = np.zeros(n_features, dtype=np.float64)

    def compute_linear_predictor(self, X) -> np.ndarray:
        """Linear predictor eta = X @ w + bias."""
        X = check_array(X, name='X')
        if X.shape[1] != len(self.w):
            raise InvalidArgumentError(
                f"X has {X.shape[1]} columns but the weight vector has length {len(self.w)}"
            )
        return X @ self.w + self.bias

    @property
    def coef(self) -> pd.Series:
        """Named coefficients, intercept first (pandas Series)."""
        names = self.feature_names
        if names is None or len(names) != len(self.w):
            names = [f'x{i}' for i in range(len(self.w))]
        return pd.Series(
            np.concatenate([[self.bias], self.w]),
            index=['Intercept'] + list(names)
        )

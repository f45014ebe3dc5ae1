"""
Parameter descriptors.

Models declare their fields once (name, description, mutability) and
expose them through a small queryable interface. The numeric core never
sees this; it only matters for introspection and ``put``/``get``.
"""

import pandas as pd
from dataclasses import dataclass
from enum import Flag, auto
from typing import Any, Dict, List


class ParameterProperties(Flag):
    """Mutability category of a registered parameter."""
    NONE = 0
    SETTING = auto()    # Configuration chosen by the user
    HYPER = auto()      # Tunable hyperparameter
    MODEL = auto()      # Learned state (weights, bias)
    READONLY = auto()   # Not settable through put()


@dataclass(frozen=True)
class ParameterDescriptor:
    """Registered field of a model."""
    name: str
    description: str
    properties: ParameterProperties


class ParameterRegistry:
    """
    Mixin keeping an ordered list of parameter descriptors.

    Registered names must be attributes (or properties) of the instance.
    """

    def _register(self, name: str, description: str,
                  properties: ParameterProperties = ParameterProperties.NONE):
        if '_parameters' not in self.__dict__:
            self._parameters = {}
        if name in self._parameters:
            raise ValueError(f"Parameter '{name}' already registered")
        self._parameters[name] = ParameterDescriptor(name, description, properties)

    def parameter_descriptors(self) -> List[ParameterDescriptor]:
        """All registered descriptors, in registration order."""
        return list(self.__dict__.get('_parameters', {}).values())

    def parameter_names(self) -> List[str]:
        return [p.name for p in self.parameter_descriptors()]

    def descriptor(self, name: str) -> ParameterDescriptor:
        try:
            return self._parameters[name]
        except (AttributeError, KeyError):
            raise KeyError(f"No parameter named '{name}' on {type(self).__name__}")

    def has(self, name: str) -> bool:
        return name in self.__dict__.get('_parameters', {})

    def get(self, name: str) -> Any:
        """Value of a registered parameter."""
        self.descriptor(name)
        return getattr(self, name)

    def put(self, name: str, value: Any):
        """
        Set a registered parameter.

        Raises
        ------
        KeyError
            If ``name`` is not registered
        ValueError
            If the parameter is read-only
        """
        desc = self.descriptor(name)
        if ParameterProperties.READONLY in desc.properties:
            raise ValueError(f"Parameter '{name}' is read-only")
        setattr(self, name, value)
        return self

    def get_params(self) -> Dict[str, Any]:
        """Dict of every registered parameter's current value."""
        return {name: getattr(self, name) for name in self.parameter_names()}

    def describe_parameters(self) -> pd.DataFrame:
        """Table of registered parameters with their current values."""
        rows = []
        for p in self.parameter_descriptors():
            flags = [f.name for f in ParameterProperties
                     if f.value and f in p.properties]
            rows.append({
                'name': p.name,
                'description': p.description,
                'properties': '|'.join(flags),
                'value': repr(getattr(self, p.name)),
            })
        return pd.DataFrame(
            rows, columns=['name', 'description', 'properties', 'value']
        ).set_index('name')

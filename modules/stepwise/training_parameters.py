import math
from numbers import Integral, Real
from typing import Any, Dict, Mapping, Optional

from modules.model_factory import ModelFactory
from utils.exceptions import ConfigurationError
from utils import constants

class StepwiseTrainingParameters:
    """
    Training configuration of a stepwise regression.

    Attributes:
        regression_kind: Registered name of the delegate regressor. Must report
            feature p-values; checked when set, before any data is touched.
        regression_parameters: Parameters handed unmodified to the delegate's fit.
        max_iterations: Upper bound on elimination iterations (None = unbounded).
        aout: Significance threshold; features with p-value above it are removed.
    """

    def __init__(self,
                 regression_kind: Optional[str] = None,
                 regression_parameters: Optional[Mapping[str, Any]] = None,
                 max_iterations: Optional[int] = None,
                 aout: float = constants.DEFAULT_AOUT):
        self._regression_kind: Optional[str] = None
        self._regression_parameters: Mapping[str, Any] = {}
        self._max_iterations: Optional[int] = None
        self._aout: float = constants.DEFAULT_AOUT

        if regression_kind is not None:
            self.regression_kind = regression_kind
        self.regression_parameters = regression_parameters
        self.max_iterations = max_iterations
        self.aout = aout

    @property
    def regression_kind(self) -> Optional[str]:
        return self._regression_kind

    @regression_kind.setter
    def regression_kind(self, kind: str) -> None:
        if kind not in ModelFactory.get_available_models():
            raise ConfigurationError(
                f"Unknown regression model '{kind}'. Available: {ModelFactory.get_available_models()}"
            )
        if not ModelFactory.supports_pvalues(kind):
            raise ConfigurationError(
                f"The regression model '{kind}' is not stepwise compatible as it does not "
                f"calculate the p-values of the features."
            )
        self._regression_kind = kind

    @property
    def regression_parameters(self) -> Mapping[str, Any]:
        return self._regression_parameters

    @regression_parameters.setter
    def regression_parameters(self, params: Optional[Mapping[str, Any]]) -> None:
        if params is None:
            params = {}
        if not isinstance(params, Mapping):
            raise ConfigurationError(f"regression_parameters must be a mapping, got {type(params).__name__}.")
        self._regression_parameters = params

    @property
    def max_iterations(self) -> Optional[int]:
        return self._max_iterations

    @max_iterations.setter
    def max_iterations(self, value: Optional[int]) -> None:
        if value is not None:
            if isinstance(value, bool) or not isinstance(value, Integral):
                raise ConfigurationError(f"max_iterations must be an integer or None, got {value!r}.")
            if value < 1:
                raise ConfigurationError(f"max_iterations must be >= 1, got {value}.")
            value = int(value)
        self._max_iterations = value

    @property
    def aout(self) -> float:
        return self._aout

    @aout.setter
    def aout(self, value: float) -> None:
        if isinstance(value, bool) or not isinstance(value, Real) or math.isnan(value):
            raise ConfigurationError(f"aout must be a number, got {value!r}.")
        if not (0.0 <= value <= 1.0):
            raise ConfigurationError(f"aout must be between 0 and 1 (inclusive), got {value}.")
        self._aout = float(value)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'regression_kind': self._regression_kind,
            'regression_parameters': dict(self._regression_parameters),
            'max_iterations': self._max_iterations,
            'aout': self._aout,
        }

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> "StepwiseTrainingParameters":
        return cls(
            regression_kind=values.get('regression_kind'),
            regression_parameters=values.get('regression_parameters'),
            max_iterations=values.get('max_iterations'),
            aout=values.get('aout', constants.DEFAULT_AOUT),
        )

    def __repr__(self) -> str:
        return (f"StepwiseTrainingParameters(regression_kind={self._regression_kind!r}, "
                f"max_iterations={self._max_iterations!r}, aout={self._aout!r})")

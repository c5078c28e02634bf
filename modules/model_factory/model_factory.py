import logging
from typing import Dict, List, Optional, Type

from modules.base.base_regressor import BaseRegressor
from modules.regressors import LinearRegression, ExtraTreesRegressor, supports_pvalues
from modules.storage import StorageContext

class ModelFactory:
    """
    Registry of regression algorithms addressable by name.

    Every created model is bound to the StorageContext it is given, so a
    wrapper and the delegates it creates can share one persistence identity.
    """

    MODELS: Dict[str, Type[BaseRegressor]] = {
        'LinearRegression': LinearRegression,
        'ExtraTreesRegressor': ExtraTreesRegressor,
    }

    @classmethod
    def create(cls, model_name: str, storage: StorageContext,
               logger: Optional[logging.Logger] = None) -> BaseRegressor:
        """
        Create and return a model instance bound to `storage`.
        """
        return cls.get_model_class(model_name)(storage, logger)

    @classmethod
    def get_model_class(cls, model_name: str) -> Type[BaseRegressor]:
        if model_name not in cls.MODELS:
            raise ValueError(f"Unknown model name: {model_name}. Available: {cls.get_available_models()}")
        return cls.MODELS[model_name]

    @classmethod
    def register(cls, model_name: str, model_class: Type[BaseRegressor]) -> None:
        """Add a model class to the registry under `model_name`."""
        if not (isinstance(model_class, type) and issubclass(model_class, BaseRegressor)):
            raise TypeError(f"{model_class!r} is not a BaseRegressor subclass.")
        cls.MODELS[model_name] = model_class

    @classmethod
    def unregister(cls, model_name: str) -> None:
        cls.MODELS.pop(model_name, None)

    @classmethod
    def get_available_models(cls) -> List[str]:
        """Return list of all supported model names."""
        return list(cls.MODELS.keys())

    @classmethod
    def supports_pvalues(cls, model_name: str) -> bool:
        """True if the named model reports feature p-values."""
        return model_name in cls.MODELS and supports_pvalues(cls.MODELS[model_name])

    @classmethod
    def get_stepwise_compatible_models(cls) -> List[str]:
        return [name for name in cls.MODELS if cls.supports_pvalues(name)]

import logging
from typing import Any, Hashable, Mapping, Optional

from modules.base.base_regressor import BaseRegressor
from modules.data_manager.dataset import Dataset
from modules.model_factory import ModelFactory
from modules.regressors.capabilities import PvalueReporting
from modules.stepwise.stopping_criteria import snapshot_report
from modules.storage import StorageContext
from utils.exceptions import ConfigurationError

class DelegateLifecycleManager:
    """
    Creates, fits, queries and disposes delegate regressors.

    Every delegate is bound to the same StorageContext as its owner. Outside
    of `fit_and_report` at most one delegate (the retained handle) is alive;
    inside it, exactly one, erased before the call returns.
    """

    def __init__(self, storage: StorageContext, logger: logging.Logger):
        self.storage = storage
        self.logger = logger
        self._handle: Optional[BaseRegressor] = None

    @property
    def handle(self) -> Optional[BaseRegressor]:
        return self._handle

    def create(self, kind: str) -> BaseRegressor:
        return ModelFactory.create(kind, self.storage, self.logger)

    def fit_and_report(self, kind: str, dataset: Dataset,
                       regression_parameters: Mapping[str, Any]) -> Mapping[Hashable, float]:
        """
        Fit a throwaway delegate and return a read-only snapshot of its p-values.
        The delegate is erased whether or not the fit succeeds.
        """
        delegate = self.create(kind)
        try:
            if not isinstance(delegate, PvalueReporting):
                raise ConfigurationError(f"Regressor '{kind}' does not report feature p-values.")
            delegate.fit(dataset, regression_parameters)
            report = snapshot_report(delegate.get_feature_pvalues())
        finally:
            delegate.erase()
        return report

    def fit_retained(self, kind: str, dataset: Dataset,
                     regression_parameters: Mapping[str, Any]) -> BaseRegressor:
        """Fit the delegate that is kept; the handle is only set on success."""
        delegate = self.create(kind)
        delegate.fit(dataset, regression_parameters)
        self._handle = delegate
        return delegate

    def ensure_loaded(self, kind: str) -> BaseRegressor:
        """Return the live handle, re-creating it from storage when absent."""
        if self._handle is None:
            self.logger.debug(f"Reloading delegate '{kind}' from storage '{self.storage.name}'")
            self._handle = self.create(kind)
        return self._handle

    def release(self) -> None:
        """Drops the in-memory handle without touching persisted state."""
        self._handle = None

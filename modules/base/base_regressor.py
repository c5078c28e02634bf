import abc
import logging
import numpy as np
from typing import Any, Optional
from sklearn.model_selection import KFold

from modules.data_manager.dataset import Dataset
from modules.evaluation_engine.metrics import RegressionMetrics, compute_regression_metrics
from modules.evaluation_engine.cv_analysis import cv_fold_consistency
from modules.storage import StorageContext, KnowledgeBase
from utils.exceptions import ConfigurationError, ModelNotFittedError
from utils import constants

class BaseRegressor(abc.ABC):
    """
    Abstract base class for all regressors.

    Provides the common model lifecycle:
    - Binding to a named StorageContext and a per-class KnowledgeBase.
    - fit -> persist, predict / validate -> lazily reload persisted state.
    - Generic k-fold cross-validation.
    - erase, which drops everything the model persisted.

    Subclasses must accept `(storage, logger)` as constructor arguments.
    """

    def __init__(self, storage: StorageContext, logger: Optional[logging.Logger] = None):
        self.storage = storage
        self.logger = logger or logging.getLogger(self.__class__.__module__)
        self.knowledge_base = KnowledgeBase(storage, self._get_namespace(), self.logger)

    def _get_namespace(self) -> str:
        """Directory name of this model inside the storage identity."""
        return self.__class__.__name__

    def fit(self, dataset: Dataset, training_parameters: Any) -> "BaseRegressor":
        """
        Train on `dataset` and persist the resulting knowledge base.
        Any state previously persisted by this model is discarded first; a
        failed fit leaves the model unfitted.
        """
        self.knowledge_base.erase()
        self.knowledge_base.training_parameters = training_parameters

        self.logger.debug(
            f"Fitting {self.__class__.__name__} on {dataset.size()} samples "
            f"with {dataset.column_size()} columns."
        )
        try:
            self._fit(dataset)
        except Exception:
            self.knowledge_base.erase()
            raise
        self.knowledge_base.save()
        return self

    def predict(self, dataset: Dataset) -> None:
        """Writes predictions into `dataset.predictions` in place."""
        self._ensure_knowledge_base()
        self._predict_dataset(dataset)

    def validate(self, dataset: Dataset) -> RegressionMetrics:
        self._ensure_knowledge_base()
        return self._validate_model(dataset)

    def k_fold_cross_validation(self, dataset: Dataset, training_parameters: Any, k: int) -> RegressionMetrics:
        """
        Average validation metrics over k folds.

        Every fold trains a fresh model of the same class bound to a temporary
        storage identity, which is erased once the fold is validated.
        """
        if k < 2:
            raise ConfigurationError(f"k must be >= 2, got {k}.")
        if k > dataset.size():
            raise ConfigurationError(f"k ({k}) cannot exceed the number of samples ({dataset.size()}).")

        self.logger.info(f"Running {k}-fold cross validation for {self.__class__.__name__}...")
        splitter = KFold(n_splits=k, shuffle=True, random_state=constants.DEFAULT_CV_SEED)

        fold_metrics = []
        for fold, (train_idx, test_idx) in enumerate(splitter.split(np.arange(dataset.size()))):
            fold_storage = self.storage.derive(f"{constants.CV_FOLD_SUFFIX}{fold}")
            fold_model = self.__class__(fold_storage, self.logger)
            try:
                fold_model.fit(dataset.subset(train_idx), training_parameters)
                fold_metrics.append(fold_model.validate(dataset.subset(test_idx)))
            finally:
                fold_model.erase()

        summary = cv_fold_consistency(fold_metrics)
        self.logger.debug(f"Fold consistency:\n{summary.to_string(index=False)}")
        return RegressionMetrics.average(fold_metrics)

    def erase(self) -> None:
        """Releases all persisted state of this model."""
        self.knowledge_base.erase()

    def is_fitted(self) -> bool:
        return self.knowledge_base.model_parameters is not None or self.knowledge_base.is_persisted()

    def _ensure_knowledge_base(self) -> None:
        if self.knowledge_base.model_parameters is not None:
            return
        if not self.knowledge_base.load():
            raise ModelNotFittedError(
                f"{self.__class__.__name__} has no trained model in storage '{self.storage.name}'."
            )

    def _validate_model(self, dataset: Dataset) -> RegressionMetrics:
        """Default validation: predict on a copy and score against the target."""
        y_true = dataset.require_target()
        scored = dataset.copy()
        self._predict_dataset(scored)
        return compute_regression_metrics(y_true.values, scored.predictions.values)

    @abc.abstractmethod
    def _fit(self, dataset: Dataset) -> None:
        """Train and store model parameters in self.knowledge_base."""
        raise NotImplementedError("Subclasses must implement _fit.")

    @abc.abstractmethod
    def _predict_dataset(self, dataset: Dataset) -> None:
        """Compute predictions and write them with dataset.set_predictions."""
        raise NotImplementedError("Subclasses must implement _predict_dataset.")

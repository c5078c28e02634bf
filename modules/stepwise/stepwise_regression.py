import itertools
import logging
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Hashable, List, Optional
from tqdm import tqdm

from modules.base.base_regressor import BaseRegressor
from modules.data_manager.dataset import Dataset
from modules.evaluation_engine.metrics import RegressionMetrics
from modules.stepwise.delegate_manager import DelegateLifecycleManager
from modules.stepwise.stopping_criteria import StoppingCriteria
from modules.stepwise.training_parameters import StepwiseTrainingParameters
from modules.storage import StorageContext
from utils.exceptions import ConfigurationError, UnsupportedOperationError
from utils import constants


@dataclass
class ModelSummary:
    """
    Shape of the dataset that survived elimination.

    d counts the surviving columns (constant included), n the rows.
    Coefficients are owned by the retained delegate, not stored here.
    """
    d: int
    n: int
    features: List[Hashable] = field(default_factory=list)
    history: List[Dict[str, Any]] = field(default_factory=list)
    stop_reason: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class StepwiseRegression(BaseRegressor):
    """
    Backward elimination wrapper around a p-value reporting regressor.

    Each iteration fits a fresh delegate on a private copy of the training
    data, reads the delegate's feature p-values, erases the delegate and
    removes the least significant feature while its p-value exceeds aout.
    A final delegate trained on the surviving features is kept for
    prediction and validation.

    The model itself only persists its training parameters and a
    ModelSummary; every delegate shares its StorageContext.
    """

    def __init__(self, storage: StorageContext, logger: Optional[logging.Logger] = None,
                 show_progress: bool = False):
        super().__init__(storage, logger)
        self.show_progress = show_progress
        self.delegates = DelegateLifecycleManager(storage, self.logger)

    def fit(self, dataset: Dataset, training_parameters: StepwiseTrainingParameters) -> "StepwiseRegression":
        """
        Run backward elimination and train the final delegate.

        The caller's dataset is never modified; all column removal happens on
        a deep copy that is discarded once the final delegate is trained.
        Delegate errors propagate unchanged and leave no retained delegate.
        Refitting erases the delegate persisted by the previous fit.
        """
        if not isinstance(training_parameters, StepwiseTrainingParameters):
            raise ConfigurationError(
                f"Expected StepwiseTrainingParameters, got {type(training_parameters).__name__}."
            )
        if training_parameters.regression_kind is None:
            raise ConfigurationError("No regression model configured for stepwise regression.")

        if self.is_fitted():
            self.erase_delegate()
        self.delegates.release()
        return super().fit(dataset, training_parameters)

    def k_fold_cross_validation(self, dataset: Dataset, training_parameters: Any, k: int) -> RegressionMetrics:
        raise UnsupportedOperationError(
            "K-fold cross validation is not supported. Run it directly on the wrapped regressor."
        )

    def erase(self) -> None:
        """Erases the retained delegate, then this model's own persisted state."""
        self._ensure_knowledge_base()
        self.erase_delegate()
        super().erase()

    def erase_delegate(self) -> None:
        """Erases the retained delegate of the current model and drops the handle."""
        self._ensure_knowledge_base()
        self._ensure_delegate().erase()
        self.delegates.release()

    def get_model_summary(self) -> ModelSummary:
        self._ensure_knowledge_base()
        return self.knowledge_base.model_parameters

    @property
    def selected_features(self) -> List[Hashable]:
        return list(self.get_model_summary().features)

    def get_delegate(self) -> BaseRegressor:
        """The retained delegate, reloaded from storage if needed."""
        self._ensure_knowledge_base()
        return self._ensure_delegate()

    def _fit(self, dataset: Dataset) -> None:
        training_parameters: StepwiseTrainingParameters = self.knowledge_base.training_parameters
        kind = training_parameters.regression_kind
        regression_parameters = training_parameters.regression_parameters
        max_iterations = training_parameters.max_iterations
        aout = training_parameters.aout

        criteria = StoppingCriteria(aout, self.logger)
        working = dataset.copy()

        self.logger.info(
            f"Starting backward elimination with {kind}: {working.column_size()} columns, "
            f"{working.size()} samples, aout={aout}, max_iterations={max_iterations or 'unbounded'}"
        )

        iterations = range(max_iterations) if max_iterations is not None else itertools.count()
        history: List[Dict[str, Any]] = []
        stop_reason = constants.STOP_MAX_ITERATIONS

        for iteration in tqdm(iterations, total=max_iterations, desc="Backward elimination",
                              unit="iteration", disable=not self.show_progress):
            record = {
                'iteration': iteration + 1,
                'n_columns': working.column_size(),
                'candidate': None,
                'pvalue': None,
                'removed': None,
                'stop_reason': None,
            }
            history.append(record)

            report = self.delegates.fit_and_report(kind, working, regression_parameters)
            decision = criteria.evaluate(report)
            record['candidate'] = decision.feature
            record['pvalue'] = decision.pvalue

            if decision.stop:
                stop_reason = record['stop_reason'] = decision.reason
                self.logger.info(f"Iteration {iteration + 1}: stopping ({decision.reason}).")
                break

            working.remove_column(decision.feature)
            record['removed'] = decision.feature
            self.logger.info(
                f"Iteration {iteration + 1}: removed '{decision.feature}' "
                f"(p={decision.pvalue:.4g} > aout={aout}), {working.column_size()} columns left."
            )

            remaining = criteria.check_remaining(working)
            if remaining.stop:
                stop_reason = record['stop_reason'] = remaining.reason
                self.logger.info(f"Iteration {iteration + 1}: stopping ({remaining.reason}).")
                break
        else:
            self.logger.info(f"Reached max_iterations ({max_iterations}).")

        summary = ModelSummary(
            d=working.column_size(),
            n=working.size(),
            features=working.columns,
            history=history,
            stop_reason=stop_reason,
        )
        self.logger.info(f"Training final {kind} on {summary.d} columns: {summary.features}")
        self.delegates.fit_retained(kind, working, regression_parameters)
        self.knowledge_base.model_parameters = summary
        del working

        self.knowledge_base.save_metadata(constants.MODEL_SUMMARY_FILE, {
            'regression_kind': kind,
            'training_parameters': training_parameters.to_dict(),
            **summary.to_dict(),
        })

    def _predict_dataset(self, dataset: Dataset) -> None:
        self._ensure_delegate().predict(dataset)

    def _validate_model(self, dataset: Dataset) -> RegressionMetrics:
        return self._ensure_delegate().validate(dataset)

    def _ensure_delegate(self) -> BaseRegressor:
        return self.delegates.ensure_loaded(self.knowledge_base.training_parameters.regression_kind)

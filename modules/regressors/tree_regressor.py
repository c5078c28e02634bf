import numpy as np
from typing import Dict, Hashable
from sklearn.ensemble import ExtraTreesRegressor as SklearnExtraTreesRegressor

from modules.base.base_regressor import BaseRegressor
from modules.data_manager.dataset import Dataset
from utils.error_handling import handle_model_errors
from utils.exceptions import ModelTrainingError, PredictionError
from utils.params import filter_params

class ExtraTreesRegressor(BaseRegressor):
    """
    Extremely randomized trees ensemble.

    Reports impurity-based feature importances but no coefficient
    significance, so it cannot drive stepwise elimination.
    """

    @handle_model_errors("Extra trees training", ModelTrainingError)
    def _fit(self, dataset: Dataset) -> None:
        params = dict(self.knowledge_base.training_parameters or {})
        X = dataset.features
        y = dataset.require_target()

        if X.empty or len(X.columns) == 0:
            raise ModelTrainingError("No features available for training.")

        estimator = SklearnExtraTreesRegressor(**filter_params(SklearnExtraTreesRegressor, params))
        estimator.fit(X.to_numpy(dtype=float), y.to_numpy(dtype=float))

        features = list(X.columns)
        self.knowledge_base.model_parameters = {
            'estimator': estimator,
            'features': features,
            'importances': dict(zip(features, np.asarray(estimator.feature_importances_).tolist())),
        }

    @handle_model_errors("Extra trees prediction", PredictionError)
    def _predict_dataset(self, dataset: Dataset) -> None:
        model_params = self.knowledge_base.model_parameters
        features = model_params['features']

        missing = [f for f in features if f not in dataset.features.columns]
        if missing:
            raise PredictionError(f"Missing features required by the model: {missing}")

        X = dataset.features[features].to_numpy(dtype=float)
        dataset.set_predictions(model_params['estimator'].predict(X))

    def get_feature_importances(self) -> Dict[Hashable, float]:
        self._ensure_knowledge_base()
        return dict(self.knowledge_base.model_parameters['importances'])

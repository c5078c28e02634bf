import numpy as np
from typing import Dict, Hashable, Mapping
from scipy import stats
from sklearn.linear_model import LinearRegression as SklearnLinearRegression

from modules.base.base_regressor import BaseRegressor
from modules.data_manager.dataset import Dataset
from utils.error_handling import handle_model_errors
from utils.exceptions import ModelTrainingError, PredictionError
from utils.params import filter_params

class LinearRegression(BaseRegressor):
    """
    Ordinary least squares regression with coefficient significance tests.

    The intercept is expected to come from the dataset's constant column, so
    the underlying estimator is always fitted with `fit_intercept=False`.
    Standard errors use the pseudo-inverse of X'X; p-values are two-sided
    t-tests with n - rank(X) degrees of freedom.
    """

    @handle_model_errors("Linear regression training", ModelTrainingError)
    def _fit(self, dataset: Dataset) -> None:
        params = dict(self.knowledge_base.training_parameters or {})
        X = dataset.features
        y = dataset.require_target()

        if X.empty or len(X.columns) == 0:
            raise ModelTrainingError("No features available for training.")

        X_values = X.to_numpy(dtype=float)
        y_values = y.to_numpy(dtype=float)

        n_samples = X_values.shape[0]
        rank = int(np.linalg.matrix_rank(X_values))
        dof = n_samples - rank
        if dof < 1:
            raise ModelTrainingError(
                f"Not enough samples ({n_samples}) for {rank} independent features."
            )

        estimator_params = filter_params(SklearnLinearRegression, params)
        estimator_params['fit_intercept'] = False
        estimator = SklearnLinearRegression(**estimator_params)
        estimator.fit(X_values, y_values)

        coefficients = np.asarray(estimator.coef_, dtype=float).ravel()
        residuals = y_values - X_values @ coefficients
        sse = float(residuals @ residuals)
        sigma2 = sse / dof

        xtx_inv = np.linalg.pinv(X_values.T @ X_values)
        standard_errors = np.sqrt(np.clip(np.diag(xtx_inv) * sigma2, 0.0, None))

        with np.errstate(divide='ignore', invalid='ignore'):
            t_stats = coefficients / standard_errors
        pvalues = 2.0 * stats.t.sf(np.abs(t_stats), dof)
        # 0/0 (zero coefficient with zero standard error) carries no evidence
        pvalues = np.where(np.isnan(pvalues), 1.0, pvalues)

        features = list(X.columns)
        self.knowledge_base.model_parameters = {
            'estimator': estimator,
            'features': features,
            'coefficients': dict(zip(features, coefficients.tolist())),
            'standard_errors': dict(zip(features, standard_errors.tolist())),
            'pvalues': dict(zip(features, pvalues.tolist())),
            'dof': dof,
            'sse': sse,
        }

        self.logger.debug(f"OLS fitted: {len(features)} features, {dof} residual dof, SSE={sse:.4f}")

    @handle_model_errors("Linear regression prediction", PredictionError)
    def _predict_dataset(self, dataset: Dataset) -> None:
        model_params = self.knowledge_base.model_parameters
        features = model_params['features']

        missing = [f for f in features if f not in dataset.features.columns]
        if missing:
            raise PredictionError(f"Missing features required by the model: {missing}")

        X = dataset.features[features].to_numpy(dtype=float)
        dataset.set_predictions(model_params['estimator'].predict(X))

    def get_feature_pvalues(self) -> Mapping[Hashable, float]:
        self._ensure_knowledge_base()
        return dict(self.knowledge_base.model_parameters['pvalues'])

    def get_coefficients(self) -> Dict[Hashable, float]:
        self._ensure_knowledge_base()
        return dict(self.knowledge_base.model_parameters['coefficients'])

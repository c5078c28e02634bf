import numpy as np
import pandas as pd
import pytest
from unittest.mock import MagicMock

from modules.base.base_regressor import BaseRegressor
from modules.data_manager.dataset import Dataset
from modules.storage import StorageContext
from utils.exceptions import DataValidationError, ModelNotFittedError

class MeanRegressor(BaseRegressor):
    """Predicts the training mean."""

    def _fit(self, dataset):
        self.knowledge_base.model_parameters = {'mean': float(dataset.require_target().mean())}

    def _predict_dataset(self, dataset):
        dataset.set_predictions(np.full(dataset.size(), self.knowledge_base.model_parameters['mean']))

@pytest.fixture
def storage(tmp_path):
    return StorageContext("base", tmp_path)

@pytest.fixture
def dataset():
    return Dataset.from_dataframe(pd.DataFrame({'x': range(10), 'y': [float(v) for v in range(10)]}), 'y')

def test_cannot_instantiate_abstract(storage):
    with pytest.raises(TypeError):
        BaseRegressor(storage)

def test_namespace_is_class_name(storage):
    model = MeanRegressor(storage, MagicMock())
    assert model.knowledge_base.owner == 'MeanRegressor'

def test_fit_persists_training_parameters(storage, dataset):
    model = MeanRegressor(storage, MagicMock()).fit(dataset, {'alpha': 0.1})

    assert model.is_fitted()
    reloaded = MeanRegressor(storage, MagicMock())
    reloaded.predict(dataset)
    assert reloaded.knowledge_base.training_parameters == {'alpha': 0.1}
    assert dataset.predictions.tolist() == [4.5] * 10

def test_refit_discards_previous_state(storage, dataset):
    model = MeanRegressor(storage, MagicMock())
    model.fit(dataset, {'run': 1})
    model.knowledge_base.save_metadata('stale.json', {})

    model.fit(dataset.subset([0, 1]), {'run': 2})
    assert not (storage.namespace('MeanRegressor') / 'stale.json').exists()
    assert model.knowledge_base.model_parameters == {'mean': 0.5}

def test_validate_scores_copy(storage, dataset):
    model = MeanRegressor(storage, MagicMock()).fit(dataset, {})
    metrics = model.validate(dataset)

    assert metrics.n == 10
    assert metrics.mae == pytest.approx(2.5)
    assert dataset.predictions is None

@pytest.mark.parametrize("operation", ["predict", "validate"])
def test_unfitted_raises(storage, dataset, operation):
    with pytest.raises(ModelNotFittedError):
        getattr(MeanRegressor(storage, MagicMock()), operation)(dataset)

def test_k_fold_uses_temporary_storage(storage, dataset, tmp_path):
    logger = MagicMock()
    metrics = MeanRegressor(storage, logger).k_fold_cross_validation(dataset, {}, 5)

    assert metrics.n == 10
    assert list(tmp_path.iterdir()) == []
    logger.info.assert_any_call("Running 5-fold cross validation for MeanRegressor...")

def test_failed_refit_leaves_model_unfitted(storage, dataset):
    model = MeanRegressor(storage, MagicMock()).fit(dataset, {})
    unlabeled = Dataset(dataset.features.drop(columns=['constant']))

    with pytest.raises(DataValidationError):
        model.fit(unlabeled, {'run': 2})

    assert not model.is_fitted()
    assert model.knowledge_base.training_parameters is None
    assert not storage.root.exists()

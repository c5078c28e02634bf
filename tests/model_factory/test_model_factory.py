import pytest
from unittest.mock import MagicMock

from modules.base.base_regressor import BaseRegressor
from modules.model_factory import ModelFactory
from modules.regressors import LinearRegression, ExtraTreesRegressor
from modules.storage import StorageContext

class PvalueStub(BaseRegressor):
    def _fit(self, dataset):
        self.knowledge_base.model_parameters = {}

    def _predict_dataset(self, dataset):
        dataset.set_predictions([0.0] * dataset.size())

    def get_feature_pvalues(self):
        return {}

@pytest.fixture
def storage(tmp_path):
    return StorageContext("factory", tmp_path)

@pytest.fixture
def registered_stub():
    ModelFactory.register('PvalueStub', PvalueStub)
    yield 'PvalueStub'
    ModelFactory.unregister('PvalueStub')

def test_create_binds_storage(storage):
    logger = MagicMock()
    model = ModelFactory.create('LinearRegression', storage, logger)

    assert isinstance(model, LinearRegression)
    assert model.storage is storage
    assert model.logger is logger

def test_create_tree_model(storage):
    assert isinstance(ModelFactory.create('ExtraTreesRegressor', storage), ExtraTreesRegressor)

def test_unknown_model_error(storage):
    """Test error handling for unknown models."""
    with pytest.raises(ValueError, match="Unknown model name"):
        ModelFactory.create('SuperAdvancedAIModel', storage)

def test_supports_pvalues():
    assert ModelFactory.supports_pvalues('LinearRegression')
    assert not ModelFactory.supports_pvalues('ExtraTreesRegressor')
    assert not ModelFactory.supports_pvalues('SuperAdvancedAIModel')

def test_stepwise_compatible_models():
    compatible = ModelFactory.get_stepwise_compatible_models()
    assert 'LinearRegression' in compatible
    assert 'ExtraTreesRegressor' not in compatible

def test_register_custom_model(registered_stub, storage):
    assert registered_stub in ModelFactory.get_available_models()
    assert ModelFactory.supports_pvalues(registered_stub)
    assert isinstance(ModelFactory.create(registered_stub, storage), PvalueStub)

def test_unregister_removes_model(registered_stub):
    ModelFactory.unregister(registered_stub)
    assert registered_stub not in ModelFactory.get_available_models()

def test_register_rejects_non_regressor():
    with pytest.raises(TypeError):
        ModelFactory.register('Bogus', dict)
    assert 'Bogus' not in ModelFactory.get_available_models()

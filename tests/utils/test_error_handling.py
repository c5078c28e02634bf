import pytest
from unittest.mock import MagicMock

from utils.error_handling import handle_model_errors
from utils.exceptions import DataValidationError, ModelTrainingError

class Worker:
    def __init__(self):
        self.logger = MagicMock()

    @handle_model_errors("Training", ModelTrainingError)
    def crash(self):
        raise ValueError("singular matrix")

    @handle_model_errors("Training", ModelTrainingError)
    def reject(self):
        raise DataValidationError("no target")

    @handle_model_errors("Training", ModelTrainingError)
    def succeed(self):
        return 42

def test_unexpected_error_is_wrapped():
    worker = Worker()
    with pytest.raises(ModelTrainingError, match="Training failed: singular matrix") as info:
        worker.crash()
    assert isinstance(info.value.__cause__, ValueError)
    worker.logger.error.assert_called_once()

def test_own_errors_pass_through():
    worker = Worker()
    with pytest.raises(DataValidationError):
        worker.reject()
    worker.logger.error.assert_not_called()

def test_return_value_preserved():
    assert Worker().succeed() == 42
    assert Worker.succeed.__name__ == "succeed"

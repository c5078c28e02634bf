import pytest
import pandas as pd
import numpy as np
import logging
from unittest.mock import MagicMock
from modules.data_manager import DataManager
from utils.exceptions import DataValidationError
from utils import constants

# --- Fixtures ---

@pytest.fixture
def mock_logger():
    """Provides a mock logger for tests."""
    return MagicMock(spec=logging.Logger)

@pytest.fixture
def base_config(tmp_path):
    """Provides a base configuration dictionary."""
    return {
        "data": {
            "file_path": str(tmp_path / "train.csv"),
            "target_column": "y",
            "add_constant": True,
            "drop_columns": ["row_id"],
        }
    }

@pytest.fixture
def sample_df():
    return pd.DataFrame({
        'row_id': [1, 2, 3, 4, 5],
        'x1': [0.1, 0.2, 0.3, 0.4, 0.5],
        'x2': [1.0, np.nan, 3.0, 4.0, 5.0],
        'y': [1.0, 2.0, 3.0, 4.0, 5.0],
    })

# --- Tests ---

class TestDataManager:

    def test_load_csv(self, base_config, mock_logger, sample_df, tmp_path):
        sample_df.to_csv(tmp_path / "train.csv", index=False)
        dataset = DataManager(base_config, mock_logger).load_dataset()

        assert dataset.columns == [constants.CONSTANT_COLUMN, 'x1', 'x2']
        # the NaN row is dropped
        assert dataset.size() == 4
        assert dataset.target.tolist() == [1.0, 3.0, 4.0, 5.0]
        mock_logger.warning.assert_called()

    def test_load_parquet_override(self, base_config, mock_logger, sample_df, tmp_path):
        path = tmp_path / "train.parquet"
        sample_df.dropna().to_parquet(path, index=False)

        dataset = DataManager(base_config, mock_logger).load_dataset(str(path))
        assert dataset.size() == 4

    def test_missing_file(self, base_config, mock_logger):
        with pytest.raises(DataValidationError, match="not found"):
            DataManager(base_config, mock_logger).load_dataset()

    def test_unsupported_extension(self, base_config, mock_logger, tmp_path):
        path = tmp_path / "train.txt"
        path.write_text("x,y\n1,2\n")
        with pytest.raises(DataValidationError, match="Unsupported"):
            DataManager(base_config, mock_logger).load_dataset(str(path))

    def test_missing_target(self, base_config, mock_logger, sample_df, tmp_path):
        sample_df.drop(columns=['y']).to_csv(tmp_path / "train.csv", index=False)
        manager = DataManager(base_config, mock_logger)

        with pytest.raises(DataValidationError, match="Missing target"):
            manager.load_dataset()

        unlabeled = manager.load_dataset(require_target=False)
        assert unlabeled.target is None

    def test_non_numeric_rejected(self, base_config, mock_logger, sample_df, tmp_path):
        sample_df['label'] = ['a', 'b', 'c', 'd', 'e']
        sample_df.to_csv(tmp_path / "train.csv", index=False)
        with pytest.raises(DataValidationError, match="Non-numeric"):
            DataManager(base_config, mock_logger).load_dataset()

    def test_validate_nan_inf_report(self, base_config, mock_logger, sample_df):
        manager = DataManager(base_config, mock_logger)
        manager.data = sample_df.replace({5.0: np.inf})
        stats = manager.validate_nan_inf().set_index('column')

        assert stats.loc['x2', 'nan_count'] == 1
        assert stats.loc['x2', 'inf_count'] == 1
        assert len(manager.data) == 3

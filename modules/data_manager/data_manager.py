import pandas as pd
import numpy as np
import logging
from pathlib import Path
from typing import Optional

from modules.data_manager.dataset import Dataset
from utils.exceptions import DataValidationError
from utils.file_io import read_dataframe

class DataManager:
    """
    Loads the raw input table and turns it into a validated Dataset.

    Validation:
    - File exists and has a supported extension.
    - Target column present (when configured) and numeric.
    - NaN / Inf values are reported; rows containing them are dropped.
    """

    def __init__(self, config: dict, logger: logging.Logger):
        self.config = config
        self.logger = logger
        self.data: Optional[pd.DataFrame] = None

    def load_dataset(self, file_path: Optional[str] = None, require_target: bool = True) -> Dataset:
        """
        Load data from the configured file (or `file_path`) and build a Dataset.

        Args:
            file_path: Overrides config['data']['file_path'].
            require_target: If False, a missing target column yields an unlabeled dataset.
        """
        data_cfg = self.config.get('data', {})
        path = Path(file_path or data_cfg.get('file_path', ''))
        target_column = data_cfg.get('target_column')
        add_constant = data_cfg.get('add_constant', True)

        self.load_data(path)
        self.validate_nan_inf()

        if target_column not in self.data.columns:
            if require_target:
                raise DataValidationError(f"Missing target column in dataset: {target_column}")
            target_column = None

        drop_cols = [c for c in data_cfg.get('drop_columns', []) if c in self.data.columns]
        frame = self.data.drop(columns=drop_cols)

        non_numeric = [c for c in frame.columns if not pd.api.types.is_numeric_dtype(frame[c])]
        if non_numeric:
            raise DataValidationError(f"Non-numeric columns are not supported: {non_numeric}")

        dataset = Dataset.from_dataframe(frame, target_column, add_constant=add_constant)
        self.logger.info(
            f"Dataset ready: {dataset.size()} rows, {dataset.column_size()} columns "
            f"(target='{target_column}', constant={'yes' if dataset.has_constant() else 'no'})"
        )
        return dataset

    def load_data(self, path: Path) -> pd.DataFrame:
        if not path.exists():
            raise DataValidationError(f"Data file not found: {path}")

        self.logger.info(f"Loading data from {path}")
        try:
            self.data = read_dataframe(path)
        except ValueError as e:
            raise DataValidationError(str(e)) from e

        if self.data.empty:
            raise DataValidationError("Loaded dataframe is empty.")

        self.logger.info(f"Data loaded successfully. Shape: {self.data.shape}")
        return self.data

    def validate_nan_inf(self) -> pd.DataFrame:
        """Report NaN and Inf values and drop the affected rows."""
        stats = []
        for col in self.data.columns:
            if pd.api.types.is_numeric_dtype(self.data[col]):
                nan_count = int(self.data[col].isna().sum())
                inf_count = int(np.isinf(self.data[col]).sum())
                stats.append({'column': col, 'nan_count': nan_count, 'inf_count': inf_count})

                if nan_count > 0:
                    self.logger.warning(f"Column '{col}' contains {nan_count} NaNs.")
                if inf_count > 0:
                    self.logger.warning(f"Column '{col}' contains {inf_count} infinite values.")

        before = len(self.data)
        self.data = self.data.replace([np.inf, -np.inf], np.nan).dropna()
        dropped = before - len(self.data)
        if dropped:
            self.logger.warning(f"Dropped {dropped} rows with missing or infinite values.")
        if self.data.empty:
            raise DataValidationError("No rows left after removing missing values.")

        return pd.DataFrame(stats)

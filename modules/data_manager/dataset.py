import numpy as np
import pandas as pd
from typing import Any, Hashable, List, Optional, Sequence

from utils.exceptions import DataValidationError
from utils import constants

class Dataset:
    """
    Column store of feature columns plus an optional regression target.

    Features are held in a DataFrame keyed by feature name. A synthetic
    constant (intercept) column of ones is added by default; it is a regular
    column as far as counting goes but stepwise elimination never removes it.

    `copy()` returns an independent deep copy: mutating the copy (removing
    columns, writing predictions) never affects the original.
    """

    def __init__(self,
                 features: pd.DataFrame,
                 target: Optional[pd.Series] = None,
                 add_constant: bool = True):
        features = features.copy(deep=True)
        if target is not None:
            target = pd.Series(target, copy=True)
            if len(target) != len(features):
                raise DataValidationError(
                    f"Target length ({len(target)}) does not match feature rows ({len(features)})."
                )
            target.index = features.index

        if add_constant and constants.CONSTANT_COLUMN not in features.columns:
            features.insert(0, constants.CONSTANT_COLUMN, 1.0)

        self._features = features
        self._target = target
        self._predictions: Optional[pd.Series] = None

    @classmethod
    def from_dataframe(cls,
                       df: pd.DataFrame,
                       target_column: Optional[str] = None,
                       add_constant: bool = True) -> "Dataset":
        """
        Split a flat DataFrame into features and target.

        Args:
            df: Source data.
            target_column: Name of the response column, or None for unlabeled data.
            add_constant: Insert the intercept column.
        """
        if target_column is None:
            return cls(df, None, add_constant=add_constant)
        if target_column not in df.columns:
            raise DataValidationError(f"Target column '{target_column}' not found in data.")
        return cls(df.drop(columns=[target_column]), df[target_column], add_constant=add_constant)

    # --- Shape ---

    def column_size(self) -> int:
        """Number of feature columns, constant included."""
        return len(self._features.columns)

    def size(self) -> int:
        """Number of rows."""
        return len(self._features)

    def __len__(self) -> int:
        return self.size()

    @property
    def columns(self) -> List[Hashable]:
        return list(self._features.columns)

    def has_constant(self) -> bool:
        return constants.CONSTANT_COLUMN in self._features.columns

    # --- Access ---

    @property
    def features(self) -> pd.DataFrame:
        return self._features

    @property
    def target(self) -> Optional[pd.Series]:
        return self._target

    def require_target(self) -> pd.Series:
        if self._target is None:
            raise DataValidationError("Dataset has no target column.")
        return self._target

    @property
    def predictions(self) -> Optional[pd.Series]:
        return self._predictions

    def set_predictions(self, values: Any) -> None:
        values = np.asarray(values, dtype=float).ravel()
        if len(values) != self.size():
            raise DataValidationError(
                f"Prediction length ({len(values)}) does not match dataset rows ({self.size()})."
            )
        self._predictions = pd.Series(values, index=self._features.index, name=constants.PREDICTION_COLUMN)

    # --- Mutation ---

    def remove_column(self, column: Hashable) -> None:
        if column not in self._features.columns:
            raise DataValidationError(f"Column '{column}' not found in dataset.")
        self._features = self._features.drop(columns=[column])

    def copy(self) -> "Dataset":
        """Independent deep copy."""
        clone = Dataset.__new__(Dataset)
        clone._features = self._features.copy(deep=True)
        clone._target = None if self._target is None else self._target.copy(deep=True)
        clone._predictions = None if self._predictions is None else self._predictions.copy(deep=True)
        return clone

    def __deepcopy__(self, memo):
        return self.copy()

    def subset(self, rows: Sequence[int]) -> "Dataset":
        """Deep copy restricted to the given row positions."""
        clone = Dataset.__new__(Dataset)
        clone._features = self._features.iloc[list(rows)].copy(deep=True)
        clone._target = None if self._target is None else self._target.iloc[list(rows)].copy(deep=True)
        clone._predictions = None
        return clone

    def __repr__(self) -> str:
        return f"Dataset(rows={self.size()}, columns={self.columns})"



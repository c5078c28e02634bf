import numpy as np
from dataclasses import dataclass, asdict, fields
from typing import Dict, List
from sklearn.metrics import mean_absolute_error, mean_squared_error, r2_score, max_error


@dataclass(frozen=True)
class RegressionMetrics:
    """
    Validation metrics common to every regressor.

    Models never define their own metric shape; wrappers forward these unchanged.
    """
    r2: float
    rmse: float
    mae: float
    max_error: float
    n: int

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    @classmethod
    def average(cls, metrics: List["RegressionMetrics"]) -> "RegressionMetrics":
        """Mean of each metric across folds (n is summed)."""
        if not metrics:
            raise ValueError("Cannot average an empty list of metrics.")
        values = {}
        for f in fields(cls):
            column = [getattr(m, f.name) for m in metrics]
            values[f.name] = int(np.sum(column)) if f.name == 'n' else float(np.mean(column))
        return cls(**values)


def compute_regression_metrics(y_true, y_pred) -> RegressionMetrics:
    """Calculate the standard regression metric suite."""
    y_true = np.asarray(y_true, dtype=float)
    y_pred = np.asarray(y_pred, dtype=float)

    # r2 is undefined for fewer than two samples
    r2 = float(r2_score(y_true, y_pred)) if len(y_true) > 1 else float('nan')

    return RegressionMetrics(
        r2=r2,
        rmse=float(np.sqrt(mean_squared_error(y_true, y_pred))),
        mae=float(mean_absolute_error(y_true, y_pred)),
        max_error=float(max_error(y_true, y_pred)),
        n=int(len(y_true)),
    )

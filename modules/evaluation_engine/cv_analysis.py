import numpy as np
import pandas as pd
from typing import Dict, List

from modules.evaluation_engine.metrics import RegressionMetrics


def cv_fold_consistency(fold_metrics: List[RegressionMetrics]) -> pd.DataFrame:
    """
    Summarize CV fold consistency for each metric.
    One row per metric with fold count, mean, std, min, max and range.
    """
    cv_scores: Dict[str, List[float]] = {}
    for m in fold_metrics:
        for name, value in m.to_dict().items():
            if name == 'n':
                continue
            cv_scores.setdefault(name, []).append(value)

    rows = []
    for metric, scores in cv_scores.items():
        scores = np.asarray(scores, dtype=float)
        if scores.size == 0:
            continue
        rows.append({
            "metric": metric,
            "folds": len(scores),
            "mean": float(np.nanmean(scores)),
            "std": float(np.nanstd(scores)),
            "min": float(np.nanmin(scores)),
            "max": float(np.nanmax(scores)),
            "range": float(np.nanmax(scores) - np.nanmin(scores)),
        })
    return pd.DataFrame(rows)

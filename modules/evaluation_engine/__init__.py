"""
Evaluation Module
=================

Responsibility:
- Common validation metric shape shared by all regressors.
- Cross-validation fold consistency summaries.
"""

from .metrics import RegressionMetrics, compute_regression_metrics
from .cv_analysis import cv_fold_consistency

__all__ = ['RegressionMetrics', 'compute_regression_metrics', 'cv_fold_consistency']

"""
Regressors Module
=================

Concrete regression algorithms usable directly or as stepwise delegates.
Only classes satisfying the PvalueReporting capability can drive stepwise elimination.
"""

from .capabilities import PvalueReporting, supports_pvalues
from .linear_regression import LinearRegression
from .tree_regressor import ExtraTreesRegressor

__all__ = ['PvalueReporting', 'supports_pvalues', 'LinearRegression', 'ExtraTreesRegressor']

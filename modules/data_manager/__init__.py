"""
Data Manager Module
===================

Responsibility:
- Column-store Dataset abstraction (features, target, constant column, predictions).
- Loading of raw data files (CSV, Parquet) into validated Datasets.
"""

from .dataset import Dataset
from .data_manager import DataManager

__all__ = ['Dataset', 'DataManager']

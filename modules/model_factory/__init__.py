"""
Model Factory Module
====================

Name-based registry used to instantiate regressors bound to a storage identity.
"""

from .model_factory import ModelFactory

__all__ = ['ModelFactory']

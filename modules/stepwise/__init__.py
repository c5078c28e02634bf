"""
Stepwise Regression Module
==========================

Backward elimination on top of a p-value reporting regressor:
- StepwiseRegression: orchestrates the elimination loop and forwards predict/validate.
- StepwiseTrainingParameters: validated training configuration.
- DelegateLifecycleManager: creates, fits and disposes delegate regressors.
- StoppingCriteria: decides when elimination halts.
"""

from .training_parameters import StepwiseTrainingParameters
from .stopping_criteria import StoppingCriteria, EliminationDecision, select_least_significant
from .delegate_manager import DelegateLifecycleManager
from .stepwise_regression import StepwiseRegression, ModelSummary

__all__ = [
    'StepwiseRegression',
    'StepwiseTrainingParameters',
    'ModelSummary',
    'DelegateLifecycleManager',
    'StoppingCriteria',
    'EliminationDecision',
    'select_least_significant'
]

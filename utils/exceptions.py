"""
Custom exception hierarchy for the Stepwise Regression System.
"""

class StepwiseMLException(Exception):
    """Base exception for all system errors."""
    pass

class ConfigurationError(StepwiseMLException):
    """Configuration validation failed."""
    pass

class UnsupportedOperationError(StepwiseMLException):
    """Operation is deliberately not supported by this model."""
    pass

class ModelNotFittedError(StepwiseMLException):
    """No trained or persisted model is available."""
    pass

class DataValidationError(StepwiseMLException):
    """Data validation failed."""
    pass

class ModelTrainingError(StepwiseMLException):
    """Model training failed."""
    pass

class PredictionError(StepwiseMLException):
    """Prediction generation failed."""
    pass

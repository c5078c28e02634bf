import functools
import logging
from utils.exceptions import StepwiseMLException

def handle_model_errors(operation_name: str, error_cls=StepwiseMLException):
    """Decorator for consistent error handling in regressors."""
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except StepwiseMLException:
                # Re-raise our custom exceptions
                raise
            except Exception as e:
                # Wrap unexpected errors
                logger = args[0].logger if hasattr(args[0], 'logger') else logging.getLogger()
                logger.error(f"{operation_name} failed: {e}", exc_info=True)
                raise error_cls(f"{operation_name} failed: {str(e)}") from e
        return wrapper
    return decorator

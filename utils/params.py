import inspect
from typing import Any, Dict

def filter_params(estimator_class, params: Dict[str, Any]) -> Dict[str, Any]:
    """
    Remove parameters from `params` that are not accepted by `estimator_class` constructor.
    """
    sig = inspect.signature(estimator_class.__init__)

    valid_keys = [
        p.name for p in sig.parameters.values()
        if p.kind in (p.POSITIONAL_OR_KEYWORD, p.KEYWORD_ONLY)
    ]

    # Always allow **kwargs if the estimator supports it
    has_kwargs = any(p.kind == p.VAR_KEYWORD for p in sig.parameters.values())

    if has_kwargs:
        return dict(params)

    return {k: v for k, v in params.items() if k in valid_keys}

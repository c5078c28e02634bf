from typing import Hashable, Mapping, Protocol, runtime_checkable


@runtime_checkable
class PvalueReporting(Protocol):
    """
    Capability of a regressor that reports coefficient significance.

    After a completed fit, `get_feature_pvalues` returns a mapping from
    feature name to the two-sided p-value of that feature's coefficient.
    Conformance is structural: any class providing the method qualifies.
    """

    def get_feature_pvalues(self) -> Mapping[Hashable, float]:
        ...


def supports_pvalues(regressor_class: type) -> bool:
    return isinstance(regressor_class, type) and issubclass(regressor_class, PvalueReporting)

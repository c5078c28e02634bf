import logging
import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Hashable, Iterable, Mapping, Optional, Tuple

from modules.data_manager.dataset import Dataset
from utils import constants


@dataclass(frozen=True)
class EliminationDecision:
    stop: bool
    reason: Optional[str] = None
    feature: Optional[Hashable] = None
    pvalue: Optional[float] = None


def snapshot_report(pvalues: Mapping[Hashable, float]) -> Mapping[Hashable, float]:
    """Read-only copy of a delegate's p-value report."""
    return MappingProxyType(dict(pvalues))


def select_least_significant(report: Mapping[Hashable, float],
                             excluded: Iterable[Hashable] = (constants.CONSTANT_COLUMN,)
                             ) -> Optional[Tuple[Hashable, float]]:
    """
    Feature with the highest p-value, ignoring `excluded` names.

    Ties go to the smallest feature name under str() ordering. A NaN p-value
    counts as the least significant value possible. Returns None when no
    candidate is left. The report is never modified.
    """
    excluded = set(excluded)
    candidates = [(feature, float(p)) for feature, p in report.items() if feature not in excluded]
    if not candidates:
        return None

    def rank(item):
        feature, p = item
        return (-(math.inf if math.isnan(p) else p), str(feature))

    return min(candidates, key=rank)


class StoppingCriteria:
    """
    Evaluates whether backward elimination should terminate.

    Checks, in order:
    - empty report: the delegate had nothing to evaluate.
    - only the constant column reported.
    - highest p-value <= aout: every remaining feature is significant.
    - after a removal, no column left in the dataset.
    The iteration bound is enforced by the caller's loop.
    """

    def __init__(self, aout: float, logger: logging.Logger):
        self.aout = aout
        self.logger = logger

    def evaluate(self, report: Mapping[Hashable, float]) -> EliminationDecision:
        """Decides on a fresh p-value report: stop, or remove the returned feature."""
        if not report:
            return EliminationDecision(True, constants.STOP_EMPTY_REPORT)

        selected = select_least_significant(report)
        if selected is None:
            return EliminationDecision(True, constants.STOP_ONLY_CONSTANT)

        feature, pvalue = selected
        if pvalue <= self.aout:
            return EliminationDecision(True, constants.STOP_ALL_SIGNIFICANT, feature, pvalue)

        return EliminationDecision(False, None, feature, pvalue)

    def check_remaining(self, dataset: Dataset) -> EliminationDecision:
        """Decides after a column removal."""
        if dataset.column_size() == 0:
            return EliminationDecision(True, constants.STOP_NO_COLUMNS)
        return EliminationDecision(False)

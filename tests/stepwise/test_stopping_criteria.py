import math
import pandas as pd
import pytest
from unittest.mock import MagicMock

from modules.data_manager.dataset import Dataset
from modules.stepwise.stopping_criteria import (
    StoppingCriteria,
    select_least_significant,
    snapshot_report,
)
from utils import constants

CONST = constants.CONSTANT_COLUMN

# --- Fixtures ---

@pytest.fixture
def mock_logger():
    return MagicMock()

@pytest.fixture
def stopper(mock_logger):
    return StoppingCriteria(0.05, mock_logger)

# --- Tests ---

class TestSelectLeastSignificant:

    def test_picks_highest_pvalue(self):
        assert select_least_significant({'A': 0.8, 'B': 0.03, 'C': 0.6}) == ('A', 0.8)

    def test_constant_is_excluded(self):
        assert select_least_significant({CONST: 0.99, 'B': 0.2}) == ('B', 0.2)

    def test_report_not_modified(self):
        report = {CONST: 0.99, 'B': 0.2}
        select_least_significant(report)
        assert report == {CONST: 0.99, 'B': 0.2}

    def test_tie_goes_to_smallest_name(self):
        assert select_least_significant({'zeta': 0.5, 'alpha': 0.5, 'mid': 0.1}) == ('alpha', 0.5)

    def test_nan_is_least_significant(self):
        feature, pvalue = select_least_significant({'A': 0.9, 'B': math.nan})
        assert feature == 'B'
        assert math.isnan(pvalue)

    def test_only_constant_returns_none(self):
        assert select_least_significant({CONST: 0.3}) is None

    def test_snapshot_is_read_only(self):
        snapshot = snapshot_report({'A': 0.1})
        with pytest.raises(TypeError):
            snapshot['A'] = 0.5


class TestStoppingCriteria:

    def test_empty_report_stops(self, stopper):
        decision = stopper.evaluate({})
        assert decision.stop is True
        assert decision.reason == constants.STOP_EMPTY_REPORT

    def test_only_constant_stops(self, stopper):
        decision = stopper.evaluate({CONST: 0.7})
        assert decision.stop is True
        assert decision.reason == constants.STOP_ONLY_CONSTANT

    def test_all_significant_stops(self, stopper):
        decision = stopper.evaluate({'B': 0.03})
        assert decision.stop is True
        assert decision.reason == constants.STOP_ALL_SIGNIFICANT
        assert decision.feature == 'B'

    def test_pvalue_equal_to_aout_is_kept(self, stopper):
        decision = stopper.evaluate({'B': 0.05})
        assert decision.stop is True

    def test_insignificant_feature_selected(self, stopper):
        decision = stopper.evaluate({CONST: 0.9, 'A': 0.8, 'B': 0.03})
        assert decision.stop is False
        assert decision.feature == 'A'
        assert decision.pvalue == 0.8

    def test_no_columns_left(self, stopper):
        dataset = Dataset(pd.DataFrame({'A': [1.0, 2.0]}), add_constant=False)
        assert stopper.check_remaining(dataset).stop is False

        dataset.remove_column('A')
        decision = stopper.check_remaining(dataset)
        assert decision.stop is True
        assert decision.reason == constants.STOP_NO_COLUMNS

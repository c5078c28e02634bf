import json
import logging
import numpy as np
import pandas as pd
import pytest

import main
from utils import constants

@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        handler.close()
    root.handlers = handlers
    root.setLevel(level)

@pytest.fixture
def workspace(tmp_path):
    rng = np.random.default_rng(11)
    df = pd.DataFrame({'x1': rng.normal(size=80), 'x2': rng.normal(size=80)})
    df['y'] = 1.0 + 2.0 * df['x1'] + rng.normal(scale=0.2, size=80)
    df.to_csv(tmp_path / "train.csv", index=False)

    config = {
        "data": {"file_path": str(tmp_path / "train.csv"), "target_column": "y"},
        "stepwise": {"regression_kind": "LinearRegression", "aout": 0.01},
        "storage": {"name": "cli", "base_dir": str(tmp_path / "store")},
        "logging": {"log_to_file": False, "colorful_console": False},
    }
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps(config))
    return tmp_path, str(config_path)

def test_dry_run(workspace):
    tmp_path, config_path = workspace
    assert main.main(["--config", config_path, "--dry-run"]) == 0
    assert not (tmp_path / "store").exists()

def test_full_run_writes_predictions(workspace):
    tmp_path, config_path = workspace
    output = tmp_path / "out" / "predictions.csv"

    assert main.main(["--config", config_path, "--predict-output", str(output)]) == 0

    predictions = pd.read_csv(output)
    assert list(predictions.columns) == ['target', 'prediction']
    assert len(predictions) == 80

    summary_path = tmp_path / "store" / "cli" / "StepwiseRegression" / constants.MODEL_SUMMARY_FILE
    summary = json.loads(summary_path.read_text())
    assert constants.CONSTANT_COLUMN in summary['features']
    assert 'x1' in summary['features']
    assert summary['d'] == len(summary['features'])

def test_data_override(workspace):
    tmp_path, config_path = workspace
    pd.read_csv(tmp_path / "train.csv").to_parquet(tmp_path / "train.parquet", index=False)
    assert main.main(["--config", config_path, "--data", str(tmp_path / "train.parquet")]) == 0

def test_configuration_error_returns_one(tmp_path, capsys):
    assert main.main(["--config", str(tmp_path / "missing.json")]) == 1
    assert "[ERROR]" in capsys.readouterr().out

def test_missing_data_returns_one(workspace):
    tmp_path, config_path = workspace
    assert main.main(["--config", config_path, "--data", str(tmp_path / "absent.csv")]) == 1

# utils/constants.py

# --- Dataset ---
# Synthetic intercept column, never eliminated.
CONSTANT_COLUMN = "constant"
PREDICTION_COLUMN = "prediction"

# --- Stepwise Defaults ---
DEFAULT_AOUT = 0.05
DEFAULT_CV_SEED = 42

# --- Storage Layout ---
# Every model persists under <base_dir>/<storage name>/<owner namespace>/
DEFAULT_STORAGE_DIR = "model_store"
KNOWLEDGE_BASE_FILE = "knowledge_base.pkl"
MODEL_SUMMARY_FILE = "model_summary.json"
CV_FOLD_SUFFIX = "kfold"

# --- Logging ---
LOG_DIR = "logs"
LOG_FILE = "stepwise.log"

# --- Stop Reasons (elimination history) ---
STOP_EMPTY_REPORT = "empty_report"
STOP_ONLY_CONSTANT = "only_constant_left"
STOP_ALL_SIGNIFICANT = "all_significant"
STOP_NO_COLUMNS = "no_columns_left"
STOP_MAX_ITERATIONS = "max_iterations"

#!/usr/bin/env python
"""
Stepwise Regression - Main Entry Point
Runs backward elimination on a tabular dataset and stores the resulting model.
"""
import sys
import argparse
import traceback
from pathlib import Path

import pandas as pd

# Add project root to Python path
sys.path.insert(0, str(Path(__file__).parent))

from modules.config_manager import ConfigurationManager
from modules.logging_config import LoggingConfigurator
from modules.data_manager import DataManager
from modules.stepwise import StepwiseRegression
from utils.exceptions import StepwiseMLException
from utils.file_io import save_dataframe


def parse_arguments(argv=None):
    """
    Parse command-line arguments.

    Returns:
        argparse.Namespace: Parsed command-line arguments.
    """
    parser = argparse.ArgumentParser(
        description="Stepwise Regression - backward elimination by coefficient p-values",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    parser.add_argument(
        "--config",
        type=str,
        default="config/config.json",
        help="Path to the configuration JSON file"
    )

    parser.add_argument(
        "--data",
        type=str,
        default=None,
        help="Training data file (CSV or Parquet); overrides data.file_path"
    )

    parser.add_argument(
        "--predict-output",
        type=str,
        default=None,
        help="Write in-sample predictions to this file (CSV or Parquet)"
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose (DEBUG) logging"
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate configuration without training"
    )

    return parser.parse_args(argv)


def main(argv=None):
    """
    Load configuration and data, fit the stepwise model, report the outcome.

    Returns:
        int: Exit code (0 for success, 1 for errors)
    """
    logger = None

    try:
        args = parse_arguments(argv)

        # 1. Load and validate configuration
        config_manager = ConfigurationManager(config_path=args.config)
        config = config_manager.load_and_validate()

        if args.verbose:
            config['logging']['level'] = 'DEBUG'

        # 2. Setup logging
        logging_configurator = LoggingConfigurator(config)
        logging_configurator.setup()
        logger = logging_configurator.get_logger('stepwise')
        logger.info(f"Configuration loaded from: {args.config}")

        training_parameters = config_manager.build_training_parameters()
        storage = config_manager.build_storage()
        logger.info(f"Training parameters: {training_parameters}")
        logger.info(f"Model storage: {storage.root.absolute()}")

        if args.dry_run:
            logger.info("Dry run mode: validation complete. Exiting without training.")
            return 0

        # 3. Data
        data_manager = DataManager(config, logger)
        dataset = data_manager.load_dataset(args.data)

        # 4. Backward elimination
        model = StepwiseRegression(storage, logger, show_progress=config['outputs'].get('show_progress', False))
        model.fit(dataset, training_parameters)

        summary = model.get_model_summary()
        logger.info(f"Selected {summary.d} columns on {summary.n} samples: {summary.features}")
        logger.info(f"Elimination stopped: {summary.stop_reason}")

        metrics = model.validate(dataset)
        logger.info(f"In-sample metrics: {metrics.to_dict()}")

        # 5. Optional predictions
        predict_output = args.predict_output or config['outputs'].get('predictions_path')
        if predict_output:
            model.predict(dataset)
            predictions = pd.DataFrame({
                'target': dataset.target.values,
                'prediction': dataset.predictions.values,
            })
            path = save_dataframe(predictions, Path(predict_output))
            logger.info(f"Predictions saved to {path}")

        return 0

    except StepwiseMLException as e:
        msg = f"Stepwise Error: {str(e)}"
        print(f"\n[ERROR] {msg}")
        if logger:
            logger.critical(msg, exc_info=True)
        else:
            traceback.print_exc()
        return 1

    except KeyboardInterrupt:
        print("\n[INTERRUPTED] Interrupted by user.")
        if logger:
            logger.warning("Interrupted by user (Ctrl+C)")
        return 130


if __name__ == "__main__":
    sys.exit(main())

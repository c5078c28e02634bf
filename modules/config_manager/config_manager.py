import json
import os
import logging
import jsonschema
from pathlib import Path
from typing import Dict, Any

from modules.stepwise.training_parameters import StepwiseTrainingParameters
from modules.storage import StorageContext
from utils.exceptions import ConfigurationError
from utils import constants

DEFAULT_SCHEMA_PATH = Path(__file__).with_name("schema.json")

class ConfigurationManager:
    """
    Manages system configuration loading, validation, and access.

    Builds the objects the rest of the system consumes: the stepwise
    training parameters and the storage identity.
    """

    def __init__(self, config_path: str = "config/config.json",
                 schema_path: str = str(DEFAULT_SCHEMA_PATH)):
        """
        Initialize the ConfigurationManager.

        Args:
            config_path (str): Path to the user configuration JSON.
            schema_path (str): Path to the JSON schema definition.
        """
        self.config_path = config_path
        self.schema_path = schema_path
        self.config: Dict[str, Any] = {}
        self.schema: Dict[str, Any] = {}
        self.logger = logging.getLogger("config_manager")

    def load_and_validate(self) -> Dict[str, Any]:
        """
        Loads config, validates schema and logic, applies defaults.

        Returns:
            Dict[str, Any]: The fully validated configuration.

        Raises:
            ConfigurationError: If any validation step fails.
        """
        self.config = self._load_json(self.config_path)
        self.schema = self._load_json(self.schema_path)

        self._validate_schema()
        self._validate_logic()
        self._apply_defaults()

        return self.config

    def build_training_parameters(self) -> StepwiseTrainingParameters:
        """Stepwise training parameters from the 'stepwise' section."""
        return StepwiseTrainingParameters.from_dict(self.config.get('stepwise', {}))

    def build_storage(self) -> StorageContext:
        storage = self.config.get('storage', {})
        return StorageContext(storage['name'], storage.get('base_dir', constants.DEFAULT_STORAGE_DIR))

    def _load_json(self, path: str) -> Dict[str, Any]:
        """Safely load a JSON file."""
        if not os.path.exists(path):
            raise ConfigurationError(f"File not found: {path}")
        try:
            with open(path, 'r') as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in {path}: {str(e)}")

    def _validate_schema(self) -> None:
        """Validate config structure against JSON schema."""
        try:
            jsonschema.validate(instance=self.config, schema=self.schema)
        except jsonschema.ValidationError as e:
            raise ConfigurationError(f"Schema validation failed: {e.message}")

    def _validate_logic(self) -> None:
        """Logical validation beyond the schema."""
        # --- Data Section ---
        data = self.config.get('data', {})
        if not data.get('target_column'):
            raise ConfigurationError("Data 'target_column' must be specified and non-empty.")
        if data['target_column'] in data.get('drop_columns', []):
            raise ConfigurationError("The target column cannot be listed in drop_columns.")

        # --- Stepwise Section ---
        # Building the parameters runs every setter check (capability, aout, max_iterations)
        parameters = self.build_training_parameters()
        self.logger.debug(f"Stepwise configuration validated: {parameters}")

        # --- Logging Section ---
        level = self.config.get('logging', {}).get('level', 'INFO')
        if not isinstance(getattr(logging, level.upper(), None), int):
            raise ConfigurationError(f"Unknown logging level: {level}")

    def _apply_defaults(self) -> None:
        stepwise = self.config.setdefault('stepwise', {})
        stepwise.setdefault('regression_parameters', {})
        stepwise.setdefault('max_iterations', None)
        stepwise.setdefault('aout', constants.DEFAULT_AOUT)

        self.config['data'].setdefault('add_constant', True)
        self.config['data'].setdefault('drop_columns', [])
        self.config['storage'].setdefault('base_dir', constants.DEFAULT_STORAGE_DIR)
        self.config.setdefault('logging', {})
        self.config.setdefault('outputs', {})

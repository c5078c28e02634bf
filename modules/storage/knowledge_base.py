import json
import joblib
import logging
from typing import Any, Dict, Optional

from modules.storage.storage_context import StorageContext
from utils import constants

class KnowledgeBase:
    """
    Persisted state of one model: its training parameters and its fitted model parameters.

    Pickled with joblib into the owner's namespace of the storage context.
    Optional JSON metadata files can be written next to it for human inspection.
    """

    def __init__(self, storage: StorageContext, owner: str, logger: Optional[logging.Logger] = None):
        self.storage = storage
        self.owner = owner
        self.logger = logger or logging.getLogger(__name__)
        self.training_parameters: Any = None
        self.model_parameters: Any = None

    @property
    def path(self):
        return self.storage.namespace(self.owner) / constants.KNOWLEDGE_BASE_FILE

    def is_persisted(self) -> bool:
        return self.path.exists()

    def save(self) -> None:
        self.storage.namespace(self.owner, create=True)
        joblib.dump(
            {'training_parameters': self.training_parameters, 'model_parameters': self.model_parameters},
            self.path
        )
        self.logger.debug(f"Knowledge base of {self.owner} saved to {self.path}")

    def load(self) -> bool:
        """Loads persisted state. Returns False when nothing is persisted."""
        if not self.is_persisted():
            return False
        state = joblib.load(self.path)
        self.training_parameters = state['training_parameters']
        self.model_parameters = state['model_parameters']
        return True

    def save_metadata(self, filename: str, metadata: Dict[str, Any]) -> None:
        path = self.storage.namespace(self.owner, create=True) / filename
        with open(path, 'w') as f:
            json.dump(metadata, f, indent=2, default=str)

    def clear(self) -> None:
        self.training_parameters = None
        self.model_parameters = None

    def erase(self) -> None:
        """Drops in-memory and persisted state."""
        self.clear()
        self.storage.erase_namespace(self.owner)

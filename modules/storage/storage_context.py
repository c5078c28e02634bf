import shutil
import logging
from pathlib import Path
from typing import Optional, Union

from utils import constants

class StorageContext:
    """
    Named persistent identity shared by a model and every delegate it creates.

    All state lives under `<base_dir>/<name>/`. Each owner (a model class)
    gets its own namespace directory so that several models bound to the same
    identity can persist and erase independently.
    """

    def __init__(self, name: str, base_dir: Union[str, Path] = constants.DEFAULT_STORAGE_DIR,
                 logger: Optional[logging.Logger] = None):
        if not name:
            raise ValueError("Storage name must be a non-empty string.")
        self.name = name
        self.base_dir = Path(base_dir)
        self.logger = logger or logging.getLogger(__name__)

    @property
    def root(self) -> Path:
        return self.base_dir / self.name

    def namespace(self, owner: str, create: bool = False) -> Path:
        """Directory holding the persisted state of `owner`."""
        path = self.root / owner
        if create:
            path.mkdir(parents=True, exist_ok=True)
        return path

    def exists(self, owner: str) -> bool:
        return self.namespace(owner).exists()

    def derive(self, suffix: str) -> "StorageContext":
        """A sibling identity, e.g. for temporary cross-validation models."""
        return StorageContext(f"{self.name}_{suffix}", self.base_dir, self.logger)

    def erase_namespace(self, owner: str) -> None:
        """Removes the owner's directory, and the identity root once it is empty."""
        path = self.namespace(owner)
        if path.exists():
            shutil.rmtree(path)
            self.logger.debug(f"Erased storage namespace {path}")

        if self.root.exists() and not any(self.root.iterdir()):
            self.root.rmdir()

    def __eq__(self, other) -> bool:
        if not isinstance(other, StorageContext):
            return NotImplemented
        return self.name == other.name and self.base_dir == other.base_dir

    def __hash__(self) -> int:
        return hash((self.name, self.base_dir))

    def __repr__(self) -> str:
        return f"StorageContext(name={self.name!r}, base_dir={str(self.base_dir)!r})"

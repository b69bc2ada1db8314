"""Persistence helpers (load/save) for the task store.

The document is a single JSON object: {"boards": [...]}; see models for the
field names. A missing file is an empty store.
"""
import json
import logging
import os
from pathlib import Path
from typing import Optional, Union

from errors import StorageError, StoreFormatError
from store import TaskStore

logger = logging.getLogger(__name__)

FILE_ENV = 'TASKBOARD_FILE'
DEFAULT_FILE = Path.home() / '.taskboard.json'


def default_path() -> Path:
    """Resolve the document path: TASKBOARD_FILE if set, else ~/.taskboard.json."""
    raw = os.environ.get(FILE_ENV, '').strip()
    return Path(raw).expanduser() if raw else DEFAULT_FILE


class Storage:
    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path: Path = Path(path).expanduser() if path else default_path()

    def load(self) -> TaskStore:
        """Load the store from disk. Missing file -> empty store."""
        if not self.path.exists():
            logger.debug("no document at %s, starting empty", self.path)
            return TaskStore()
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except OSError as e:
            raise StorageError(self.path, f'cannot read: {e.strerror or e}') from e
        except ValueError as e:
            raise StorageError(self.path, f'invalid JSON: {e}') from e
        try:
            store = TaskStore.from_dict(data)
        except StoreFormatError as e:
            raise StorageError(self.path, f'malformed document: {e}') from e
        logger.debug("loaded %s (%d boards)", self.path, len(store.boards))
        return store

    def save(self, store: TaskStore) -> None:
        """Persist the store to disk (pretty-printed)."""
        tmp = self.path.with_name(self.path.name + '.tmp')
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp, 'w', encoding='utf-8') as f:
                json.dump(store.to_dict(), f, indent=4, ensure_ascii=False)
            os.replace(tmp, self.path)
        except OSError as e:
            if tmp.is_file():
                tmp.unlink()
            raise StorageError(self.path, f'cannot write: {e.strerror or e}') from e
        logger.debug("saved %s (%d boards, %d tasks)", self.path, len(store.boards), store.task_count())

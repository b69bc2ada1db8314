"""Exceptions raised by the task store and its persistence layer."""
from __future__ import annotations
from pathlib import Path
from typing import Union


class TaskboardError(Exception):
    """Base class for every error this project raises on purpose."""


class InvalidName(TaskboardError):
    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f'Invalid board name "{name}": {reason}.')


class DuplicateName(TaskboardError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f'Board "{name}" already exists.')


class BoardNotFound(TaskboardError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f'Board "{name}" not found.')


class TaskNotFound(TaskboardError):
    def __init__(self, task_id: int, board_name: str):
        self.task_id = task_id
        self.board_name = board_name
        super().__init__(f'Task id {task_id} not found on board "{board_name}".')


class StoreFormatError(TaskboardError):
    """Document decoded fine but does not have the shape of a store."""


class StorageError(TaskboardError):
    def __init__(self, path: Union[str, Path], reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f'{path}: {reason}')

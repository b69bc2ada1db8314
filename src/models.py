"""Data models for the task board.

A store holds boards, a board holds tasks. Ids are allocated by the store,
never by callers; see store.TaskStore.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, NamedTuple

from errors import StoreFormatError


def _require_id(raw: Mapping[str, Any], what: str) -> int:
    rid = raw.get('id')
    # bool is an int subclass; a stray true/false is not an id
    if not isinstance(rid, int) or isinstance(rid, bool) or rid <= 0:
        raise StoreFormatError(f'{what} has invalid id: {rid!r}')
    return rid


def _require_flag(raw: Mapping[str, Any], what: str) -> bool:
    flag = raw.get('status', False)
    if not isinstance(flag, bool):
        raise StoreFormatError(f'{what} has invalid status: {flag!r}')
    return flag


@dataclass
class Task:
    """A single task.

    Fields:
        id: Positive integer, unique within the owning board.
        text: Free-form description.
        done: Completion flag.
    """
    id: int
    text: str
    done: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {'id': self.id, 'name': self.text, 'status': self.done}

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> Task:
        if not isinstance(raw, Mapping):
            raise StoreFormatError(f'task entry is not an object: {raw!r}')
        return cls(
            id=_require_id(raw, 'task'),
            text=str(raw.get('name') or ''),
            done=_require_flag(raw, 'task'),
        )

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return f"Task(id={self.id}, text={self.text}, done={self.done})"


@dataclass
class Board:
    """A named, ordered collection of tasks.

    `active` is persisted but not consulted by any operation.
    """
    id: int
    name: str
    active: bool = False
    tasks: List[Task] = field(default_factory=list)

    def max_task_id(self) -> int:
        return max((t.id for t in self.tasks), default=0)

    def find_task(self, task_id: int):
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'status': self.active,
            'tasks': [t.to_dict() for t in self.tasks],
        }

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> Board:
        if not isinstance(raw, Mapping):
            raise StoreFormatError(f'board entry is not an object: {raw!r}')
        raw_tasks = raw.get('tasks')
        if raw_tasks is None:
            raw_tasks = []
        if not isinstance(raw_tasks, list):
            raise StoreFormatError(f'board {raw.get("name")!r} tasks is not a list')
        return cls(
            id=_require_id(raw, 'board'),
            name=str(raw.get('name') or ''),
            active=_require_flag(raw, 'board'),
            tasks=[Task.from_dict(t) for t in raw_tasks],
        )


class Stats(NamedTuple):
    done: int
    in_progress: int
    percent: int

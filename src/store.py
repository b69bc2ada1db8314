"""TaskStore: boards, id management, task mutation, statistics and rendering.

Board names are unique and looked up case-insensitively; the original case
is kept for display. Ids grow from a running maximum per scope (the store
for boards, each board for tasks) and are never reused.
"""
import logging
import sys
import unicodedata
from typing import IO, Any, Dict, Iterable, List, Mapping, Optional

from errors import BoardNotFound, DuplicateName, InvalidName, StoreFormatError, TaskNotFound
from models import Board, Stats, Task
from theme import Theme

logger = logging.getLogger(__name__)

DEFAULT_BOARD = "actual"
MAX_NAME_LENGTH = 32
INDENT = 10


def validate_name(name: str) -> None:
    """Raise InvalidName unless `name` is 1-32 chars of no whitespace or punctuation."""
    if not name:
        raise InvalidName(name, 'must not be empty')
    if len(name) > MAX_NAME_LENGTH:
        raise InvalidName(name, f'must not be longer than {MAX_NAME_LENGTH} characters')
    for ch in name:
        if ch.isspace():
            raise InvalidName(name, 'must not contain spaces')
        # Unicode punctuation only (P*); symbols such as + or $ are allowed
        if unicodedata.category(ch).startswith('P'):
            raise InvalidName(name, 'must not contain special characters')


def fuzzy_match(pattern: str, text: str) -> bool:
    """True if the characters of `pattern` occur in order in `text`, ignoring case."""
    if not pattern:
        return True
    it = iter(text.casefold())
    return all(ch in it for ch in pattern.casefold())


class TaskStore:
    def __init__(self, boards: Optional[Iterable[Board]] = None):
        self.boards: List[Board] = []
        self._max_board_id: int = 0
        self._max_task_ids: Dict[int, int] = {}
        for board in boards or ():
            if board.id in self._max_task_ids:
                raise StoreFormatError(f'duplicate board id: {board.id}')
            try:
                validate_name(board.name)
            except InvalidName as e:
                raise StoreFormatError(str(e)) from e
            if self.find_board(board.name) is not None:
                raise StoreFormatError(f'duplicate board name: {board.name!r}')
            self._adopt(board)

    # -------------------- loading / serialization --------------------
    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'TaskStore':
        if not isinstance(data, Mapping):
            raise StoreFormatError('document root is not an object')
        raw_boards = data.get('boards')
        if raw_boards is None:
            raw_boards = []
        if not isinstance(raw_boards, list):
            raise StoreFormatError('"boards" is not a list')
        store = cls(Board.from_dict(raw) for raw in raw_boards)
        logger.debug("loaded %d boards, %d tasks", len(store.boards), store.task_count())
        return store

    def to_dict(self) -> Dict[str, Any]:
        return {'boards': [b.to_dict() for b in self.boards]}

    def _adopt(self, board: Board) -> None:
        self.boards.append(board)
        self._max_board_id = max(self._max_board_id, board.id)
        self._max_task_ids[board.id] = board.max_task_id()

    # -------------------- queries --------------------
    def find_board(self, name: str) -> Optional[Board]:
        wanted = name.casefold()
        for board in self.boards:
            if board.name.casefold() == wanted:
                return board
        return None

    def get_board(self, name: str) -> Board:
        board = self.find_board(name)
        if board is None:
            raise BoardNotFound(name)
        return board

    def all_tasks(self) -> List[Task]:
        return [t for b in self.boards for t in b.tasks]

    def task_count(self) -> int:
        return sum(len(b.tasks) for b in self.boards)

    def stats(self) -> Stats:
        done = in_progress = 0
        for task in self.all_tasks():
            if task.done:
                done += 1
            else:
                in_progress += 1
        total = done + in_progress
        percent = done * 100 // total if total else 0
        return Stats(done, in_progress, percent)

    # -------------------- mutation --------------------
    def add_board(self, name: str, active: bool = False) -> Board:
        validate_name(name)
        if self.find_board(name) is not None:
            raise DuplicateName(name)
        board = Board(id=self._max_board_id + 1, name=name, active=active)
        self._adopt(board)
        logger.debug("added board %d %r", board.id, board.name)
        return board

    def add_task(self, text: str, board_name: str = DEFAULT_BOARD) -> Task:
        if not self.boards:
            self.add_board(board_name, active=False)
        board = self.get_board(board_name)
        task = Task(id=self._max_task_ids[board.id] + 1, text=text)
        board.tasks.append(task)
        self._max_task_ids[board.id] = task.id
        logger.debug("added task %d to board %r", task.id, board.name)
        return task

    def new_task(self, text: str) -> Task:
        """Add to the default board (single-board workflow)."""
        return self.add_task(text, DEFAULT_BOARD)

    def mark_done(self, task_id: int, board_name: str = DEFAULT_BOARD) -> Task:
        board = self.get_board(board_name)
        task = board.find_task(task_id)
        if task is None:
            raise TaskNotFound(task_id, board.name)
        if not task.done:
            task.done = True
            logger.debug("task %d on board %r marked done", task_id, board.name)
        return task

    # -------------------- display --------------------
    def render(self, pattern: str = "", theme: Optional[Theme] = None,
               out: Optional[IO[str]] = None) -> None:
        """Print every board and the tasks whose text fuzzy-matches `pattern`,
        followed by the completion summary.
        """
        theme = theme or Theme.plain()
        out = out or sys.stdout
        pad = ' ' * (INDENT // 2)
        for board in self.boards:
            print(pad + '@' + theme.underline(board.name), file=out)
            for task in board.tasks:
                if not fuzzy_match(pattern, task.text):
                    continue
                gutter = theme.muted(f"{task.id:>{INDENT}}. ")
                if task.done:
                    line = gutter + theme.done('[✓] ') + theme.muted(task.text)
                else:
                    line = gutter + theme.pending('[ ] ') + task.text
                print(line, file=out)
            print(file=out)
        print(self.summary(theme), file=out)

    def summary(self, theme: Optional[Theme] = None) -> str:
        theme = theme or Theme.plain()
        stat = self.stats()
        if stat.done == 0 and stat.in_progress == 0:
            return "No tasks were found."
        pad = ' ' * (INDENT // 2)
        return (f"{pad}{stat.percent}% of all tasks complete\n"
                f"{pad}{theme.done(str(stat.done))} done | "
                f"{theme.pending(str(stat.in_progress))} in progress")

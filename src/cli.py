"""Interactive shell loop for the task board.

Every cycle clears the screen, renders the store and reads one command.
The store is saved after each mutating command and on exit.
"""
import logging
import os
from typing import Optional

from errors import TaskboardError
from storage import Storage
from store import DEFAULT_BOARD, TaskStore
from theme import Theme

logger = logging.getLogger(__name__)

# --- terminal control helpers ---
# ESC[3J (scrollback), ESC[H (home), ESC[2J (screen), ESC[H (home)
# Order (3J first) improves reliability in some terminals.
def _clear_screen() -> None:
    print("\033[3J\033[H\033[2J\033[H", end="", flush=True)


def _truthy_env(value: Optional[str], default: bool = True) -> bool:
    if value is None:
        return default
    return value.strip().lower() not in {"0", "false", "no", "off", ""}


def _enter_alt_screen() -> None:
    print("\033[?1049h", end="", flush=True)


def _leave_alt_screen() -> None:
    print("\033[?1049l", end="", flush=True)


class CLI:
    def __init__(self, store: TaskStore, storage: Storage, theme: Optional[Theme] = None):
        self.store: TaskStore = store
        self.storage: Storage = storage
        self.theme: Theme = theme or Theme.plain()
        self.pattern: str = ""
        self.message: Optional[str] = None
        # Alt screen default ON; disable with TASKBOARD_ALT_SCREEN=0 (or false/no/off)
        self.alt_screen: bool = _truthy_env(os.getenv("TASKBOARD_ALT_SCREEN"), True)

    def run(self) -> None:
        """Main REPL loop; board is always cleared/redrawn each cycle.

        Uses the terminal's alternate screen (if enabled) so prior renders
        do not remain in scrollback history.
        """
        exit_message: Optional[str] = None
        if self.alt_screen:
            _enter_alt_screen()
        try:
            while True:
                self._redraw()
                line = input("\n: ").strip()
                if not line:
                    continue
                lower = line.lower()
                if lower == 'help':
                    _clear_screen()
                    self._help()
                    input("\nPress Enter to return to the board...")
                    continue
                if lower == 'exit':
                    self._save()
                    exit_message = "Goodbye."
                    break
                if self._handle_command(line):
                    self._save()
        except (KeyboardInterrupt, EOFError):
            self._save()
            exit_message = "Interrupted. Goodbye."
        finally:
            if self.alt_screen:
                _leave_alt_screen()
            if exit_message:
                print(exit_message)

    def _redraw(self) -> None:
        _clear_screen()
        self.store.render(self.pattern, self.theme)
        if self.pattern:
            print(f"\nFilter: {self.pattern}")
        if self.message:
            print(f"\n{self.message}")
            self.message = None

    def _save(self) -> None:
        self.storage.save(self.store)

    # -------------------- command dispatch --------------------
    def _handle_command(self, line: str) -> bool:
        """Run one command; return True when the store changed."""
        tokens = line.split()
        cmd = tokens[0].lower()
        try:
            if cmd == 'add':
                return self._cmd_add(tokens)
            if cmd == 'board':
                return self._cmd_board(tokens)
            if cmd == 'done':
                return self._cmd_done(tokens)
            if cmd == 'find':
                self.pattern = ' '.join(tokens[1:])
                return False
        except TaskboardError as e:
            logger.debug("command %r failed: %s", line, e)
            self.message = str(e)
            return False
        self.message = "Unknown command. Type 'help' for instructions."
        return False

    # ---- individual command helpers ----
    def _cmd_add(self, tokens: list[str]) -> bool:
        args = tokens[1:]
        board = DEFAULT_BOARD
        if args and args[0] in ('-b', '--board'):
            if len(args) < 2:
                self.message = "Usage: add [-b <board>] <text>"
                return False
            board, args = args[1], args[2:]
        text = ' '.join(args).strip()
        if not text:
            self.message = "Usage: add [-b <board>] <text>"
            return False
        self.store.add_task(text, board)
        return True

    def _cmd_board(self, tokens: list[str]) -> bool:
        if len(tokens) != 2:
            self.message = "Usage: board <name>"
            return False
        self.store.add_board(tokens[1])
        return True

    def _cmd_done(self, tokens: list[str]) -> bool:
        if len(tokens) not in (2, 3):
            self.message = "Usage: done <id> [board]"
            return False
        raw_id = tokens[1].rstrip('.')
        if not raw_id.isdecimal():
            self.message = "Invalid id."
            return False
        board = tokens[2] if len(tokens) == 3 else DEFAULT_BOARD
        self.store.mark_done(int(raw_id), board)
        return True

    def _help(self) -> None:
        print("Commands:")
        print("  add [-b board] <text...>\n"
              "                      Add a task (default board if -b is omitted)")
        print("  board <name>        Create a board")
        print("  done <id> [board]   Mark a task done (default board if omitted)")
        print("  find [pattern]      Filter tasks by fuzzy pattern; no pattern clears")
        print("  help                Show this help (press Enter to return)")
        print("  exit                Save and exit")

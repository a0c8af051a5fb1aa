"""Command-line interface loop for the to-do list.

The screen is redrawn from a fresh projection after every command, so
the rendered list never drifts from the store. Row numbers typed by the
user refer to the list as last shown.
"""
import logging
import os
from typing import List, Optional

from models import Priority, TodoFilter
from projection import Projection, project
from store import NotFoundError, TaskStore
from validation import ValidationError
import view

logger = logging.getLogger(__name__)

# ESC[3J (scrollback), ESC[H (home), ESC[2J (screen), ESC[H (home)
def _clear_screen() -> None:  # pragma: no cover
    print("\033[3J\033[H\033[2J\033[H", end="", flush=True)


def _truthy_env(value: Optional[str], default: bool = True) -> bool:
    if value is None:
        return default
    return value.strip().lower() not in {"0", "false", "no", "off", ""}


def _enter_alt_screen() -> None:  # pragma: no cover
    print("\033[?1049h", end="", flush=True)


def _leave_alt_screen() -> None:  # pragma: no cover
    print("\033[?1049l", end="", flush=True)


PRIORITY_FLAGS = ('-p', '--priority')


class CLI:
    def __init__(self, store: TaskStore, alt_screen: Optional[bool] = None):
        self.store: TaskStore = store
        # Alt screen default ON; disable with TODO_ALT_SCREEN=0 (or false/no/off)
        if alt_screen is None:
            alt_screen = _truthy_env(os.getenv("TODO_ALT_SCREEN"), True)
        self.alt_screen: bool = alt_screen
        self.message: Optional[str] = None
        self._shown: Projection = project(store)

    def run(self) -> None:
        """Main REPL loop; the list is cleared and redrawn each cycle."""
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
                    input("\nPress Enter to return to the list...")
                    continue
                if lower in ('exit', 'quit'):
                    exit_message = "Goodbye."
                    break
                self.handle_command(line)
        except (KeyboardInterrupt, EOFError):
            exit_message = "Interrupted. Goodbye."
        finally:
            logger.debug("session ended: %s", self.store)
            if self.alt_screen:
                _leave_alt_screen()
            if exit_message:
                print(exit_message)

    def _redraw(self) -> None:
        _clear_screen()
        print("To-Do:")
        self._shown = project(self.store)
        view.display(self._shown)
        if self.message:
            print(f"\n{self.message}")
            self.message = None

    def _notify(self, message: str) -> None:
        self.message = message

    # -------------------- command dispatch --------------------
    def handle_command(self, line: str) -> None:
        tokens = line.split()
        if not tokens:
            return
        cmd = tokens[0].lower()
        if cmd == 'add':
            self._cmd_add(line, tokens)
        elif cmd in ('t', 'toggle'):
            self._cmd_toggle(tokens)
        elif cmd in ('rm', 'delete'):
            self._cmd_rm(tokens)
        elif cmd in ('f', 'filter'):
            self._cmd_filter(tokens)
        elif cmd == 'clear':
            removed = self.store.clear_completed()
            self._notify(f"Cleared {removed} completed task(s).")
        elif cmd in ('done', 'all-done'):
            self.store.mark_all_done()
        elif cmd == 'sample':
            self.store.add_sample()
        else:
            self._notify("Unknown command. Type 'help' for instructions.")
        # commands issued without a redraw in between still see current rows
        self._shown = project(self.store)

    # ---- individual command helpers ----
    def _cmd_add(self, line: str, tokens: List[str]) -> None:
        """Inline add; only a trailing `-p <prio>` pair is read as the priority.

        The title is taken verbatim from the line, inner spacing included.
        """
        if len(tokens) == 1:
            self._add()
            return
        title = line.strip()[len(tokens[0]):]
        priority = Priority.MEDIUM
        if len(tokens) >= 3 and tokens[-2].lower() in PRIORITY_FLAGS:
            try:
                priority = Priority.parse(tokens[-1])
            except ValueError:
                self._notify("Invalid priority.")
                return
            for tok in (tokens[-1], tokens[-2]):
                title = title.rstrip()[:-len(tok)]
        self._create(title, priority)

    def _create(self, title: str, priority: Priority) -> None:
        try:
            self.store.add(title, priority)
        except ValidationError as exc:
            logger.debug("add rejected: %s", exc)
            self._notify(str(exc))

    def _cmd_toggle(self, tokens: List[str]) -> None:
        task_id = self._row_id(tokens, "Usage: t <n>")
        if task_id is None:
            return
        try:
            self.store.toggle_done(task_id)
        except NotFoundError as exc:
            self._stale(exc)

    def _cmd_rm(self, tokens: List[str]) -> None:
        task_id = self._row_id(tokens, "Usage: rm <n>")
        if task_id is None:
            return
        try:
            self.store.delete(task_id)
        except NotFoundError as exc:
            self._stale(exc)

    def _cmd_filter(self, tokens: List[str]) -> None:
        if len(tokens) != 2:
            self._notify("Usage: f <all|active|completed>")
            return
        try:
            self.store.set_filter(TodoFilter.parse(tokens[1]))
        except ValueError:
            self._notify("Invalid filter.")

    def _row_id(self, tokens: List[str], usage: str) -> Optional[str]:
        """Map a 1-based row number in the shown list to a task id."""
        if len(tokens) != 2:
            self._notify(usage)
            return None
        raw = tokens[1].rstrip('.')
        if not raw.isdecimal():
            self._notify("Invalid row number.")
            return None
        idx = int(raw) - 1
        rows = self._shown.visible
        if idx < 0 or idx >= len(rows):
            self._notify(f"No task #{raw} in view.")
            return None
        return rows[idx].id

    def _stale(self, exc: NotFoundError) -> None:
        # target was already removed; nothing to do
        logger.debug("stale reference: %s", exc)
        self._notify("Task no longer exists.")

    # -------------------- user-interactive flows --------------------
    def _help(self) -> None:
        print("Commands:")
        print("  add                        Add a new task (prompts for title and priority)")
        print("  add <title...> [-p prio]   Inline add; a trailing -p low/medium/high (or l/m/h) sets priority")
        print("  t <n>                      Toggle done for row n (also: toggle)")
        print("  rm <n>                     Delete row n (also: delete)")
        print("  f <filter>                 Show all/active/completed (aliases: a/ac/c)")
        print("  clear                      Remove all completed tasks")
        print("  done                       Mark every task done (also: all-done)")
        print("  sample                     Add a numbered sample task")
        print("  help                       Show this help (press Enter to return)")
        print("  exit                       Exit (tasks are not saved)")

    def _add(self) -> None:
        title = input("Enter task title: ")
        raw = input("Priority (low/medium/high) [medium]: ").strip()
        try:
            priority = Priority.parse(raw) if raw else Priority.MEDIUM
        except ValueError:
            self._notify("Invalid priority.")
            return
        self._create(title, priority)


if __name__ == '__main__':  # pragma: no cover
    CLI(TaskStore.with_samples()).run()

"""Interactive text-mode loop for the todo list.

Every command maps onto one TaskRepo call. Domain errors (empty text, unknown
id) are printed and the loop carries on; infrastructure errors propagate.
"""
from __future__ import annotations

from typing import Callable, Optional

from todolist.domain.errors import TodoError
from todolist.domain.models import Task
from todolist.storage import TaskRepo


def _format_task(task: Task) -> str:
    mark = "x" if task.status else " "
    return f"[{mark}] {task.task_id:>4}  {task.created_at.isoformat()}  {task.task}"


def _parse_id(raw: str) -> Optional[int]:
    try:
        return int(raw.rstrip('.'))
    except ValueError:
        return None


class CLI:
    def __init__(self, repo: TaskRepo, prompt: Optional[Callable[[str], str]] = None):
        self.repo: TaskRepo = repo
        self._prompt = prompt or input

    def run(self) -> None:
        """Main REPL loop; reads a command per line until `exit` or Ctrl-C/EOF."""
        print("Todo list. Type 'help' for instructions.")
        try:
            while True:
                line = self._prompt("\n> ").strip()
                if not line:
                    continue
                if line.lower() in ('exit', 'quit'):
                    break
                self.handle(line)
        except (KeyboardInterrupt, EOFError):
            pass
        print("Goodbye.")

    # -------------------- command dispatch --------------------
    def handle(self, line: str) -> None:
        cmd, _, rest = line.strip().partition(' ')
        cmd = cmd.lower()
        rest = rest.strip()
        handlers = {
            'add': self._cmd_add,
            'list': self._cmd_list,
            'ls': self._cmd_list,
            'show': self._cmd_show,
            'edit': self._cmd_edit,
            'done': self._cmd_done,
            'rm': self._cmd_rm,
            'help': self._cmd_help,
        }
        handler = handlers.get(cmd)
        if handler is None:
            print("Unknown command. Type 'help' for instructions.")
            return
        try:
            handler(rest)
        except TodoError as e:
            print(f"Error: {e}")

    # ---- individual command helpers ----
    def _cmd_add(self, rest: str) -> None:
        text = rest or self._prompt("Enter task: ")
        task_id = self.repo.create(text)
        print(f"Task {task_id} created.")

    def _cmd_list(self, rest: str) -> None:
        tasks = self.repo.show_all()
        if not tasks:
            print("No tasks.")
            return
        for task in tasks:
            print(_format_task(task))

    def _cmd_show(self, rest: str) -> None:
        task_id = self._require_id(rest, "show <id>")
        if task_id is not None:
            print(_format_task(self.repo.read(task_id)))

    def _cmd_edit(self, rest: str) -> None:
        raw_id, _, text = rest.partition(' ')
        task_id = self._require_id(raw_id, "edit <id> <text>")
        if task_id is None:
            return
        self.repo.update(task_id, text.strip() or self._prompt("Enter new task: "))
        print(f"Task {task_id} updated.")

    def _cmd_done(self, rest: str) -> None:
        task_id = self._require_id(rest, "done <id>")
        if task_id is not None:
            self.repo.mark_done(task_id)
            print(f"Task {task_id} marked done.")

    def _cmd_rm(self, rest: str) -> None:
        task_id = self._require_id(rest, "rm <id>")
        if task_id is not None:
            self.repo.delete(task_id)
            print(f"Task {task_id} deleted.")

    def _cmd_help(self, rest: str) -> None:
        print("Commands:")
        print("  add <text...>       Add a new task (prompts for text when omitted)")
        print("  list                List all tasks ([x] marks done ones)")
        print("  show <id>           Show one task")
        print("  edit <id> <text>    Replace the text of a task")
        print("  done <id>           Mark a task done")
        print("  rm <id>             Delete a task")
        print("  help                Show this help")
        print("  exit                Quit")

    @staticmethod
    def _require_id(raw: str, usage: str) -> Optional[int]:
        task_id = _parse_id(raw.strip())
        if task_id is None:
            print(f"Usage: {usage}")
        return task_id

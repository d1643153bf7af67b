"""Interactive menu for the student record store.

The menu loop only reads input and dispatches to :class:`RecordStore`;
every message is produced by the ``render_*`` / ``format_*`` helpers so
they can be checked without a terminal.

Start with::

    student-records --table-size 50
"""

from __future__ import annotations

import argparse
import logging
import sys
import uuid
from typing import Callable, List, Optional, Sequence, TextIO

from .audit_logger import get_audit_logger
from .config import DEFAULT_TABLE_SIZE, StoreConfig
from .models import StoreResult, StudentRecord, parse_int
from .store import RecordStore

MENU = (
    "\n===== Student Management System (Hash Table) ====="
    "\n1. Add New Student (O(1) Avg)"
    "\n2. Find Student by ID (O(1) Avg)"
    "\n3. Remove Student by ID (O(1) Avg)"
    "\n4. Display All Students (O(N))"
    "\n5. Exit"
)
CHOICE_PROMPT = "\nEnter your choice (1-5): "
INVALID_NUMBER = "Invalid input. Please enter a valid number: "
INVALID_CHOICE = "Invalid choice. Please enter a number between 1 and 5."
GOODBYE = "\nExiting Student Management System. Goodbye!"

_RULE = "-" * 38

ADD, FIND, REMOVE, DISPLAY, EXIT = 1, 2, 3, 4, 5


class EndOfInput(Exception):
    """Raised by the prompt helpers when the input stream is exhausted."""


# ------------------------------------------------------------------
# Rendering
# ------------------------------------------------------------------


def format_insert(result: StoreResult) -> str:
    if result.ok and result.record is not None:
        return f"\nSuccess: Student {result.record.name} (ID: {result.student_id}) added."
    return f"\nError: Student ID {result.student_id} already exists."


def format_find(result: StoreResult) -> str:
    if not result.ok or result.record is None:
        return f"\nError: Student ID {result.student_id} not found."
    record = result.record
    return "\n".join([
        "\n--- Student Found ---",
        f"ID: {record.student_id}",
        f"Name: {record.name}",
        f"Grade: {record.grade}",
        "---------------------",
    ])


def format_delete(result: StoreResult) -> str:
    if result.ok:
        return f"\nSuccess: Student ID {result.student_id} removed."
    return f"\nError: Student ID {result.student_id} not found."


def render_table(records: Sequence[StudentRecord]) -> str:
    """Render *records* as the fixed-width ID / Name / Grade listing."""
    lines: List[str] = [
        "\n--- All Student Records ---",
        f"{'ID':<5} | {'Name':<20} | {'Grade':<5}",
        _RULE,
    ]
    for record in records:
        lines.append(f"{record.student_id:<5} | {record.name:<20} | {record.grade:<5}")
    if not records:
        lines.append("The system contains no student records.")
    lines.append(_RULE)
    return "\n".join(lines)


# ------------------------------------------------------------------
# Shell
# ------------------------------------------------------------------


class StudentShell:
    """Numbered-menu front end over a :class:`RecordStore`.

    Parameters
    ----------
    store : RecordStore
        The store to operate on.  The shell tears it down on exit.
    input_fn : callable, optional
        ``f(prompt) -> str`` used to read a line; defaults to :func:`input`.
        Must raise :class:`EOFError` when input is exhausted.
    out : TextIO, optional
        Stream for all output (default ``sys.stdout``).
    """

    def __init__(
        self,
        store: RecordStore,
        input_fn: Optional[Callable[[str], str]] = None,
        out: Optional[TextIO] = None,
    ) -> None:
        self._store = store
        self._input = input_fn or input
        self._out = out or sys.stdout

    def _print(self, text: str) -> None:
        print(text, file=self._out)

    def _read(self, prompt: str) -> str:
        try:
            return self._input(prompt)
        except EOFError:
            raise EndOfInput() from None

    # --- prompts ------------------------------------------------------

    def read_int(self, prompt: str) -> int:
        """Prompt until a plain decimal integer is entered."""
        value = parse_int(self._read(prompt))
        while value is None:
            value = parse_int(self._read(INVALID_NUMBER))
        return value

    def read_text(self, prompt: str) -> str:
        return self._read(prompt).rstrip("\r\n")

    # --- menu actions -------------------------------------------------

    def add_student(self, operation_id: str) -> None:
        self._print("\n--- Add Student ---")
        student_id = self.read_int("Enter Student ID (e.g., 101): ")
        name = self.read_text("Enter Student Name: ")
        grade = self.read_text("Enter Student Grade (e.g., A, B+): ")
        result = self._store.insert(student_id, name, grade, operation_id=operation_id)
        self._print(format_insert(result))

    def find_student(self, operation_id: str) -> None:
        self._print("\n--- Find Student ---")
        student_id = self.read_int("Enter Student ID to find: ")
        self._print(format_find(self._store.find(student_id, operation_id=operation_id)))

    def remove_student(self, operation_id: str) -> None:
        self._print("\n--- Remove Student ---")
        student_id = self.read_int("Enter Student ID to remove: ")
        self._print(format_delete(self._store.delete(student_id, operation_id=operation_id)))

    def display_all(self, operation_id: str) -> None:
        self._print(render_table(self._store.list_all(operation_id=operation_id)))

    # --- loop ---------------------------------------------------------

    def run(self) -> int:
        """Run the menu until Exit (or end of input); return the exit status."""
        actions = {
            ADD: self.add_student,
            FIND: self.find_student,
            REMOVE: self.remove_student,
            DISPLAY: self.display_all,
        }
        try:
            while True:
                self._print(MENU)
                choice = self.read_int(CHOICE_PROMPT)
                if choice == EXIT:
                    break
                action = actions.get(choice)
                if action is None:
                    self._print(INVALID_CHOICE)
                    continue
                action(uuid.uuid4().hex)
        except EndOfInput:
            pass

        self._print(GOODBYE)
        self._store.teardown()
        return 0


# ------------------------------------------------------------------
# CLI entry-point
# ------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Student record store (hash table)")
    parser.add_argument(
        "--table-size",
        type=int,
        default=DEFAULT_TABLE_SIZE,
        help="number of hash buckets (default: %(default)s)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="emit JSON event logs for every store operation on stderr",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        config = StoreConfig(table_size=args.table_size).validate()
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    get_audit_logger().set_level(logging.DEBUG if args.verbose else logging.ERROR)
    return StudentShell(RecordStore(config)).run()


if __name__ == "__main__":
    sys.exit(main())

"""Unit tests for the interactive menu and its rendering helpers."""

import io

import pytest

from student_records import cli
from student_records.cli import (
    StudentShell,
    format_delete,
    format_find,
    format_insert,
    render_table,
)
from student_records.models import DUPLICATE_ID, NOT_FOUND, OK, StoreResult, StudentRecord
from student_records.store import RecordStore


def _scripted(lines):
    """Return an input function that replays *lines* then raises EOFError."""
    it = iter(lines)
    prompts = []

    def fake_input(prompt):
        prompts.append(prompt)
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    fake_input.prompts = prompts
    return fake_input


def _run(lines, store=None):
    store = store or RecordStore()
    out = io.StringIO()
    fake_input = _scripted(lines)
    status = StudentShell(store, input_fn=fake_input, out=out).run()
    return status, out.getvalue(), fake_input.prompts, store


# ---- Rendering ------------------------------------------------------------


def test_format_insert_messages():
    ok = StoreResult(OK, 101, StudentRecord(101, "Alice", "A"))
    assert format_insert(ok) == "\nSuccess: Student Alice (ID: 101) added."
    dup = StoreResult(DUPLICATE_ID, 101)
    assert format_insert(dup) == "\nError: Student ID 101 already exists."


def test_format_find_block():
    found = StoreResult(OK, 7, StudentRecord(7, "Gus", "B+"))
    text = format_find(found)
    assert "--- Student Found ---" in text
    assert "ID: 7" in text
    assert "Name: Gus" in text
    assert "Grade: B+" in text
    assert format_find(StoreResult(NOT_FOUND, 7)) == "\nError: Student ID 7 not found."


def test_format_delete_messages():
    assert format_delete(StoreResult(OK, 3)) == "\nSuccess: Student ID 3 removed."
    assert format_delete(StoreResult(NOT_FOUND, 3)) == "\nError: Student ID 3 not found."


def test_render_table_empty():
    text = render_table([])
    assert "The system contains no student records." in text
    assert "ID    | Name                 | Grade" in text


def test_render_table_fixed_width_rows():
    text = render_table([StudentRecord(101, "Alice", "A"), StudentRecord(7, "Bo", "B+")])
    lines = text.splitlines()
    assert "101   | Alice                | A    " in lines
    assert "7     | Bo                   | B+   " in lines
    assert "The system contains no student records." not in text
    assert lines[-1] == "-" * 38


# ---- Menu loop ------------------------------------------------------------


def test_exit_choice_tears_down_and_returns_zero():
    store = RecordStore()
    store.insert(1, "One", "A")
    status, out, _, store = _run(["5"], store)
    assert status == 0
    assert "Goodbye!" in out
    assert len(store) == 0


def test_end_of_input_exits_cleanly():
    status, out, _, _ = _run([])
    assert status == 0
    assert "Goodbye!" in out


def test_add_find_remove_session():
    status, out, _, store = _run([
        "1", "101", "Alice", "A",
        "1", "101", "Bob", "B",
        "2", "101",
        "3", "101",
        "2", "101",
        "3", "101",
        "5",
    ])
    assert status == 0
    assert "Success: Student Alice (ID: 101) added." in out
    assert "Error: Student ID 101 already exists." in out
    assert "Name: Alice" in out
    assert "Success: Student ID 101 removed." in out
    assert out.count("Error: Student ID 101 not found.") == 2


def test_display_all_lists_records():
    _, out, _, _ = _run(["1", "1", "One", "A", "1", "51", "Fifty", "B", "4", "5"])
    assert "51    | Fifty" in out
    assert "1     | One" in out
    assert out.index("51    | Fifty") < out.index("1     | One")


def test_display_all_empty():
    _, out, _, _ = _run(["4", "5"])
    assert "The system contains no student records." in out


def test_invalid_number_reprompts():
    _, out, prompts, store = _run(["abc", "", "1", "x", "9", "Ivy", "A", "5"])
    assert prompts.count(cli.INVALID_NUMBER) == 3
    assert store.find(9).ok is False  # torn down on exit
    assert "Success: Student Ivy (ID: 9) added." in out


def test_out_of_range_choice():
    _, out, _, _ = _run(["0", "6", "5"])
    assert out.count(cli.INVALID_CHOICE) == 2


def test_long_name_is_truncated_in_messages():
    _, out, _, _ = _run(["1", "1", "N" * 60, "ABCDEFG", "2", "1", "5"])
    assert "Name: " + "N" * 49 + "\n" in out
    assert "Grade: ABCD\n" in out


# ---- Entry-point ----------------------------------------------------------


def test_main_rejects_bad_table_size(capsys):
    assert cli.main(["--table-size", "0"]) == 2
    assert "table_size" in capsys.readouterr().err


def test_main_runs_shell(monkeypatch, capsys):
    monkeypatch.setattr("builtins.input", _scripted(["1", "5", "Eve", "B", "4", "5"]))
    assert cli.main(["--table-size", "10"]) == 0
    out = capsys.readouterr().out
    assert "Success: Student Eve (ID: 5) added." in out
    assert "5     | Eve" in out


def test_parser_defaults():
    args = cli.build_parser().parse_args([])
    assert args.table_size == 50
    assert args.verbose is False


@pytest.mark.parametrize("choice", ["2", "3"])
def test_lookup_choices_on_empty_store(choice):
    _, out, _, _ = _run([choice, "42", "5"])
    assert "Error: Student ID 42 not found." in out


def test_underscore_and_float_ids_reprompt():
    _, out, prompts, _ = _run(["1", "1_0", "1.0", "+10", "Tia", "B", "2", "10", "5"])
    assert prompts.count(cli.INVALID_NUMBER) == 2
    assert "Success: Student Tia (ID: 10) added." in out
    assert "Name: Tia" in out

"""Tests for the artifact layout."""

from datetime import datetime

from printer.content import Author, ContentType
from printer.formatter import SEPARATOR, format_artifact, format_date

NOW = datetime(2024, 6, 8, 14, 5)
AUTHOR = Author(id=42, name="Alice")


def _lines(artifact: str) -> list[str]:
    assert artifact.startswith("```\n") and artifact.endswith("\n```")
    return artifact[4:-4].split("\n")


def test_format_date_has_no_padding():
    assert format_date(NOW) == "6/8/2024"
    assert format_date(datetime(2023, 12, 25)) == "12/25/2023"


def test_note_layout():
    lines = _lines(format_artifact(ContentType.NOTE, AUTHOR, "Buy milk", now=NOW))
    assert lines == ["Note", "By: Alice (42)", "Date: 6/8/2024", SEPARATOR, "Buy milk"]


def test_task_has_checkbox_and_no_due_date():
    lines = _lines(format_artifact(ContentType.TASK, AUTHOR, "Finish report", now=NOW))
    assert lines[0] == "Task"
    assert lines[-1] == "[_] Finish report"
    assert not any(line.startswith("Due:") for line in lines)


def test_reminder_ends_with_due_date():
    lines = _lines(
        format_artifact(ContentType.REMINDER, AUTHOR, "Dentist", "08/06/2024", now=NOW)
    )
    assert lines[0] == "Reminder"
    assert lines[-2:] == ["Dentist", "Due: 08/06/2024"]


def test_due_date_ignored_for_notes():
    artifact = format_artifact(ContentType.NOTE, AUTHOR, "Buy milk", "08/06/2024", now=NOW)
    assert "Due:" not in artifact


def test_same_inputs_same_output():
    first = format_artifact(ContentType.NOTE, AUTHOR, "Buy milk", now=NOW)
    second = format_artifact(ContentType.NOTE, AUTHOR, "Buy milk", now=NOW)
    assert first == second

from __future__ import annotations

"""Render collected answers into the printable text block."""

from datetime import datetime
from typing import Optional

from .content import Author, ContentType

__all__ = ["TASK_MARKER", "SEPARATOR", "format_date", "format_artifact"]

TASK_MARKER = "[_]"
SEPARATOR = "-" * 30


def format_date(moment: datetime) -> str:
    """Return ``moment`` as ``M/D/YYYY`` without zero padding."""
    return f"{moment.month}/{moment.day}/{moment.year}"


def format_artifact(
    content_type: ContentType,
    author: Author,
    body: str,
    due_date: Optional[str] = None,
    *,
    now: Optional[datetime] = None,
) -> str:
    """Return the artifact for ``body`` as a monospace block.

    The layout is fixed: label, author, date, a separator and the body. Task
    bodies get an unchecked box in front; reminders end with their due date.
    ``now`` is the only input that is not taken from the conversation and
    defaults to the current local time.
    """

    moment = now or datetime.now()
    text = f"{TASK_MARKER} {body}" if content_type is ContentType.TASK else body
    lines = [
        content_type.label,
        f"By: {author.name} ({author.id})",
        f"Date: {format_date(moment)}",
        SEPARATOR,
        text,
    ]
    if content_type is ContentType.REMINDER and due_date:
        lines.append(f"Due: {due_date}")
    return "```\n" + "\n".join(lines) + "\n```"

from __future__ import annotations

"""Content types and the prompt sequence used to collect each of them."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from .validators import DATE_FORMAT_HINT, Validator, is_valid_date

__all__ = [
    "ContentType",
    "Author",
    "Inbound",
    "PromptSpec",
    "Choice",
    "PROMPTS",
    "MODE_CHOICES",
]


class ContentType(str, Enum):
    """Kinds of artifact the bot can print."""

    NOTE = "note"
    REMINDER = "reminder"
    TASK = "task"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @classmethod
    def parse(cls, text: Optional[str]) -> Optional["ContentType"]:
        """Return the content type named by ``text`` or ``None``."""
        if not text:
            return None
        try:
            return cls(text.strip().lower())
        except ValueError:
            return None


@dataclass(frozen=True)
class Author:
    """The user a flow was started by."""

    id: int
    name: str


@dataclass(frozen=True)
class Inbound:
    """Platform-neutral envelope for an incoming chat message."""

    chat_id: int
    user: Optional[Author]
    text: Optional[str]


@dataclass(frozen=True)
class PromptSpec:
    """One question of a dialogue.

    ``field`` names the answer in the collected mapping. Without a
    ``validator`` any non-empty text is accepted; ``format_hint`` is shown to
    the user when the validator rejects an answer.
    """

    field: str
    text: str
    validator: Optional[Validator] = None
    format_hint: Optional[str] = None


@dataclass(frozen=True)
class Choice:
    """A selectable option shown as a button under a message."""

    label: str
    payload: str


PROMPTS: Dict[ContentType, Tuple[PromptSpec, ...]] = {
    ContentType.NOTE: (
        PromptSpec("body", "Please enter the note message:"),
    ),
    ContentType.REMINDER: (
        PromptSpec(
            "due_date",
            f"Please enter the date for the reminder ({DATE_FORMAT_HINT}):",
            validator=is_valid_date,
            format_hint=DATE_FORMAT_HINT,
        ),
        PromptSpec("body", "Please enter the reminder message:"),
    ),
    ContentType.TASK: (
        PromptSpec("body", "Please enter the task message:"),
    ),
}

MODE_CHOICES: Tuple[Choice, ...] = tuple(
    Choice(label=kind.label, payload=kind.value) for kind in ContentType
)

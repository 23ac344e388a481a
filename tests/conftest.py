"""Shared fixtures for the printer tests."""

from __future__ import annotations

import asyncio
import os
import sys
from dataclasses import dataclass
from typing import List, Optional, Sequence

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from printer.content import Author, Choice
from printer.errors import DeliveryError
from printer.messenger import Messenger


@dataclass
class Sent:
    chat_id: int
    text: str
    choices: Optional[Sequence[Choice]]
    token: Optional[str]


class RecordingMessenger(Messenger):
    """Messenger that keeps every outbound message in memory."""

    def __init__(self, fail: bool = False) -> None:
        self.sent: List[Sent] = []
        self.retired: List[str] = []
        self.fail = fail

    async def send(self, chat_id, text, choices=None, *, token=None) -> None:
        if self.fail:
            raise DeliveryError(chat_id, "rejected")
        self.sent.append(Sent(chat_id, text, choices, token))

    async def retire(self, chat_id, token) -> None:
        self.retired.append(token)

    @property
    def last(self) -> Sent:
        return self.sent[-1]

    def texts(self) -> List[str]:
        return [item.text for item in self.sent]


@pytest.fixture
def messenger() -> RecordingMessenger:
    return RecordingMessenger()


@pytest.fixture
def alice() -> Author:
    return Author(id=42, name="Alice")


@pytest.fixture
def settle():
    """Let scheduled flow tasks run until they block again."""

    async def _settle(rounds: int = 20) -> None:
        for _ in range(rounds):
            await asyncio.sleep(0)

    return _settle

from __future__ import annotations

"""Ask a sequence of questions in one chat and collect the answers."""

import logging
from typing import Dict, Optional, Sequence

from .content import PromptSpec
from .inbox import ChatInbox
from .messenger import Messenger
from .validators import validate

logger = logging.getLogger(__name__)

__all__ = ["EMPTY_INPUT_TEXT", "ConversationCollector", "invalid_format_text"]

EMPTY_INPUT_TEXT = "Input cannot be empty."


def invalid_format_text(hint: Optional[str]) -> str:
    if hint:
        return f"Invalid format. Please use {hint}."
    return "Invalid format."


class ConversationCollector:
    """Prompt, wait for the reply, validate, and re-prompt until accepted.

    There is no retry limit and no timeout: an unanswered prompt keeps its
    listener until the owning flow is cancelled.
    """

    def __init__(self, messenger: Messenger, inbox: ChatInbox) -> None:
        self._messenger = messenger
        self._inbox = inbox

    async def ask(self, chat_id: int, spec: PromptSpec) -> str:
        """Return the first acceptable answer to ``spec``."""

        await self._messenger.send(chat_id, spec.text)
        while True:
            text = await self._inbox.wait(chat_id)
            if text is None or not text.strip():
                logger.info("Empty answer for %r in chat %s", spec.field, chat_id)
                await self._messenger.send(chat_id, f"{EMPTY_INPUT_TEXT} {spec.text}")
                continue
            if not validate(text, spec.validator):
                logger.info("Rejected answer for %r in chat %s: %r", spec.field, chat_id, text)
                await self._messenger.send(
                    chat_id, f"{invalid_format_text(spec.format_hint)} {spec.text}"
                )
                continue
            logger.info("Accepted answer for %r in chat %s", spec.field, chat_id)
            return text

    async def collect(self, chat_id: int, specs: Sequence[PromptSpec]) -> Dict[str, str]:
        """Ask every prompt in order and map each ``field`` to its answer."""

        answers: Dict[str, str] = {}
        for spec in specs:
            answers[spec.field] = await self.ask(chat_id, spec)
        return answers

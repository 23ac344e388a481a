from __future__ import annotations

"""The print flow: choose a content type, answer its prompts, get the artifact.

Each chat has at most one running flow. :meth:`PrintFlow.start` schedules
:meth:`PrintFlow.run` as a task and cancels the flow it replaces, which also
releases that flow's pending listener.
"""

import asyncio
import logging
import uuid
from datetime import datetime
from typing import Awaitable, Callable, Dict, Optional

from .collector import ConversationCollector
from .content import MODE_CHOICES, PROMPTS, Author, ContentType
from .errors import DeliveryError
from .formatter import format_artifact
from .inbox import ChatInbox
from .messenger import Messenger

logger = logging.getLogger(__name__)

__all__ = ["CHOICE_PROMPT", "PrintFlow"]

CHOICE_PROMPT = "What do you want to print?"

Clock = Callable[[], datetime]
HelpSender = Callable[[int], Awaitable[None]]


class PrintFlow:
    """Drive the print dialogue for each chat."""

    def __init__(
        self,
        messenger: Messenger,
        inbox: ChatInbox,
        send_help: HelpSender,
        *,
        clock: Clock = datetime.now,
    ) -> None:
        self._messenger = messenger
        self._inbox = inbox
        self._send_help = send_help
        self._clock = clock
        self._collector = ConversationCollector(messenger, inbox)
        self._flows: Dict[int, asyncio.Task] = {}

    def active(self, chat_id: int) -> bool:
        task = self._flows.get(chat_id)
        return task is not None and not task.done()

    async def start(self, chat_id: int, author: Author) -> asyncio.Task:
        """Begin a new flow in ``chat_id``, replacing any running one."""

        previous = self._flows.pop(chat_id, None)
        if previous is not None and not previous.done():
            logger.info("Cancelling unfinished print flow in chat %s", chat_id)
            previous.cancel()
        self._inbox.clear(chat_id)
        task = asyncio.create_task(self._guarded_run(chat_id, author))
        self._flows[chat_id] = task
        task.add_done_callback(lambda t, cid=chat_id: self._forget(cid, t))
        return task

    def _forget(self, chat_id: int, task: asyncio.Task) -> None:
        if self._flows.get(chat_id) is task:
            del self._flows[chat_id]
            dropped = self._inbox.clear(chat_id)
            if dropped:
                logger.info("Discarded %d unanswered message(s) in chat %s", dropped, chat_id)

    async def _guarded_run(self, chat_id: int, author: Author) -> Optional[str]:
        try:
            return await self.run(chat_id, author)
        except asyncio.CancelledError:
            logger.info("Print flow in chat %s was cancelled", chat_id)
            raise
        except DeliveryError as exc:
            logger.error("Abandoning print flow in chat %s: %s", chat_id, exc)
        except Exception:
            logger.exception("Print flow in chat %s failed", chat_id)
        return None

    async def run(self, chat_id: int, author: Author) -> Optional[str]:
        """Run one flow to completion and return the artifact sent.

        ``None`` is returned when the selected content type is unknown; the
        help listing is sent instead and nothing else is asked.
        """

        logger.info("Handling print command for chat %s, user %s", chat_id, author.id)
        token = uuid.uuid4().hex
        await self._messenger.send(chat_id, CHOICE_PROMPT, MODE_CHOICES, token=token)
        try:
            selection = await self._inbox.wait(chat_id, token=token)
        finally:
            await self._messenger.retire(chat_id, token)

        content_type = ContentType.parse(selection)
        if content_type is None:
            logger.warning("Unknown print mode %r chosen by user %s", selection, author.id)
            await self._send_help(chat_id)
            return None

        logger.info("User %s chose %s in chat %s", author.id, content_type.value, chat_id)
        answers = await self._collector.collect(chat_id, PROMPTS[content_type])
        output = format_artifact(
            content_type,
            author,
            answers["body"],
            answers.get("due_date"),
            now=self._clock(),
        )
        await self._messenger.send(chat_id, output)
        logger.info("Sent %s to chat %s", content_type.value, chat_id)
        return output

    async def shutdown(self) -> None:
        """Cancel every running flow and wait for them to finish."""

        tasks = [task for task in self._flows.values() if not task.done()]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        for chat_id in self._flows:
            self._inbox.clear(chat_id)
        self._flows.clear()

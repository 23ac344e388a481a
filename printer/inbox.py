"""Per-chat one-shot listeners for "the next message in this chat".

A running dialogue calls :meth:`ChatInbox.wait` and is suspended until the
gateway hands the next message for that chat to :meth:`ChatInbox.deliver`.
Only one listener exists per chat; the first delivered message wins.

Messages posted with :meth:`ChatInbox.post` while a dialogue is between two
listeners are kept and answer the next :meth:`ChatInbox.wait` of that chat.
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, Optional

logger = logging.getLogger(__name__)

__all__ = ["ChatInbox"]


@dataclass
class _Waiter:
    future: "asyncio.Future[Optional[str]]"
    token: Optional[str]


class ChatInbox:
    """Registry of pending listeners keyed by chat id."""

    def __init__(self) -> None:
        self._waiters: Dict[int, _Waiter] = {}
        self._pending: Dict[int, Deque[Optional[str]]] = {}

    def is_waiting(self, chat_id: int) -> bool:
        waiter = self._waiters.get(chat_id)
        return waiter is not None and not waiter.future.done()

    async def wait(self, chat_id: int, *, token: Optional[str] = None) -> Optional[str]:
        """Suspend until the next message for ``chat_id`` is delivered.

        A delivery tagged with a token only resolves a listener registered
        with the same ``token``. Registering a new listener for a chat cancels
        the one it replaces. A message posted earlier is returned at once.
        """

        self.cancel(chat_id)
        pending = self._pending.get(chat_id)
        if pending:
            text = pending.popleft()
            if not pending:
                del self._pending[chat_id]
            return text
        loop = asyncio.get_running_loop()
        waiter = _Waiter(loop.create_future(), token)
        self._waiters[chat_id] = waiter
        try:
            return await waiter.future
        finally:
            if self._waiters.get(chat_id) is waiter:
                del self._waiters[chat_id]

    def deliver(self, chat_id: int, text: Optional[str], *, token: Optional[str] = None) -> bool:
        """Hand ``text`` to the listener of ``chat_id``.

        Returns ``True`` when a listener consumed it.
        """

        waiter = self._waiters.get(chat_id)
        if waiter is None or waiter.future.done():
            return False
        if token is not None and token != waiter.token:
            logger.info("Ignoring stale selection for chat %s", chat_id)
            return False
        waiter.future.set_result(text)
        return True

    def post(self, chat_id: int, text: Optional[str]) -> None:
        """Deliver ``text`` now, or keep it for the next listener of ``chat_id``."""

        if self.deliver(chat_id, text):
            return
        self._pending.setdefault(chat_id, deque()).append(text)
        logger.debug("Queued message for chat %s until its next prompt", chat_id)

    def clear(self, chat_id: int) -> int:
        """Forget queued messages of ``chat_id`` and return how many there were."""
        pending = self._pending.pop(chat_id, None)
        return len(pending) if pending else 0

    def cancel(self, chat_id: int) -> bool:
        """Drop the listener of ``chat_id`` if there is one."""
        waiter = self._waiters.pop(chat_id, None)
        if waiter is None or waiter.future.done():
            return False
        waiter.future.cancel()
        logger.debug("Cancelled pending listener for chat %s", chat_id)
        return True

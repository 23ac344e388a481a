from __future__ import annotations

"""Platform-neutral entry point wiring the router, inbox and print flow."""

import logging
from datetime import datetime
from typing import Callable, Optional

from .content import Author, Inbound
from .errors import DeliveryError
from .inbox import ChatInbox
from .messenger import Messenger
from .orchestrator import PrintFlow
from .router import Command, CommandRouter

logger = logging.getLogger(__name__)

__all__ = ["PRINT_COMMAND", "PRINT_DESCRIPTION", "PrinterService"]

PRINT_COMMAND = "print"
PRINT_DESCRIPTION = "Print a note, reminder, or task"


class PrinterService:
    """Receive messages and selections for every chat.

    While a flow runs, every message in its chat is its next answer, except
    the slash form of a registered command, which replaces the running flow.
    An answer that arrives before the flow asks for it is kept until it does.
    """

    def __init__(
        self,
        messenger: Messenger,
        *,
        inbox: Optional[ChatInbox] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.inbox = inbox or ChatInbox()
        self.router = CommandRouter(messenger)
        self.flow = PrintFlow(messenger, self.inbox, self.router.send_help, clock=clock)
        self.router.register(Command(PRINT_COMMAND, PRINT_DESCRIPTION, self.flow.start))

    def _is_slash_command(self, text: Optional[str]) -> bool:
        value = (text or "").strip()
        return value.startswith("/") and self.router.match(value) is not None

    async def handle_message(self, message: Inbound) -> None:
        user_id = message.user.id if message.user else None
        logger.info(
            "Received message from chat %s, user %s: %r", message.chat_id, user_id, message.text
        )
        in_flow = self.inbox.is_waiting(message.chat_id) or self.flow.active(message.chat_id)
        if in_flow and not self._is_slash_command(message.text):
            self.inbox.post(message.chat_id, message.text)
            return
        try:
            await self.router.route(message)
        except DeliveryError as exc:
            logger.error("Could not answer chat %s: %s", message.chat_id, exc)

    def handle_selection(self, chat_id: int, payload: str, token: Optional[str]) -> bool:
        """Deliver a button selection to the flow that offered it."""

        accepted = self.inbox.deliver(chat_id, payload, token=token)
        logger.info("Selection %r in chat %s accepted=%s", payload, chat_id, accepted)
        return accepted

    async def run_command(self, keyword: str, chat_id: int, author: Author) -> None:
        command = self.router.match(keyword)
        try:
            if command is None:
                await self.router.send_help(chat_id)
                return
            logger.info("Running /%s for chat %s, user %s", command.keyword, chat_id, author.id)
            await command.handler(chat_id, author)
        except DeliveryError as exc:
            logger.error("Could not answer chat %s: %s", chat_id, exc)

    async def shutdown(self) -> None:
        await self.flow.shutdown()

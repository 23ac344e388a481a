from __future__ import annotations

"""Map inbound command text to a registered handler."""

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, Optional, Tuple

from .content import Author, Inbound
from .messenger import Messenger

logger = logging.getLogger(__name__)

__all__ = ["Command", "CommandHandler", "CommandRouter", "HELP_HEADER"]

CommandHandler = Callable[[int, Author], Awaitable[object]]

HELP_HEADER = "✨ Available Commands ✨"


@dataclass(frozen=True)
class Command:
    keyword: str
    description: str
    handler: CommandHandler


class CommandRouter:
    """Dispatch commands; anything unrecognised gets the help listing.

    Every routed message produces exactly one outbound action: either the
    matching handler runs or the help listing is sent.
    """

    def __init__(self, messenger: Messenger) -> None:
        self._messenger = messenger
        self._commands: Dict[str, Command] = {}

    @property
    def commands(self) -> Tuple[Command, ...]:
        return tuple(self._commands.values())

    def register(self, command: Command) -> None:
        keyword = self.normalize(command.keyword)
        if not keyword or keyword != command.keyword:
            raise ValueError(f"Invalid command keyword: {command.keyword!r}")
        self._commands[keyword] = command

    @staticmethod
    def normalize(text: Optional[str]) -> str:
        """Lower-case ``text`` and drop a single leading slash."""
        value = (text or "").strip().lower()
        if value.startswith("/"):
            value = value[1:]
        return value

    def match(self, text: Optional[str]) -> Optional[Command]:
        keyword = self.normalize(text)
        if not keyword:
            return None
        return self._commands.get(keyword)

    def help_text(self) -> str:
        lines = [f"• /{cmd.keyword} - {cmd.description}" for cmd in self._commands.values()]
        return f"{HELP_HEADER}\n\n" + "\n".join(lines)

    async def send_help(self, chat_id: int) -> None:
        logger.info("Sending help listing to chat %s", chat_id)
        await self._messenger.send(chat_id, self.help_text())

    async def route(self, message: Inbound) -> Optional[Command]:
        """Run the handler matching ``message`` and return its command."""

        if not message.text or message.user is None:
            await self.send_help(message.chat_id)
            return None
        command = self.match(message.text)
        if command is None:
            logger.info("No command matches %r in chat %s", message.text, message.chat_id)
            await self.send_help(message.chat_id)
            return None
        logger.info(
            "Routing /%s for chat %s, user %s", command.keyword, message.chat_id, message.user.id
        )
        await command.handler(message.chat_id, message.user)
        return command

"""Outbound side of a chat platform as seen by the dialogue code."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from .content import Choice

__all__ = ["Messenger"]


class Messenger(ABC):
    """Send text, optionally with choice buttons, to a chat.

    Implementations raise :class:`printer.errors.DeliveryError` when the
    platform rejects a message.
    """

    @abstractmethod
    async def send(
        self,
        chat_id: int,
        text: str,
        choices: Optional[Sequence[Choice]] = None,
        *,
        token: Optional[str] = None,
    ) -> None:
        """Send ``text`` to ``chat_id``.

        ``token`` identifies the flow a set of ``choices`` belongs to and is
        returned with the selection.
        """

    async def retire(self, chat_id: int, token: str) -> None:
        """Withdraw the choices sent with ``token`` once nobody waits for them."""

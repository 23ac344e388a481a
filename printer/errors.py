"""Exceptions raised by the printer bot."""

from __future__ import annotations


class PrinterBotError(Exception):
    """Base class for printer bot failures."""


class ConfigError(PrinterBotError):
    """Required configuration is missing or malformed."""


class DeliveryError(PrinterBotError):
    """An outbound message was rejected by the messaging platform."""

    def __init__(self, chat_id: int, message: str) -> None:
        super().__init__(f"Failed to deliver message to chat {chat_id}: {message}")
        self.chat_id = chat_id

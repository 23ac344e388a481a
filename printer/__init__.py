"""Collect notes, reminders and tasks through a short chat dialogue."""

from .collector import ConversationCollector
from .content import MODE_CHOICES, PROMPTS, Author, Choice, ContentType, Inbound, PromptSpec
from .errors import ConfigError, DeliveryError, PrinterBotError
from .formatter import format_artifact
from .inbox import ChatInbox
from .messenger import Messenger
from .orchestrator import PrintFlow
from .router import Command, CommandRouter
from .service import PrinterService
from .validators import is_valid_date, validate

__all__ = [
    "Author",
    "ChatInbox",
    "Choice",
    "Command",
    "CommandRouter",
    "ConfigError",
    "ContentType",
    "ConversationCollector",
    "DeliveryError",
    "Inbound",
    "MODE_CHOICES",
    "Messenger",
    "PROMPTS",
    "PrintFlow",
    "PrinterBotError",
    "PrinterService",
    "PromptSpec",
    "format_artifact",
    "is_valid_date",
    "validate",
]

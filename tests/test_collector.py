"""Tests for the prompt/answer loop."""

import asyncio

import pytest

from printer.collector import EMPTY_INPUT_TEXT, ConversationCollector
from printer.content import PROMPTS, ContentType, PromptSpec
from printer.inbox import ChatInbox
from printer.validators import is_valid_date

CHAT = 10


@pytest.fixture
def inbox() -> ChatInbox:
    return ChatInbox()


@pytest.mark.asyncio
async def test_single_prompt_answer(messenger, inbox, settle):
    collector = ConversationCollector(messenger, inbox)
    spec = PromptSpec("body", "Say something:")
    task = asyncio.create_task(collector.ask(CHAT, spec))
    await settle()

    assert messenger.texts() == ["Say something:"]
    inbox.deliver(CHAT, "hello there")
    assert await task == "hello there"


@pytest.mark.asyncio
async def test_empty_answers_never_advance(messenger, inbox, settle):
    collector = ConversationCollector(messenger, inbox)
    specs = PROMPTS[ContentType.REMINDER]
    task = asyncio.create_task(collector.collect(CHAT, specs))
    await settle()

    for empty in ("", "   ", None):
        inbox.deliver(CHAT, empty)
        await settle()
        assert messenger.last.text == f"{EMPTY_INPUT_TEXT} {specs[0].text}"
        assert not task.done()

    # Still on the first prompt: the second one was never sent.
    assert specs[1].text not in messenger.texts()
    task.cancel()
    await settle()


@pytest.mark.asyncio
async def test_invalid_answer_reprompts_with_hint(messenger, inbox, settle):
    collector = ConversationCollector(messenger, inbox)
    spec = PromptSpec("due_date", "Date?", validator=is_valid_date, format_hint="DD/MM/YYYY")
    task = asyncio.create_task(collector.ask(CHAT, spec))
    await settle()

    inbox.deliver(CHAT, "not-a-date")
    await settle()
    assert messenger.last.text == "Invalid format. Please use DD/MM/YYYY. Date?"
    assert not task.done()

    inbox.deliver(CHAT, "08/06/2024")
    assert await task == "08/06/2024"


@pytest.mark.asyncio
async def test_collect_in_order(messenger, inbox, settle):
    collector = ConversationCollector(messenger, inbox)
    specs = PROMPTS[ContentType.REMINDER]
    task = asyncio.create_task(collector.collect(CHAT, specs))
    await settle()
    assert messenger.texts() == [specs[0].text]

    inbox.deliver(CHAT, "08/06/2024")
    await settle()
    assert messenger.texts() == [specs[0].text, specs[1].text]

    inbox.deliver(CHAT, "Dentist at 3")
    answers = await task
    assert answers == {"due_date": "08/06/2024", "body": "Dentist at 3"}
    assert list(answers) == [spec.field for spec in specs]


@pytest.mark.asyncio
async def test_answer_kept_verbatim(messenger, inbox, settle):
    collector = ConversationCollector(messenger, inbox)
    task = asyncio.create_task(collector.ask(CHAT, PromptSpec("body", "Note?")))
    await settle()

    inbox.deliver(CHAT, "  Buy milk  ")
    assert await task == "  Buy milk  "

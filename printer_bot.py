from __future__ import annotations

"""Discord front end for the printer dialogue.

Gateway messages and button clicks are turned into calls on
:class:`printer.service.PrinterService`; everything the service sends goes
out through :class:`DiscordMessenger`.
"""

import logging
from typing import Any, Awaitable, Callable, Dict, Optional, Sequence, Tuple

import discord
from discord import app_commands
from discord.ext import commands

from config.settings import BotConfig
from printer.content import Author, Choice, Inbound
from printer.errors import ConfigError, DeliveryError
from printer.messenger import Messenger
from printer.router import Command
from printer.service import PrinterService

logger = logging.getLogger(__name__)

SelectionHandler = Callable[[int, str, Optional[str]], bool]


class InteractionReply:
    """Answer an interaction once, then fall back to followups."""

    def __init__(self, interaction: discord.Interaction) -> None:
        self.interaction = interaction

    def response_done(self) -> bool:
        try:
            return bool(self.interaction.response.is_done())
        except AttributeError:
            logger.debug("Interaction has no response state; answering directly")
            return False

    async def send_message(self, *args, **kwargs) -> Optional[discord.WebhookMessage]:
        """Send and return the followup message, or ``None`` for the original response."""
        if self.response_done():
            return await self.interaction.followup.send(*args, wait=True, **kwargs)
        await self.interaction.response.send_message(*args, **kwargs)
        return None


class ChoiceButton(discord.ui.Button):
    def __init__(self, choice: Choice) -> None:
        super().__init__(label=choice.label, style=discord.ButtonStyle.primary)
        self.payload = choice.payload

    async def callback(self, interaction: discord.Interaction) -> None:
        view = self.view
        if isinstance(view, ChoiceView):
            await view.select(interaction, self.payload)


class ChoiceView(discord.ui.View):
    """Buttons for one set of choices belonging to one flow."""

    def __init__(self, choices: Sequence[Choice], token: Optional[str], on_select: SelectionHandler) -> None:
        super().__init__(timeout=None)
        self.token = token
        self._on_select = on_select
        for choice in choices:
            self.add_item(ChoiceButton(choice))

    async def select(self, interaction: discord.Interaction, payload: str) -> None:
        await interaction.response.defer()
        chat_id = interaction.channel_id
        if chat_id is None:
            logger.warning("Selection %r arrived without a channel", payload)
            return
        if not self._on_select(chat_id, payload, self.token):
            return
        self.stop()
        try:
            await interaction.edit_original_response(view=None)
        except discord.HTTPException as exc:
            logger.warning("Could not remove choices in chat %s: %s", chat_id, exc)


class DiscordMessenger(Messenger):
    """Send messages to Discord channels.

    A slash command interaction bound with :meth:`bind_interaction` is
    answered by the next message for its channel; later messages go to the
    channel directly. Choice views are kept by token until :meth:`retire`.
    """

    def __init__(self, client: discord.Client) -> None:
        self._client = client
        self._channels: Dict[int, discord.abc.Messageable] = {}
        self._interactions: Dict[int, discord.Interaction] = {}
        self._views: Dict[str, Tuple[ChoiceView, Callable[..., Awaitable[Any]]]] = {}
        self.on_select: SelectionHandler = lambda chat_id, payload, token: False

    def remember(self, channel: discord.abc.Messageable) -> None:
        channel_id = getattr(channel, "id", None)
        if channel_id is not None:
            self._channels[int(channel_id)] = channel

    def bind_interaction(self, chat_id: int, interaction: discord.Interaction) -> None:
        self._interactions[chat_id] = interaction

    async def _resolve_channel(self, chat_id: int) -> discord.abc.Messageable:
        channel = self._channels.get(chat_id) or self._client.get_channel(chat_id)
        if channel is None:
            channel = await self._client.fetch_channel(chat_id)
            self._channels[chat_id] = channel  # type: ignore[assignment]
        return channel  # type: ignore[return-value]

    async def send(
        self,
        chat_id: int,
        text: str,
        choices: Optional[Sequence[Choice]] = None,
        *,
        token: Optional[str] = None,
    ) -> None:
        view = ChoiceView(choices, token, self.on_select) if choices else None
        kwargs = {"view": view} if view is not None else {}
        try:
            interaction = self._interactions.pop(chat_id, None)
            if interaction is not None:
                sent = await InteractionReply(interaction).send_message(text, **kwargs)
                edit = sent.edit if sent is not None else interaction.edit_original_response
            else:
                channel = await self._resolve_channel(chat_id)
                sent = await channel.send(text, **kwargs)
                edit = sent.edit
        except discord.HTTPException as exc:
            raise DeliveryError(chat_id, str(exc)) from exc
        if view is not None and token is not None:
            self._views[token] = (view, edit)

    async def retire(self, chat_id: int, token: str) -> None:
        """Stop the buttons sent with ``token`` and remove them from their message."""

        entry = self._views.pop(token, None)
        if entry is None:
            return
        view, edit = entry
        if view.is_finished():
            return
        view.stop()
        try:
            await edit(view=None)
        except discord.HTTPException as exc:
            logger.warning("Could not remove choices in chat %s: %s", chat_id, exc)


class PrinterBot(commands.Bot):
    def __init__(self, config: BotConfig) -> None:
        intents = discord.Intents.default()
        intents.message_content = True
        super().__init__(command_prefix=commands.when_mentioned, intents=intents)
        self.config = config
        self.messenger = DiscordMessenger(self)
        self.service = PrinterService(self.messenger)
        self.messenger.on_select = self.service.handle_selection
        logger.info("PrinterBot initialized")

    def _slash_command(self, command: Command) -> app_commands.Command:
        async def callback(interaction: discord.Interaction) -> None:
            await self.handle_slash(interaction, command.keyword)

        return app_commands.Command(
            name=command.keyword,
            description=command.description,
            callback=callback,
        )

    async def setup_hook(self) -> None:  # called before login
        for command in self.service.router.commands:
            self.tree.add_command(self._slash_command(command))
        try:
            if self.config.guild_id is not None:
                guild = discord.Object(id=self.config.guild_id)
                self.tree.copy_global_to(guild=guild)
                synced = await self.tree.sync(guild=guild)
                logger.info("Synced %d commands to guild %s", len(synced), self.config.guild_id)
            else:
                synced = await self.tree.sync()
                logger.info("Global sync requested for %d commands", len(synced))
        except discord.HTTPException as exc:
            logger.error("Command sync failed: %s", exc)

    async def on_ready(self) -> None:
        logger.info("PrinterBot started as %s", self.user)

    async def on_message(self, message: discord.Message) -> None:
        if message.author.bot:
            return
        self.messenger.remember(message.channel)
        user = Author(id=message.author.id, name=message.author.display_name)
        await self.service.handle_message(
            Inbound(chat_id=message.channel.id, user=user, text=message.content)
        )

    async def handle_slash(self, interaction: discord.Interaction, keyword: str) -> None:
        chat_id = interaction.channel_id
        if chat_id is None:
            await InteractionReply(interaction).send_message(
                "This command has to be used in a channel.", ephemeral=True
            )
            return
        user = interaction.user
        self.messenger.bind_interaction(chat_id, interaction)
        await self.service.run_command(keyword, chat_id, Author(id=user.id, name=user.display_name))

    async def close(self) -> None:
        await self.service.shutdown()
        await super().close()


def main() -> None:
    try:
        config = BotConfig.load()
    except ConfigError as exc:
        raise SystemExit(str(exc)) from exc
    discord.utils.setup_logging(level=config.log_level_value, root=True)
    logger.info("Starting printer bot (guild=%s)", config.guild_id or "global")
    bot = PrinterBot(config)
    bot.run(config.token, log_handler=None)


if __name__ == "__main__":
    main()

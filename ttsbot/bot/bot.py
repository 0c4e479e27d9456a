import logging

import discord
from discord.ext import commands

from ..core.container import ServiceContainer
from ..core.error_messages import sanitize_error
from ..core.services import SETTINGS
from .handlers import COMMANDS
from .message_handlers import handle_message, handle_voice_state_update
from .playback import GuildPlayer

logger = logging.getLogger(__name__)


def build_intents() -> discord.Intents:
    intents = discord.Intents.default()
    intents.message_content = True
    intents.voice_states = True
    intents.members = True
    return intents


class TTSBot(commands.Bot):
    """Discord bot that reads messages aloud in voice channels"""

    def __init__(self, container: ServiceContainer):
        self.container = container
        self.settings = container.get(SETTINGS)
        self.player = GuildPlayer(volume=self.settings.playback_volume)

        super().__init__(
            command_prefix=self.settings.command_prefix,
            intents=build_intents(),
            help_command=None,
        )

        for name, callback in COMMANDS.items():
            self.add_command(commands.Command(callback, name=name))

    async def on_ready(self) -> None:
        logger.info(f"{self.user} is connected to {len(self.guilds)} guilds")

    async def on_message(self, message: discord.Message) -> None:
        await self.process_commands(message)
        await handle_message(self, message)

    async def on_voice_state_update(
        self,
        member: discord.Member,
        before: discord.VoiceState,
        after: discord.VoiceState,
    ) -> None:
        await handle_voice_state_update(self, member, before, after)

    async def on_command_error(
        self, ctx: commands.Context, error: commands.CommandError
    ) -> None:
        if isinstance(error, commands.CommandNotFound):
            return
        if isinstance(error, commands.NoPrivateMessage):
            await ctx.send("This command can only be used in a server")
            return

        original = getattr(error, "original", error)
        logger.error(
            f"Command {ctx.invoked_with} from user {ctx.author.id} failed: {original}",
            exc_info=original,
        )
        await ctx.send(sanitize_error(original, context=f"running {ctx.invoked_with}"))


def create_bot(container: ServiceContainer) -> TTSBot:
    """Create the bot with all commands and event handlers registered."""
    bot = TTSBot(container)
    logger.info(f"Bot created with commands: {', '.join(sorted(COMMANDS))}")
    return bot

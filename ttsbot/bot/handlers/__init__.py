"""
Bot command handlers package.

Handlers are organized by functionality:
- core_commands.py: Basic commands (.ping)
- voice_settings_commands.py: Per-user voice options (.set, .preset, .engine)
- voice_channel_commands.py: Voice channel control (.join, .leave, .mute, .unmute, .stop)

``COMMANDS`` maps each command name to its callback and is what the bot
registers at startup.
"""

from .core_commands import ping_command
from .voice_channel_commands import (
    join_command,
    leave_command,
    mute_command,
    stop_command,
    unmute_command,
)
from .voice_settings_commands import engine_command, preset_command, set_command

COMMANDS = {
    "engine": engine_command,
    "join": join_command,
    "leave": leave_command,
    "mute": mute_command,
    "ping": ping_command,
    "preset": preset_command,
    "set": set_command,
    "stop": stop_command,
    "unmute": unmute_command,
}

__all__ = [
    "COMMANDS",
    "engine_command",
    "join_command",
    "leave_command",
    "mute_command",
    "ping_command",
    "preset_command",
    "set_command",
    "stop_command",
    "unmute_command",
]

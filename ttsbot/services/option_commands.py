"""
Option commands: ``set``, ``preset`` and ``engine``.

Each handler takes the already-split command arguments and returns the
reply text, so the Discord cog only has to forward the result. Option
errors become replies; storage errors propagate to the bot's command
error handler.
"""

import logging
from typing import Sequence

from ..domain.errors import OptionError, UnrecognizedValueError
from ..models.engine import Engine
from ..models.options import Preset, describe_options
from ..models.voice_text import VoiceTextSpeaker
from ..models.voice_vox import VoiceVoxSpeaker
from ..utils import audit_log
from .option_builder import build_options
from .option_store import OptionStore

logger = logging.getLogger(__name__)

ENGINE_CHOICES = "{" + "|".join(Engine.choices()) + "}"


def set_usage(prefix: str = ".") -> str:
    return f"`{prefix}set {ENGINE_CHOICES} [key=value...]`"


def engine_usage(prefix: str = ".") -> str:
    return f"`{prefix}engine {ENGINE_CHOICES}`"


def preset_usage() -> str:
    return f"Available presets: {', '.join(Preset.choices())}"


def describe_engine(engine: Engine) -> str:
    """Links and speaker list for an engine."""
    if engine is Engine.VOICETEXT:
        return (
            "API: https://cloud.voicetext.jp/webapi/docs/api\n"
            f"Available speakers: {', '.join(VoiceTextSpeaker.choices())}"
        )
    return (
        "Official: https://voicevox.hiroshiba.jp\n"
        "API: https://voicevox.su-shiki.com\n"
        f"Available speakers: {', '.join(VoiceVoxSpeaker.choices())}"
    )


async def set_command(
    store: OptionStore, user_id: int, args: Sequence[str], prefix: str = "."
) -> str:
    """``set {engine} key=value...``: build, persist and confirm options.

    Raises:
        StorageError: Persisting the options failed.
    """
    if not args:
        return set_usage(prefix)
    try:
        engine = Engine.from_text(args[0])
    except UnrecognizedValueError:
        return set_usage(prefix)

    try:
        options = build_options(engine, args[1:])
    except OptionError as e:
        logger.info(f"Rejected options from user {user_id}: {e}")
        return str(e)

    await store.set(user_id, options)
    audit_log.options_set(user_id, options)
    return f"Saved options: {describe_options(options)}"


async def preset_command(
    store: OptionStore, user_id: int, mention: str, args: Sequence[str]
) -> str:
    """``preset {name}``: replace the user's options with a named preset."""
    if not args:
        return preset_usage()
    try:
        preset = Preset.from_text(args[0])
    except UnrecognizedValueError:
        return preset_usage()

    options = preset.to_options()
    await store.set(user_id, options)
    audit_log.preset_set(user_id, preset, options)
    return f"Set {mention}'s preset: {preset}"


def engine_command(args: Sequence[str], prefix: str = ".") -> str:
    """``engine {name}``: describe one of the engines."""
    if not args:
        return engine_usage(prefix)
    try:
        engine = Engine.from_text(args[0])
    except UnrecognizedValueError:
        return engine_usage(prefix)
    return describe_engine(engine)

"""
Two-engine TTS client.

Routes a request to VoiceText or VOICEVOX depending on which options
variant the user has, and returns the raw audio bytes.
"""

import asyncio
import logging
from typing import List, Optional, Tuple

import aiohttp

from ..domain.errors import SynthesisFailure
from ..models.engine import Engine
from ..models.options import Options
from ..models.voice_text import VoiceTextOptions
from ..models.voice_vox import VoiceVoxOptions

logger = logging.getLogger(__name__)

VOICETEXT_API_URL = "https://api.voicetext.jp/v1/tts"
VOICEVOX_API_URL = "https://api.su-shiki.com/v2/voicevox/audio"

Params = List[Tuple[str, str]]


# ---------------------------------------------------------------------------
# Request parameters
# ---------------------------------------------------------------------------


def format_number(value: float) -> str:
    """Render a float the way the API expects: ``1`` rather than ``1.0``."""
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


def voice_text_params(text: str, options: VoiceTextOptions) -> Params:
    """Form fields for a VoiceText request.

    Emotion fields are only sent when an emotion is chosen.
    """
    params = [
        ("text", text),
        ("speaker", str(options.speaker)),
        ("format", str(options.format)),
        ("pitch", str(options.pitch)),
        ("speed", str(options.speed)),
        ("volume", str(options.volume)),
    ]
    if options.emotion is not None:
        params.append(("emotion", str(options.emotion)))
        params.append(("emotion_level", str(options.emotion_level)))
    return params


def voice_vox_params(text: str, options: VoiceVoxOptions, api_key: str) -> Params:
    """Query parameters for a VOICEVOX request."""
    return [
        ("text", text),
        ("key", api_key),
        ("speaker", str(options.speaker.speaker_id)),
        ("pitch", format_number(options.pitch)),
        ("intonationScale", format_number(options.intonation_scale)),
        ("speed", format_number(options.speed)),
    ]


# ---------------------------------------------------------------------------
# Engine clients
# ---------------------------------------------------------------------------


async def _read_audio(resp: aiohttp.ClientResponse, engine: Engine) -> bytes:
    if resp.status != 200:
        error_text = await resp.text()
        raise SynthesisFailure(
            str(engine), f"API returned {resp.status}: {error_text[:200]}"
        )
    return await resp.read()


class VoiceTextClient:
    """VoiceText Web API (HTTP basic auth, form POST)."""

    def __init__(self, api_key: str, url: str = VOICETEXT_API_URL) -> None:
        self._api_key = api_key
        self._url = url

    async def request(
        self, session: aiohttp.ClientSession, text: str, options: VoiceTextOptions
    ) -> bytes:
        async with session.post(
            self._url,
            data=voice_text_params(text, options),
            auth=aiohttp.BasicAuth(self._api_key, ""),
        ) as resp:
            return await _read_audio(resp, Engine.VOICETEXT)


class VoiceVoxClient:
    """su-shiki VOICEVOX web API (API key in the query string)."""

    def __init__(self, api_key: str, url: str = VOICEVOX_API_URL) -> None:
        self._api_key = api_key
        self._url = url

    async def request(
        self, session: aiohttp.ClientSession, text: str, options: VoiceVoxOptions
    ) -> bytes:
        async with session.get(
            self._url, params=voice_vox_params(text, options, self._api_key)
        ) as resp:
            return await _read_audio(resp, Engine.VOICEVOX)


# ---------------------------------------------------------------------------
# TTSClient
# ---------------------------------------------------------------------------


class TTSClient:
    """Dispatches synthesis requests to the engine matching the options."""

    def __init__(
        self,
        voicetext_api_key: str,
        voicevox_api_key: str,
        timeout: float = 30.0,
    ) -> None:
        self.voice_text = VoiceTextClient(voicetext_api_key)
        self.voice_vox = VoiceVoxClient(voicevox_api_key)
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: Optional[aiohttp.ClientSession] = None

    # -- Factory --

    @classmethod
    def from_settings(cls, settings) -> "TTSClient":
        """Create a client from application settings."""
        return cls(
            voicetext_api_key=settings.voicetext_api_key,
            voicevox_api_key=settings.voicevox_api_key,
            timeout=settings.http_timeout,
        )

    # -- Synthesis --

    async def request(self, text: str, options: Options) -> bytes:
        """Synthesize ``text`` with the user's options.

        Raises:
            SynthesisFailure: The API rejected the request or was unreachable.
        """
        session = self._get_session()
        try:
            if isinstance(options, VoiceTextOptions):
                audio = await self.voice_text.request(session, text, options)
            elif isinstance(options, VoiceVoxOptions):
                audio = await self.voice_vox.request(session, text, options)
            else:
                raise TypeError(f"Not a TTS options value: {type(options).__name__}")
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise SynthesisFailure(str(options.engine), str(e) or type(e).__name__) from e

        logger.info(
            f"{options.engine} TTS: {len(audio)} bytes for {len(text)} characters"
        )
        return audio

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
        return self._session

    async def close(self) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

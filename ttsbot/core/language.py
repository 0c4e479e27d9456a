"""Decides whether a chat message should be read aloud."""

import logging
from typing import Iterable, Optional

from lingua import Language, LanguageDetector, LanguageDetectorBuilder

logger = logging.getLogger(__name__)

_CANDIDATES = (Language.ENGLISH, Language.JAPANESE)


class LanguageGate:
    """Only lets through text detected as Japanese.

    Detection is restricted to English and Japanese, so romaji and URLs
    are classified as English and skipped.
    """

    def __init__(
        self,
        detector: Optional[LanguageDetector] = None,
        languages: Iterable[Language] = _CANDIDATES,
        target: Language = Language.JAPANESE,
    ) -> None:
        if detector is None:
            detector = LanguageDetectorBuilder.from_languages(*languages).build()
            logger.info("Language detector ready")
        self._detector = detector
        self._target = target

    def detect(self, text: str) -> Optional[Language]:
        if not text or not text.strip():
            return None
        return self._detector.detect_language_of(text)

    def should_speak(self, text: str) -> bool:
        return self.detect(text) == self._target

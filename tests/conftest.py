import logging
import logging.handlers
import os

import pytest

# Set test environment variables
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["DISCORD_TOKEN"] = "test-discord-token"
os.environ["VOICETEXT_API_KEY"] = "test-voicetext-key"
os.environ["VOICEVOX_API_KEY"] = "test-voicevox-key"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(autouse=True)
def _strip_file_handlers():
    """Remove file handlers from root logger so tests never write to logs/app.log."""
    root = logging.getLogger()
    saved = [h for h in root.handlers if isinstance(h, logging.FileHandler)]
    for h in saved:
        root.removeHandler(h)
    yield
    for h in list(root.handlers):
        if isinstance(h, logging.FileHandler):
            root.removeHandler(h)
    for h in saved:
        root.addHandler(h)


@pytest.fixture(autouse=True)
def _audit_log_in_tmp(tmp_path):
    """Send audit records to a temporary file instead of logs/audit.log."""
    audit = logging.getLogger("audit")
    saved = list(audit.handlers)
    for h in saved:
        audit.removeHandler(h)

    handler = logging.FileHandler(tmp_path / "audit.log", encoding="utf-8")
    audit.addHandler(handler)
    audit.setLevel(logging.INFO)
    audit.propagate = False
    yield tmp_path / "audit.log"

    for h in list(audit.handlers):
        audit.removeHandler(h)
        h.close()
    for h in saved:
        audit.addHandler(h)


@pytest.fixture
def audit_log_path(_audit_log_in_tmp):
    return _audit_log_in_tmp


@pytest.fixture
async def option_store():
    """An OptionStore over a fresh in-memory SQLite database."""
    from ttsbot.services.option_store import OptionStore

    store = await OptionStore.connect("sqlite+aiosqlite:///:memory:")
    yield store
    await store.close()

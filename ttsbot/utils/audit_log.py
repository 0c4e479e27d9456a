"""
Audit trail of voice option changes.

Each ``.set`` or ``.preset`` that reached the database leaves one line in
``logs/audit.log``:

    event=options_set | user_id=42 | engine=voicevox | speaker=ずんだもん | speed=1.2

Only fields that differ from the engine's defaults are written, so a line
shows what the user actually chose. The file handler is installed by
``setup_logging`` when file logging is enabled; without it nothing is
written.
"""

import logging
import logging.handlers
from pathlib import Path
from typing import Any, Dict

from ..models.options import Options, Preset, engine_of

AUDIT_LOGGER = "audit"
RETENTION_DAYS = 90

logger = logging.getLogger(AUDIT_LOGGER)
logger.setLevel(logging.INFO)
logger.propagate = False


def install_audit_handler(logs_dir: Path) -> None:
    """Write audit records to ``logs_dir/audit.log``, rotated daily."""
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handler = logging.handlers.TimedRotatingFileHandler(
        logs_dir / "audit.log",
        when="midnight",
        backupCount=RETENTION_DAYS,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter("%(asctime)s - AUDIT - %(message)s"))
    logger.addHandler(handler)


def _chosen_fields(options: Options) -> Dict[str, Any]:
    defaults = type(options).model_fields
    chosen = {}
    for name, value in options.model_dump(mode="json", exclude_none=True).items():
        if name == "speaker" or value != defaults[name].default:
            chosen[name] = value
    return chosen


def _record(event: str, user_id: int, **fields: Any) -> None:
    parts = [f"event={event}", f"user_id={user_id}"]
    parts.extend(f"{key}={value}" for key, value in fields.items())
    logger.info(" | ".join(parts))


def options_set(user_id: int, options: Options) -> None:
    """Record options saved with ``.set``."""
    _record(
        "options_set", user_id, engine=str(engine_of(options)), **_chosen_fields(options)
    )


def preset_set(user_id: int, preset: Preset, options: Options) -> None:
    """Record a preset saved with ``.preset``."""
    _record(
        "preset_set",
        user_id,
        preset=str(preset),
        engine=str(engine_of(options)),
        **_chosen_fields(options),
    )

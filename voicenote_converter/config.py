"""Configuration constants, voice encoding parameters, and .env loading.

WHY: Centralizes all configurable values so they are easy to find,
update, and override. Accepted audio extensions and encoder settings are
plain data, not buried in the ffmpeg call, so they can be changed
without touching the pipeline.

HOW: python-dotenv loads the .env file on import. Constants are defined
as module-level sets, ints, and strings. The load_bot_token() function
provides a clear error when the token is missing.

RULES:
- AUDIO_EXTENSIONS lists document extensions treated as audio (lowercase, with dot)
- Voice output is always Opus/Ogg, 48 kbit/s, mono, 48 kHz, no video
- BOT_TOKEN is loaded from .env via python-dotenv, never hardcoded
- Operational defaults can be overridden via environment variables
"""

from __future__ import annotations

import os
import tempfile
from typing import Optional

from dotenv import load_dotenv

from voicenote_converter.core.errors import ConfigurationError

# Load .env from the project root (where the bot is started from)
load_dotenv()

# ---------------------------------------------------------------------------
# Accepted input
# ---------------------------------------------------------------------------

AUDIO_EXTENSIONS: set[str] = {
    ".mp3", ".wav", ".m4a", ".flac", ".aac", ".ogg", ".oga",
}
"""Document extensions accepted as audio even without an audio/* MIME type."""

AUDIO_MIME_PREFIX = "audio/"

DEFAULT_INPUT_EXTENSION = ".tmp"
"""Temp-file extension used when the attachment has no usable filename."""

# ---------------------------------------------------------------------------
# Voice message encoding
# ---------------------------------------------------------------------------

VOICE_CODEC = "libopus"
VOICE_BITRATE = "48k"
VOICE_CHANNELS = 1
VOICE_SAMPLE_RATE = 48000
VOICE_CONTAINER = "ogg"
VOICE_EXTENSION = ".ogg"

# ---------------------------------------------------------------------------
# Runtime configuration
# ---------------------------------------------------------------------------

TMP_DIR_NAME = "audio-tools-bot"

FFMPEG_BINARY = os.getenv("FFMPEG_BINARY", "ffmpeg")
VOICE_BOT_TMP_DIR = os.getenv(
    "VOICE_BOT_TMP_DIR", os.path.join(tempfile.gettempdir(), TMP_DIR_NAME)
)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def load_download_timeout() -> Optional[float]:
    """Read DOWNLOAD_TIMEOUT_S; unset or empty means no timeout at all."""
    raw = os.getenv("DOWNLOAD_TIMEOUT_S", "").strip()
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(
            "DOWNLOAD_TIMEOUT_S must be a number of seconds, got {!r}".format(raw)
        )
    return value if value > 0 else None


def load_bot_token() -> str:
    """Load the Telegram bot token from the environment.

    WHY: The token is required to talk to the Bot API at all. Loading it
    from the environment (via .env) keeps it out of source code.

    HOW: Reads BOT_TOKEN from os.environ (populated by python-dotenv).

    RULES:
    - Raises ConfigurationError if the token is missing or empty
    - Never returns a default/placeholder value
    """
    token = os.getenv("BOT_TOKEN", "").strip()
    if not token:
        raise ConfigurationError(
            "BOT_TOKEN is not set. "
            "Add it to the .env file or export it in the environment."
        )
    return token

"""Attachment classification and the per-message AudioRequest.

WHY: Telegram delivers audio two ways: as a proper audio attachment, or
as a generic document (people drag .flac files into the chat). The bot
must pick out the documents that are really audio and leave the rest
(PDFs, images) to other handlers.

HOW: is_audio_document() checks the MIME type first and falls back to
the filename extension. AudioRequest bundles what the pipeline needs
from one message: the file reference, a filename hint, and the trim.

RULES:
- MIME type starting with "audio/" is enough, whatever the extension
- Otherwise the extension must be in config.AUDIO_EXTENSIONS (case-insensitive)
- A missing filename hint yields the ".tmp" extension for the input temp file
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from voicenote_converter.config import (
    AUDIO_EXTENSIONS,
    AUDIO_MIME_PREFIX,
    DEFAULT_INPUT_EXTENSION,
)
from voicenote_converter.core.timecodes import TrimRange


@dataclass(frozen=True)
class AudioRequest:
    """One inbound audio conversion, alive for the duration of one message.

    RULES:
    - file_id: platform file reference, resolved to a URL by the chat client
    - filename_hint: original filename (or the unique file id), used only
      for the temp-file extension
    - trim: optional TrimRange parsed from the caption
    """

    file_id: str
    filename_hint: Optional[str] = None
    trim: Optional[TrimRange] = None

    @property
    def input_extension(self) -> str:
        return input_extension_for(self.filename_hint)


def input_extension_for(filename_hint: Optional[str]) -> str:
    """Return the extension (with dot) for the downloaded input temp file."""
    ext = os.path.splitext(filename_hint or "")[1]
    return ext or DEFAULT_INPUT_EXTENSION


def has_audio_extension(filename: Optional[str]) -> bool:
    """Check if a filename ends with one of the accepted audio extensions.

    RULES:
    - Extension check is case-insensitive
    - No filename / no extension → False
    """
    if not filename:
        return False
    ext = os.path.splitext(filename)[1].lower()
    return ext in AUDIO_EXTENSIONS


def is_audio_document(mime_type: Optional[str], file_name: Optional[str]) -> bool:
    """Decide whether a document attachment should be converted."""
    if mime_type and mime_type.lower().startswith(AUDIO_MIME_PREFIX):
        return True
    return has_audio_extension(file_name)

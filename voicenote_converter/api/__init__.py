"""HTTP download package — fetches chat attachments to local temp files.

WHY: The Bot API hands out a file URL; the bytes still have to be pulled
down before ffmpeg can read them. This package keeps all httpx usage in
one place.

HOW: Uses httpx.AsyncClient with a streamed GET so large audio files are
written chunk by chunk instead of being held in memory.

RULES:
- All HTTP calls go through HttpDownloader (no direct httpx usage elsewhere)
- HTTP and filesystem failures surface as DownloadError
- File URLs embed the bot token and are never logged
"""

from voicenote_converter.api.downloader import HttpDownloader

__all__ = ["HttpDownloader"]

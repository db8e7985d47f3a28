"""Voicenote Converter — turns audio attachments into chat voice messages.

WHY: Chat clients play voice messages inline, but only when the audio is
Opus in an Ogg container at voice-friendly settings. Users send mp3, m4a,
flac and friends; this package converts them (optionally trimmed) and
sends them back as proper voice messages.

HOW: Three-stage pipeline: fetch (httpx download of the attachment),
transcode (ffmpeg subprocess), reply (python-telegram-bot). The timecode
parser in core/ decides the optional trim window from the caption.

RULES:
- Each inbound message is one independent request; no shared state
- Temp files are always removed, whatever the outcome
- Timecodes are seconds on both sides of the colon ("0:40" = 0s to 40s)
"""

__version__ = "0.1.0"

"""Core request model, timecode parsing and temp-file handling.

WHY: The core package holds the pieces of the converter that do not talk
to the outside world: the trim-range parser, attachment classification,
the request dataclass, the tagged error types, and the temp workspace.
Everything here is testable without a bot token, network, or ffmpeg.

HOW: timecodes.py turns caption text into a TrimRange, media.py decides
whether an attachment is audio and builds AudioRequest objects,
errors.py defines the ErrorKind-tagged exceptions, workspace.py owns the
per-process temp directory.

RULES:
- No imports of python-telegram-bot, httpx, or subprocess in this package
- Modules here must not import voicenote_converter.core at package level
  (config.py imports core.errors; keep this __init__ import-free)
"""

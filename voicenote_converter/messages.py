"""User-facing message texts and small formatting helpers.

WHY: The same replies are sent from the request service and the bot's
global error handler. Keeping the wording here means one place to edit
(or translate) what users see.

RULES:
- Texts are plain strings, no platform markup
- The timecode hint must explain that both numbers are seconds
"""

from __future__ import annotations

from typing import Optional

from voicenote_converter.core.timecodes import FORMAT_HINT_EXAMPLE, TrimRange

START_GREETING = "Send me an audio file and I will return it as a voice message."

TIMECODE_FORMAT_HINT = (
    'Could not understand the timecodes. Use the format "{}", '
    "where both numbers are seconds: start and end."
).format(FORMAT_HINT_EXAMPLE)

CONVERSION_FAILED = "Could not process the file. Please try again later."

UNEXPECTED_ERROR = "Something went wrong. Please try again later."

READY_LOG_LINE = "Bot initialized and ready to convert audio"


def describe_trim(trim: Optional[TrimRange]) -> str:
    """Human-readable description of a trim window, for logs and the CLI."""
    if trim is None:
        return "full length"
    if trim.end is None:
        return "from {}s to the end".format(trim.start)
    return "{}s to {}s ({}s)".format(trim.start, trim.end, trim.duration)

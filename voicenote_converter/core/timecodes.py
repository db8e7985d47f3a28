"""Trim-range extraction from free-form caption text.

WHY: Users ask for a fragment of the audio by typing it in the caption,
"skip to 0:40 please", "12 : 345". The converter needs a validated start
and end before it spends time downloading and encoding.

HOW: A single regular expression finds the first standalone pair of
1–4 digit numbers around a colon. Both numbers are seconds. The pair is
validated (end must exceed start) and returned as a TrimRange.

RULES:
- No timecodes in the text is not an error: return None (full-length convert)
- Only the first matching pair is used; later pairs are ignored
- "0:40" means 0s → 40s, NOT 0 minutes 40 seconds
- end <= start raises TimecodeFormatError before any work starts
- Digits are ASCII only; longer digit runs ("12345:6") do not match
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from voicenote_converter.core.errors import TimecodeFormatError

TIMECODE_PATTERN = re.compile(r"\b(\d{1,4})\s*:\s*(\d{1,4})\b", re.ASCII)

FORMAT_HINT_EXAMPLE = "0:40"


@dataclass(frozen=True)
class TrimRange:
    """The slice of the source audio to keep, in whole seconds.

    RULES:
    - start >= 0
    - end is None (keep until the end) or strictly greater than start
    """

    start: int
    end: Optional[int] = None

    @property
    def duration(self) -> Optional[int]:
        """Length of the kept slice in seconds, or None when open-ended."""
        if self.end is None:
            return None
        return self.end - self.start


def parse_timecodes(raw_text: Optional[str]) -> Optional[TrimRange]:
    """Parse the first ``start:end`` seconds pair out of ``raw_text``.

    WHY: The trim window is optional, but when the user writes one it has
    to make sense. A backwards range is reported, not ignored.

    HOW: Searches with TIMECODE_PATTERN, converts both groups to int and
    checks ordering.

    RULES:
    - Empty/None text or no match → None
    - Returns TrimRange(start, end) with exactly the parsed integers
    - Raises TimecodeFormatError("could not parse ...") on a bad number
    - Raises TimecodeFormatError("end must exceed start") when end <= start
    """
    if not raw_text:
        return None

    match = TIMECODE_PATTERN.search(raw_text)
    if match is None:
        return None

    try:
        start = int(match.group(1))
        end = int(match.group(2))
    except ValueError:
        raise TimecodeFormatError("could not parse timecodes as numbers")

    if start < 0 or end <= start:
        raise TimecodeFormatError("end must exceed start")

    return TrimRange(start=start, end=end)


def extract_trim_range(caption: Optional[str], text: Optional[str] = None) -> Optional[TrimRange]:
    """Parse timecodes from a message, preferring the caption over the body text.

    Attachments carry their description in the caption; plain messages
    only have text. Whichever is non-empty first is parsed.
    """
    return parse_timecodes(caption or text or "")

"""ffmpeg invocation for voice-message encoding.

WHY: Encoding to Opus/Ogg at voice settings and cutting a time window are
exactly what ffmpeg is for. This module shells out to it rather than
re-implementing any codec work.

HOW: build_voice_command() produces the argument vector; the
FfmpegTranscoder runs it with asyncio.create_subprocess_exec and waits
for it to finish. One awaited call per request, returning the output
path or raising TranscodeError.

RULES:
- Start time is an input seek ("-ss" before "-i"); end becomes "-t <end - start>"
- Output is always libopus, 48k, mono, 48000 Hz, no video, ogg container
- A non-positive trim duration is rejected before ffmpeg is started
- stderr is captured and its tail attached to TranscodeError for the logs
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import List, Optional

from voicenote_converter.config import (
    FFMPEG_BINARY,
    VOICE_BITRATE,
    VOICE_CHANNELS,
    VOICE_CODEC,
    VOICE_CONTAINER,
    VOICE_SAMPLE_RATE,
)
from voicenote_converter.core.errors import TranscodeError
from voicenote_converter.core.timecodes import TrimRange

logger = logging.getLogger(__name__)

_STDERR_TAIL_CHARS = 4000


def build_voice_command(
    input_path: Path,
    output_path: Path,
    trim: Optional[TrimRange] = None,
    binary: str = FFMPEG_BINARY,
) -> List[str]:
    """Build the ffmpeg argument vector for one conversion."""
    cmd = [binary, "-y"]

    if trim is not None:
        duration = trim.duration
        if duration is not None and duration <= 0:
            raise TranscodeError(
                "Invalid trim interval: {}s to {}s".format(trim.start, trim.end)
            )
        cmd += ["-ss", str(trim.start)]

    cmd += ["-i", str(input_path)]

    if trim is not None and trim.duration is not None:
        cmd += ["-t", str(trim.duration)]

    cmd += [
        "-acodec", VOICE_CODEC,
        "-b:a", VOICE_BITRATE,
        "-ac", str(VOICE_CHANNELS),
        "-ar", str(VOICE_SAMPLE_RATE),
        "-vn",
        "-f", VOICE_CONTAINER,
        str(output_path),
    ]
    return cmd


class FfmpegTranscoder:
    """Runs ffmpeg as a subprocess and reports success or a TranscodeError."""

    def __init__(self, binary: str = FFMPEG_BINARY) -> None:
        self.binary = binary

    async def transcode(
        self,
        input_path: Path,
        output_path: Path,
        trim: Optional[TrimRange] = None,
    ) -> Path:
        """Encode ``input_path`` into a voice-ready ogg at ``output_path``.

        RULES:
        - Returns output_path on exit code 0
        - Missing binary → TranscodeError with returncode None
        - Non-zero exit → TranscodeError with returncode and stderr tail
        """
        cmd = build_voice_command(input_path, output_path, trim, binary=self.binary)
        logger.debug("Running %s", " ".join(cmd))

        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise TranscodeError(
                "Could not start {}: {}".format(self.binary, exc)
            ) from exc

        _, stderr = await proc.communicate()

        if proc.returncode != 0:
            tail = (stderr or b"").decode(errors="ignore")[-_STDERR_TAIL_CHARS:]
            raise TranscodeError(
                "ffmpeg exited with code {}".format(proc.returncode),
                returncode=proc.returncode,
                stderr=tail,
            )

        return output_path

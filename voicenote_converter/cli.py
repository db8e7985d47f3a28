"""Command-line interface for converting a local file to a voice-ready ogg.

WHY: Checking what the bot will send (trim window, encoder settings)
should not require a Telegram round trip. The CLI runs the same timecode
parser and the same ffmpeg command on a file already on disk.

HOW: Uses argparse for the input path, optional output path and trim
text. Runs the transcoder via asyncio.run(). Status lines go to stderr.

RULES:
- --trim takes the same text users put in captions ("0:40" = 0s to 40s)
- Default output is <input stem>.ogg next to the input
  (<stem>.voice.ogg when the input is already .ogg)
- Any error prints "Error: ..." to stderr and exits with status 1;
  ffmpeg failures include the last stderr line
- A failed transcode removes the partial output file
- Ctrl+C exits with status 130
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import List, Optional

from voicenote_converter.config import FFMPEG_BINARY, VOICE_EXTENSION
from voicenote_converter.core.errors import TranscodeError, VoiceConverterError
from voicenote_converter.core.timecodes import parse_timecodes
from voicenote_converter.ffmpeg import FfmpegTranscoder
from voicenote_converter.messages import describe_trim


def _status(msg: str) -> None:
    """Print a status message to stderr (keeps stdout clean for piping)."""
    print(msg, file=sys.stderr, flush=True)


def _resolve_output_path(input_path: Path, output: Optional[str]) -> Path:
    if output:
        return Path(output)
    candidate = input_path.with_suffix(VOICE_EXTENSION)
    if candidate == input_path:
        candidate = input_path.with_name(input_path.stem + ".voice" + VOICE_EXTENSION)
    return candidate


async def _run(args: argparse.Namespace) -> Path:
    input_path = Path(args.input)
    if not input_path.is_file():
        raise FileNotFoundError("File not found: {}".format(input_path))

    trim = parse_timecodes(args.trim)
    if args.trim and trim is None:
        _status("No timecodes found in {!r}; converting full length".format(args.trim))

    output_path = _resolve_output_path(input_path, args.output)
    _status("Converting {} ({})...".format(input_path.name, describe_trim(trim)))

    transcoder = FfmpegTranscoder(binary=args.ffmpeg)
    try:
        await transcoder.transcode(input_path, output_path, trim)
    except TranscodeError:
        # ffmpeg -y truncates the target before failing
        if output_path.exists():
            output_path.unlink()
        raise

    _status("Saved: {}".format(output_path))
    return output_path


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="voicenote-convert",
        description="Convert an audio file to an Opus/Ogg voice message.",
    )
    parser.add_argument("input", help="Path to the audio file to convert")
    parser.add_argument(
        "-o", "--output",
        default=None,
        help="Output path (default: <input stem>.ogg next to the input)",
    )
    parser.add_argument(
        "--trim",
        default=None,
        help='Trim window as "start:end" in seconds, e.g. "0:40"',
    )
    parser.add_argument(
        "--ffmpeg",
        default=FFMPEG_BINARY,
        help="ffmpeg binary to use (default: %(default)s)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    try:
        asyncio.run(_run(args))
    except KeyboardInterrupt:
        _status("Interrupted")
        sys.exit(130)
    except VoiceConverterError as e:
        print("Error: {}".format(e), file=sys.stderr)
        sys.exit(1)
    except FileNotFoundError as e:
        print("Error: {}".format(e), file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()

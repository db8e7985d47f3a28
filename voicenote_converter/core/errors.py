"""Tagged error types shared by every stage of the conversion pipeline.

WHY: The request handler has to tell a user typo in the timecodes apart
from a broken download or a crashed encoder. The first gets a format
hint, the rest get an apology. Branching on a kind tag keeps that
decision in one place instead of a ladder of isinstance checks.

HOW: Every domain error derives from VoiceConverterError and carries an
ErrorKind. Subclasses fix their kind, so raising sites only supply the
human-readable message.

RULES:
- Every raised domain error has exactly one ErrorKind
- message is user-safe text; details of the cause go in __cause__
"""

from __future__ import annotations

import enum


class ErrorKind(str, enum.Enum):
    """Category of a pipeline failure.

    RULES:
    - configuration: fatal at startup (missing token, bad env value)
    - timecode_format: user input problem, reported with a format hint
    - download / transcode / reply: external-system failures
    """

    CONFIGURATION = "configuration"
    TIMECODE_FORMAT = "timecode_format"
    DOWNLOAD = "download"
    TRANSCODE = "transcode"
    REPLY = "reply"


class VoiceConverterError(Exception):
    """Base class for all errors raised by voicenote_converter.

    Subclasses fix ``kind`` as a class attribute; raising the base class
    directly requires passing one.
    """

    kind: ErrorKind

    def __init__(self, message: str, kind: ErrorKind | None = None) -> None:
        if kind is not None:
            self.kind = kind
        self.message = message
        super().__init__(message)


class ConfigurationError(VoiceConverterError):
    """Raised when required configuration is missing or malformed."""

    kind = ErrorKind.CONFIGURATION


class TimecodeFormatError(VoiceConverterError):
    """Raised when caption timecodes are present but not a valid range.

    WHY: A caption like "40:10" clearly means to trim, but the range is
    backwards. Silently converting the full file would surprise the user,
    so the request is rejected before anything is downloaded.

    RULES:
    - message is the human-readable reason ("end must exceed start", ...)
    """

    kind = ErrorKind.TIMECODE_FORMAT


class DownloadError(VoiceConverterError):
    """Raised when the attachment cannot be resolved or fetched."""

    kind = ErrorKind.DOWNLOAD


class TranscodeError(VoiceConverterError):
    """Raised when ffmpeg cannot be started or exits with a failure.

    HOW: Carries the ffmpeg return code (None if it never started) and a
    tail of its stderr for the logs.
    """

    kind = ErrorKind.TRANSCODE

    def __init__(self, message: str, returncode: int | None = None, stderr: str = "") -> None:
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)

    def __str__(self) -> str:
        lines = self.stderr.strip().splitlines()
        if lines:
            return "{}: {}".format(self.message, lines[-1])
        return self.message


class ReplyError(VoiceConverterError):
    """Raised when the finished voice message cannot be delivered."""

    kind = ErrorKind.REPLY

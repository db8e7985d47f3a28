"""Per-message conversion service: parse → download → transcode → reply → cleanup.

WHY: The steps for one audio message are the same whatever chat platform
delivered it. Putting them in an explicitly constructed service (instead
of module-level bot and temp-dir globals) lets tests run the whole
pipeline with fake collaborators and no network.

HOW: VoiceConverterService is built from a TempWorkspace, an
HttpDownloader and an FfmpegTranscoder. The chat side is reached through
the ReplyChannel protocol, implemented by the Telegram adapter.
handle_message() runs one request and returns a ProcessingOutcome.

RULES:
- Timecodes are validated before any download or ffmpeg work
- TIMECODE_FORMAT errors get the format hint; every other failure gets
  one generic apology and is logged with its traceback
- Failures never propagate past handle_message()
- Both temp files are removed on every exit path
- No retries, no timeouts beyond what the downloader was configured with
"""

from __future__ import annotations

import enum
import logging
from pathlib import Path
from typing import Optional, Protocol

from voicenote_converter import messages
from voicenote_converter.api.downloader import HttpDownloader
from voicenote_converter.config import VOICE_BOT_TMP_DIR, load_download_timeout
from voicenote_converter.core.errors import ErrorKind, VoiceConverterError
from voicenote_converter.core.media import AudioRequest
from voicenote_converter.core.timecodes import extract_trim_range
from voicenote_converter.core.workspace import TempWorkspace
from voicenote_converter.ffmpeg import FfmpegTranscoder

logger = logging.getLogger(__name__)


class ProcessingOutcome(str, enum.Enum):
    """Result of handling one inbound audio message."""

    CONVERTED = "converted"
    INVALID_TIMECODES = "invalid_timecodes"
    FAILED = "failed"


class ReplyChannel(Protocol):
    """The conversation an audio message came from.

    RULES:
    - resolve_file_url raises DownloadError when the file cannot be resolved
    - send_recording_action / reply_voice raise ReplyError on delivery failure
    """

    async def resolve_file_url(self, file_id: str) -> str: ...

    async def send_recording_action(self) -> None: ...

    async def reply_voice(self, path: Path) -> None: ...

    async def reply_text(self, text: str) -> None: ...


class VoiceConverterService:
    """Orchestrates one audio-to-voice conversion per inbound message."""

    def __init__(
        self,
        workspace: TempWorkspace,
        downloader: HttpDownloader,
        transcoder: FfmpegTranscoder,
    ) -> None:
        self.workspace = workspace
        self.downloader = downloader
        self.transcoder = transcoder

    @classmethod
    def from_config(cls) -> VoiceConverterService:
        """Build a service from environment configuration.

        Raises ConfigurationError when DOWNLOAD_TIMEOUT_S is malformed.
        """
        return cls(
            workspace=TempWorkspace(VOICE_BOT_TMP_DIR),
            downloader=HttpDownloader(timeout=load_download_timeout()),
            transcoder=FfmpegTranscoder(),
        )

    async def handle_message(
        self,
        channel: ReplyChannel,
        file_id: str,
        filename_hint: Optional[str] = None,
        caption: Optional[str] = None,
        text: Optional[str] = None,
    ) -> ProcessingOutcome:
        """Convert one audio attachment and reply in the same conversation.

        WHY: This is the request boundary: the chat layer calls it and
        must never see an exception from a single bad file.

        HOW: Parses the trim window, runs process(), and maps any
        VoiceConverterError by its kind to the right user reply.

        RULES:
        - Returns CONVERTED only after the voice reply was delivered
        - Returns INVALID_TIMECODES without touching the network or disk
        - Returns FAILED for everything else, after one apology message
        """
        try:
            trim = extract_trim_range(caption, text)
            request = AudioRequest(file_id=file_id, filename_hint=filename_hint, trim=trim)
            logger.info(
                "Converting %s (%s)", filename_hint or file_id, messages.describe_trim(trim)
            )
            await self.process(request, channel)
        except VoiceConverterError as exc:
            if exc.kind is ErrorKind.TIMECODE_FORMAT:
                logger.info("Rejected timecodes for %s: %s", file_id, exc.message)
                await self._reply_safely(channel, messages.TIMECODE_FORMAT_HINT)
                return ProcessingOutcome.INVALID_TIMECODES
            logger.error(
                "Conversion of %s failed (%s): %s", file_id, exc.kind.value, exc.message,
                exc_info=exc,
            )
        except Exception:
            logger.exception("Unexpected error while converting %s", file_id)
        else:
            return ProcessingOutcome.CONVERTED

        await self._reply_safely(channel, messages.CONVERSION_FAILED)
        return ProcessingOutcome.FAILED

    async def process(self, request: AudioRequest, channel: ReplyChannel) -> Path:
        """Download, transcode and send one request; temp files never outlive it.

        Errors propagate to the caller unchanged. Returns the (already
        deleted) output path so callers can log it.
        """
        with self.workspace.request_files(request.input_extension) as (input_path, output_path):
            url = await channel.resolve_file_url(request.file_id)
            await self.downloader.download(url, input_path)

            await channel.send_recording_action()
            await self.transcoder.transcode(input_path, output_path, request.trim)

            await channel.reply_voice(output_path)
        return output_path

    async def _reply_safely(self, channel: ReplyChannel, text: str) -> None:
        try:
            await channel.reply_text(text)
        except Exception:
            logger.exception("Failed to send reply to the conversation")

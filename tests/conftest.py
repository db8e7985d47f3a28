"""Shared test fixtures for the voicenote_converter test suite.

WHY: The service, bot and workspace tests all need a temp workspace, a
fake chat conversation and stand-ins for the downloader and ffmpeg.
Centralizing them here keeps each test focused on one behavior.

HOW: Fixtures build a TempWorkspace under pytest's tmp_path, a MagicMock
reply channel with AsyncMock methods, and AsyncMock collaborators whose
side effects create the files the real ones would.

RULES:
- No fixture touches the network or runs ffmpeg
- Fake collaborators write real files so cleanup can be asserted
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from voicenote_converter.core.workspace import TempWorkspace
from voicenote_converter.service import VoiceConverterService

FAKE_FILE_URL = "https://api.telegram.org/file/bot123:ABC/music/file_7.mp3"


@pytest.fixture
def workspace(tmp_path):
    """A TempWorkspace rooted in a per-test directory."""
    return TempWorkspace(tmp_path / "audio-tools-bot")


@pytest.fixture
def channel():
    """A fake ReplyChannel that records every call."""
    ch = MagicMock()
    ch.resolve_file_url = AsyncMock(return_value=FAKE_FILE_URL)
    ch.send_recording_action = AsyncMock()
    ch.reply_voice = AsyncMock()
    ch.reply_text = AsyncMock()
    return ch


@pytest.fixture
def downloader():
    """Fake HttpDownloader that writes a few bytes to the destination."""

    async def _download(url: str, destination: Path) -> int:
        Path(destination).write_bytes(b"ID3 fake mp3")
        return 12

    fake = MagicMock()
    fake.download = AsyncMock(side_effect=_download)
    return fake


@pytest.fixture
def transcoder():
    """Fake FfmpegTranscoder that writes an ogg header to the output."""

    async def _transcode(input_path: Path, output_path: Path, trim=None) -> Path:
        Path(output_path).write_bytes(b"OggS fake opus")
        return output_path

    fake = MagicMock()
    fake.transcode = AsyncMock(side_effect=_transcode)
    return fake


@pytest.fixture
def service(workspace, downloader, transcoder):
    """A VoiceConverterService wired to the fakes above."""
    return VoiceConverterService(
        workspace=workspace,
        downloader=downloader,
        transcoder=transcoder,
    )

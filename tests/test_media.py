"""Tests for attachment classification and temp-file extension inference."""

from __future__ import annotations

import pytest

from voicenote_converter.core.media import (
    AudioRequest,
    has_audio_extension,
    input_extension_for,
    is_audio_document,
)
from voicenote_converter.core.timecodes import TrimRange


class TestIsAudioDocument:
    """MIME type wins; extension is the fallback."""

    def test_audio_mime_without_known_extension(self):
        assert is_audio_document("audio/mpeg", "recording") is True

    def test_audio_mime_with_unrelated_extension(self):
        assert is_audio_document("audio/x-wav", "take.bin") is True

    @pytest.mark.parametrize("name", [
        "song.mp3", "take.wav", "memo.m4a", "album.flac",
        "clip.aac", "voice.ogg", "voice.oga",
    ])
    def test_known_extension_with_generic_mime(self, name):
        assert is_audio_document("application/octet-stream", name) is True

    def test_extension_case_insensitive(self):
        assert is_audio_document(None, "LOUD.MP3") is True

    def test_pdf_is_not_audio(self):
        assert is_audio_document("application/pdf", "report.pdf") is False

    def test_nothing_known(self):
        assert is_audio_document(None, None) is False

    def test_video_mime_is_not_audio(self):
        assert is_audio_document("video/mp4", "clip.mp4") is False


class TestHasAudioExtension:
    def test_no_extension(self):
        assert has_audio_extension("noext") is False

    def test_dotfile_has_no_extension(self):
        assert has_audio_extension(".mp3") is False


class TestInputExtension:
    def test_from_filename(self):
        assert input_extension_for("interview.m4a") == ".m4a"

    def test_missing_hint_defaults_to_tmp(self):
        assert input_extension_for(None) == ".tmp"

    def test_unique_id_hint_without_dot(self):
        assert input_extension_for("AgADBAADr6cxG") == ".tmp"

    def test_request_property(self):
        request = AudioRequest(file_id="F1", filename_hint="a.flac", trim=TrimRange(0, 4))
        assert request.input_extension == ".flac"

"""Telegram bot: update handlers, reply channel adapter, and process entry point.

WHY: This module is the glue between Telegram and the conversion service:
it decides which messages are audio, exposes the chat as a ReplyChannel,
and owns the process lifecycle (start, ready log, graceful stop).

HOW: Uses python-telegram-bot's Application with long polling. Handlers
are registered by create_application(); the VoiceConverterService lives
in application.bot_data so handlers never touch module globals. Updates
are processed concurrently; each message gets its own temp files.

RULES:
- /start replies with a short usage greeting
- Audio attachments are always converted
- Documents are converted only if AUDIO_DOCUMENT matches (MIME or extension)
- Only new messages and channel posts are converted; edits are ignored
- The application error handler logs any escaped fault and replies
  generically when the update has a message to reply to
- run_polling() installs SIGINT/SIGTERM handling and stops the app cleanly
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from telegram import Message, Update
from telegram.constants import ChatAction
from telegram.error import TelegramError
from telegram.ext import (
    Application,
    ApplicationBuilder,
    CommandHandler,
    ContextTypes,
    MessageHandler,
    filters,
)

from voicenote_converter import messages
from voicenote_converter.config import LOG_LEVEL, load_bot_token
from voicenote_converter.core.errors import ConfigurationError, DownloadError, ReplyError
from voicenote_converter.core.media import is_audio_document
from voicenote_converter.service import VoiceConverterService

logger = logging.getLogger(__name__)

SERVICE_KEY = "voice_converter_service"


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------


class AudioDocumentFilter(filters.MessageFilter):
    """Matches documents that are audio by MIME type or by file extension."""

    __slots__ = ()

    def filter(self, message: Message) -> bool:
        document = message.document
        if document is None:
            return False
        return is_audio_document(document.mime_type, document.file_name)


AUDIO_DOCUMENT = AudioDocumentFilter(name="AudioDocument")

# Edited messages and edited channel posts never re-run a conversion
NEW_AUDIO = filters.UpdateType.MESSAGES & filters.AUDIO
NEW_AUDIO_DOCUMENT = filters.UpdateType.MESSAGES & AUDIO_DOCUMENT


# ---------------------------------------------------------------------------
# Reply channel
# ---------------------------------------------------------------------------


class TelegramChannel:
    """ReplyChannel implementation backed by one incoming Telegram message.

    RULES:
    - Telegram failures resolving the file → DownloadError
    - Telegram failures sending the chat action or the voice → ReplyError
    - reply_text lets TelegramError through; the service logs it
    """

    def __init__(self, message: Message) -> None:
        self._message = message

    async def resolve_file_url(self, file_id: str) -> str:
        try:
            tg_file = await self._message.get_bot().get_file(file_id)
        except TelegramError as exc:
            raise DownloadError("Telegram could not resolve the file: {}".format(exc)) from exc
        if not tg_file.file_path:
            raise DownloadError("Telegram returned no download path for the file")
        return tg_file.file_path

    async def send_recording_action(self) -> None:
        try:
            await self._message.get_bot().send_chat_action(
                chat_id=self._message.chat_id,
                action=ChatAction.RECORD_VOICE,
            )
        except TelegramError as exc:
            raise ReplyError("Could not send chat action: {}".format(exc)) from exc

    async def reply_voice(self, path: Path) -> None:
        try:
            with open(path, "rb") as voice:
                await self._message.reply_voice(voice=voice)
        except TelegramError as exc:
            raise ReplyError("Could not send voice message: {}".format(exc)) from exc
        except OSError as exc:
            raise ReplyError("Could not read encoded voice file {}".format(path)) from exc

    async def reply_text(self, text: str) -> None:
        await self._message.reply_text(text)


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def _get_service(context: ContextTypes.DEFAULT_TYPE) -> VoiceConverterService:
    return context.bot_data[SERVICE_KEY]


async def handle_start(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    await update.effective_message.reply_text(messages.START_GREETING)


async def handle_audio(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Convert an audio attachment into a voice reply."""
    message = update.effective_message
    audio = message.audio
    await _get_service(context).handle_message(
        TelegramChannel(message),
        file_id=audio.file_id,
        filename_hint=audio.file_name or audio.file_unique_id,
        caption=message.caption,
        text=message.text,
    )


async def handle_audio_document(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Convert a document that AUDIO_DOCUMENT recognised as audio."""
    message = update.effective_message
    document = message.document
    await _get_service(context).handle_message(
        TelegramChannel(message),
        file_id=document.file_id,
        filename_hint=document.file_name or document.file_unique_id,
        caption=message.caption,
        text=message.text,
    )


async def handle_error(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Last-resort handler for faults that escaped the request handlers."""
    logger.error("Unhandled error while processing an update", exc_info=context.error)

    if not isinstance(update, Update) or update.effective_message is None:
        return

    try:
        await update.effective_message.reply_text(messages.UNEXPECTED_ERROR)
    except TelegramError:
        logger.exception("Failed to send generic error reply")


async def _on_initialized(application: Application) -> None:
    """Log the ready line once the bot identity is known.

    Runs as post_init: after Application.initialize() (getMe succeeded,
    so the token is valid) and before polling starts. The line marks
    initialization, not the first getUpdates call.
    """
    logger.info("%s (@%s)", messages.READY_LOG_LINE, application.bot.username)


# ---------------------------------------------------------------------------
# App setup
# ---------------------------------------------------------------------------


def create_application(
    token: Optional[str] = None,
    service: Optional[VoiceConverterService] = None,
) -> Application:
    """Create and configure the Telegram application with all handlers.

    WHY: Factory function allows tests to inject a token and a service
    built from fakes, and avoids module-level side effects.

    RULES:
    - If token is None, reads BOT_TOKEN (raises ConfigurationError if unset)
    - If service is None, builds one from environment configuration
    - All handlers are registered before returning
    """
    token = token or load_bot_token()
    service = service or VoiceConverterService.from_config()

    application = (
        ApplicationBuilder()
        .token(token)
        .concurrent_updates(True)
        .post_init(_on_initialized)
        .build()
    )
    application.bot_data[SERVICE_KEY] = service

    application.add_handler(CommandHandler("start", handle_start))
    application.add_handler(MessageHandler(NEW_AUDIO, handle_audio))
    application.add_handler(MessageHandler(NEW_AUDIO_DOCUMENT, handle_audio_document))
    application.add_error_handler(handle_error)

    return application


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main() -> None:
    """Start the Telegram bot with long polling.

    WHY: The bot needs to be runnable as a standalone process via
    python -m voicenote_converter.

    RULES:
    - Missing BOT_TOKEN logs a diagnostic and exits with status 1
    - Blocks in run_polling() until SIGINT/SIGTERM, then stops the bot
    """
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    # httpx logs full request URLs, which embed the bot token
    logging.getLogger("httpx").setLevel(logging.WARNING)

    try:
        application = create_application()
    except ConfigurationError as exc:
        logger.error("%s", exc.message)
        sys.exit(1)

    logger.info("Starting Telegram bot (long polling)...")
    application.run_polling(allowed_updates=Update.ALL_TYPES)
    logger.info("Bot stopped")


if __name__ == "__main__":
    main()

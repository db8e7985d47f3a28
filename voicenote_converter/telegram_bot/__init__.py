"""Telegram bot integration for the voicenote converter.

WHY: Users send audio to a Telegram chat and expect a playable voice
message back. This package connects Telegram updates to the
platform-agnostic VoiceConverterService.

HOW: The bot runs with python-telegram-bot's Application in long-polling
mode (no public URL needed). Handlers wrap the incoming Message in a
TelegramChannel and hand it to the service.

RULES:
- Requires BOT_TOKEN in the environment (or .env)
- Only audio attachments and audio-looking documents are handled;
  other documents fall through to later handlers
- Runnable as: python -m voicenote_converter  or  python -m voicenote_converter.telegram_bot.bot
"""

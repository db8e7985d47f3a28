"""Package entry point for ``python -m voicenote_converter``.

WHY: Operators start the bot with ``python -m voicenote_converter``;
``python -m voicenote_converter convert input.mp3 --trim 0:40`` converts
a local file without Telegram.

HOW: Checks whether the first argument is ``convert``. If so, the
remaining arguments go to the CLI. Otherwise the Telegram bot starts.

RULES:
- No arguments → Telegram bot (needs BOT_TOKEN)
- ``convert ...`` → local CLI, see cli.build_parser()
"""

import sys

if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == "convert":
        from voicenote_converter.cli import main as cli_main
        cli_main(sys.argv[2:])
    else:
        from voicenote_converter.telegram_bot.bot import main
        main()

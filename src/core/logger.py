"""
Logging setup. The terminal belongs to Textual, so records go to a rotating
file and to the Textual devtools console, never to stderr.
"""
import logging
from logging.handlers import RotatingFileHandler

from textual.logging import TextualHandler

from core.config import Settings

LOG_FORMAT = (
    "%(asctime)s | %(levelname)s | %(name)s | %(funcName)s:%(lineno)d | %(message)s"
)

_HANDLER_MARK = '_chatbot_console'


def configure_logging(settings: Settings) -> logging.Logger:
    root = logging.getLogger()
    root.setLevel(settings.log_level)

    # Prevent duplicate handlers when the app is started more than once
    if any(getattr(h, _HANDLER_MARK, False) for h in root.handlers):
        return root

    formatter = logging.Formatter(LOG_FORMAT)

    settings.log_file.parent.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(
        settings.log_file,
        maxBytes=5 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)

    textual_handler = TextualHandler()
    textual_handler.setFormatter(formatter)

    for handler in (file_handler, textual_handler):
        setattr(handler, _HANDLER_MARK, True)
        root.addHandler(handler)

    root.debug("Logger initialized: %s", settings.log_file)
    return root

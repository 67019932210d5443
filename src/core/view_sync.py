"""
Keeps a transcript view pinned to the newest turn.
"""
import logging
from typing import Protocol

from models import Conversation, Turn
from models.conversation import ConversationListener

logger = logging.getLogger(__name__)


class TranscriptView(Protocol):
    def scroll_to_latest(self) -> None:
        ...


def bind_view(conversation: Conversation, view: TranscriptView) -> ConversationListener:
    """
    Scroll ``view`` to its end every time the conversation grows.

    Returns the listener so callers can unsubscribe it.
    """

    def _on_append(_conversation: Conversation, _turn: Turn) -> None:
        try:
            view.scroll_to_latest()
        except Exception as e:
            logger.debug("Failed to scroll to latest turn: %s", e)

    conversation.subscribe(_on_append)
    return _on_append

"""
Append-only conversation log.
"""
import logging
from typing import Callable, Iterator, Optional

from models.turn import Turn, create_turn

logger = logging.getLogger(__name__)

SEED_SYSTEM_TEXT = (
    "You are chatting with an AI agent. Ask anything about your product, users, or data."
)
SEED_GREETING_TEXT = (
    "Hey, I'm ready when you are. Tell me what you're working on "
    "and I'll help you break it down."
)

ConversationListener = Callable[['Conversation', Turn], None]


class Conversation:
    """
    Ordered history of turns. Insertion order is both storage and display order.

    Turns are never edited, reordered or removed; listeners are told about
    every append, in order, right after it happens. A failing listener is
    logged and skipped; it never undoes or blocks the append.
    """

    def __init__(self, turns: Optional[list[Turn]] = None) -> None:
        self._turns: list[Turn] = list(turns or [])
        self._listeners: list[ConversationListener] = []

    def append(self, turn: Turn) -> 'Conversation':
        self._turns.append(turn)
        for listener in list(self._listeners):
            try:
                listener(self, turn)
            except Exception:
                logger.exception("Conversation listener failed for turn %s", turn.id)
        return self

    def subscribe(self, listener: ConversationListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: ConversationListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    @property
    def turns(self) -> tuple[Turn, ...]:
        return tuple(self._turns)

    @property
    def last(self) -> Optional[Turn]:
        return self._turns[-1] if self._turns else None

    def __len__(self) -> int:
        return len(self._turns)

    def __iter__(self) -> Iterator[Turn]:
        return iter(tuple(self._turns))

    def __getitem__(self, index: int) -> Turn:
        return self._turns[index]


def new_conversation() -> Conversation:
    """Seed a conversation with the session framing and the greeting."""
    conversation = Conversation()
    conversation.append(create_turn('system', SEED_SYSTEM_TEXT))
    conversation.append(create_turn('assistant', SEED_GREETING_TEXT))
    return conversation

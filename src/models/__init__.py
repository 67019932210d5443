"""
Conversation data models for the Chatbot Console application.
"""
from .turn import ROLES, Role, Turn, create_turn
from .conversation import (
    SEED_GREETING_TEXT,
    SEED_SYSTEM_TEXT,
    Conversation,
    new_conversation,
)

__all__ = [
    "ROLES",
    "Role",
    "Turn",
    "create_turn",
    "Conversation",
    "new_conversation",
    "SEED_SYSTEM_TEXT",
    "SEED_GREETING_TEXT",
]

"""
Data models for the Chatbot Console application.
"""
import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal

Role = Literal['user', 'assistant', 'system']
ROLES: tuple[Role, ...] = ('user', 'assistant', 'system')


def _new_turn_id() -> str:
    return f'{time.time_ns():x}-{uuid.uuid4().hex[:12]}'


@dataclass(frozen=True)
class Turn:
    """
    Represents a single immutable message in the conversation.
    """
    id: str
    role: Role
    content: str
    created_at: datetime = field(default_factory=datetime.now)

    @property
    def display_time(self) -> str:
        return self.created_at.strftime('%H:%M')


def create_turn(role: Role, content: str) -> Turn:
    """
    Build a fresh Turn stamped with a new id and the current time.

    The content is stored as given; validating user input is the session's job.
    """
    if role not in ROLES:
        raise ValueError(f'unknown role: {role!r}')
    return Turn(id=_new_turn_id(), role=role, content=content)

"""
Respondent wire types and the stream events the langgraph adapter produces.
"""

from typing import Literal, TypedDict

Mode = Literal['default', 'fast', 'precise']
MODES: tuple[Mode, ...] = ('default', 'fast', 'precise')

MODE_LABELS: dict[str, str] = {
    'default': 'Agent · Default',
    'fast': 'Agent · Fast',
    'precise': 'Agent · Precise',
}

ErrorKind = Literal['timeout', 'unavailable', 'invalid_reply']


class RespondentRequest(TypedDict):
    prompt: str
    mode: Mode


class RespondentReply(TypedDict):
    reply: str


class RespondentError(TypedDict):
    error: ErrorKind
    message: str


class TokenEvent(TypedDict, total=False):
    type: Literal['token']
    text: str

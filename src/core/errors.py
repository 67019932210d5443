from core.domain import ErrorKind, RespondentError


class ChatConsoleError(Exception):
    """Base class for errors raised by the chatbot console."""


class ConfigError(ChatConsoleError):
    pass


class RespondentFailure(ChatConsoleError):
    """The respondent could not produce a reply for a request."""

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(f'{kind}: {message}')
        self.kind = kind
        self.message = message

    def to_payload(self) -> RespondentError:
        return {'error': self.kind, 'message': self.message}

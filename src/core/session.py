"""
ChatSession drives the request/response cycle of one conversation.

States:
    IDLE               accepting user input
    AWAITING_RESPONSE  one respondent call outstanding

accept() performs the IDLE -> AWAITING_RESPONSE transition synchronously on
the event loop: it appends the user turn and returns the request to send.
resolve() awaits the respondent, appends its reply (or a system notice when
the respondent fails) and goes back to IDLE. Because accept() refuses to run
while a response is pending, at most one request is ever in flight.
"""
import asyncio
import logging
from enum import Enum
from typing import Callable, Optional

from core.domain import MODES, Mode, RespondentError, RespondentRequest
from core.errors import RespondentFailure
from core.respondent import Respondent
from models import Conversation, Turn, create_turn, new_conversation

logger = logging.getLogger(__name__)

StateListener = Callable[['SessionState'], None]


class SessionState(str, Enum):
    IDLE = 'idle'
    AWAITING_RESPONSE = 'awaiting_response'


def failure_notice(error: RespondentError) -> str:
    return f"The assistant could not reply ({error['error']}): {error['message']}"


class ChatSession:
    def __init__(
        self,
        respondent: Respondent,
        *,
        mode: Mode = 'default',
        timeout: Optional[float] = None,
        conversation: Optional[Conversation] = None,
    ) -> None:
        self._respondent = respondent
        self._conversation = conversation if conversation is not None else new_conversation()
        self._state = SessionState.IDLE
        self._state_listeners: list[StateListener] = []
        self._mode: Mode = 'default'
        self.mode = mode
        self.timeout = timeout
        self.draft = ''

    @property
    def conversation(self) -> Conversation:
        return self._conversation

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_pending(self) -> bool:
        return self._state is SessionState.AWAITING_RESPONSE

    @property
    def mode(self) -> Mode:
        return self._mode

    @mode.setter
    def mode(self, value: Mode) -> None:
        if value not in MODES:
            raise ValueError(f'unknown mode: {value!r}')
        self._mode = value

    def add_state_listener(self, listener: StateListener) -> None:
        self._state_listeners.append(listener)

    def remove_state_listener(self, listener: StateListener) -> None:
        if listener in self._state_listeners:
            self._state_listeners.remove(listener)

    def _set_state(self, state: SessionState) -> None:
        self._state = state
        for listener in list(self._state_listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("State listener failed on %s", state.value)

    def _append_user_turn(self, content: str) -> Turn:
        turn = create_turn('user', content)
        self._conversation.append(turn)
        return turn

    def _append_assistant_turn(self, content: str) -> Turn:
        turn = create_turn('assistant', content)
        self._conversation.append(turn)
        return turn

    def _append_notice(self, content: str) -> Turn:
        turn = create_turn('system', content)
        self._conversation.append(turn)
        return turn

    def accept(self, raw_text: Optional[str] = None) -> Optional[RespondentRequest]:
        """
        Accept user input and start waiting for a reply.

        Args:
            raw_text: text to send; the current draft when omitted

        Returns:
            The request for the respondent, or None when the input is blank
            or a reply is still pending. Nothing changes in that case.
        """
        text = (self.draft if raw_text is None else raw_text).strip()
        if not text:
            logger.debug("Ignoring blank input")
            return None
        if self.is_pending:
            logger.debug("Ignoring input while a reply is pending")
            return None

        self._append_user_turn(text)
        self.draft = ''
        self._set_state(SessionState.AWAITING_RESPONSE)
        logger.info("Sending prompt (%d chars, mode=%s)", len(text), self._mode)
        return {'prompt': text, 'mode': self._mode}

    async def _call_respondent(self, request: RespondentRequest) -> str:
        try:
            result = await asyncio.wait_for(
                self._respondent.respond(request), timeout=self.timeout
            )
        except asyncio.TimeoutError:
            message = (
                f'no reply within {self.timeout:g} seconds' if self.timeout else 'request timed out'
            )
            raise RespondentFailure('timeout', message) from None
        except RespondentFailure:
            raise
        except Exception as e:
            logger.exception("Respondent raised an unexpected error")
            raise RespondentFailure('unavailable', str(e) or type(e).__name__) from e

        reply = result.get('reply') if isinstance(result, dict) else None
        if not isinstance(reply, str):
            raise RespondentFailure('invalid_reply', 'reply is missing or not text')
        return reply

    async def resolve(self, request: RespondentRequest) -> Turn:
        """
        Wait for the respondent and append what it produced.

        Never raises for respondent failures: they become a system notice
        turn. The session is back in IDLE when this returns or raises.
        """
        try:
            reply = await self._call_respondent(request)
            turn = self._append_assistant_turn(reply)
            logger.info("Reply received (%d chars)", len(reply))
        except RespondentFailure as failure:
            error = failure.to_payload()
            logger.warning("Respondent failed: %(error)s: %(message)s", error)
            turn = self._append_notice(failure_notice(error))
        except asyncio.CancelledError:
            logger.info("Pending reply cancelled")
            raise
        finally:
            self._set_state(SessionState.IDLE)
        return turn

    async def submit(self, raw_text: Optional[str] = None) -> Optional[Turn]:
        request = self.accept(raw_text)
        if request is None:
            return None
        return await self.resolve(request)

"""
Respondents: the collaborators that turn a prompt into an assistant reply.
"""
import asyncio
import logging
import uuid
from typing import Any, Dict, Protocol

from langchain_core.messages import HumanMessage
from langgraph.checkpoint.memory import MemorySaver

from core.agents.assistant import build_agent
from core.config import Settings
from core.domain import Mode, RespondentReply, RespondentRequest
from core.errors import RespondentFailure
from core.langgraph_adapter import collect_reply

logger = logging.getLogger(__name__)

MOCK_REPLY = (
    "This is a mock AI response. In your real app, this will stream "
    "from your FastAPI + agent backend."
)


class Respondent(Protocol):
    async def respond(self, request: RespondentRequest) -> RespondentReply:
        """Resolve exactly once with a reply, or raise RespondentFailure."""
        ...


class MockRespondent:
    """Answers every prompt with the same canned reply after a short delay."""

    def __init__(self, delay: float = 0.9, reply: str = MOCK_REPLY) -> None:
        self.delay = delay
        self.reply = reply

    async def respond(self, request: RespondentRequest) -> RespondentReply:
        await asyncio.sleep(self.delay)
        return {'reply': self.reply}


class LangGraphRespondent:
    """
    Chat agent backed by a langgraph graph over ChatOpenAI.

    One graph is built per mode on first use. All of them share a single
    checkpointer and thread id, so switching modes keeps the history.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.checkpointer = MemorySaver()
        self.config = {'configurable': {'thread_id': f'console-{uuid.uuid4().hex}'}}
        self._agents: Dict[Mode, Any] = {}

    def _agent_for(self, mode: Mode):
        if mode not in self._agents:
            model, temperature = self.settings.model_for(mode)
            logger.info("Building agent for mode=%s model=%s", mode, model)
            self._agents[mode] = build_agent(model, temperature, self.checkpointer)
        return self._agents[mode]

    async def respond(self, request: RespondentRequest) -> RespondentReply:
        payload = {"messages": [HumanMessage(content=request['prompt'])]}
        try:
            agent = self._agent_for(request['mode'])
            stream = agent.astream_events(payload, config=self.config, version='v2')
            reply = await collect_reply(stream)
        except Exception as e:
            raise RespondentFailure('unavailable', str(e) or type(e).__name__) from e

        if not reply.strip():
            raise RespondentFailure('invalid_reply', 'the agent returned an empty reply')
        return {'reply': reply}


def build_respondent(settings: Settings) -> Respondent:
    if settings.respondent == 'langgraph':
        return LangGraphRespondent(settings)
    return MockRespondent(delay=settings.mock_delay)

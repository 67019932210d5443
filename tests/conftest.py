import asyncio

import pytest

from core.config import Settings
from core.errors import RespondentFailure


class GatedRespondent:
    """Respondent whose reply is released by the test."""

    def __init__(self, reply: str = "hi there") -> None:
        self.reply = reply
        self.requests = []
        self.release = asyncio.Event()

    async def respond(self, request):
        self.requests.append(request)
        await self.release.wait()
        return {"reply": self.reply}


class FailingRespondent:
    def __init__(self, exc: Exception) -> None:
        self.exc = exc
        self.requests = []

    async def respond(self, request):
        self.requests.append(request)
        raise self.exc


class EchoRespondent:
    def __init__(self) -> None:
        self.requests = []

    async def respond(self, request):
        self.requests.append(request)
        return {"reply": f"echo: {request['prompt']}"}


@pytest.fixture
def gated_respondent():
    return GatedRespondent()


@pytest.fixture
def echo_respondent():
    return EchoRespondent()


@pytest.fixture
def failing_respondent():
    return FailingRespondent(RespondentFailure("unavailable", "backend is down"))


@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        respondent="mock",
        mock_delay=0,
        timeout=5.0,
        log_file=tmp_path / "console.log",
        _env_file=None,
    )

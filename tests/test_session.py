"""Tests for the ChatSession send pipeline."""

import asyncio
from unittest.mock import Mock

import pytest

from core.errors import RespondentFailure
from core.session import ChatSession, SessionState, failure_notice
from models import Conversation


def contents(session):
    return [(t.role, t.content) for t in session.conversation]


class TestValidation:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw", ["", "   ", "\n\t"])
    async def test_blank_input_is_a_no_op(self, raw, echo_respondent):
        session = ChatSession(echo_respondent)
        before = session.conversation.turns

        result = await session.submit(raw)

        assert result is None
        assert session.conversation.turns == before
        assert session.state is SessionState.IDLE
        assert echo_respondent.requests == []

    def test_accept_rejects_blank_input_without_state_change(self, echo_respondent):
        session = ChatSession(echo_respondent)
        listener = Mock()
        session.add_state_listener(listener)

        assert session.accept("  ") is None
        listener.assert_not_called()


class TestHappyPath:
    @pytest.mark.asyncio
    async def test_hello_scenario(self, gated_respondent):
        """submit("hello") appends the user turn at once and the reply later."""
        session = ChatSession(gated_respondent)

        task = asyncio.create_task(session.submit("hello"))
        await asyncio.sleep(0)

        assert contents(session)[2:] == [("user", "hello")]
        assert session.state is SessionState.AWAITING_RESPONSE
        assert session.is_pending is True

        gated_respondent.release.set()
        turn = await task

        assert contents(session) == [
            ("system", session.conversation[0].content),
            ("assistant", session.conversation[1].content),
            ("user", "hello"),
            ("assistant", "hi there"),
        ]
        assert turn is session.conversation.last
        assert session.state is SessionState.IDLE
        assert session.is_pending is False

    def test_accept_trims_and_builds_request(self, echo_respondent):
        session = ChatSession(echo_respondent, mode="precise")

        request = session.accept("  what now?\n")

        assert request == {"prompt": "what now?", "mode": "precise"}
        assert session.conversation.last.content == "what now?"
        assert session.state is SessionState.AWAITING_RESPONSE

    @pytest.mark.asyncio
    async def test_draft_is_used_and_cleared(self, echo_respondent):
        session = ChatSession(echo_respondent)
        session.draft = "from the buffer"

        await session.submit()

        assert session.draft == ""
        assert echo_respondent.requests == [{"prompt": "from the buffer", "mode": "default"}]

    @pytest.mark.asyncio
    async def test_rejected_submit_keeps_draft(self, gated_respondent):
        session = ChatSession(gated_respondent)
        task = asyncio.create_task(session.submit("first"))
        await asyncio.sleep(0)

        session.draft = "second"
        assert session.accept() is None
        assert session.draft == "second"

        gated_respondent.release.set()
        await task

    @pytest.mark.asyncio
    async def test_every_reply_follows_its_prompt(self, echo_respondent):
        session = ChatSession(echo_respondent)

        for prompt in ["one", "two", "three"]:
            await session.submit(prompt)

        turns = session.conversation.turns[2:]
        for i in range(0, len(turns), 2):
            user, assistant = turns[i], turns[i + 1]
            assert user.role == "user"
            assert assistant.role == "assistant"
            assert assistant.content == f"echo: {user.content}"
        assert [r["prompt"] for r in echo_respondent.requests] == ["one", "two", "three"]

    @pytest.mark.asyncio
    async def test_state_listener_sees_both_transitions(self, echo_respondent):
        session = ChatSession(echo_respondent)
        states = []
        session.add_state_listener(states.append)

        await session.submit("hi")

        assert states == [SessionState.AWAITING_RESPONSE, SessionState.IDLE]

    def test_custom_conversation_is_used(self, echo_respondent):
        conversation = Conversation()
        session = ChatSession(echo_respondent, conversation=conversation)

        assert session.conversation is conversation


class TestSingleFlight:
    @pytest.mark.asyncio
    async def test_second_submit_while_pending_is_dropped(self, gated_respondent):
        session = ChatSession(gated_respondent)

        task = asyncio.create_task(session.submit("a"))
        await asyncio.sleep(0)
        second = await session.submit("b")

        assert second is None
        assert len(gated_respondent.requests) == 1

        gated_respondent.release.set()
        await task

        user_contents = [t.content for t in session.conversation if t.role == "user"]
        assert user_contents == ["a"]
        assert len(session.conversation) == 4

    @pytest.mark.asyncio
    async def test_concurrent_submits_issue_one_request(self, gated_respondent):
        session = ChatSession(gated_respondent)

        tasks = [asyncio.create_task(session.submit(f"msg {i}")) for i in range(5)]
        await asyncio.sleep(0)
        gated_respondent.release.set()
        results = await asyncio.gather(*tasks)

        assert len(gated_respondent.requests) == 1
        assert sum(r is not None for r in results) == 1

    @pytest.mark.asyncio
    async def test_submit_works_again_after_reply(self, echo_respondent):
        session = ChatSession(echo_respondent)

        await session.submit("a")
        await session.submit("b")

        assert [r["prompt"] for r in echo_respondent.requests] == ["a", "b"]


class TestRespondentFailure:
    @pytest.mark.asyncio
    async def test_failure_appends_notice_and_returns_to_idle(self, failing_respondent):
        session = ChatSession(failing_respondent)

        turn = await session.submit("hello")

        assert turn.role == "system"
        assert "unavailable" in turn.content
        assert "backend is down" in turn.content
        assert session.state is SessionState.IDLE
        assert [t.role for t in session.conversation][2:] == ["user", "system"]

    @pytest.mark.asyncio
    async def test_unexpected_exception_does_not_escape(self):
        class BrokenRespondent:
            async def respond(self, request):
                raise RuntimeError("boom")

        session = ChatSession(BrokenRespondent())

        turn = await session.submit("hello")

        assert turn.role == "system"
        assert "boom" in turn.content
        assert session.state is SessionState.IDLE

    @pytest.mark.asyncio
    async def test_timeout_appends_notice(self, gated_respondent):
        session = ChatSession(gated_respondent, timeout=0.01)

        turn = await session.submit("slow")

        assert turn.role == "system"
        assert "timeout" in turn.content
        assert session.state is SessionState.IDLE

    @pytest.mark.asyncio
    async def test_malformed_reply_is_a_failure(self):
        class BadRespondent:
            async def respond(self, request):
                return {"text": "wrong key"}

        session = ChatSession(BadRespondent())

        turn = await session.submit("hello")

        assert turn.role == "system"
        assert "invalid_reply" in turn.content

    @pytest.mark.asyncio
    async def test_submit_works_after_failure(self, echo_respondent):
        responses = [RespondentFailure("timeout", "slow"), None]

        class FlakyRespondent:
            async def respond(self, request):
                exc = responses.pop(0)
                if exc:
                    raise exc
                return await echo_respondent.respond(request)

        session = ChatSession(FlakyRespondent())
        await session.submit("first")
        turn = await session.submit("again")

        assert turn.role == "assistant"
        assert turn.content == "echo: again"

    @pytest.mark.asyncio
    async def test_cancellation_restores_idle(self, gated_respondent):
        session = ChatSession(gated_respondent)

        task = asyncio.create_task(session.submit("hello"))
        await asyncio.sleep(0)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert session.state is SessionState.IDLE
        assert session.conversation.last.role == "user"


class TestBrokenListeners:
    @pytest.mark.asyncio
    async def test_failing_turn_listener_does_not_leave_session_pending(self, echo_respondent):
        session = ChatSession(echo_respondent)

        def view_gone(_conversation, turn):
            if turn.role == "assistant":
                raise RuntimeError("view gone")

        session.conversation.subscribe(view_gone)

        turn = await session.submit("hello")

        assert turn.content == "echo: hello"
        assert session.conversation.last is turn
        assert session.state is SessionState.IDLE

        again = await session.submit("again")
        assert again is not None
        assert [r["prompt"] for r in echo_respondent.requests] == ["hello", "again"]

    @pytest.mark.asyncio
    async def test_failing_listener_on_notice_does_not_leave_session_pending(
        self, failing_respondent
    ):
        session = ChatSession(failing_respondent)
        session.conversation.subscribe(Mock(side_effect=RuntimeError("view gone")))

        turn = await session.submit("hello")

        assert turn.role == "system"
        assert session.state is SessionState.IDLE

    @pytest.mark.asyncio
    async def test_failing_state_listener_does_not_block_transitions(self, echo_respondent):
        session = ChatSession(echo_respondent)
        session.add_state_listener(Mock(side_effect=RuntimeError("indicator gone")))

        turn = await session.submit("hello")

        assert turn.role == "assistant"
        assert session.state is SessionState.IDLE

    @pytest.mark.asyncio
    async def test_other_listeners_still_run_after_one_fails(self, echo_respondent):
        session = ChatSession(echo_respondent)
        session.conversation.subscribe(Mock(side_effect=RuntimeError("boom")))
        healthy = Mock()
        session.conversation.subscribe(healthy)

        await session.submit("hello")

        assert healthy.call_count == 2


def test_failure_notice_is_built_from_error_payload():
    failure = RespondentFailure("timeout", "no reply within 5 seconds")

    notice = failure_notice(failure.to_payload())

    assert notice == "The assistant could not reply (timeout): no reply within 5 seconds"


class TestMode:
    def test_mode_defaults_to_default(self, echo_respondent):
        assert ChatSession(echo_respondent).mode == "default"

    def test_unknown_mode_is_rejected(self, echo_respondent):
        session = ChatSession(echo_respondent)

        with pytest.raises(ValueError):
            session.mode = "turbo"

    @pytest.mark.asyncio
    async def test_mode_is_sent_with_the_prompt(self, echo_respondent):
        session = ChatSession(echo_respondent)
        session.mode = "fast"

        await session.submit("hi")

        assert echo_respondent.requests == [{"prompt": "hi", "mode": "fast"}]

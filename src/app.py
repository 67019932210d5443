"""
Chatbot Console
"""

import logging
from typing import Optional
from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer

from core.config import Settings, load_settings
from core.domain import MODE_LABELS, RespondentRequest
from core.logger import configure_logging
from core.respondent import Respondent, build_respondent
from core.session import ChatSession, SessionState
from core.view_sync import bind_view
from models import Conversation, Turn
from models.conversation import ConversationListener
from widgets import InputArea, ChatLog, ThinkingIndicator
from screens import ModeSelectScreen

logger = logging.getLogger(__name__)


class ChatApp(App):
    TITLE = "Chatbot Console"
    CSS = """
#chat_log {
    height: 1fr;
    border: round $primary-background;
    padding: 0 1;
}
#input_text {
    margin: 0 0 1 0;
}
    """
    BINDINGS = [
        Binding('f2', 'choose_mode', 'Mode'),
        Binding('ctrl+q', 'quit', 'Quit'),
    ]

    def __init__(
        self,
        settings: Optional[Settings] = None,
        respondent: Optional[Respondent] = None,
    ):
        """Initialize the chat application with a fresh session."""
        super().__init__()
        self.settings = settings or load_settings()
        self.session = ChatSession(
            respondent or build_respondent(self.settings),
            mode=self.settings.mode,
            timeout=self.settings.timeout,
        )
        self._view_listener: Optional[ConversationListener] = None

    def compose(self) -> ComposeResult:
        """
        Create the main UI layout.
        """
        yield ChatLog(id="chat_log")
        yield ThinkingIndicator(id="thinking")
        yield InputArea(
            id="input_text",
            placeholder="Ask your agent anything… (ctrl+j for newline)",
        )
        yield Footer()

    async def on_mount(self) -> None:
        """Render the seeded conversation and start following it."""
        chat_log = self.query_one("#chat_log", ChatLog)
        for turn in self.session.conversation:
            chat_log.write_turn(turn)

        self.session.conversation.subscribe(self._on_turn_appended)
        self._view_listener = bind_view(self.session.conversation, chat_log)
        self.session.add_state_listener(self._on_state_changed)

        self._update_subtitle()
        self.query_one('#input_text', InputArea).focus()

    def on_unmount(self) -> None:
        """Stop following the conversation once the DOM is being torn down."""
        conversation = self.session.conversation
        conversation.unsubscribe(self._on_turn_appended)
        if self._view_listener is not None:
            conversation.unsubscribe(self._view_listener)
            self._view_listener = None
        self.session.remove_state_listener(self._on_state_changed)

    def _on_turn_appended(self, _conversation: Conversation, turn: Turn) -> None:
        self.query_one("#chat_log", ChatLog).write_turn(turn)

    def _on_state_changed(self, state: SessionState) -> None:
        if state is SessionState.AWAITING_RESPONSE:
            self._start_thinking()
        else:
            self._stop_thinking()

    async def on_input_area_submit(self, message: InputArea.Submit) -> None:
        """
        1. Hands the text to the session, which appends the user turn
        2. Clears the input if the session accepted it
        3. Waits for the reply in a worker
        """
        request = self.session.accept(message.value)
        if request is None:
            return

        self.query_one('#input_text', InputArea).load_text(self.session.draft)
        self.run_infer(request)

    def on_text_area_changed(self, message: InputArea.Changed) -> None:
        self.session.draft = message.text_area.text

    def _start_thinking(self):
        self.query_one('#thinking', ThinkingIndicator).display = True

    def _stop_thinking(self):
        self.query_one('#thinking', ThinkingIndicator).display = False

    def _update_subtitle(self) -> None:
        self.sub_title = MODE_LABELS[self.session.mode]

    def action_choose_mode(self) -> None:
        def apply_mode(mode: Optional[str]) -> None:
            if mode:
                self.session.mode = mode
                self._update_subtitle()
                logger.info("Mode changed to %s", mode)

        self.push_screen(ModeSelectScreen(self.session.mode), apply_mode)

    @work(exclusive=True, group='infer')
    async def run_infer(self, request: RespondentRequest):
        """
        Wait for the respondent's reply to an accepted request.
        """
        await self.session.resolve(request)


def main():
    settings = load_settings()
    configure_logging(settings)
    app = ChatApp(settings)
    app.run()


if __name__ == "__main__":
    main()

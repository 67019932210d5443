"""
Prompt input for the Chatbot Console application.
"""
from textual import events
from textual.widgets import TextArea
from textual.message import Message

NEWLINE_KEYS = ('shift+enter', 'ctrl+j')


class InputArea(TextArea):
    """Multi-line prompt editor. Enter sends, shift+enter or ctrl+j adds a newline."""

    DEFAULT_CSS = """
    InputArea {
        height: 4;
    }
    """

    class Submit(Message, bubble=True):
        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def __init__(self, **kwargs) -> None:
        kwargs.setdefault('soft_wrap', True)
        kwargs.setdefault('show_line_numbers', False)
        super().__init__(**kwargs)

    async def _on_key(self, event: events.Key) -> None:
        if event.key == 'enter':
            # The app decides whether to clear the input, since a submit can be refused
            event.stop()
            event.prevent_default()
            self.post_message(self.Submit(self.text))
            return
        if event.key in NEWLINE_KEYS:
            event.stop()
            event.prevent_default()
            self.insert('\n')
            return
        await super()._on_key(event)

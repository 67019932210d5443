from rich.markup import escape
from textual.widgets import RichLog

from models import Turn

_LABELS = {
    'user': '[bold #38bdf8]You[/]',
    'assistant': '[bold]Assistant[/]',
    'system': '[bold #94a3b8]System[/]',
}


class ChatLog(RichLog):
    """Transcript of the conversation, one entry per turn."""

    def __init__(self, **kwargs) -> None:
        kwargs.setdefault('markup', True)
        kwargs.setdefault('wrap', True)
        # scrolling is driven by the view sync binding
        kwargs.setdefault('auto_scroll', False)
        super().__init__(**kwargs)

    @staticmethod
    def format_turn(turn: Turn) -> str:
        header = f"{_LABELS[turn.role]} [dim]• {turn.display_time}[/dim]"
        body = escape(turn.content)
        if turn.role == 'system':
            body = f"[italic dim]{body}[/italic dim]"
        return f"{header}\n{body}\n"

    def write_turn(self, turn: Turn) -> None:
        self.write(self.format_turn(turn))

    def scroll_to_latest(self) -> None:
        self.scroll_end(animate=False)

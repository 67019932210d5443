from textual.widgets import Static


class ThinkingIndicator(Static):
    """Shown while a reply is pending."""

    DEFAULT_CSS = """
    ThinkingIndicator {
        color: $text-muted;
        padding: 0 1;
    }
    """

    def __init__(self, **kwargs) -> None:
        super().__init__("[#38bdf8]●[/] Thinking…", markup=True, **kwargs)
        self.display = False

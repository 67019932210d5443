"""
Modal screens for the Chatbot Console application.
"""

from textual import on
from textual.widgets import Static, OptionList
from textual.widgets.option_list import Option
from textual.containers import Center, Vertical
from textual.screen import ModalScreen

from core.domain import MODES, MODE_LABELS


class ModeSelectScreen(ModalScreen[str]):
    """Lets the user pick the mode tag sent along with each prompt."""
    CSS = """
#panel {
    width: 60%;
    max-width: 60;
    border: round $secondary;
    padding: 1 2;
}
#mode_options {
    margin-top: 1;
}
#panel OptionList {
    border: none;
    background: transparent;
}
    """
    BINDINGS = [
        ('1', 'choose(0)', 'default'),
        ('2', 'choose(1)', 'fast'),
        ('3', 'choose(2)', 'precise'),
        ('escape', 'cancel', 'cancel'),
    ]

    def __init__(self, current: str) -> None:
        """
        Args:
            current (str): The mode currently selected, highlighted on open
        """
        super().__init__()
        self.current = current

    def compose(self):
        yield Center(
                Vertical(
                    Static("[bold]Choose a mode[/bold]\n", markup=True, classes="title"),
                    Static("[dim]The mode is passed to the agent with every prompt.[/dim]", markup=True),
                    OptionList(
                        *(
                            Option(f"{i}. {MODE_LABELS[mode]}", id=mode)
                            for i, mode in enumerate(MODES, start=1)
                        ),
                        id="mode_options",
                    ),
                ),
                id="panel",
        )

    async def on_mount(self):
        """Focus the option list with the current mode highlighted."""
        ol = self.query_one(OptionList)
        ol.focus()
        ol.highlighted = MODES.index(self.current) if self.current in MODES else 0

    @on(OptionList.OptionSelected)
    def on_option_selected(self, event: OptionList.OptionSelected) -> None:
        self.dismiss(event.option_id)

    def action_choose(self, index: int) -> None:
        self.dismiss(MODES[index])

    def action_cancel(self) -> None:
        self.dismiss(self.current)

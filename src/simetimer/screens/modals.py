"""Modal screens: comment entry, yes/no confirmation, project file path."""

from __future__ import annotations

from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Input, Label, OptionList
from textual.widgets.option_list import Option


class CommentScreen(ModalScreen[str | None]):
    """Ask for a chunk comment. Dismisses with the text, or None on cancel."""

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
        Binding("ctrl+c", "cancel", "Cancel", priority=True),
    ]

    def __init__(self, title: str = "Comment:", initial: str = "") -> None:
        super().__init__()
        self.title_text = title
        self.initial = initial

    def compose(self):
        yield Vertical(
            Label(self.title_text, classes="modal-title"),
            Input(value=self.initial, placeholder="Type a comment, press Enter...", id="comment-input"),
            classes="modal-container",
        )

    def on_mount(self) -> None:
        self.query_one("#comment-input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.dismiss(event.value)

    def action_cancel(self) -> None:
        self.dismiss(None)


class ConfirmScreen(ModalScreen[bool]):
    """Yes/no question."""

    BINDINGS = [
        Binding("escape", "no", "No"),
        Binding("ctrl+c", "no", "No", priority=True),
        Binding("y", "yes", "Yes"),
        Binding("n", "no", "No"),
    ]

    def __init__(self, message: str, yes: str = "Yes", no: str = "No") -> None:
        super().__init__()
        self.question = message
        self.yes_label = yes
        self.no_label = no

    def compose(self):
        yield Vertical(
            Label(self.question, classes="modal-title"),
            OptionList(
                Option(self.yes_label, id="yes"),
                Option(self.no_label, id="no"),
                id="confirm-list",
            ),
            classes="modal-container",
        )

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        self.dismiss(event.option.id == "yes")

    def action_yes(self) -> None:
        self.dismiss(True)

    def action_no(self) -> None:
        self.dismiss(False)


class PathScreen(ModalScreen[str | None]):
    """Ask for a project file path."""

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
        Binding("ctrl+c", "cancel", "Cancel", priority=True),
    ]

    def __init__(self, title: str, initial: str | None = None) -> None:
        super().__init__()
        self.title_text = title
        self.initial = initial or ""

    def compose(self):
        yield Vertical(
            Label(self.title_text, classes="modal-title"),
            Input(value=self.initial, placeholder="~/projects/work.stp", id="path-input"),
            classes="modal-container",
        )

    def on_mount(self) -> None:
        self.query_one("#path-input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        path = event.value.strip()
        self.dismiss(path or None)

    def action_cancel(self) -> None:
        self.dismiss(None)

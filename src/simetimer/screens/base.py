"""Shared bindings, brand rendering and base screen for the SimeTimer TUI."""

from __future__ import annotations

from pyfiglet import Figlet
from textual.binding import Binding
from textual.screen import Screen

BACK_BINDINGS = [
    Binding("escape", "back", "Back"),
    Binding("ctrl+c", "back", "Back", key_display="^c", priority=True),
]

TIMER_BINDINGS = [
    Binding("space", "start_stop", "Start/Stop"),
    Binding("x", "cut", "Cut"),
    Binding("e", "edit_comment", "Comment"),
    Binding("ctrl+r", "reset", "Reset", key_display="^r"),
    Binding("ctrl+s", "save", "Save", key_display="^s"),
    Binding("ctrl+o", "load", "Load", key_display="^o"),
    Binding("o", "options", "Options"),
    Binding("ctrl+c", "quit", "Quit", key_display="^c", priority=True),
]

__all__ = ["BACK_BINDINGS", "TIMER_BINDINGS", "BackScreen", "render_brand"]


def render_brand(font: str = "small") -> str:
    """Render the brand title as ASCII art."""
    try:
        return Figlet(font=font).renderText("SimeTimer").rstrip()
    except Exception:
        return "SimeTimer"


class BackScreen(Screen[None]):
    """Screen that pops itself on escape."""

    BINDINGS = BACK_BINDINGS

    def action_back(self) -> None:
        self.app.pop_screen()

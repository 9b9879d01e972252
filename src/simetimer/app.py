"""Textual TUI app hosting the timer screen.

Layout:
┌─────────────────────────────────────────────┐
│  SimeTimer                                  │
│  Total  1:02:03.456                         │
│  Chunk  0:12:00.001                         │
├─────────────────────────────────────────────┤
│  #  Start                 Duration  Comment │
│  1  5. 3. 2023, 07:08:09  0:12:00.000  ...  │
├─────────────────────────────────────────────┤
│  Start  Cut  Reset  Save  Load  Options     │
└─────────────────────────────────────────────┘
"""

from __future__ import annotations

from pathlib import Path

from textual.app import App

from simetimer.codec import FileFormat
from simetimer.screens.timer import TimerScreen


class SimeTimerApp(App[None]):
    """Stopwatch with a table of recorded time chunks."""

    TITLE = "SimeTimer"

    CSS = """
    .screen-frame {
        height: 1fr;
    }

    .top-bar {
        height: auto;
        padding: 0 1;
        background: $accent;
        color: $text;
    }

    .clock-row {
        height: 1;
    }

    .clock-label {
        width: 8;
        color: $text-muted;
    }

    .clock {
        text-style: bold;
    }

    #chunk-table {
        height: 11;
        margin: 1 0;
    }

    .screen-body {
        height: 1fr;
        padding: 0 1;
    }

    .screen-body-footer {
        height: auto;
        dock: bottom;
    }

    .btn {
        margin: 0 1 0 0;
    }

    .option-row {
        height: auto;
    }

    .option-label {
        padding: 1 0 0 1;
    }

    .modal-container {
        align: center middle;
        width: 70;
        height: auto;
        background: $surface;
        border: tall $accent;
        padding: 1 2;
    }

    .modal-title {
        margin-bottom: 1;
    }

    ModalScreen {
        align: center middle;
    }
    """

    def __init__(
        self,
        open_file: str | Path | None = None,
        open_format: FileFormat | str | None = None,
    ) -> None:
        super().__init__()
        self.open_file = open_file
        self.open_format = open_format

    def on_mount(self) -> None:
        self.push_screen(TimerScreen(open_file=self.open_file, open_format=self.open_format))

"""Options — the user-editable part of the config."""

from __future__ import annotations

from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Input, Select, Static, Switch

from simetimer.codec import FileFormat
from simetimer.config import MAX_TABLE_SIZE, MIN_TABLE_SIZE, load_config, save_config, validate_config
from simetimer.screens.base import BackScreen

BOOL_OPTIONS = [
    ("load_last_file_on_startup", "Load last used project on startup"),
    ("autosave", "Save changes to the last used file immediately"),
    ("ask_for_comment_on_stop", "Ask for a comment on stop"),
    ("ask_for_comment_on_cut", "Ask for a comment on cut"),
    ("ask_for_save_on_load", "Offer to save before loading"),
    ("ask_for_save_on_close", "Offer to save before quitting"),
]


class OptionsScreen(BackScreen):
    """Switches for the boolean options, file format and table size."""

    def compose(self):
        cfg = load_config()
        with Vertical(classes="screen-frame"):
            with Horizontal(classes="top-bar compact"):
                yield Static("SimeTimer", classes="brand")
                yield Static("Options", classes="top-bar-section")
            with Vertical(classes="screen-body"):
                for key, label in BOOL_OPTIONS:
                    with Horizontal(classes="option-row"):
                        yield Switch(value=bool(cfg.get(key)), id=f"opt-{key}")
                        yield Static(label, classes="option-label")
                yield Static("File format:")
                yield Select(
                    [("Plain text", FileFormat.PLAIN.value), ("Byte coded", FileFormat.BYTE.value)],
                    value=cfg["file_format"],
                    allow_blank=False,
                    id="opt-file_format",
                )
                yield Static(f"Table rows ({MIN_TABLE_SIZE}-{MAX_TABLE_SIZE}):")
                yield Input(value=str(cfg["table_size"]), id="opt-table_size", type="integer")
                with Horizontal(classes="screen-body-footer"):
                    yield Button("Save options", id="btn-save", classes="btn primary inline")
                    yield Button("esc Back", id="btn-back", classes="btn secondary inline")

    def collect(self) -> dict:
        """Current widget values merged into the stored config, validated."""
        cfg = load_config()
        for key, _ in BOOL_OPTIONS:
            cfg[key] = bool(self.query_one(f"#opt-{key}", Switch).value)
        cfg["file_format"] = self.query_one("#opt-file_format", Select).value
        raw_size = self.query_one("#opt-table_size", Input).value.strip()
        try:
            cfg["table_size"] = int(raw_size)
        except ValueError:
            cfg["table_size"] = None
        return validate_config(cfg)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn-back":
            self.action_back()
            return
        if event.button.id != "btn-save":
            return
        save_config(self.collect())
        self.notify("Options saved.")
        self.action_back()

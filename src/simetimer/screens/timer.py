"""Timer screen — total and chunk clocks, chunk table, start/stop/cut/reset, save/load."""

from __future__ import annotations

import logging
from pathlib import Path

from textual.containers import Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import Button, DataTable, Footer, Static

from simetimer.clock import SessionClock
from simetimer.codec import FileFormat, delete_file, load_project, save_project, with_default_suffix
from simetimer.config import file_format, load_config, save_config
from simetimer.errors import CorruptDataError, InvalidArgumentError, ProjectFileError
from simetimer.screens.base import TIMER_BINDINGS, render_brand
from simetimer.screens.modals import CommentScreen, ConfirmScreen, PathScreen

logger = logging.getLogger(__name__)

COLUMNS = ("#", "Start", "Duration", "Comment")

# Display refresh period; the interval only reads clock state.
REFRESH_SECONDS = 0.016


class TimerScreen(Screen[None]):
    """Main screen. Every mutation goes through :meth:`_change_made`."""

    BINDINGS = TIMER_BINDINGS

    def __init__(
        self,
        open_file: str | Path | None = None,
        open_format: FileFormat | str | None = None,
        clock: SessionClock | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.session = clock or SessionClock()
        self.cfg = load_config()
        self.open_file = open_file
        self.open_format = open_format

    def compose(self):
        with Vertical(classes="screen-frame"):
            with Vertical(classes="top-bar"):
                yield Static(render_brand(), classes="brand")
                with Horizontal(classes="clock-row"):
                    yield Static("Total", classes="clock-label")
                    yield Static("0:00:00.000", id="total-time", classes="clock")
                with Horizontal(classes="clock-row"):
                    yield Static("Chunk", classes="clock-label")
                    yield Static("0:00:00.000", id="chunk-time", classes="clock")
            yield DataTable(id="chunk-table", zebra_stripes=True)
            with Horizontal(classes="screen-body-footer"):
                yield Button("Start", id="btn-start", classes="btn primary inline")
                yield Button("Cut", id="btn-cut", classes="btn secondary inline")
                yield Button("Reset", id="btn-reset", classes="btn danger inline")
                yield Button("Save", id="btn-save", classes="btn secondary inline")
                yield Button("Load", id="btn-load", classes="btn secondary inline")
                yield Button("Options", id="btn-options", classes="btn secondary inline")
        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one("#chunk-table", DataTable)
        table.cursor_type = "row"
        table.add_columns(*COLUMNS)
        self._apply_table_size()

        self._load_on_startup()
        self._refresh_table()
        self._refresh_time_labels()
        self.set_interval(REFRESH_SECONDS, self._refresh_time_labels)

    def on_screen_resume(self) -> None:
        self.cfg = load_config()
        self._apply_table_size()

    # -- display -----------------------------------------------------------

    def _apply_table_size(self) -> None:
        try:
            table = self.query_one("#chunk-table", DataTable)
        except Exception:
            return
        # header row plus the configured number of chunk rows
        table.styles.height = self.cfg["table_size"] + 1

    def _refresh_time_labels(self) -> None:
        try:
            self.query_one("#total-time", Static).update(self.session.displayed_total())
            self.query_one("#chunk-time", Static).update(self.session.displayed_chunk())
        except Exception:
            pass

    def _refresh_table(self) -> None:
        table = self.query_one("#chunk-table", DataTable)
        table.clear()
        for row in self.session.project_rows():
            table.add_row(*row)
        if table.row_count:
            table.move_cursor(row=table.row_count - 1)

    def _refresh_buttons(self) -> None:
        try:
            self.query_one("#btn-start", Button).label = "Stop" if self.session.running else "Start"
        except Exception:
            pass

    def _refresh_title(self) -> None:
        used = self.cfg.get("last_used_file")
        self.app.sub_title = Path(used).name if used else ""

    def _refresh_all(self) -> None:
        self._refresh_table()
        self._refresh_time_labels()
        self._refresh_buttons()
        self._refresh_title()

    # -- persistence -------------------------------------------------------

    def _remember_file(self, path: str | Path | None) -> None:
        self.cfg["last_used_file"] = str(path) if path is not None else None
        save_config(self.cfg)

    def _load_on_startup(self) -> None:
        """Open the file given on the command line, else the last used one."""
        path = self.open_file
        remembered = path is None
        if remembered:
            if not self.cfg.get("load_last_file_on_startup"):
                return
            path = self.cfg.get("last_used_file")
        if not path:
            return
        loaded = self._load_from(path, self.open_format or file_format(self.cfg))
        if not loaded and remembered:
            # Autosave must not overwrite a file that could not be opened.
            logger.warning("Forgetting last used file %s", path)
            self._remember_file(None)

    def _save_to(self, path: str | Path) -> bool:
        try:
            save_project(self.session.project, path, file_format(self.cfg))
        except (ProjectFileError, InvalidArgumentError) as exc:
            logger.error("Save to %s failed: %s", path, exc)
            self.notify(str(exc), title="Save error", severity="error")
            return False
        self.session.mark_persisted()
        return True

    def _load_from(self, path: str | Path, fmt: FileFormat | str) -> bool:
        """Replace the project with the one at *path*; the file is remembered only on success."""
        try:
            project = load_project(path, fmt)
        except CorruptDataError as exc:
            corrupt_path = exc.path
            self.notify(exc.message, title="Load error", severity="error")
            self.app.push_screen(
                ConfirmScreen(f"{exc.message}\nDo you wish to delete it?"),
                lambda confirmed: self._delete_corrupt(corrupt_path) if confirmed else None,
            )
            return False
        except ProjectFileError as exc:
            self.notify(exc.message, title="Load error", severity="error")
            return False
        self.session.replace_project(project)
        self._remember_file(path)
        self._refresh_all()
        return True

    def _delete_corrupt(self, path: Path | None) -> None:
        if path is None:
            return
        try:
            delete_file(path)
        except ProjectFileError as exc:
            self.notify(exc.message, title="Delete error", severity="error")
            return
        self.notify(f"Deleted {path.name}")

    def _change_made(self) -> None:
        """Autosave to the last used file when enabled; otherwise leave it unsaved."""
        used = self.cfg.get("last_used_file")
        if self.cfg.get("autosave") and used:
            self._save_to(used)
        self._refresh_all()

    # -- clock actions -----------------------------------------------------

    def action_start_stop(self) -> None:
        if not self.session.running:
            self.session.start()
            self._refresh_buttons()
            return
        self.session.stop()
        self._chunk_added(self.cfg.get("ask_for_comment_on_stop"))

    def action_cut(self) -> None:
        if not self.session.running:
            self.app.bell()
            return
        self.session.cut()
        self._chunk_added(self.cfg.get("ask_for_comment_on_cut"))

    def _chunk_added(self, ask_for_comment: bool) -> None:
        self._change_made()
        if ask_for_comment:
            index = self.session.project.size() - 1
            self.app.push_screen(
                CommentScreen("You can enter a comment for the last time chunk here:"),
                lambda text: self._comment_entered(index, text),
            )

    def action_edit_comment(self) -> None:
        table = self.query_one("#chunk-table", DataTable)
        if not table.row_count:
            return
        index = table.cursor_row
        chunk = self.session.project.get(index)
        self.app.push_screen(
            CommentScreen(f"Comment for chunk {index + 1}:", initial=chunk.comment),
            lambda text: self._comment_entered(index, text),
        )

    def _comment_entered(self, index: int, text: str | None) -> None:
        if text is None:
            return
        chunk = self.session.project.get(index)
        if chunk.comment == text:
            return
        self.session.set_comment(index, text)
        self._change_made()

    def action_reset(self) -> None:
        if not self.session.has_unsaved_chunks:
            self._do_reset()
            return
        self.app.push_screen(
            ConfirmScreen("Do you really want to reset your current project?"),
            lambda confirmed: self._do_reset() if confirmed else None,
        )

    def _do_reset(self) -> None:
        self.session.reset()
        self._refresh_all()

    # -- file actions ------------------------------------------------------

    def action_save(self) -> None:
        self.app.push_screen(
            PathScreen("Save project to:", self.cfg.get("last_used_file")),
            self._on_save_path,
        )

    def _on_save_path(self, path: str | None, then=None) -> None:
        if path is None:
            return
        target = with_default_suffix(path)
        if not self._save_to(target):
            return
        self._remember_file(target)
        self.notify(f"Saved {target.name}")
        self._refresh_title()
        if then is not None:
            then()

    def action_load(self) -> None:
        if self.session.running:
            self.notify("Stop the clock before loading a project.", severity="warning")
            return
        if self.session.has_unsaved_chunks and self.cfg.get("ask_for_save_on_load"):
            self.app.push_screen(
                ConfirmScreen("Your current project is not saved.\nDo you want to save it before loading?"),
                self._on_save_before_load,
            )
            return
        self._ask_load_path()

    def _on_save_before_load(self, confirmed: bool) -> None:
        if not confirmed:
            self._ask_load_path()
            return
        self.app.push_screen(
            PathScreen("Save project to:", self.cfg.get("last_used_file")),
            lambda path: self._on_save_path(path, then=self._ask_load_path),
        )

    def _ask_load_path(self) -> None:
        self.app.push_screen(
            PathScreen("Load project from:", self.cfg.get("last_used_file")),
            self._on_load_path,
        )

    def _on_load_path(self, path: str | None) -> None:
        if path is None:
            return
        if self._load_from(Path(path).expanduser(), file_format(self.cfg)):
            self.notify(f"Loaded {Path(path).name}")

    def action_options(self) -> None:
        from simetimer.screens.options import OptionsScreen
        self.app.push_screen(OptionsScreen())

    def action_quit(self) -> None:
        if self.session.has_unsaved_chunks and self.cfg.get("ask_for_save_on_close"):
            self.app.push_screen(
                ConfirmScreen("Your current project is not saved.\nDo you want to save it before exiting?"),
                self._on_save_before_quit,
            )
            return
        self.app.exit()

    def _on_save_before_quit(self, confirmed: bool) -> None:
        if not confirmed:
            self.app.exit()
            return
        self.app.push_screen(
            PathScreen("Save project to:", self.cfg.get("last_used_file")),
            lambda path: self._on_save_path(path, then=self.app.exit),
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        bid = event.button.id
        if bid == "btn-start":
            self.action_start_stop()
        elif bid == "btn-cut":
            self.action_cut()
        elif bid == "btn-reset":
            self.action_reset()
        elif bid == "btn-save":
            self.action_save()
        elif bid == "btn-load":
            self.action_load()
        elif bid == "btn-options":
            self.action_options()

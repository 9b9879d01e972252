"""TUI screens — Timer, Options, and the modal dialogs."""

from simetimer.screens.base import BackScreen
from simetimer.screens.modals import CommentScreen, ConfirmScreen, PathScreen
from simetimer.screens.options import OptionsScreen
from simetimer.screens.timer import TimerScreen

__all__ = [
    "BackScreen",
    "CommentScreen",
    "ConfirmScreen",
    "OptionsScreen",
    "PathScreen",
    "TimerScreen",
]

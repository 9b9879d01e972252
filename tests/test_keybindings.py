"""Tests for timer and modal key binding coverage."""

from __future__ import annotations

import pytest

pytest.importorskip("textual")

from simetimer.screens.base import BACK_BINDINGS, TIMER_BINDINGS
from simetimer.screens.modals import CommentScreen, ConfirmScreen, PathScreen


def _binding_exists(bindings, key: str, action: str, *, priority: bool | None = None) -> bool:
    for binding in bindings:
        if binding.key == key and binding.action == action:
            if priority is None or bool(binding.priority) == priority:
                return True
    return False


def test_timer_bindings_cover_clock_actions() -> None:
    assert _binding_exists(TIMER_BINDINGS, "space", "start_stop")
    assert _binding_exists(TIMER_BINDINGS, "x", "cut")
    assert _binding_exists(TIMER_BINDINGS, "ctrl+r", "reset")


def test_timer_bindings_cover_file_actions() -> None:
    assert _binding_exists(TIMER_BINDINGS, "ctrl+s", "save")
    assert _binding_exists(TIMER_BINDINGS, "ctrl+o", "load")


def test_timer_ctrl_c_prioritizes_quit() -> None:
    assert _binding_exists(TIMER_BINDINGS, "ctrl+c", "quit", priority=True)


def test_back_screens_support_ctrl_c_back() -> None:
    assert _binding_exists(BACK_BINDINGS, "ctrl+c", "back", priority=True)


def test_modal_ctrl_c_bindings() -> None:
    assert _binding_exists(CommentScreen.BINDINGS, "ctrl+c", "cancel", priority=True)
    assert _binding_exists(PathScreen.BINDINGS, "ctrl+c", "cancel", priority=True)
    assert _binding_exists(ConfirmScreen.BINDINGS, "ctrl+c", "no", priority=True)

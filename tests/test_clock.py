"""Tests for clock module — start/stop/cut/reset transitions and elapsed-time display."""

import pytest

from simetimer.chunks import TimeChunk
from simetimer.clock import SessionClock
from simetimer.errors import InvalidStateError
from simetimer.project import Project


class TestTransitions:
    def test_start_stop_cut_scenario(self, fake_clock):
        clock = SessionClock(now=fake_clock)
        fake_clock.t = 0
        clock.start()
        fake_clock.t = 300
        clock.cut("x")
        fake_clock.t = 700
        clock.stop("done")

        assert list(clock.project) == [TimeChunk(0, 300, "x"), TimeChunk(300, 400, "done")]
        assert clock.project.total_time() == 700
        assert clock.running is False

    def test_cut_has_no_gap_or_overlap(self, fake_clock):
        clock = SessionClock(now=fake_clock)
        fake_clock.t = 1_000
        clock.start()
        fake_clock.t = 1_234
        closed = clock.cut()
        assert clock.current_start == closed.end_ms
        fake_clock.t = 2_000
        following = clock.stop()
        assert following.start_ms == closed.end_ms

    def test_cut_reads_the_clock_once(self):
        readings = iter([100, 250, 999])
        clock = SessionClock(now=lambda: next(readings))
        clock.start()
        chunk = clock.cut()
        assert chunk == TimeChunk(100, 150)
        assert clock.current_start == 250

    def test_start_while_running(self, fake_clock):
        clock = SessionClock(now=fake_clock)
        clock.start()
        fake_clock.t = 50
        with pytest.raises(InvalidStateError):
            clock.start()
        assert clock.current_start == 0

    @pytest.mark.parametrize("action", ["stop", "cut"])
    def test_stop_and_cut_need_running_clock(self, action):
        clock = SessionClock()
        with pytest.raises(InvalidStateError):
            getattr(clock, action)()
        assert clock.project.size() == 0

    def test_reset_discards_running_interval(self, fake_clock):
        clock = SessionClock(now=fake_clock)
        clock.start()
        fake_clock.t = 100
        clock.cut()
        fake_clock.t = 500
        old_project = clock.project
        clock.reset()
        assert clock.running is False
        assert clock.project.size() == 0
        assert clock.project is not old_project
        assert old_project.size() == 1

    def test_reset_when_idle(self):
        clock = SessionClock(project=Project([TimeChunk(0, 5)]))
        clock.reset()
        assert clock.project.size() == 0

    def test_clock_going_backwards_is_clamped(self, fake_clock):
        clock = SessionClock(now=fake_clock)
        fake_clock.t = 1_000
        clock.start()
        fake_clock.t = 900
        chunk = clock.cut()
        assert chunk.duration_ms == 0
        assert clock.current_start == 1_000
        fake_clock.t = 1_100
        assert clock.stop().duration_ms == 100

    def test_replace_project_refused_while_running(self):
        clock = SessionClock()
        clock.start()
        with pytest.raises(InvalidStateError):
            clock.replace_project(Project())

    def test_set_comment(self):
        clock = SessionClock(project=Project([TimeChunk(0, 5)]))
        clock.set_comment(0, "edited")
        assert clock.project.get(0).comment == "edited"


class TestUnsavedTracking:
    def test_new_clock_has_nothing_unsaved(self):
        assert SessionClock().has_unsaved_chunks is False

    def test_stop_creates_unsaved_chunk(self, fake_clock):
        clock = SessionClock(now=fake_clock)
        clock.start()
        fake_clock.t = 10
        clock.stop()
        assert clock.has_unsaved_chunks is True
        clock.mark_persisted()
        assert clock.has_unsaved_chunks is False

    def test_comment_edit_after_save(self):
        clock = SessionClock(project=Project([TimeChunk(0, 5)]))
        clock.mark_persisted()
        clock.set_comment(0, "new")
        assert clock.has_unsaved_chunks is True

    def test_replace_project_counts_as_persisted(self):
        clock = SessionClock()
        clock.replace_project(Project([TimeChunk(0, 5)]))
        assert clock.has_unsaved_chunks is False

    def test_reset_clears_state(self):
        clock = SessionClock(project=Project([TimeChunk(0, 5)]))
        clock.reset()
        assert clock.has_unsaved_chunks is False


class TestDisplay:
    def test_idle_empty(self):
        clock = SessionClock()
        assert clock.displayed_total() == "0:00:00.000"
        assert clock.displayed_chunk() == "0:00:00.000"

    def test_running_adds_current_interval(self, fake_clock):
        clock = SessionClock(project=Project([TimeChunk(0, 1_000)]), now=fake_clock)
        fake_clock.t = 5_000
        clock.start()
        fake_clock.t = 6_500
        assert clock.elapsed_total_ms() == 2_500
        assert clock.displayed_chunk() == "0:00:01.500"
        assert clock.displayed_total() == "0:00:02.500"

    def test_idle_shows_last_chunk(self, fake_clock):
        clock = SessionClock(now=fake_clock)
        clock.start()
        fake_clock.t = 3661004
        clock.stop()
        fake_clock.t = 9_999_999
        assert clock.displayed_chunk() == "1:01:01.004"
        assert clock.displayed_total() == "1:01:01.004"

    def test_project_rows(self):
        clock = SessionClock(project=Project([TimeChunk(0, 1_000, "a")]))
        assert clock.project_rows()[0][0] == "1"
        assert clock.project_rows()[0][3] == "a"

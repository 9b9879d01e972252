"""Tests for project module — positional access, totals, sorting, unsaved detection."""

import pytest

from simetimer.chunks import TimeChunk
from simetimer.errors import ChunkIndexError
from simetimer.project import Project, has_unsaved_chunks


def _project(*specs) -> Project:
    return Project(TimeChunk(*spec) for spec in specs)


class TestProject:
    def test_empty(self):
        project = Project()
        assert project.size() == 0
        assert len(project) == 0
        assert project.total_time() == 0
        assert project.last_chunk() is None
        assert project.rows() == []

    def test_add_keeps_append_order(self):
        project = Project()
        project.add(TimeChunk(2000, 10))
        project.add(TimeChunk(1000, 10))
        assert [c.start_ms for c in project] == [2000, 1000]
        assert project.last_chunk().start_ms == 1000

    def test_total_time_is_sum_of_durations(self):
        project = _project((1000, 500, "a"), (2000, 250, ""), (5000, 0, ""))
        assert project.total_time() == 750

    def test_get(self):
        project = _project((1000, 500, "a"))
        assert project.get(0).comment == "a"
        assert project[0] is project.get(0)

    @pytest.mark.parametrize("index", [1, 5, -1])
    def test_get_out_of_range(self, index):
        project = _project((1000, 500, "a"))
        with pytest.raises(ChunkIndexError):
            project.get(index)

    def test_index_error_is_builtin_index_error(self):
        with pytest.raises(IndexError):
            Project()[0]

    def test_sort_times_orders_by_start_then_duration(self):
        project = _project((3000, 1), (1000, 20), (1000, 10), (2000, 5))
        project.sort_times()
        assert [(c.start_ms, c.duration_ms) for c in project] == [
            (1000, 10), (1000, 20), (2000, 5), (3000, 1),
        ]

    def test_sort_times_is_stable_and_idempotent(self):
        project = _project((1000, 10, "first"), (500, 1, ""), (1000, 10, "second"))
        project.sort_times()
        once = list(project)
        project.sort_times()
        assert list(project) == once
        assert [c.comment for c in project] == ["", "first", "second"]

    def test_rows(self):
        project = _project((0, 1000, "a"), (0, 2000, "b"))
        rows = project.rows()
        assert [r[0] for r in rows] == ["1", "2"]
        assert rows[1][2] == "0:00:02.000"
        assert rows[1][3] == "b"

    def test_equality(self):
        assert _project((1, 2, "x")) == _project((1, 2, "x"))
        assert _project((1, 2, "x")) != _project((1, 2, "y"))


class TestHasUnsavedChunks:
    def test_nothing_persisted_empty_project(self):
        assert has_unsaved_chunks(Project(), None) is False

    def test_nothing_persisted_with_chunks(self):
        assert has_unsaved_chunks(_project((1, 2, "")), None) is True

    def test_same_content(self):
        project = _project((1, 2, "a"))
        assert has_unsaved_chunks(project, project.snapshot()) is False
        assert has_unsaved_chunks(project, _project((1, 2, "a"))) is False

    def test_comment_edit_counts(self):
        project = _project((1, 2, "a"))
        saved = project.snapshot()
        project.get(0).set_comment("b")
        assert has_unsaved_chunks(project, saved) is True

    def test_appended_chunk_counts(self):
        project = _project((1, 2, "a"))
        saved = project.snapshot()
        project.add(TimeChunk(3, 4))
        assert has_unsaved_chunks(project, saved) is True

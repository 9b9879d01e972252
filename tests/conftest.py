"""Shared fixtures."""

from __future__ import annotations

import pytest

from simetimer import config


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, t: int = 0) -> None:
        self.t = t

    def __call__(self) -> int:
        return self.t


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep every test away from the real ~/.config/simetimer."""
    path = tmp_path / "config" / "config.json"
    monkeypatch.setattr(config, "CONFIG_PATH", path)
    monkeypatch.setattr(config, "CONFIG_DIR", path.parent)
    return path

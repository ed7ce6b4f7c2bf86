# tests/conftest.py - shared fixtures: quiet logging and a manual clock for debounce timers

import pytest

from predictive_notes.utils.logger_utils import Log


@pytest.fixture(autouse=True)
def _log_to_tmp(tmp_path):
    old = (Log.path, Log.echo)
    Log.configure(path=str(tmp_path / "logs" / "test.log"), echo=False)
    yield
    Log.configure(path=old[0], echo=old[1])


class FakeHandle:
    def __init__(self, when, fn):
        self.when = when
        self.fn = fn
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class FakeScheduler:
    """Drop-in for loop.call_later driven by advance()."""

    def __init__(self):
        self.now = 0.0
        self.handles = []

    def __call__(self, delay, fn):
        handle = FakeHandle(self.now + delay, fn)
        self.handles.append(handle)
        return handle

    @property
    def pending(self):
        return [h for h in self.handles if not h.cancelled]

    def advance(self, seconds):
        self.now += seconds
        due = [h for h in self.pending if h.when <= self.now + 1e-9]
        for h in due:
            self.handles.remove(h)
            h.fn()


@pytest.fixture
def fake_scheduler():
    return FakeScheduler()

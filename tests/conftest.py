import asyncio

import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import Session

from break_reminder.controller import SessionController
from break_reminder.db import make_engine
from break_reminder.main import MAIN_WINDOW_OPTIONS
from break_reminder.store import KeyValueStore
from break_reminder.window_surface import HeadlessWindowSurface, Monitor


class InstantSleep:
    """Stands in for asyncio.sleep: records the requested delay and yields once."""

    def __init__(self):
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)
        await asyncio.sleep(0)


@pytest.fixture
def engine(tmp_path):
    return make_engine(f"sqlite:///{tmp_path / 'store.db'}")


@pytest.fixture
def store(engine):
    return KeyValueStore(engine)


@pytest.fixture
def surface():
    surface = HeadlessWindowSurface(Monitor(2880, 1800, 2.0))
    surface.create_window(MAIN_WINDOW_OPTIONS).show()
    return surface


@pytest.fixture
def instant_sleep():
    return InstantSleep()


@pytest.fixture
def controller(store, surface, instant_sleep):
    return SessionController(store, surface, sleep=instant_sleep)


@pytest.fixture
def break_commits(monkeypatch):
    """Call the returned function to make every later store commit fail (locked SQLite file)."""

    def commit(self):
        raise OperationalError("COMMIT", {}, Exception("database is locked"))

    def enable():
        monkeypatch.setattr(Session, "commit", commit)

    return enable

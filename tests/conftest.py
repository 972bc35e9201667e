import pathlib
import sys
from datetime import datetime, timedelta, timezone

import pytest

sys.path.append(str(pathlib.Path(__file__).resolve().parents[1]))

from scouting import create_app
from scouting.storage import EntityStore


class TickingClock:
    """Deterministic clock: each call is one second after the previous one."""

    def __init__(self, start=None):
        self.now = start or datetime(2025, 1, 1, tzinfo=timezone.utc)

    def __call__(self):
        current = self.now
        self.now = self.now + timedelta(seconds=1)
        return current


@pytest.fixture()
def clock():
    return TickingClock()


@pytest.fixture()
def store(clock):
    return EntityStore(clock=clock)


@pytest.fixture()
def seeded_store(store):
    store.seed()
    return store


def _client_for(entity_store, seed):
    app = create_app(store=entity_store, seed=seed)
    app.config.update({"TESTING": True})
    return app.test_client()


@pytest.fixture()
def client(store):
    with _client_for(store, seed=False) as c:
        yield c


@pytest.fixture()
def seeded_client(store):
    with _client_for(store, seed=True) as c:
        yield c

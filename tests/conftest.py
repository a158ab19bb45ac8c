"""Shared pytest fixtures for Collection Sync tests.

Provides populated observable lists, mapping functions and a recorder for
change events so tests can assert exactly what a collection emitted.
"""

import pytest

from collection_sync.config import SyncConfig, SyncMode
from collection_sync.observables import ObservableList
from collection_sync.sync.synchronizer import Synchronizer


def times_ten(x):
    return x * 10


def div_ten(x):
    return x // 10


class EventRecorder:
    """Change handler that remembers every (sender, event) it receives."""

    def __init__(self):
        self.calls = []

    def __call__(self, sender, event):
        self.calls.append((sender, event))

    @property
    def events(self):
        return [event for _, event in self.calls]

    @property
    def actions(self):
        return [event.action for event in self.events]


@pytest.fixture
def recorder():
    """Fresh EventRecorder."""
    return EventRecorder()


@pytest.fixture
def source():
    """Source list [1, 2, 3]."""
    return ObservableList([1, 2, 3])


@pytest.fixture
def target():
    """Target list already aligned with source under times_ten."""
    return ObservableList([10, 20, 30])


@pytest.fixture
def two_way(source, target):
    """Two-way Synchronizer over the aligned pair."""
    sync = Synchronizer(source, target, to_source=div_ten, to_target=times_ten)
    yield sync
    sync.dispose()


@pytest.fixture
def one_way_to_target(source, target):
    """Synchronizer that only relays source changes."""
    sync = Synchronizer(
        source, target, div_ten, times_ten,
        SyncConfig(mode=SyncMode.ONE_WAY_TO_TARGET),
    )
    yield sync
    sync.dispose()

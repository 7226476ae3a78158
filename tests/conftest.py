"""Shared fixtures: a manual clock scheduler and a ready-made engine."""

import random

import pytest

from undercover.catalog.topics import Topic, TopicCatalog
from undercover.engine.game import GameEngine
from undercover.storage.stores import MemoryStore


class FakeHandle:
    def __init__(self, scheduler, when, callback):
        self.scheduler = scheduler
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class FakeScheduler:
    """Stands in for an asyncio loop; time only moves on ``advance``."""

    def __init__(self):
        self.now = 0.0
        self.handles = []

    def time(self):
        return self.now

    def call_later(self, delay, callback, *args):
        handle = FakeHandle(self, self.now + delay, lambda: callback(*args))
        self.handles.append(handle)
        return handle

    def pending(self):
        return [h for h in self.handles if not h.cancelled]

    def advance(self, seconds):
        """Move the clock forward, firing due callbacks in time order."""
        target = self.now + seconds
        while True:
            due = sorted(
                (h for h in self.pending() if h.when <= target),
                key=lambda h: h.when,
            )
            if not due:
                break
            handle = due[0]
            self.handles.remove(handle)
            self.now = handle.when
            handle.callback()
        self.now = target


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def catalog():
    return TopicCatalog([
        Topic(name="Knight", hint="Armor"),
        Topic(name="Goblins", hint="Green"),
        Topic(name="Zappies"),
    ])


@pytest.fixture
def engine(store, catalog):
    return GameEngine(store, store, catalog, rng=random.Random(1234))

"""Shared fixtures."""

from datetime import date

import pytest

from daybook.workflows import TodoList

from fakes import NOW, FixedClock, InMemoryKeyValueStore, SequentialIdGenerator


@pytest.fixture
def today():
    return date(2025, 1, 15)


@pytest.fixture
def clock():
    return FixedClock(NOW)


@pytest.fixture
def kv():
    return InMemoryKeyValueStore()


@pytest.fixture
def todo(kv, clock):
    return TodoList(kv, clock=clock, id_generator=SequentialIdGenerator())

"""Shared fixtures: a recording in-memory backend and the models used across tests."""

from typing import Any, Dict, List, Tuple

import pytest

from virtualmodel import Model, MemoryRepo, virtual, set_config, ApplicationConfig, Environment


class RecordingBackend(MemoryRepo):
    """MemoryRepo that remembers every insert/update payload it receives."""

    def __init__(self):
        super().__init__()
        if not hasattr(self, "calls"):
            self.calls: List[Tuple[str, Dict[str, Any], bool]] = []

    async def insert(self, table, attributes, id_attribute="id"):
        self.calls.append(("insert", dict(attributes), False))
        return await super().insert(table, attributes, id_attribute)

    async def update(self, table, record_id, attributes, patch=False):
        self.calls.append(("update", dict(attributes), patch))
        return await super().update(table, record_id, attributes, patch)

    def clear(self):
        super().clear()
        self.calls.clear()


def split_full_name(self, value):
    first, last = value.split(" ")
    self.set("first", first)
    self.set("last", last)


class Person(Model):
    """Person with a writable full name and a few computed virtuals."""
    _persistence_backend_class = RecordingBackend

    virtuals = {
        "full_name": {
            "get": lambda self: f"{self.get('first')} {self.get('last')}",
            "set": split_full_name,
        },
        "initials": lambda self: f"{self.get('first')[0]}{self.get('last')[0]}",
    }

    @virtual
    def greeting(self, salutation="Hello"):
        return f"{salutation}, {self.get('first')}"


class QuietPerson(Person):
    """Same virtuals, hidden from to_json unless asked for."""
    output_virtuals = False


@pytest.fixture(autouse=True)
def testing_config():
    set_config(ApplicationConfig.for_environment(Environment.TESTING))
    yield
    set_config(None)


@pytest.fixture(autouse=True)
def backends():
    """Clear both in-memory backends around every test."""
    MemoryRepo().clear()
    RecordingBackend().clear()
    yield
    MemoryRepo().clear()
    RecordingBackend().clear()


@pytest.fixture
def recording_backend() -> RecordingBackend:
    return RecordingBackend()


@pytest.fixture
def ada() -> Person:
    return Person({"first": "Ada", "last": "Byron"})

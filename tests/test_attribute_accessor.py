"""
Attribute Accessor Tests

Routing of get/set between virtual and real attributes.
"""

import pytest

from virtualmodel import Model, Record

from conftest import Person


class Counter(Model):
    """Model whose setter only records what it was given."""
    received = []

    virtuals = {
        "tally": {
            "get": lambda self: len(Counter.received),
            "set": lambda self, value: Counter.received.append(value),
        },
        "double": lambda self: self.get("count") * 2,
    }


class Profile(Model):
    virtuals = {"card": lambda self: {"name": self.get("name")}}


@pytest.fixture(autouse=True)
def reset_counter():
    Counter.received.clear()
    yield
    Counter.received.clear()


@pytest.fixture
def real_set_calls(monkeypatch):
    """Spy on the record-level set that virtual dispatch falls through to."""
    calls = []
    original = Record.set

    def spy(self, key, value=None, **options):
        calls.append((key, value, options))
        return original(self, key, value, **options)

    monkeypatch.setattr(Record, "set", spy)
    return calls


class TestGet:
    """Virtual reads go to the getter, everything else to the record"""

    def test_computed_value(self, ada):
        assert ada.get("full_name") == "Ada Byron"
        assert ada.get("initials") == "AB"

    def test_read_has_no_side_effects(self, ada):
        before = dict(ada.attributes)
        ada.get("full_name")
        ada.get("initials")
        assert ada.attributes == before
        assert not ada.has_changed()

    def test_getter_arguments(self, ada):
        assert ada.get("greeting") == "Hello, Ada"
        assert ada.get("greeting", "Hi") == "Hi, Ada"

    def test_real_and_unknown_names(self, ada):
        assert ada.get("first") == "Ada"
        assert ada.get("middle") is None

    def test_getter_errors_propagate(self):
        nameless = Person()
        with pytest.raises(TypeError):
            nameless.get("initials")


class TestSetBag:
    """set({...}) partitions virtual and real keys"""

    def test_setter_called_once_and_key_excluded(self, real_set_calls):
        counter = Counter()
        real_set_calls.clear()

        counter.set({"tally": 5, "count": 2})

        assert Counter.received == [5]
        assert real_set_calls == [({"count": 2}, None, {})]
        assert counter.attributes == {"count": 2}

    def test_read_only_virtual_dropped(self, ada):
        ada.set({"initials": "XX", "last": "Lovelace"})
        assert ada.attributes == {"first": "Ada", "last": "Lovelace"}
        assert ada.get("initials") == "AL"

    def test_setter_writes_real_attributes(self, ada):
        ada.set({"full_name": "Grace Hopper"})
        assert ada.attributes == {"first": "Grace", "last": "Hopper"}

    def test_options_passed_through(self, real_set_calls):
        counter = Counter({"count": 1})
        real_set_calls.clear()
        counter.set({"count": 3}, silent=True)
        assert real_set_calls == [({"count": 3}, None, {"silent": True})]

    def test_returns_self(self, ada):
        assert ada.set({"first": "Augusta"}) is ada


class TestSetSingle:
    """set("name", value) for virtual and real names"""

    def test_virtual_does_not_touch_real_set(self, real_set_calls):
        counter = Counter({"count": 1})
        real_set_calls.clear()

        assert counter.set("tally", 7) is counter

        assert Counter.received == [7]
        assert real_set_calls == []
        assert counter.attributes == {"count": 1}

    def test_read_only_virtual_is_silent_noop(self, ada):
        before = dict(ada.attributes)
        ada.set("initials", "ZZ")
        assert ada.attributes == before
        assert ada.get("initials") == "AB"

    def test_real_name_delegates(self, ada):
        ada.set("last", "King")
        assert ada.get("last") == "King"
        assert ada.get("full_name") == "Ada King"

    def test_none_key_is_noop(self, ada):
        assert ada.set(None) is ada
        assert ada.attributes == {"first": "Ada", "last": "Byron"}

    def test_unset_ignores_virtuals(self, ada):
        ada.set({"full_name": None, "last": None}, unset=True)
        assert ada.attributes == {"first": "Ada"}

    def test_setter_errors_propagate(self, ada):
        with pytest.raises(ValueError):
            ada.set("full_name", "Ada")


class TestConstruction:
    """Constructor attributes go through the virtual-aware set"""

    def test_virtual_in_constructor(self):
        person = Person({"full_name": "Ada Lovelace", "born": 1815})
        assert person.attributes == {"first": "Ada", "last": "Lovelace", "born": 1815}
        assert not person.has_changed()


class TestAttributeHelpers:
    """keys/values/items/invert/pick/omit cover real attributes plus virtuals"""

    def test_keys_and_values(self, ada):
        assert set(ada.keys()) == {"first", "last", "full_name", "initials", "greeting"}
        assert "Ada Byron" in ada.values()
        assert ("initials", "AB") in ada.items()

    def test_pick_and_omit(self, ada):
        assert ada.pick("first", "full_name", "missing") == {"first": "Ada", "full_name": "Ada Byron"}
        assert set(ada.omit("greeting", "first")) == {"last", "full_name", "initials"}

    def test_invert(self, ada):
        inverted = ada.invert()
        assert inverted["Ada"] == "first"
        assert inverted["AB"] == "initials"

    def test_invert_stringifies_unhashable_values(self):
        profile = Profile({"name": "Ada", "tags": ["math"]})
        inverted = profile.invert()
        assert inverted["Ada"] == "name"
        assert inverted["['math']"] == "tags"
        assert inverted["{'name': 'Ada'}"] == "card"

"""Tests for ordered maps embedded in dataclass records."""

from dataclasses import dataclass, field
from typing import Optional

import pytest

from orderedmap import (
    OrderedMap,
    TypeMismatch,
    VNumber,
    decode_record,
    encode_record,
)

from wrapped import WrappedMap


@dataclass
class Envelope:
    data: OrderedMap


@dataclass
class Tagged:
    name: str
    attrs: OrderedMap
    count: int = 0
    extra: Optional[OrderedMap] = None


@dataclass
class Outer:
    inner: Tagged
    label: str = field(default="", metadata={"key": "the-label"})


@dataclass
class Wrapped:
    data: WrappedMap


# ---------------------------------------------------------------------------
# decode_record
# ---------------------------------------------------------------------------

def test_map_field():
    v = decode_record(Envelope, '{ "data": { "x": 1 } }')
    assert isinstance(v.data, OrderedMap)
    assert v.data.get("x") == VNumber(1)


def test_field_order_preserved():
    v = decode_record(Tagged, '{"attrs": {"z": 1, "a": 2, "m": 3}, "name": "t"}')
    assert v.name == "t"
    assert v.attrs.keys() == ["z", "a", "m"]
    assert v.count == 0
    assert v.extra is None


def test_optional_map_field():
    v = decode_record(Tagged, '{"name": "t", "attrs": {}, "extra": {"b": 1, "a": 2}}')
    assert v.extra.keys() == ["b", "a"]
    v = decode_record(Tagged, '{"name": "t", "attrs": {}, "extra": null}')
    assert v.extra is None


def test_plain_fields_are_python_values():
    v = decode_record(Tagged, '{"name": "t", "attrs": {}, "count": 5}')
    assert v.count == 5
    assert isinstance(v.name, str)


def test_nested_record_and_key_override():
    v = decode_record(Outer, '{"the-label": "L", "inner": {"name": "n", "attrs": {"q": 1}}}')
    assert v.label == "L"
    assert v.inner.attrs.keys() == ["q"]


def test_unknown_keys_ignored():
    v = decode_record(Envelope, '{"junk": [1, {"a": 2}], "data": {"x": 1}}')
    assert v.data.keys() == ["x"]


def test_duplicate_field_last_wins():
    v = decode_record(Envelope, '{"data": {"x": 1}, "data": {"y": 2}}')
    assert v.data.keys() == ["y"]


def test_wrapped_map_field():
    v = decode_record(Wrapped, '{"data": {"b": {"c": 1}, "a": 2}}')
    assert isinstance(v.data, WrappedMap)
    assert v.data.keys() == ["b", "a"]
    nested, _ = v.data.lookup("b")
    assert isinstance(nested, WrappedMap)


class TestRecordErrors:
    def test_missing_field(self):
        with pytest.raises(TypeMismatch):
            decode_record(Envelope, "{}")

    def test_map_field_not_object(self):
        with pytest.raises(TypeMismatch):
            decode_record(Envelope, '{"data": [1]}')

    def test_root_not_object(self):
        with pytest.raises(TypeMismatch):
            decode_record(Envelope, "[]")

    def test_not_a_dataclass(self):
        with pytest.raises(TypeError):
            decode_record(dict, "{}")


# ---------------------------------------------------------------------------
# encode_record
# ---------------------------------------------------------------------------

def test_encode_record():
    attrs = OrderedMap([("z", 1), ("a", "<")])
    v = Tagged(name="t", attrs=attrs, count=2)
    assert encode_record(v) == r'{"name":"t","attrs":{"z":1,"a":"\u003c"},"count":2,"extra":null}'
    assert encode_record(v, escape_html=False) == '{"name":"t","attrs":{"z":1,"a":"<"},"count":2,"extra":null}'


def test_encode_nested_record():
    v = Outer(inner=Tagged(name="n", attrs=OrderedMap()), label="L")
    assert encode_record(v) == '{"inner":{"name":"n","attrs":{},"count":0,"extra":null},"the-label":"L"}'


def test_record_round_trip():
    src = '{"inner":{"name":"n","attrs":{"b":[1,{"d":2,"c":3}],"a":null},"count":1,"extra":null},"the-label":""}'
    assert encode_record(decode_record(Outer, src)) == src


@dataclass
class Item:
    n: int


@dataclass
class Box:
    items: list
    by_name: dict = field(default_factory=dict)


def test_encode_records_inside_containers():
    v = Box(items=[Item(1), (Item(2),)], by_name={"z": Item(3), "a": [Item(4)]})
    assert encode_record(v) == '{"items":[{"n":1},[{"n":2}]],"by_name":{"z":{"n":3},"a":[{"n":4}]}}'

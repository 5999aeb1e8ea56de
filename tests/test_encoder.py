"""Tests for the encoder."""

from decimal import Decimal

import pytest

from orderedmap import (
    EncodeOptions,
    Null,
    OrderedMap,
    UnsupportedValue,
    VList,
    decode,
    encode,
    encode_bytes,
)
from orderedmap.encoder import escape_string


def _sample() -> OrderedMap:
    o = OrderedMap()
    o.set("number", 3)
    o.set("string", "x")
    o.set("specialstring", "\\.<>[]{}_-")
    # new value keeps key in old position
    o.set("number", 4)
    # keys not sorted alphabetically
    o.set("z", 1)
    o.set("a", 2)
    o.set("b", 3)
    o.set("slice", ["1", 1])
    v = OrderedMap()
    v.set("e", 1)
    v.set("a", 2)
    o.set("orderedmap", v)
    o.set("test\n\r\t\\\"ing", 9)
    return o


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------

def test_blank_map():
    o = OrderedMap()
    assert encode(o) == "{}"
    assert encode(o, indent=2) == "{}"


def test_compact():
    expected = (
        r'{"number":4,"string":"x","specialstring":"\\.\u003c\u003e[]{}_-",'
        r'"z":1,"a":2,"b":3,"slice":["1",1],"orderedmap":{"e":1,"a":2},'
        r'"test\n\r\t\\\"ing":9}'
    )
    assert encode(_sample()) == expected
    assert _sample().to_json() == expected


def test_indented():
    expected = r'''{
  "number": 4,
  "string": "x",
  "specialstring": "\\.\u003c\u003e[]{}_-",
  "z": 1,
  "a": 2,
  "b": 3,
  "slice": [
    "1",
    1
  ],
  "orderedmap": {
    "e": 1,
    "a": 2
  },
  "test\n\r\t\\\"ing": 9
}'''
    assert encode(_sample(), indent=2) == expected


def test_indent_string_unit():
    o = OrderedMap({"a": [1]})
    assert encode(o, indent="\t") == '{\n\t"a": [\n\t\t1\n\t]\n}'


def test_empty_containers_nested():
    o = OrderedMap({"x": [], "y": {}})
    assert encode(o) == '{"x":[],"y":{}}'
    assert encode(o, indent=2) == '{\n  "x": [],\n  "y": {}\n}'


def test_scalars_and_sequences():
    assert encode(Null) == "null"
    assert encode(True) == "true"
    assert encode(VList([])) == "[]"
    assert encode([1, "a", None, False]) == '[1,"a",null,false]'


# ---------------------------------------------------------------------------
# HTML escaping
# ---------------------------------------------------------------------------

def test_no_escape_html():
    o = OrderedMap()
    o.set_escape_html(False)
    o.set("specialstring", "\\.<>[]{}_-")
    assert o.to_json() == r'{"specialstring":"\\.<>[]{}_-"}'


def test_escape_html_ampersand():
    assert encode(OrderedMap({"a": "x&y"})) == r'{"a":"x\u0026y"}'


def test_root_policy_applies_to_nested_maps():
    inner = OrderedMap({"c": "<y>"})  # inner keeps its default flag
    outer = OrderedMap({"a": "<x>", "b": inner, "l": [{"d": "&"}]})
    outer.set_escape_html(False)
    assert encode(outer) == '{"a":"<x>","b":{"c":"<y>"},"l":[{"d":"&"}]}'


def test_explicit_option_overrides_map_flag():
    o = OrderedMap({"a": "<"}, escape_html=False)
    assert encode(o, escape_html=True) == r'{"a":"\u003c"}'
    assert encode(o, EncodeOptions(escape_html=True)) == r'{"a":"\u003c"}'


def test_keys_are_escaped_too():
    o = OrderedMap({"<k>": 1})
    assert encode(o) == r'{"\u003ck\u003e":1}'
    assert encode(o, escape_html=False) == '{"<k>":1}'


# ---------------------------------------------------------------------------
# String escaping
# ---------------------------------------------------------------------------

class TestEscapeString:
    def test_quotes_and_backslash(self):
        assert escape_string('a"b\\c') == r'"a\"b\\c"'

    def test_control_characters(self):
        assert escape_string("\n\r\t\b\f") == r'"\n\r\t\b\f"'
        assert escape_string("\x00\x1f") == r'"\u0000\u001f"'

    def test_line_separators(self):
        assert escape_string(chr(0x2028) + chr(0x2029)) == r'"\u2028\u2029"'

    def test_lone_surrogate(self):
        assert escape_string(chr(0xD800)) == r'"\ud800"'

    def test_non_ascii_literal(self):
        assert escape_string("héllo ☃") == '"héllo ☃"'

    def test_html_policy(self):
        assert escape_string("<&>", escape_html=True) == r'"\u003c\u0026\u003e"'
        assert escape_string("<&>", escape_html=False) == '"<&>"'


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------

class TestNumbers:
    def test_int_float_decimal(self):
        o = OrderedMap({"i": 12345678901234567890, "f": 0.5, "d": Decimal("0.10")})
        assert encode(o) == '{"i":12345678901234567890,"f":0.5,"d":0.10}'

    @pytest.mark.parametrize("bad", [float("nan"), float("inf"), -float("inf"), Decimal("NaN"), Decimal("Infinity")])
    def test_non_finite(self, bad):
        with pytest.raises(UnsupportedValue):
            encode(OrderedMap({"x": bad}))

    def test_non_finite_nested(self):
        o = OrderedMap({"ok": 1, "deep": {"list": [1, float("nan")]}})
        with pytest.raises(UnsupportedValue):
            o.to_json()


# ---------------------------------------------------------------------------
# Misc
# ---------------------------------------------------------------------------

def test_encode_does_not_mutate():
    o = decode('{"b":1,"a":{"c":[1,2]}}')
    before = o.clone()
    encode(o, indent=4)
    assert o == before


def test_encode_bytes():
    assert encode_bytes(OrderedMap({"a": "é"})) == '{"a":"é"}'.encode("utf-8")


def test_raw_python_in_sequence():
    o = OrderedMap({"l": []})
    o.get("l").items.append({"k": 1})
    assert encode(o) == '{"l":[{"k":1}]}'

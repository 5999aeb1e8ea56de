"""Record layer: ordered maps as fields of dataclass records.

    @dataclass
    class Envelope:
        kind: str
        data: OrderedMap

    env = decode_record(Envelope, '{"kind": "x", "data": {"b": 1, "a": 2}}')
    env.data.keys()        # → ["b", "a"]
    encode_record(env)     # → '{"kind":"x","data":{"b":1,"a":2}}'

Fields typed as a map class (OrderedMap, a subclass, or any MapLike class)
are decoded into that class with key order kept. Dataclass-typed fields
recurse. Everything else receives plain Python values. When encoding,
records held in lists, tuples and dicts are written as objects too.
"""

from __future__ import annotations

import dataclasses
import types
import typing
from typing import Any, Optional

from .config import DecodeOptions, EncodeOptions, resolve
from .decoder import Decoder
from .encoder import Encoder
from .errors import TypeMismatch
from .orderedmap import OrderedMap
from .reader import TokenStream, TokenType
from .values import Null, to_python


def _json_key(f: dataclasses.Field) -> str:
    return f.metadata.get("key", f.name)


def _unwrap_optional(hint: Any) -> tuple[Any, bool]:
    """Return ``(inner, True)`` for ``Optional[inner]``, else ``(hint, False)``."""
    if typing.get_origin(hint) in (typing.Union, types.UnionType):
        args = [a for a in typing.get_args(hint) if a is not type(None)]
        if len(args) == 1:
            return args[0], True
    return hint, False


def _is_map_class(hint: Any) -> bool:
    if not isinstance(hint, type):
        return False
    if issubclass(hint, OrderedMap):
        return True
    # Protocols with data members reject issubclass(); check the methods by hand
    return all(hasattr(hint, name) for name in ("lookup", "set", "delete", "keys", "set_escape_html"))


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

def _read_record(cls, stream: TokenStream, decoder: Decoder):
    hints = typing.get_type_hints(cls)
    fields = {_json_key(f): f for f in dataclasses.fields(cls) if f.init}
    found: dict[str, Any] = {}

    tok = stream.next("record")
    if tok.type is not TokenType.OBJECT_START:
        raise TypeMismatch("record", f"{cls.__name__} expects an object, found {tok.type.value}")

    while True:
        tok = stream.next("record")
        if tok.type is TokenType.OBJECT_END:
            break
        key = tok.value
        f = fields.get(key)
        if f is None:
            # unknown key: consume and drop
            decoder.read_value(stream)
            continue
        found[f.name] = _read_field(hints[f.name], stream, decoder, f.name)

    for f in fields.values():
        if f.name in found:
            continue
        if f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING:
            raise TypeMismatch("record", f"{cls.__name__} is missing field {_json_key(f)!r}")
    return cls(**found)


def _read_field(hint: Any, stream: TokenStream, decoder: Decoder, name: str):
    inner, optional = _unwrap_optional(hint)
    stage = f"field {name}"
    if optional:
        tok = stream.peek(stage)
        if tok.type is TokenType.SCALAR and tok.value is Null:
            stream.next(stage)
            return None
    if dataclasses.is_dataclass(inner) and isinstance(inner, type):
        return _read_record(inner, stream, decoder)
    if _is_map_class(inner):
        return decoder.read_object(stream, factory=inner)
    return to_python(decoder.read_value(stream))


def decode_record(cls, data, options: Optional[DecodeOptions] = None, **overrides):
    """Decode the JSON object in ``data`` into dataclass ``cls``."""
    if not dataclasses.is_dataclass(cls):
        raise TypeError(f"{cls!r} is not a dataclass")
    opts = resolve(options, DecodeOptions, overrides)
    stream = TokenStream.open(data, opts)
    record = _read_record(cls, stream, Decoder(opts))
    stream.expect_end()
    return record


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------

def _record_to_map(obj) -> OrderedMap:
    m = OrderedMap()
    for f in dataclasses.fields(obj):
        m.set(_json_key(f), _plain(getattr(obj, f.name)))
    return m


def _plain(value):
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return _record_to_map(value)
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    return value


def encode_record(obj, options: Optional[EncodeOptions] = None, **overrides) -> str:
    """Encode dataclass instance ``obj``; fields in declaration order."""
    if not dataclasses.is_dataclass(obj) or isinstance(obj, type):
        raise TypeError(f"{obj!r} is not a dataclass instance")
    opts = resolve(options, EncodeOptions, overrides)
    return Encoder(opts).encode(_record_to_map(obj))

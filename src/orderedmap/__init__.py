"""orderedmap: JSON objects that keep their key order through decode and encode."""

from .config import DecodeOptions, EncodeOptions
from .decoder import Decoder, decode, decode_value
from .encoder import Encoder, encode, encode_bytes
from .errors import (
    DecodeError,
    KeyPermutationInvalid,
    MalformedInput,
    OrderedMapError,
    TypeMismatch,
    UnsupportedValue,
)
from .interface import MapLike
from .log import configure_logging
from .orderedmap import OrderedMap
from .pairs import Pair
from .record import decode_record, encode_record
from .values import (
    Null,
    Value,
    VBool,
    VList,
    VNumber,
    VString,
    _NullType,
    to_python,
    to_value,
)

__version__ = "0.1.0"

__all__ = [
    "OrderedMap",
    "Pair",
    "MapLike",
    "decode",
    "decode_value",
    "Decoder",
    "DecodeOptions",
    "encode",
    "encode_bytes",
    "Encoder",
    "EncodeOptions",
    "decode_record",
    "encode_record",
    "Null",
    "Value",
    "VBool",
    "VList",
    "VNumber",
    "VString",
    "_NullType",
    "to_python",
    "to_value",
    "OrderedMapError",
    "DecodeError",
    "TypeMismatch",
    "MalformedInput",
    "UnsupportedValue",
    "KeyPermutationInvalid",
    "configure_logging",
]

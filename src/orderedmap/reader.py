"""Reader layer: turns ijson parse events into structural tokens.

ijson does all string lexing and scalar decoding, so braces, brackets,
colons and escaped quotes inside keys and strings never reach the decoder
as structure.
"""

from __future__ import annotations

import io
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, Optional

import ijson

from .config import DecodeOptions
from .errors import MalformedInput
from .values import Null, VBool, VNumber, VString


class TokenType(Enum):
    OBJECT_START = "object-start"
    OBJECT_END = "object-end"
    ARRAY_START = "array-start"
    ARRAY_END = "array-end"
    KEY = "key"
    SCALAR = "scalar"


@dataclass(slots=True)
class Token:
    type: TokenType
    value: Any = None


_STRUCTURAL = {
    "start_map": TokenType.OBJECT_START,
    "end_map": TokenType.OBJECT_END,
    "start_array": TokenType.ARRAY_START,
    "end_array": TokenType.ARRAY_END,
}


# ---------------------------------------------------------------------------
# Event → token conversion
# ---------------------------------------------------------------------------

def _open(data) -> Any:
    """Wrap ``data`` as a binary file-like object for ijson."""
    if isinstance(data, str):
        return io.BytesIO(data.encode("utf-8"))
    if isinstance(data, (bytes, bytearray, memoryview)):
        return io.BytesIO(bytes(data))
    if hasattr(data, "read"):
        return data
    raise TypeError(f"cannot read JSON from {type(data).__name__}")


def _scalar(event: str, value: Any):
    if event == "string":
        return VString(value)
    if event in ("number", "integer", "double"):
        return VNumber(value)
    if event == "boolean":
        return VBool(value)
    if event == "null":
        return Null
    raise MalformedInput("tokenize", f"unexpected parser event {event!r}")


def iter_tokens(data, options: Optional[DecodeOptions] = None) -> Iterator[Token]:
    """Yield structural tokens for the JSON document in ``data``.

    Scalar tokens carry their Value (VString, VNumber, VBool or Null).
    """
    opts = options or DecodeOptions()
    events = ijson.parse(_open(data), buf_size=opts.buf_size, use_float=opts.use_float)
    for _prefix, event, value in events:
        kind = _STRUCTURAL.get(event)
        if kind is not None:
            yield Token(kind)
        elif event == "map_key":
            yield Token(TokenType.KEY, value)
        else:
            yield Token(TokenType.SCALAR, _scalar(event, value))


# ---------------------------------------------------------------------------
# TokenStream
# ---------------------------------------------------------------------------

class TokenStream:
    """Pull-based token stream with one token of lookahead.

    Parser failures surface as :class:`MalformedInput` tagged with the
    stage the caller was in when it asked for the token.
    """

    def __init__(self, tokens: Iterator[Token]) -> None:
        self._tokens = tokens
        self._peeked: Optional[Token] = None

    @classmethod
    def open(cls, data, options: Optional[DecodeOptions] = None) -> "TokenStream":
        return cls(iter_tokens(data, options))

    def _pull(self, stage: str) -> Optional[Token]:
        try:
            return next(self._tokens)
        except StopIteration:
            return None
        except ijson.JSONError as exc:
            raise MalformedInput(stage, str(exc) or type(exc).__name__) from exc
        except ValueError as exc:
            # UnicodeDecodeError and friends from the byte decoding underneath
            if isinstance(exc, MalformedInput):
                raise
            raise MalformedInput(stage, str(exc)) from exc

    def peek(self, stage: str = "value") -> Token:
        if self._peeked is None:
            self._peeked = self._pull(stage)
            if self._peeked is None:
                raise MalformedInput(stage, "unexpected end of input")
        return self._peeked

    def next(self, stage: str = "value") -> Token:
        tok = self.peek(stage)
        self._peeked = None
        return tok

    def expect_end(self, stage: str = "document") -> None:
        """Fail unless the input holds nothing after the value just read."""
        if self._peeked is not None:
            raise MalformedInput(stage, f"unexpected {self._peeked.type.value} after document")
        tok = self._pull(stage)
        if tok is not None:
            raise MalformedInput(stage, f"unexpected {tok.type.value} after document")

"""Decoder: JSON text → OrderedMap, keeping source key order.

Keys are appended in the order they appear. A key that appears again
replaces the earlier entry *and moves to the end*: both the value and the
position come from the last occurrence.

Every nested object becomes a map built by the decoder's ``factory`` and
every array becomes a :class:`~orderedmap.values.VList`, at any depth. The
walk keeps its own frame stack instead of recursing, so nesting depth is not
limited by the interpreter's recursion limit.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from .config import DecodeOptions, resolve
from .errors import MalformedInput, TypeMismatch
from .interface import MapLike
from .log import get_logger
from .orderedmap import OrderedMap
from .reader import Token, TokenStream, TokenType
from .values import Value, VList

logger = get_logger(__name__)

MapFactory = Callable[[], MapLike]


@dataclass
class _Frame:
    container: Union[MapLike, VList]
    key: Optional[str] = None

    @property
    def stage(self) -> str:
        return "array" if isinstance(self.container, VList) else "object"


class Decoder:
    """Rebuild ordered maps from a JSON token stream."""

    def __init__(
        self,
        options: Optional[DecodeOptions] = None,
        factory: Optional[MapFactory] = None,
    ) -> None:
        self.options = options or DecodeOptions()
        self.factory: MapFactory = factory or OrderedMap
        self.duplicates = 0

    # -- Entry points ---------------------------------------------------

    def decode(self, data) -> MapLike:
        """Decode a whole document whose top-level value must be an object."""
        stream = TokenStream.open(data, self.options)
        result = self.read_object(stream)
        stream.expect_end()
        return result

    def decode_value(self, data) -> Value:
        """Decode a whole document holding any JSON value."""
        stream = TokenStream.open(data, self.options)
        result = self.read_value(stream)
        stream.expect_end()
        return result

    # -- Stream readers -------------------------------------------------

    def read_object(self, stream: TokenStream, factory: Optional[MapFactory] = None) -> MapLike:
        """Read one object from ``stream``; anything else is a TypeMismatch."""
        tok = stream.peek("object")
        if tok.type is not TokenType.OBJECT_START:
            raise TypeMismatch("object", f"expected object, found {_describe(tok)}")
        return self.read_value(stream, factory)

    def read_value(self, stream: TokenStream, factory: Optional[MapFactory] = None) -> Value:
        """Read one complete value (scalar, array or object) from ``stream``."""
        self.duplicates = 0
        make_map = factory or self.factory

        tok = stream.next("value")
        root = self._open_container(tok, make_map)
        if root is None:
            if tok.type is not TokenType.SCALAR:
                raise MalformedInput("value", f"unexpected {tok.type.value}")
            return tok.value

        stack = [_Frame(root)]
        while stack:
            frame = stack[-1]
            tok = stream.next(frame.stage)

            if tok.type is TokenType.KEY:
                if frame.stage != "object" or frame.key is not None:
                    raise MalformedInput(frame.stage, f"unexpected key {tok.value!r}")
                frame.key = tok.value
                continue

            if tok.type in (TokenType.OBJECT_END, TokenType.ARRAY_END):
                expected = TokenType.ARRAY_END if frame.stage == "array" else TokenType.OBJECT_END
                if tok.type is not expected or frame.key is not None:
                    raise MalformedInput(frame.stage, f"unexpected {tok.type.value}")
                stack.pop()
                if stack:
                    self._attach(stack[-1], frame.container)
                continue

            child = self._open_container(tok, make_map)
            if child is not None:
                stack.append(_Frame(child))
            else:
                self._attach(frame, tok.value)

        if self.duplicates:
            logger.debug("repositioned %d duplicate key(s)", self.duplicates)
        return root

    # -- Helpers --------------------------------------------------------

    def _open_container(self, tok: Token, make_map: MapFactory):
        if tok.type is TokenType.OBJECT_START:
            m = make_map()
            m.set_escape_html(self.options.escape_html)
            return m
        if tok.type is TokenType.ARRAY_START:
            return VList([])
        return None

    def _attach(self, frame: _Frame, value: Any) -> None:
        """Add a finished value to the container of ``frame``."""
        container = frame.container
        if isinstance(container, VList):
            container.items.append(value)
            return
        key = frame.key
        if key is None:
            raise MalformedInput("object", "value without a key")
        frame.key = None
        _, found = container.lookup(key)
        if found:
            # last occurrence wins, at the end
            logger.debug("duplicate key %r moved to position %d", key, len(container) - 1)
            container.delete(key)
            self.duplicates += 1
        container.set(key, value)


def _describe(tok: Token) -> str:
    if tok.type is TokenType.SCALAR:
        return type(tok.value).__name__
    return tok.type.value


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------

def decode(
    data,
    options: Optional[DecodeOptions] = None,
    *,
    factory: Optional[MapFactory] = None,
    escape_html: Optional[bool] = None,
    use_float: Optional[bool] = None,
) -> MapLike:
    """Decode a JSON object from ``str``, ``bytes`` or a binary file into an ordered map.

    Raises:
        TypeMismatch: the document is not an object.
        MalformedInput: the document is not valid JSON.
    """
    opts = resolve(options, DecodeOptions, {"escape_html": escape_html, "use_float": use_float})
    return Decoder(opts, factory).decode(data)


def decode_value(
    data,
    options: Optional[DecodeOptions] = None,
    *,
    factory: Optional[MapFactory] = None,
    escape_html: Optional[bool] = None,
    use_float: Optional[bool] = None,
) -> Value:
    """Decode any JSON value; objects inside it become ordered maps."""
    opts = resolve(options, DecodeOptions, {"escape_html": escape_html, "use_float": use_float})
    return Decoder(opts, factory).decode_value(data)

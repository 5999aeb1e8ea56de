"""Encoder: Value tree → JSON text, keys in stored order."""

from __future__ import annotations

import math
import re
from decimal import Decimal
from typing import Any, Optional, Union

from .config import EncodeOptions, resolve
from .errors import UnsupportedValue
from .interface import MapLike
from .log import get_logger
from .values import Null, VBool, VList, VNumber, VString, to_value

logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# String escaping
# ---------------------------------------------------------------------------

_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\b": "\\b",
    "\f": "\\f",
}

# Control characters, line/paragraph separators and lone surrogates are
# always escaped; <, > and & only under the HTML policy.
_PLAIN_RE = re.compile(r'["\\\x00-\x1f\u2028\u2029\ud800-\udfff]')
_HTML_RE = re.compile(r'["\\\x00-\x1f\u2028\u2029\ud800-\udfff<>&]')


def _escape_char(match: re.Match) -> str:
    c = match.group(0)
    esc = _ESCAPES.get(c)
    if esc is not None:
        return esc
    return f"\\u{ord(c):04x}"


def escape_string(s: str, escape_html: bool = True) -> str:
    """Quote and escape a string for JSON."""
    pattern = _HTML_RE if escape_html else _PLAIN_RE
    return '"' + pattern.sub(_escape_char, s) + '"'


# ---------------------------------------------------------------------------
# Encoder
# ---------------------------------------------------------------------------

class Encoder:
    """Render Values as JSON with one escaping policy for the whole document."""

    def __init__(self, options: Optional[EncodeOptions] = None) -> None:
        self.options = options or EncodeOptions()
        indent = self.options.indent
        self._indent = " " * indent if isinstance(indent, int) else indent

    def encode(self, value: Any) -> str:
        escape_html = self.options.escape_html
        if escape_html is None:
            escape_html = value.escape_html if isinstance(value, MapLike) else True
        parts: list[str] = []
        self._write(to_value(value), escape_html, 0, parts)
        text = "".join(parts)
        logger.debug("encoded %s into %d characters", type(value).__name__, len(text))
        return text

    def _write(self, value, escape_html: bool, depth: int, out: list[str]) -> None:
        if value is Null:
            out.append("null")
        elif isinstance(value, VBool):
            out.append("true" if value.value else "false")
        elif isinstance(value, VNumber):
            out.append(_format_number(value.value))
        elif isinstance(value, VString):
            out.append(escape_string(value.value, escape_html))
        elif isinstance(value, VList):
            self._write_array(value, escape_html, depth, out)
        elif isinstance(value, MapLike):
            self._write_object(value, escape_html, depth, out)
        else:
            # Raw Python left in a VList by direct mutation
            self._write(to_value(value), escape_html, depth, out)

    def _write_object(self, m: MapLike, escape_html: bool, depth: int, out: list[str]) -> None:
        keys = m.keys()
        if not keys:
            out.append("{}")
            return
        out.append("{")
        for i, key in enumerate(keys):
            if i:
                out.append(",")
            self._newline(depth + 1, out)
            out.append(escape_string(key, escape_html))
            out.append(":" if self._indent is None else ": ")
            item, _ = m.lookup(key)
            self._write(item, escape_html, depth + 1, out)
        self._newline(depth, out)
        out.append("}")

    def _write_array(self, seq: VList, escape_html: bool, depth: int, out: list[str]) -> None:
        if not seq.items:
            out.append("[]")
            return
        out.append("[")
        for i, item in enumerate(seq.items):
            if i:
                out.append(",")
            self._newline(depth + 1, out)
            self._write(item, escape_html, depth + 1, out)
        self._newline(depth, out)
        out.append("]")

    def _newline(self, depth: int, out: list[str]) -> None:
        if self._indent is not None:
            out.append("\n" + self._indent * depth)


def _format_number(n: Union[int, float, Decimal]) -> str:
    if isinstance(n, int):
        return str(n)
    if isinstance(n, float):
        if not math.isfinite(n):
            raise UnsupportedValue(f"{n!r} is not representable in JSON")
        return repr(n)
    if not n.is_finite():
        raise UnsupportedValue(f"Decimal {n} is not representable in JSON")
    return str(n)


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------

def encode(
    value: Any,
    options: Optional[EncodeOptions] = None,
    *,
    escape_html: Optional[bool] = None,
    indent: Union[int, str, None] = None,
) -> str:
    """Encode a map, sequence or scalar (Value or plain Python) to JSON text.

    Keyword arguments override the matching fields of ``options``.
    """
    opts = resolve(options, EncodeOptions, {"escape_html": escape_html, "indent": indent})
    return Encoder(opts).encode(value)


def encode_bytes(value: Any, options: Optional[EncodeOptions] = None, **overrides) -> bytes:
    """Like :func:`encode`, UTF-8 encoded."""
    return encode(value, options, **overrides).encode("utf-8")

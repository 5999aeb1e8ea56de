"""Error types for orderedmap."""

from __future__ import annotations


class OrderedMapError(Exception):
    """Base class for every error raised by orderedmap."""


class DecodeError(OrderedMapError, ValueError):
    """A JSON document could not be turned into an ordered map.

    ``stage`` names the part of the decode that failed (``"document"``,
    ``"object"``, ``"array"``, ``"value"``, ``"tokenize"`` ...).
    """

    def __init__(self, stage: str, message: str) -> None:
        super().__init__(f"{stage}: {message}")
        self.stage = stage
        self.message = message


class TypeMismatch(DecodeError):
    """The token seen does not fit the structural context (e.g. array for object)."""


class MalformedInput(DecodeError):
    """Lexical or syntactic violation, truncated structure, invalid escape."""


class UnsupportedValue(OrderedMapError, ValueError):
    """A value cannot be represented in JSON."""


class KeyPermutationInvalid(OrderedMapError, ValueError):
    """A new key order is not a permutation of the current keys."""

    def __init__(
        self,
        missing: list[str],
        extra: list[str],
        duplicates: list[str],
    ) -> None:
        parts = []
        if missing:
            parts.append(f"missing {missing!r}")
        if extra:
            parts.append(f"unknown {extra!r}")
        if duplicates:
            parts.append(f"repeated {duplicates!r}")
        super().__init__("not a permutation of current keys: " + "; ".join(parts))
        self.missing = missing
        self.extra = extra
        self.duplicates = duplicates

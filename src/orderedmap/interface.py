"""MapLike: the capability set shared by every ordered map type.

The encoder, decoder and record layer only talk to maps through this
protocol, so a type that wraps an :class:`~orderedmap.OrderedMap` (or
reimplements one) can be used wherever an ``OrderedMap`` is expected.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable


@runtime_checkable
class MapLike(Protocol):
    escape_html: bool

    def lookup(self, key: str) -> tuple[Any, bool]: ...

    def set(self, key: str, value: Any) -> None: ...

    def delete(self, key: str) -> None: ...

    def keys(self) -> list[str]: ...

    def clone(self, *overrides: Mapping[str, Any]) -> "MapLike": ...

    def set_escape_html(self, on: bool) -> None: ...

    def __len__(self) -> int: ...

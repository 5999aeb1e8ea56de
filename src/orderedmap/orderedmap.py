"""OrderedMap: a JSON object that remembers its key order."""

from __future__ import annotations

from collections.abc import Mapping
from functools import cmp_to_key
from typing import Any, Callable, Iterable, Iterator, Optional

from .encoder import encode
from .errors import KeyPermutationInvalid
from .interface import MapLike
from .pairs import Pair, PairStore
from .values import Value, clone_value, to_python, to_value


class OrderedMap:
    """Insertion-ordered string-keyed map of :data:`~orderedmap.values.Value`.

    Usage::

        m = OrderedMap()
        m.set("b", 2)
        m.set("a", 1)
        m.set("b", 3)         # keeps its position
        m.keys()              # → ["b", "a"]
        m.to_json()           # → '{"b":3,"a":1}'

    Nested maps returned by :meth:`get` are live: editing them edits this
    map. Use :meth:`clone` for an independent copy. Instances are not
    thread-safe.
    """

    def __init__(
        self,
        initial: Mapping[str, Any] | Iterable[tuple[str, Any]] | None = None,
        *,
        escape_html: bool = True,
    ) -> None:
        self._store = PairStore()
        self._escape_html = escape_html
        if initial is not None:
            for key, value in _initial_items(initial):
                self.set(key, value)

    # -- Lookup ---------------------------------------------------------

    def lookup(self, key: str) -> tuple[Optional[Value], bool]:
        """Return ``(value, True)`` for a present key, else ``(None, False)``."""
        pair = self._store.find(key)
        if pair is None:
            return None, False
        return pair.value, True

    def get(self, key: str, default: Any = None) -> Any:
        pair = self._store.find(key)
        return default if pair is None else pair.value

    def keys(self) -> list[str]:
        return [p.key for p in self._store]

    def values(self) -> dict[str, Value]:
        """Unordered snapshot of key → value, built fresh on every call."""
        return {p.key: p.value for p in self._store}

    def items(self) -> list[tuple[str, Value]]:
        return [(p.key, p.value) for p in self._store]

    @property
    def pairs(self) -> list[Pair]:
        """The live pair sequence. Call :meth:`init_values` after editing it directly."""
        return self._store.pairs

    # -- Mutation -------------------------------------------------------

    def set(self, key: str, value: Any) -> None:
        """Set ``key``; an existing key keeps its position."""
        if not isinstance(key, str):
            raise TypeError(f"keys must be str, not {type(key).__name__}")
        self._store.put(key, to_value(value))

    def delete(self, key: str) -> None:
        """Remove ``key``; absent keys are ignored."""
        self._store.remove(key)

    def init_values(self) -> None:
        self._store.rebuild_index()

    # -- Ordering -------------------------------------------------------

    def set_keys(self, keys: Iterable[str]) -> None:
        """Adopt ``keys`` as the new order.

        ``keys`` must contain every current key exactly once; otherwise
        :class:`KeyPermutationInvalid` is raised and the map is unchanged.
        """
        new_order = list(keys)
        index = self._store.index
        seen: set[str] = set()
        extra: list[str] = []
        duplicates: list[str] = []
        for key in new_order:
            if key in seen:
                duplicates.append(key)
            elif key not in index:
                extra.append(key)
            seen.add(key)
        missing = [k for k in self.keys() if k not in seen]
        if missing or extra or duplicates:
            raise KeyPermutationInvalid(missing, extra, duplicates)
        self._store.reorder(index[k] for k in new_order)

    def sort_keys(self, sorter: Callable[[list[str]], Any] = sorted) -> None:
        """Reorder by applying ``sorter`` to the key list.

        ``sorter`` may sort the list in place and return None (``list.sort``)
        or return the sorted keys (``sorted``).
        """
        keys = self.keys()
        result = sorter(keys)
        self.set_keys(keys if result is None else result)

    def sort(
        self,
        less: Callable[[Pair, Pair], bool] | None = None,
        *,
        key: Callable[[Pair], Any] | None = None,
        reverse: bool = False,
    ) -> None:
        """Reorder pairs with a ``less(a, b)`` comparator or a ``key(pair)`` function.

        Both receive whole pairs, so the order can depend on values.
        Without either, pairs are ordered by key.
        """
        if less is not None and key is not None:
            raise TypeError("pass either less or key, not both")
        if less is not None:
            def compare(a: Pair, b: Pair) -> int:
                if less(a, b):
                    return -1
                if less(b, a):
                    return 1
                return 0
            key = cmp_to_key(compare)
        elif key is None:
            key = _pair_key
        self._store.reorder(sorted(self._store.pairs, key=key, reverse=reverse))

    # -- Copying --------------------------------------------------------

    def clone(self, *overrides: Mapping[str, Any]) -> "OrderedMap":
        """Deep copy, then apply each override mapping in turn with :meth:`set`."""
        copy = self._spawn()
        for pair in self._store:
            copy._store.append(Pair(pair.key, clone_value(pair.value)))
        for mapping in overrides:
            for k, v in mapping.items():
                copy.set(k, v)
        return copy

    def _spawn(self) -> "OrderedMap":
        """Empty map of the same type and escaping policy."""
        fresh = type(self)()
        fresh.set_escape_html(self._escape_html)
        return fresh

    # -- JSON -----------------------------------------------------------

    @property
    def escape_html(self) -> bool:
        return self._escape_html

    def set_escape_html(self, on: bool) -> None:
        self._escape_html = on

    def to_json(self, indent: int | str | None = None) -> str:
        return encode(self, indent=indent)

    def to_dict(self) -> dict[str, Any]:
        return to_python(self)

    @classmethod
    def from_json(cls, data, options=None, **overrides) -> "OrderedMap":
        from .decoder import decode
        return decode(data, options, factory=cls, **overrides)

    def load_json(self, data) -> None:
        """Replace this map's contents with the JSON object in ``data``.

        Nested maps inherit this map's type and ``escape_html`` flag. On
        failure the map is left as it was.
        """
        from .config import DecodeOptions
        from .decoder import Decoder
        decoder = Decoder(DecodeOptions(escape_html=self._escape_html), factory=self._spawn)
        decoded = decoder.decode(data)
        self._store = decoded._store

    # -- Python protocol ------------------------------------------------

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: object) -> bool:
        return key in self._store.index

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __getitem__(self, key: str) -> Value:
        pair = self._store.find(key)
        if pair is None:
            raise KeyError(key)
        return pair.value

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def __delitem__(self, key: str) -> None:
        if self._store.remove(key) is None:
            raise KeyError(key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OrderedMap):
            return NotImplemented
        return self.items() == other.items()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        inner = ", ".join(f"{k!r}: {v!r}" for k, v in self.items())
        return f"{type(self).__name__}({{{inner}}})"


def _pair_key(pair: Pair) -> str:
    return pair.key


def _initial_items(initial) -> Iterable[tuple[str, Any]]:
    if hasattr(initial, "items"):
        return initial.items()
    if isinstance(initial, MapLike):
        return [(key, initial.lookup(key)[0]) for key in initial.keys()]
    return initial

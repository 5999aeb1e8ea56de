"""Pair store: the ordered entry list behind an OrderedMap, plus its key index."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from .values import Value


@dataclass(eq=False)
class Pair:
    """One key/value entry. Pairs compare by identity."""

    key: str
    value: Value

    def __repr__(self) -> str:
        return f"Pair({self.key!r}, {self.value!r})"


class PairStore:
    """Ordered list of pairs with a key → pair index kept in step with it.

    Invariant: ``index[k] is p`` for exactly the pairs ``p`` in ``pairs``
    with ``p.key == k``, and no two pairs share a key.
    """

    def __init__(self) -> None:
        self.pairs: list[Pair] = []
        self.index: dict[str, Pair] = {}

    def __len__(self) -> int:
        return len(self.pairs)

    def __iter__(self) -> Iterator[Pair]:
        return iter(self.pairs)

    def find(self, key: str) -> Pair | None:
        return self.index.get(key)

    def put(self, key: str, value: Value) -> Pair:
        """Update ``key`` in place, or append a new pair at the end."""
        pair = self.index.get(key)
        if pair is not None:
            pair.value = value
            return pair
        pair = Pair(key, value)
        self.append(pair)
        return pair

    def append(self, pair: Pair) -> None:
        self.pairs.append(pair)
        self.index[pair.key] = pair

    def remove(self, key: str) -> Pair | None:
        pair = self.index.pop(key, None)
        if pair is None:
            return None
        for i, candidate in enumerate(self.pairs):
            if candidate is pair:
                del self.pairs[i]
                break
        return pair

    def reorder(self, pairs: Iterable[Pair]) -> None:
        """Replace the sequence with ``pairs``, which must be the same pair objects."""
        self.pairs = list(pairs)

    def rebuild_index(self) -> None:
        """Recompute the index from ``pairs``.

        A key appearing more than once keeps only its last pair, in that
        pair's position.
        """
        last: dict[str, Pair] = {}
        for pair in self.pairs:
            last[pair.key] = pair
        if len(last) != len(self.pairs):
            self.pairs = [p for p in self.pairs if last[p.key] is p]
        self.index = last

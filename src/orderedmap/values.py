"""Value types for orderedmap."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Union

from .errors import UnsupportedValue

if TYPE_CHECKING:
    from .orderedmap import OrderedMap


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class VString:
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, eq=False)
class VNumber:
    """A JSON number.

    A float equals the Decimal spelled by its shortest repr, so
    ``VNumber(0.1) == VNumber(Decimal("0.1"))``: that is what an encoded
    float decodes back to.
    """

    value: Union[int, float, Decimal]

    def _key(self) -> Union[int, Decimal]:
        if isinstance(self.value, float):
            return Decimal(repr(self.value))
        return self.value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VNumber):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class VBool:
    value: bool

    def __str__(self) -> str:
        return str(self.value).lower()


class _NullType:
    """Singleton for the JSON ``null`` literal."""

    _instance: "_NullType | None" = None

    def __new__(cls) -> "_NullType":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Null"

    def __bool__(self) -> bool:
        return False

    def __str__(self) -> str:
        return "null"

    def __copy__(self) -> "_NullType":
        return self

    def __deepcopy__(self, memo) -> "_NullType":
        return self


Null = _NullType()


# ---------------------------------------------------------------------------
# Sequence
# ---------------------------------------------------------------------------

@dataclass
class VList:
    items: list["Value"]

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def __getitem__(self, index):
        return self.items[index]

    def __str__(self) -> str:
        return "[" + ", ".join(str(v) for v in self.items) + "]"


Value = Union[VString, VNumber, VBool, _NullType, VList, "OrderedMap"]

_VARIANTS = (VString, VNumber, VBool, _NullType, VList)


# ---------------------------------------------------------------------------
# Conversions
# ---------------------------------------------------------------------------

def to_value(obj: Any) -> Value:
    """Convert a plain Python object to a Value.

    - Value variants and maps are returned unchanged (no copy)
    - ``None`` → Null, ``bool`` → VBool, ``int``/``float``/``Decimal`` → VNumber
    - ``str`` → VString
    - ``list``/``tuple`` → VList, elements converted recursively
    - any other Mapping → OrderedMap in the mapping's iteration order
    """
    if isinstance(obj, _VARIANTS):
        return obj
    if obj is None:
        return Null
    if isinstance(obj, bool):
        return VBool(obj)
    if isinstance(obj, (int, float, Decimal)):
        return VNumber(obj)
    if isinstance(obj, str):
        return VString(obj)
    if isinstance(obj, (list, tuple)):
        return VList([to_value(v) for v in obj])

    from .interface import MapLike
    from .orderedmap import OrderedMap
    if isinstance(obj, MapLike):
        return obj
    if isinstance(obj, Mapping):
        return OrderedMap(obj)
    raise UnsupportedValue(f"cannot store {type(obj).__name__} in an ordered map")


def to_python(value: Any) -> Any:
    """Unwrap a Value into plain Python objects (maps become ordered dicts)."""
    if value is Null:
        return None
    if isinstance(value, (VString, VNumber, VBool)):
        return value.value
    if isinstance(value, VList):
        return [to_python(v) for v in value.items]

    from .interface import MapLike
    if isinstance(value, MapLike):
        out = {}
        for key in value.keys():
            item, _ = value.lookup(key)
            out[key] = to_python(item)
        return out
    return value


def clone_value(value: Value) -> Value:
    """Deep-copy a Value; scalars are immutable and shared."""
    if isinstance(value, VList):
        return VList([clone_value(v) for v in value.items])

    from .interface import MapLike
    if isinstance(value, MapLike):
        return value.clone()
    return value

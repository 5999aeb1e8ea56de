from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, Optional, Union


@dataclass(frozen=True)
class EncodeOptions:
    """Rendering options for the encoder.

    ``escape_html=None`` defers to the ``escape_html`` flag of the value being
    encoded (the root map), falling back to True for anything else. Whatever
    the root decides is applied to the whole document.
    """

    escape_html: Optional[bool] = None
    indent: Union[int, str, None] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def replace(self, **changes: Any) -> "EncodeOptions":
        return replace(self, **changes)

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "EncodeOptions":
        return EncodeOptions(**d)


@dataclass(frozen=True)
class DecodeOptions:
    """Options for the decoder and the token reader underneath it."""

    escape_html: bool = True
    # Non-integral numbers arrive as Decimal unless this is set
    use_float: bool = False
    buf_size: int = 64 * 1024

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def replace(self, **changes: Any) -> "DecodeOptions":
        return replace(self, **changes)

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "DecodeOptions":
        return DecodeOptions(**d)


def resolve(options, cls, overrides: Dict[str, Any]):
    """Return ``options`` (or a default ``cls()``) with non-None overrides applied."""
    base = options if options is not None else cls()
    changes = {k: v for k, v in overrides.items() if v is not None}
    return base.replace(**changes) if changes else base

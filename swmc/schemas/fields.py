"""Kind-specific field values and the declarative field table entries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, Field

from swmc.document.codec import format_number


class Position(BaseModel):
    """Logic-editor position. Each grid square is 0.25 units."""

    x: float = 0.0
    y: float = 0.0

    def is_default(self) -> bool:
        return self.x == 0 and self.y == 0


class TextValue(BaseModel):
    """A number as the user typed it, plus the value it parses to."""

    text: str = "0"
    value: float = 0.0

    @classmethod
    def from_text(cls, text: str) -> "TextValue":
        """Raises ValueError when ``text`` is not a number."""
        return cls(text=text, value=float(text))

    @classmethod
    def from_value(cls, value: float) -> "TextValue":
        return cls(text=format_number(float(value)), value=float(value))


class DropdownItem(BaseModel):
    label: str
    value: TextValue = Field(default_factory=TextValue)


# ─── Field table entries ───

FIELD_CODECS = frozenset({"text", "int", "float", "bool", "opaque", "value", "dropdown"})


@dataclass(frozen=True)
class FieldSpec:
    """How one model attribute maps onto the ``<object>`` element.

    codec:
      text / int / float / bool   attribute, omitted when equal to ``default``
      opaque                      attribute kept as raw text, omitted when None
      value                       ``TextValue`` child element, always written
      dropdown                    ``<items>`` child holding ``<i>`` entries
    """

    name: str
    key: str
    codec: str
    default: Any = None
    required: bool = False

    def __post_init__(self):
        if self.codec not in FIELD_CODECS:
            raise ValueError(f"Unknown field codec {self.codec!r}")


def text_attr(name: str, key: str | None = None, default: str | None = "", required: bool = False) -> FieldSpec:
    return FieldSpec(name, f"@{key or name}", "text", default, required)


def int_attr(name: str, key: str | None = None, default: int | None = 0, required: bool = False) -> FieldSpec:
    return FieldSpec(name, f"@{key or name}", "int", default, required)


def float_attr(name: str, key: str | None = None, default: float = 0.0) -> FieldSpec:
    return FieldSpec(name, f"@{key or name}", "float", default)


def bool_attr(name: str, key: str | None = None, default: bool = False) -> FieldSpec:
    return FieldSpec(name, f"@{key or name}", "bool", default)


def opaque_attr(name: str, key: str) -> FieldSpec:
    return FieldSpec(name, f"@{key}", "opaque", None)


def value_child(name: str, key: str | None = None) -> FieldSpec:
    return FieldSpec(name, key or name, "value", required=True)


def dropdown_child(name: str, key: str = "items") -> FieldSpec:
    return FieldSpec(name, key, "dropdown")

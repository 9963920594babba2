"""Typed connection slots.

An input slot optionally points at a producer (``Endpoint``). Both input and
output slots may carry a legacy payload: the ``v`` attribute and the ``<v>``
child element, whose meaning is unknown. Both are kept verbatim.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, Field

from swmc.schemas.signal import SignalType


class Endpoint(BaseModel):
    """Producer node id and the index of the output slot that feeds an input."""

    component_id: int = Field(ge=0, le=0xFFFFFFFF)
    node_index: int = Field(default=0, ge=0, le=0xFF)


class LegacyPayload(BaseModel):
    """Attributes of a slot's ``<v>`` element, in document order.

    Seen keys are ``bools`` and ``01`` … ``20``; all of them are opaque.
    """

    attributes: list[tuple[str, str]] = Field(default_factory=list)

    def is_default(self) -> bool:
        return not self.attributes


class InputSlot(BaseModel):
    connection: Endpoint | None = None
    visibility_attr: str | None = None
    legacy_block: LegacyPayload | None = None

    @classmethod
    def connected(cls, component_id: int, node_index: int = 0) -> "InputSlot":
        return cls(connection=Endpoint(component_id=component_id, node_index=node_index))


class OutputSlot(BaseModel):
    visibility_attr: str | None = None
    legacy_block: LegacyPayload | None = None


@dataclass(frozen=True)
class SlotSpec:
    """Catalog entry for one slot position.

    ``always_visible`` slots keep an empty ``<v/>`` regardless of signal kind.
    ``required`` slots are always written, even when the model holds None.
    """

    name: str
    signal: SignalType
    always_visible: bool = False
    required: bool = False


def legacy_block_visible(spec: SlotSpec, block: LegacyPayload | None) -> bool:
    """Whether a slot's ``<v>`` element is written."""
    if block is None:
        return False
    if not block.is_default():
        return True
    if spec.always_visible:
        return True
    return spec.signal not in (SignalType.ON_OFF, SignalType.NUMBER)

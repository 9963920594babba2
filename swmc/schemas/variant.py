"""Base class shared by logic-node and IO-bridge variants.

Each concrete variant declares, as class-level table data:

  TYPE_CODE   the document's ``type`` code
  INPUTS      ordered input SlotSpecs (tag ``in{n}``)
  OUTPUTS     ordered output SlotSpecs (tag ``out{n}``)
  FIELDS      ordered FieldSpecs for kind-specific values

Slot values live in ``inputs`` / ``outputs``, one entry per SlotSpec
(None = the tag is absent from the document).
"""

from __future__ import annotations

from typing import ClassVar, NamedTuple

from pydantic import BaseModel, Field, model_validator

from swmc.schemas.fields import FieldSpec
from swmc.schemas.signal import SignalType
from swmc.schemas.slots import Endpoint, InputSlot, OutputSlot, SlotSpec


class IOSignature(NamedTuple):
    inputs: tuple[SignalType, ...]
    outputs: tuple[SignalType, ...]


def slots(*pairs: tuple[str, SignalType]) -> tuple[SlotSpec, ...]:
    return tuple(SlotSpec(name, signal) for name, signal in pairs)


class Variant(BaseModel):
    TYPE_CODE: ClassVar[int] = -1
    INPUTS: ClassVar[tuple[SlotSpec, ...]] = ()
    OUTPUTS: ClassVar[tuple[SlotSpec, ...]] = ()
    FIELDS: ClassVar[tuple[FieldSpec, ...]] = ()

    kind: str
    inputs: list[InputSlot | None] = Field(default_factory=list)
    outputs: list[OutputSlot | None] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _fill_slots(cls, data):
        """New variants start with every slot present and unconnected."""
        if isinstance(data, dict):
            data = dict(data)
            data.setdefault("inputs", [InputSlot() for _ in cls.INPUTS])
            data.setdefault("outputs", [OutputSlot() for _ in cls.OUTPUTS])
        return data

    @model_validator(mode="after")
    def _check_slots(self):
        if len(self.inputs) != len(self.INPUTS):
            raise ValueError(
                f"{self.kind} has {len(self.INPUTS)} inputs, got {len(self.inputs)}"
            )
        if len(self.outputs) != len(self.OUTPUTS):
            raise ValueError(
                f"{self.kind} has {len(self.OUTPUTS)} outputs, got {len(self.outputs)}"
            )
        for i, spec in enumerate(self.INPUTS):
            if spec.required and self.inputs[i] is None:
                self.inputs[i] = InputSlot()
        for i, spec in enumerate(self.OUTPUTS):
            if spec.required and self.outputs[i] is None:
                self.outputs[i] = OutputSlot()
        self.normalize()
        return self

    def __setattr__(self, name, value):
        super().__setattr__(name, value)
        if name in type(self).model_fields and self._slots_complete():
            self.normalize()

    def _slots_complete(self) -> bool:
        return len(self.inputs) == len(self.INPUTS) and len(self.outputs) == len(
            self.OUTPUTS
        )

    def hidden_inputs(self) -> tuple[int, ...]:
        """Input indices the document cannot carry for the current settings."""
        return ()

    def normalize(self) -> None:
        """Clear slots the document cannot carry for the current settings.

        Runs on construction and again whenever a field is assigned.
        """
        for i in self.hidden_inputs():
            self.inputs[i] = None

    # ─── Catalog queries ───

    @classmethod
    def io_signature(cls) -> IOSignature:
        return IOSignature(
            tuple(s.signal for s in cls.INPUTS),
            tuple(s.signal for s in cls.OUTPUTS),
        )

    def connections(self) -> list[Endpoint | None]:
        """Ordered input connections (None = unconnected or absent)."""
        return [slot.connection if slot is not None else None for slot in self.inputs]

    def input(self, name: str) -> InputSlot | None:
        return self.inputs[self._slot_index(self.INPUTS, name)]

    def output(self, name: str) -> OutputSlot | None:
        return self.outputs[self._slot_index(self.OUTPUTS, name)]

    def set_input(self, name: str, slot: InputSlot | None) -> None:
        self.inputs[self._slot_index(self.INPUTS, name)] = slot

    @staticmethod
    def _slot_index(specs: tuple[SlotSpec, ...], name: str) -> int:
        for i, spec in enumerate(specs):
            if spec.name == name:
                return i
        raise KeyError(name)

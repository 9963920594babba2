"""Per-kind tag corrections between the generic layout and the game's layout.

``apply_forward`` runs on a freshly rendered ``<object>`` tree and produces
what the game writes. ``apply_inverse`` runs on a parsed ``<object>`` tree and
restores the generic ``in{n}`` / ``out{n}`` layout, so that the generic
reader in ``pipeline.render`` can take over.

Kinds with corrections:

  21      NumericalJunction   both outputs are written as ``out1``
  29, 31  CompositeRead*      ``in2`` sits after ``out1``, or is absent
  40, 41  CompositeWrite*     inputs are ``inc``, ``in1``..``in32``, ``inoff``
"""

from __future__ import annotations

import re
from typing import Callable

from swmc.document.tree import AttrTree
from swmc.schemas.nodes import (
    COMPOSITE_CHANNELS,
    VARIABLE,
    CompositeReadNumber,
    CompositeReadOnOff,
    CompositeWriteNumber,
    CompositeWriteOnOff,
    NumericalJunction,
)
from swmc.schemas.variant import Variant

# Placeholder key used while the duplicated output is being inserted.
_RESERVED = "__reserved"

_NUMBERED_INPUT = re.compile(r"^in(\d+)$")

# Game tags for the composite input and the start-channel input.
_CARRY_TAG = "inc"
_OFFSET_TAG = "inoff"
_START_SLOT = COMPOSITE_CHANNELS + 2


# ═══════════════════════════════════════════════════════════
# NumericalJunction
# ═══════════════════════════════════════════════════════════


def _junction_forward(variant: Variant, obj: AttrTree) -> None:
    obj.remove("out2")
    if obj.duplicate_key("out1", _RESERVED):
        obj.rename(_RESERVED, "out1")


def _junction_inverse(obj: AttrTree) -> None:
    obj.rename("out1", "out2", occurrence=1)


# ═══════════════════════════════════════════════════════════
# CompositeWrite
# ═══════════════════════════════════════════════════════════


def _shift_down(key: str) -> str:
    if key == "in1":
        return _CARRY_TAG
    if key == f"in{_START_SLOT}":
        return _OFFSET_TAG
    match = _NUMBERED_INPUT.match(key)
    if match:
        return f"in{int(match.group(1)) - 1}"
    return key


def _shift_up(key: str) -> str:
    if key == _CARRY_TAG:
        return "in1"
    if key == _OFFSET_TAG:
        return f"in{_START_SLOT}"
    match = _NUMBERED_INPUT.match(key)
    if match:
        return f"in{int(match.group(1)) + 1}"
    return key


def _composite_write_forward(variant: Variant, obj: AttrTree) -> None:
    obj.rename_keys(_shift_down)
    if variant.offset != VARIABLE:
        obj.remove(_OFFSET_TAG)
    for n in range(variant.count + 1, COMPOSITE_CHANNELS + 1):
        obj.remove(f"in{n}")


def _composite_write_inverse(obj: AttrTree) -> None:
    obj.rename_keys(_shift_up)


# ═══════════════════════════════════════════════════════════
# CompositeRead
# ═══════════════════════════════════════════════════════════


def _composite_read_forward(variant: Variant, obj: AttrTree) -> None:
    if variant.channel == VARIABLE:
        obj.move_after("in2", "out1")
    else:
        obj.remove("in2")


def _composite_read_inverse(obj: AttrTree) -> None:
    obj.move_after("in2", "in1")


# ─── Patch table ───

_FORWARD: dict[int, Callable[[Variant, AttrTree], None]] = {
    NumericalJunction.TYPE_CODE: _junction_forward,
    CompositeReadOnOff.TYPE_CODE: _composite_read_forward,
    CompositeReadNumber.TYPE_CODE: _composite_read_forward,
    CompositeWriteNumber.TYPE_CODE: _composite_write_forward,
    CompositeWriteOnOff.TYPE_CODE: _composite_write_forward,
}

_INVERSE: dict[int, Callable[[AttrTree], None]] = {
    NumericalJunction.TYPE_CODE: _junction_inverse,
    CompositeReadOnOff.TYPE_CODE: _composite_read_inverse,
    CompositeReadNumber.TYPE_CODE: _composite_read_inverse,
    CompositeWriteNumber.TYPE_CODE: _composite_write_inverse,
    CompositeWriteOnOff.TYPE_CODE: _composite_write_inverse,
}


def has_quirk(type_code: int) -> bool:
    return type_code in _FORWARD


def apply_forward(variant: Variant, obj: AttrTree) -> AttrTree:
    """Patch a rendered logic ``<object>`` tree in place and return it."""
    patch = _FORWARD.get(variant.TYPE_CODE)
    if patch is not None:
        patch(variant, obj)
    return obj


def apply_inverse(type_code: int, obj: AttrTree) -> AttrTree:
    """Undo ``apply_forward`` on a parsed logic ``<object>`` tree, in place."""
    patch = _INVERSE.get(type_code)
    if patch is not None:
        patch(obj)
    return obj

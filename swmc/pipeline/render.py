"""Generic variant <-> ``<object>`` tree rendering.

The catalog tables drive everything here: slot ``n`` of a variant is written
as ``in{n}`` / ``out{n}`` and each FieldSpec says how its value is stored.
The per-kind tag oddities are applied afterwards by ``pipeline.quirks``.

Object element layout, in order::

    @id, pos, in1.., out1.., kind fields (declared order)
"""

from __future__ import annotations

import logging
import re
from typing import Any

from pydantic import ValidationError

from swmc.document.codec import format_number, parse_bool, parse_int, parse_number
from swmc.document.tree import AttrTree, Value
from swmc.errors import DocumentParseError, MissingAttributeError
from swmc.schemas.fields import DropdownItem, FieldSpec, Position, TextValue
from swmc.schemas.slots import (
    Endpoint,
    InputSlot,
    LegacyPayload,
    OutputSlot,
    SlotSpec,
    legacy_block_visible,
)
from swmc.schemas.variant import Variant

logger = logging.getLogger(__name__)

_SLOT_TAG = re.compile(r"^(in|out)(\d+)$")


def _expect_tree(value: Value | None, path: str) -> AttrTree:
    if not isinstance(value, AttrTree):
        raise DocumentParseError("expected an element with attributes", path)
    return value


# ─── Positions ───


def render_position(position: Position, keys: tuple[str, str] = ("@x", "@y")) -> AttrTree | None:
    """``None`` when the position is the origin (the element is omitted)."""
    if position.is_default():
        return None
    tree = AttrTree()
    if position.x != 0:
        tree.insert(keys[0], format_number(position.x))
    if position.y != 0:
        tree.insert(keys[1], format_number(position.y))
    return tree


def parse_position(
    value: Value | None, keys: tuple[str, str] = ("@x", "@y"), path: str = ""
) -> Position:
    if value is None:
        return Position()
    tree = _expect_tree(value, path)
    return Position(
        x=parse_number(tree.get(keys[0], "0"), keys[0], path),
        y=parse_number(tree.get(keys[1], "0"), keys[1], path),
    )


# ─── Text values ───


def render_text_value(value: TextValue) -> AttrTree:
    tree = AttrTree([("@text", value.text)])
    if value.value != 0:
        tree.insert("@value", format_number(value.value))
    return tree


def parse_text_value(value: Value | None, path: str) -> TextValue:
    tree = _expect_tree(value, path)
    text = tree.get("@text")
    if text is None:
        raise MissingAttributeError("@text", path)
    return TextValue(
        text=text, value=parse_number(tree.get("@value", "0"), "@value", path)
    )


# ─── Slots ───


def render_slot(slot: InputSlot | OutputSlot, spec: SlotSpec) -> AttrTree:
    tree = AttrTree()
    connection = getattr(slot, "connection", None)
    if connection is not None:
        tree.insert("@component_id", str(connection.component_id))
        if connection.node_index:
            tree.insert("@node_index", str(connection.node_index))
    if slot.visibility_attr is not None:
        tree.insert("@v", slot.visibility_attr)
    if legacy_block_visible(spec, slot.legacy_block):
        tree.insert(
            "v", AttrTree([(f"@{k}", v) for k, v in slot.legacy_block.attributes])
        )
    return tree


def _parse_legacy(tree: AttrTree, path: str) -> LegacyPayload | None:
    block = tree.get("v")
    if block is None:
        return None
    return LegacyPayload(attributes=_expect_tree(block, f"{path}/v").attributes())


def parse_input_slot(value: Value, path: str) -> InputSlot:
    tree = _expect_tree(value, path)
    connection = None
    component_id = tree.get("@component_id")
    if component_id is not None:
        connection = Endpoint(
            component_id=parse_int(component_id, "@component_id", path),
            node_index=parse_int(tree.get("@node_index", "0"), "@node_index", path),
        )
    return InputSlot(
        connection=connection,
        visibility_attr=tree.get("@v"),
        legacy_block=_parse_legacy(tree, path),
    )


def parse_output_slot(value: Value, path: str) -> OutputSlot:
    tree = _expect_tree(value, path)
    return OutputSlot(
        visibility_attr=tree.get("@v"),
        legacy_block=_parse_legacy(tree, path),
    )


# ─── Kind fields ───


def render_field(spec: FieldSpec, value: Any, tree: AttrTree) -> None:
    """Append one kind field to ``tree`` unless its codec omits it."""
    codec = spec.codec

    if codec == "value":
        tree.insert(spec.key, render_text_value(value))
        return
    if codec == "dropdown":
        items = AttrTree()
        for item in value:
            items.insert(
                "i", AttrTree([("@l", item.label), ("v", render_text_value(item.value))])
            )
        tree.insert(spec.key, items)
        return

    if value is None:
        return
    if codec == "opaque":
        tree.insert(spec.key, value)
        return
    if value == spec.default and not spec.required:
        return
    if codec == "text":
        tree.insert(spec.key, value)
    elif codec == "int":
        tree.insert(spec.key, str(value))
    elif codec == "float":
        tree.insert(spec.key, format_number(value))
    elif codec == "bool":
        tree.insert(spec.key, "true" if value else "false")


def parse_field(spec: FieldSpec, tree: AttrTree, path: str) -> Any:
    raw = tree.get(spec.key)
    codec = spec.codec

    if codec == "dropdown":
        if raw is None:
            return []
        items = []
        for i, entry in enumerate(_expect_tree(raw, path).get_all("i")):
            item_path = f"{path}/{spec.key}/i[{i}]"
            entry = _expect_tree(entry, item_path)
            label = entry.get("@l")
            if label is None:
                raise MissingAttributeError("@l", item_path)
            items.append(
                DropdownItem(
                    label=label,
                    value=parse_text_value(entry.get("v"), f"{item_path}/v"),
                )
            )
        return items

    if raw is None:
        if spec.required:
            raise MissingAttributeError(spec.key, path)
        return spec.default

    if codec == "value":
        return parse_text_value(raw, f"{path}/{spec.key}")
    if not isinstance(raw, str):
        raise DocumentParseError(f"{spec.key!r} must be an attribute", path)
    if codec in ("text", "opaque"):
        return raw
    if codec == "int":
        return parse_int(raw, spec.key, path)
    if codec == "float":
        return parse_number(raw, spec.key, path)
    return parse_bool(raw, spec.key, path)


# ─── Whole objects ───


def render_object(node_id: int, position: Position, variant: Variant) -> AttrTree:
    """The unpatched ``<object>`` tree of one node."""
    tree = AttrTree([("@id", str(node_id))])
    pos = render_position(position)
    if pos is not None:
        tree.insert("pos", pos)
    for n, (spec, slot) in enumerate(zip(variant.INPUTS, variant.inputs), start=1):
        if slot is not None:
            tree.insert(f"in{n}", render_slot(slot, spec))
    for n, (spec, slot) in enumerate(zip(variant.OUTPUTS, variant.outputs), start=1):
        if slot is not None:
            tree.insert(f"out{n}", render_slot(slot, spec))
    for spec in variant.FIELDS:
        render_field(spec, getattr(variant, spec.name), tree)
    return tree


def _warn_unknown(model: type[Variant], tree: AttrTree, path: str) -> None:
    known = {"@id", "pos"} | {spec.key for spec in model.FIELDS}
    for key in tree.keys():
        if key in known:
            continue
        match = _SLOT_TAG.match(key)
        if match:
            specs = model.INPUTS if match.group(1) == "in" else model.OUTPUTS
            if 1 <= int(match.group(2)) <= len(specs):
                continue
        logger.warning("%s: ignoring unknown %r on %s", path, key, model.__name__)


def parse_object(
    model: type[Variant], value: Value | None, path: str
) -> tuple[int, Position, Variant]:
    """Read an (already inverse-patched) ``<object>`` tree as ``model``."""
    if value is None:
        raise MissingAttributeError("object", path)
    tree = _expect_tree(value, path)

    raw_id = tree.get("@id")
    if raw_id is None:
        raise MissingAttributeError("@id", path)
    node_id = parse_int(raw_id, "@id", path)
    position = parse_position(tree.get("pos"), path=f"{path}/pos")

    inputs = []
    for n in range(1, len(model.INPUTS) + 1):
        slot = tree.get(f"in{n}")
        inputs.append(None if slot is None else parse_input_slot(slot, f"{path}/in{n}"))
    outputs = []
    for n in range(1, len(model.OUTPUTS) + 1):
        slot = tree.get(f"out{n}")
        outputs.append(None if slot is None else parse_output_slot(slot, f"{path}/out{n}"))

    fields = {spec.name: parse_field(spec, tree, path) for spec in model.FIELDS}
    _warn_unknown(model, tree, path)

    try:
        variant = model.model_validate({"inputs": inputs, "outputs": outputs, **fields})
    except ValidationError as e:
        raise DocumentParseError(f"invalid {model.__name__}: {e}", path) from e
    return node_id, position, variant

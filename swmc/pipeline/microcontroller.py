"""Microcontroller <-> ``<microprocessor>`` document.

Writing validates first, then lays out the fixed element skeleton::

    microprocessor @name @description @width @length @id_counter
                   @id_counter_node @sym0..@sym15
      nodes/n        @id @component_id
        node         @label @mode @type @description
          position   @x @z
      group
        data         @type
          inputs, outputs
        components/c             @type, object
        components_bridge/c      @type, object   (in bridge order)
        groups
        component_states/c0..    @id, object contents
        component_bridge_states/c0..
        group_states

The ``*_states`` lists mirror the components and are regenerated on every
write; they are ignored when reading.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from swmc.document.codec import parse_int, parse_xml, render_xml
from swmc.document.tree import AttrTree, Value
from swmc.errors import DocumentParseError, MissingAttributeError
from swmc.pipeline.quirks import apply_forward, apply_inverse
from swmc.pipeline.render import (
    parse_object,
    parse_position,
    render_object,
    render_position,
)
from swmc.schemas.catalog import NodeKindSpec, bridge_kind, kind_spec, logic_kind
from swmc.schemas.microcontroller import (
    ICON_SIZE,
    BridgeNode,
    IONode,
    IONodeDesign,
    Microcontroller,
    Node,
)
from swmc.schemas.nodes import LogicVariant
from swmc.schemas.signal import IONodeMode, SignalType

logger = logging.getLogger(__name__)

ROOT_TAG = "microprocessor"
_XZ = ("@x", "@z")


# ─── Writing ───


def _render_node_object(node: Node) -> AttrTree:
    obj = render_object(node.id, node.position, node.variant)
    if isinstance(node.variant, LogicVariant):
        apply_forward(node.variant, obj)
    return obj


def render_component(node: Node) -> AttrTree:
    """The ``<c>`` entry of a logic or bridge node."""
    tree = AttrTree()
    type_code = kind_spec(node.variant).type_code
    if type_code != 0:
        tree.insert("@type", str(type_code))
    tree.insert("object", _render_node_object(node))
    return tree


def render_state(node: Node) -> AttrTree:
    """The ``<cN>`` state entry: ``@id`` then the object contents."""
    tree = AttrTree()
    if node.id != 0:
        tree.insert("@id", str(node.id))
    for key, value in _render_node_object(node):
        if key != "@id":
            tree.insert(key, value)
    return tree


def _render_io_node(io: IONode) -> AttrTree:
    design = io.design
    inner = AttrTree([("@label", design.label)])
    if design.mode != IONodeMode.OUTPUT:
        inner.insert("@mode", str(int(design.mode)))
    if design.signal != SignalType.ON_OFF:
        inner.insert("@type", str(int(design.signal)))
    inner.insert("@description", design.description)
    position = render_position(design.position, _XZ)
    if position is not None:
        inner.insert("position", position)
    return AttrTree(
        [
            ("@id", str(design.node_id)),
            ("@component_id", str(io.logic.id)),
            ("node", inner),
        ]
    )


def _bridges_in_order(mc: Microcontroller) -> list[BridgeNode]:
    rank = {cid: i for i, cid in enumerate(mc.components_bridge_order)}
    return sorted((io.logic for io in mc.io), key=lambda node: rank[node.id])


def _numbered(entries: list[AttrTree]) -> AttrTree:
    return AttrTree([(f"c{i}", entry) for i, entry in enumerate(entries)])


def microcontroller_to_tree(mc: Microcontroller) -> AttrTree:
    """Validate and lay out the ``<microprocessor>`` element."""
    mc.validate()

    tree = AttrTree()
    if mc.name:
        tree.insert("@name", mc.name)
    if mc.description:
        tree.insert("@description", mc.description)
    tree.insert("@width", str(mc.width))
    tree.insert("@length", str(mc.length))
    if mc.id_counter != 0:
        tree.insert("@id_counter", str(mc.id_counter))
    if mc.id_counter_node is not None:
        tree.insert("@id_counter_node", str(mc.id_counter_node))
    for i, sym in enumerate(mc.icon):
        if sym != 0:
            tree.insert(f"@sym{i}", str(sym))

    tree.insert("nodes", AttrTree([("n", _render_io_node(io)) for io in mc.io]))

    bridges = _bridges_in_order(mc)
    data = AttrTree()
    if mc.data_type is not None:
        data.insert("@type", mc.data_type)
    data.insert("inputs", AttrTree())
    data.insert("outputs", AttrTree())

    group = AttrTree()
    group.insert("data", data)
    group.insert(
        "components", AttrTree([("c", render_component(n)) for n in mc.logic_nodes])
    )
    group.insert(
        "components_bridge", AttrTree([("c", render_component(n)) for n in bridges])
    )
    group.insert("groups", AttrTree())
    group.insert("component_states", _numbered([render_state(n) for n in mc.logic_nodes]))
    group.insert("component_bridge_states", _numbered([render_state(n) for n in bridges]))
    group.insert("group_states", AttrTree())
    tree.insert("group", group)

    logger.debug(
        "Rendered microcontroller %r: %d components, %d IO nodes",
        mc.name,
        len(mc.logic_nodes),
        len(mc.io),
    )
    return tree


def microcontroller_to_xml(mc: Microcontroller) -> str:
    return render_xml(ROOT_TAG, microcontroller_to_tree(mc))


# ─── Reading ───


def _child(tree: AttrTree, key: str, path: str) -> AttrTree:
    value = tree.get(key)
    if value is None:
        raise MissingAttributeError(key, path)
    if not isinstance(value, AttrTree):
        raise DocumentParseError(f"{key!r} must be an element", path)
    return value


def _attr(tree: AttrTree, key: str, path: str) -> str:
    value = tree.get(key)
    if value is None:
        raise MissingAttributeError(key, path)
    if not isinstance(value, str):
        raise DocumentParseError(f"{key!r} must be an attribute", path)
    return value


def _entry_kind(value: Value, lookup, path: str) -> tuple[NodeKindSpec, Value | None]:
    """Catalog entry and raw ``<object>`` of a ``<c>`` element."""
    if not isinstance(value, AttrTree):
        raise DocumentParseError("expected a <c> element", path)
    spec = lookup(value.get("@type", "0"), path)
    return spec, value.get("object")


def parse_component(value: Value, path: str = "c") -> Node:
    """Read a logic ``<c>`` entry, undoing its kind's tag corrections."""
    spec, obj = _entry_kind(value, logic_kind, path)
    if isinstance(obj, AttrTree):
        obj = apply_inverse(spec.type_code, obj.copy())
    node_id, position, variant = parse_object(spec.model, obj, f"{path}/object")
    return Node(id=node_id, position=position, variant=variant)


def parse_bridge_component(value: Value, path: str = "c") -> BridgeNode:
    spec, obj = _entry_kind(value, bridge_kind, path)
    node_id, position, variant = parse_object(spec.model, obj, f"{path}/object")
    return BridgeNode(id=node_id, position=position, variant=variant)


def _enum(cls, text: str, key: str, path: str):
    code = parse_int(text, key, path)
    try:
        return cls(code)
    except ValueError:
        raise DocumentParseError(f"{key!r} has unknown value {code}", path) from None


def _parse_io_node(entry: Value, bridges: dict[int, BridgeNode], path: str) -> IONode:
    if not isinstance(entry, AttrTree):
        raise DocumentParseError("expected an <n> element", path)
    node_id = parse_int(_attr(entry, "@id", path), "@id", path)
    component_id = parse_int(_attr(entry, "@component_id", path), "@component_id", path)
    inner_path = f"{path}/node"
    inner = _child(entry, "node", path)

    bridge = bridges.pop(component_id, None)
    if bridge is None:
        raise DocumentParseError(
            f"IO node {node_id} refers to missing bridge component {component_id}", path
        )
    design = IONodeDesign(
        node_id=node_id,
        label=_attr(inner, "@label", inner_path),
        description=_attr(inner, "@description", inner_path),
        mode=_enum(IONodeMode, inner.get("@mode", "0"), "@mode", inner_path),
        signal=_enum(SignalType, inner.get("@type", "0"), "@type", inner_path),
        position=parse_position(inner.get("position"), _XZ, f"{inner_path}/position"),
    )
    return IONode(design=design, logic=bridge)


def microcontroller_from_tree(tree: AttrTree, path: str = ROOT_TAG) -> Microcontroller:
    """Build and validate a Microcontroller from a ``<microprocessor>`` tree."""
    group = _child(tree, "group", path)
    group_path = f"{path}/group"
    data = _child(group, "data", group_path)

    components_path = f"{group_path}/components"
    logic_nodes = [
        parse_component(entry, f"{components_path}/c[{i}]")
        for i, entry in enumerate(_child(group, "components", group_path).get_all("c"))
    ]
    bridge_path = f"{group_path}/components_bridge"
    bridge_nodes = [
        parse_bridge_component(entry, f"{bridge_path}/c[{i}]")
        for i, entry in enumerate(
            _child(group, "components_bridge", group_path).get_all("c")
        )
    ]
    bridge_order = [node.id for node in bridge_nodes]
    bridges = {node.id: node for node in bridge_nodes}

    nodes_path = f"{path}/nodes"
    io = [
        _parse_io_node(entry, bridges, f"{nodes_path}/n[{i}]")
        for i, entry in enumerate(_child(tree, "nodes", path).get_all("n"))
    ]

    id_counter_node = tree.get("@id_counter_node")
    try:
        mc = Microcontroller(
            name=tree.get("@name", ""),
            description=tree.get("@description", ""),
            width=parse_int(_attr(tree, "@width", path), "@width", path),
            length=parse_int(_attr(tree, "@length", path), "@length", path),
            id_counter=parse_int(tree.get("@id_counter", "0"), "@id_counter", path),
            id_counter_node=(
                None
                if id_counter_node is None
                else parse_int(id_counter_node, "@id_counter_node", path)
            ),
            icon=[
                parse_int(tree.get(f"@sym{i}", "0"), f"@sym{i}", path)
                for i in range(ICON_SIZE)
            ],
            data_type=data.get("@type"),
            io=io,
            logic_nodes=logic_nodes,
            components_bridge_order=bridge_order,
        )
    except ValidationError as e:
        raise DocumentParseError(f"invalid microcontroller: {e}", path) from e

    logger.debug(
        "Read microcontroller %r: %d components, %d IO nodes",
        mc.name,
        len(logic_nodes),
        len(io),
    )
    mc.validate()
    return mc


def microcontroller_from_xml(xml: str) -> Microcontroller:
    root, tree = parse_xml(xml)
    if root != ROOT_TAG:
        raise DocumentParseError(f"expected <{ROOT_TAG}>, found <{root}>")
    return microcontroller_from_tree(tree)

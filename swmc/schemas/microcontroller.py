"""Microcontroller aggregate: logic nodes, IO nodes and the id counters.

The aggregate owns every node. Ids are allocated here and nowhere else; the
counters only move down when the node holding the highest id is removed,
and removing an IO node never frees its bridge id.
"""

from __future__ import annotations

import logging
from typing import Iterator

from pydantic import BaseModel, Field

from swmc.errors import ConnectionTargetError
from swmc.schemas.bridge import bridge_for
from swmc.schemas.catalog import AnyBridgeVariant, AnyLogicVariant
from swmc.schemas.fields import Position
from swmc.schemas.nodes import LogicVariant
from swmc.schemas.signal import IONodeMode, SignalType
from swmc.schemas.slots import Endpoint, InputSlot
from swmc.schemas.variant import IOSignature

logger = logging.getLogger(__name__)

DEFAULT_IO_LABEL = "Input"
DEFAULT_IO_DESCRIPTION = "The input signal to be processed."

ICON_SIZE = 16


class Node(BaseModel):
    """A logic node placed on the canvas."""

    id: int = Field(ge=0, le=0xFFFFFFFF)
    position: Position = Field(default_factory=Position)
    variant: AnyLogicVariant

    def inputs(self) -> list[Endpoint | None]:
        return self.variant.connections()

    def input_slots(self) -> list[InputSlot | None]:
        """The variant's input slots, mutable in place."""
        return self.variant.inputs

    def io_signature(self) -> IOSignature:
        return self.variant.io_signature()


class BridgeNode(Node):
    variant: AnyBridgeVariant


class IONodeDesign(BaseModel):
    """Outward-facing half of an IO node: what the player sees on the chip."""

    node_id: int = Field(ge=0, le=0xFFFFFFFF)
    label: str = DEFAULT_IO_LABEL
    description: str = DEFAULT_IO_DESCRIPTION
    signal: SignalType = SignalType.ON_OFF
    mode: IONodeMode = IONodeMode.OUTPUT
    # x / z on the chip footprint
    position: Position = Field(default_factory=Position)


class IONode(BaseModel):
    design: IONodeDesign
    logic: BridgeNode

    @property
    def node_id(self) -> int:
        return self.design.node_id


class Microcontroller(BaseModel):
    name: str = ""
    description: str = ""
    width: int = Field(ge=0, le=0xFF)
    length: int = Field(ge=0, le=0xFF)
    id_counter: int = Field(default=0, ge=0, le=0xFFFFFFFF)
    id_counter_node: int | None = Field(default=None, ge=0, le=0xFFFFFFFF)
    icon: list[int] = Field(default_factory=lambda: [0] * ICON_SIZE)
    data_type: str | None = None
    io: list[IONode] = Field(default_factory=list)
    logic_nodes: list[Node] = Field(default_factory=list)
    components_bridge_order: list[int] = Field(default_factory=list)

    # ─── Construction ───

    @classmethod
    def new(
        cls, name: str, description: str, width: int, length: int
    ) -> "Microcontroller":
        """Create an empty microcontroller. Raises on an invalid size."""
        mc = cls(name=name, description=description, width=width, length=length)
        mc.validate()
        return mc

    @classmethod
    def default(cls) -> "Microcontroller":
        return cls.new("New microcontroller", "No description set.", 2, 2)

    def validate(self) -> None:
        """Raise the first violated invariant as a MicrocontrollerValidationError."""
        from swmc.validation.engine import validate_microcontroller

        validate_microcontroller(self)

    # ─── Logic nodes ───

    def add_component(self, variant: LogicVariant) -> Node:
        self.id_counter += 1
        node = Node(id=self.id_counter, variant=variant)
        self.logic_nodes.append(node)
        logger.debug("Added %s as component %d", variant.kind, node.id)
        return node

    def remove_component(self, index: int) -> LogicVariant | None:
        if not 0 <= index < len(self.logic_nodes):
            return None
        return self.remove_component_id(self.logic_nodes[index].id)

    def remove_component_id(self, component_id: int) -> LogicVariant | None:
        for i, node in enumerate(self.logic_nodes):
            if node.id == component_id:
                del self.logic_nodes[i]
                self._release_component_id(component_id)
                return node.variant
        return None

    def _release_component_id(self, component_id: int) -> None:
        if self.id_counter == component_id:
            self.id_counter -= 1

    # ─── IO nodes ───

    def add_io(
        self,
        signal: SignalType,
        mode: IONodeMode,
        label: str | None = None,
        description: str | None = None,
    ) -> IONode:
        self.id_counter_node = (self.id_counter_node or 0) + 1
        self.id_counter += 1

        bridge = bridge_for(signal, mode)()
        io = IONode(
            design=IONodeDesign(
                node_id=self.id_counter_node,
                label=label if label is not None else DEFAULT_IO_LABEL,
                description=(
                    description if description is not None else DEFAULT_IO_DESCRIPTION
                ),
                signal=signal,
                mode=mode,
            ),
            logic=BridgeNode(id=self.id_counter, variant=bridge),
        )
        self.io.append(io)
        self.components_bridge_order.append(io.logic.id)
        logger.debug(
            "Added IO node %d (%s, bridge %d)", io.node_id, bridge.kind, io.logic.id
        )
        return io

    def io_nodes(self) -> list[IONode]:
        return self.io

    def components(self) -> list[Node]:
        return self.logic_nodes

    def remove_io(self, index: int) -> IONode | None:
        if not 0 <= index < len(self.io):
            return None
        return self.remove_io_id(self.io[index].node_id)

    def remove_io_id(self, node_id: int) -> IONode | None:
        for i, io in enumerate(self.io):
            if io.node_id == node_id:
                del self.io[i]
                if self.id_counter_node == node_id:
                    self.id_counter_node -= 1
                bridge_id = io.logic.id
                self.components_bridge_order = [
                    cid for cid in self.components_bridge_order if cid != bridge_id
                ]
                return io
        return None

    # ─── Graph access ───

    def iter_nodes(self) -> Iterator[Node]:
        """Logic nodes first, then each IO node's bridge node."""
        yield from self.logic_nodes
        for io in self.io:
            yield io.logic

    def get_node(self, component_id: int) -> Node | None:
        for node in self.iter_nodes():
            if node.id == component_id:
                return node
        return None

    def connect(self, source: Endpoint, dest: Endpoint) -> None:
        """Feed input slot ``dest.node_index`` of ``dest.component_id`` from ``source``.

        Signal kinds are not checked. Slots hidden by the node's current
        settings, such as unused composite write channels, are rejected.
        """
        node = self.get_node(dest.component_id)
        if node is None:
            raise ConnectionTargetError(dest.component_id, dest.node_index)
        slots = node.input_slots()
        if (
            dest.node_index >= len(slots)
            or dest.node_index in node.variant.hidden_inputs()
        ):
            raise ConnectionTargetError(dest.component_id, dest.node_index)
        slot = slots[dest.node_index]
        if slot is None:
            slot = InputSlot()
            slots[dest.node_index] = slot
        slot.connection = source.model_copy()

    # ─── Document conversion ───

    def to_document(self):
        from swmc.pipeline.microcontroller import microcontroller_to_tree

        return microcontroller_to_tree(self)

    @classmethod
    def from_document(cls, tree) -> "Microcontroller":
        from swmc.pipeline.microcontroller import microcontroller_from_tree

        return microcontroller_from_tree(tree)

    def to_xml(self) -> str:
        from swmc.pipeline.microcontroller import microcontroller_to_xml

        return microcontroller_to_xml(self)

    @classmethod
    def from_xml(cls, xml: str) -> "Microcontroller":
        from swmc.pipeline.microcontroller import microcontroller_from_xml

        return microcontroller_from_xml(xml)

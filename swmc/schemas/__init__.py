from swmc.schemas.signal import SignalType, IONodeMode
from swmc.schemas.slots import Endpoint, InputSlot, OutputSlot, LegacyPayload, SlotSpec
from swmc.schemas.fields import Position, TextValue, DropdownItem
from swmc.schemas.variant import IOSignature
from swmc.schemas.nodes import LogicVariant
from swmc.schemas.bridge import BridgeVariant
from swmc.schemas.catalog import NodeKindSpec, io_signature
from swmc.schemas.microcontroller import (
    Node,
    BridgeNode,
    IONodeDesign,
    IONode,
    Microcontroller,
)
from swmc.schemas.mesh import Mesh, Submesh, Vertex, Face, Material
from swmc.schemas.definition import ComponentDefinition, DefinitionFlags

__all__ = [
    "SignalType",
    "IONodeMode",
    "Endpoint",
    "InputSlot",
    "OutputSlot",
    "LegacyPayload",
    "SlotSpec",
    "Position",
    "TextValue",
    "DropdownItem",
    "IOSignature",
    "LogicVariant",
    "BridgeVariant",
    "NodeKindSpec",
    "io_signature",
    "Node",
    "BridgeNode",
    "IONodeDesign",
    "IONode",
    "Microcontroller",
    "Mesh",
    "Submesh",
    "Vertex",
    "Face",
    "Material",
    "ComponentDefinition",
    "DefinitionFlags",
]

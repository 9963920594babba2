"""Stormworks microcontroller documents and mesh files."""

from swmc.errors import (
    SwmcError,
    DocumentParseError,
    MeshFormatError,
    MicrocontrollerValidationError,
)
from swmc.schemas import (
    SignalType,
    IONodeMode,
    Endpoint,
    InputSlot,
    OutputSlot,
    Node,
    BridgeNode,
    IONode,
    IONodeDesign,
    Microcontroller,
    Mesh,
    ComponentDefinition,
)
from swmc.schemas import nodes, bridge
from swmc.mesh import decode_mesh, load_mesh
from swmc.pipeline import parse_definition, load_definition

__version__ = "0.1.0"

__all__ = [
    "SwmcError",
    "DocumentParseError",
    "MeshFormatError",
    "MicrocontrollerValidationError",
    "SignalType",
    "IONodeMode",
    "Endpoint",
    "InputSlot",
    "OutputSlot",
    "Node",
    "BridgeNode",
    "IONode",
    "IONodeDesign",
    "Microcontroller",
    "Mesh",
    "ComponentDefinition",
    "nodes",
    "bridge",
    "decode_mesh",
    "load_mesh",
    "parse_definition",
    "load_definition",
]

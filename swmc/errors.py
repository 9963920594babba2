"""Exception taxonomy.

Three families, each surfaced to the caller as a typed exception:

  DocumentParseError              the attribute tree does not have the shape
                                  a node kind or the microcontroller needs
  MeshFormatError                 a fixed marker in a .mesh stream is wrong
  MicrocontrollerValidationError  an aggregate invariant is violated

Validation errors carry a stable ``code`` so callers can branch on them
without matching on message text.
"""

from __future__ import annotations


class SwmcError(Exception):
    """Base class for every error raised by this package."""


# ─── Document shape errors ───


class DocumentParseError(SwmcError):
    """Raised when a document does not match the expected shape."""

    def __init__(self, message: str, path: str = ""):
        self.path = path
        self.detail = message
        super().__init__(f"{path}: {message}" if path else message)


class UnknownNodeTypeError(DocumentParseError):
    def __init__(self, type_code: str, catalog: str, path: str = ""):
        self.type_code = type_code
        self.catalog = catalog
        super().__init__(f"unknown {catalog} type code {type_code!r}", path)


class MissingAttributeError(DocumentParseError):
    def __init__(self, key: str, path: str = ""):
        self.key = key
        super().__init__(f"missing required {key!r}", path)


class InvalidNumberError(DocumentParseError):
    def __init__(self, key: str, text: str, path: str = ""):
        self.key = key
        self.text = text
        super().__init__(f"{key!r} is not a valid number: {text!r}", path)


# ─── Mesh format errors ───


class MeshFormatError(SwmcError):
    """Raised when a .mesh stream violates the fixed binary layout."""


class TruncatedMeshError(MeshFormatError):
    def __init__(self, offset: int, wanted: int, available: int):
        self.offset = offset
        self.wanted = wanted
        self.available = available
        super().__init__(
            f"Unexpected end of mesh data at offset {offset}: "
            f"wanted {wanted} bytes, {available} available"
        )


class InvalidHeaderError(MeshFormatError):
    def __init__(self, expected: bytes, actual: bytes):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Invalid mesh header, expected {list(expected)} but got {list(actual)}"
        )


class InvalidBlockHeaderError(MeshFormatError):
    def __init__(self, expected: bytes, actual: bytes):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Invalid block header, expected {list(expected)} but got {list(actual)}"
        )


class InvalidFaceCountError(MeshFormatError):
    def __init__(self, actual: int):
        self.actual = actual
        super().__init__(
            f"Invalid face vertex count, expected a multiple of 3 but got {actual}"
        )


class InvalidTriangleCountError(MeshFormatError):
    def __init__(self, actual: int):
        self.actual = actual
        super().__init__(
            f"Invalid submesh triangle count, expected a multiple of 3 but got {actual}"
        )


class InvalidSubmeshPositionError(MeshFormatError):
    def __init__(self, actual: int):
        self.actual = actual
        super().__init__(
            f"Invalid submesh position, expected a multiple of 3 but got {actual}"
        )


class WrongSubmeshPaddingError(MeshFormatError):
    def __init__(self, actual: bytes):
        self.expected = b"\x00\x00"
        self.actual = actual
        super().__init__(f"Wrong submesh padding, expected zeros but got {list(actual)}")


class InvalidSubmeshMaterialError(MeshFormatError):
    def __init__(self, actual: int):
        self.actual = actual
        super().__init__(
            f"Invalid submesh material, expected 0, 1, 2 or 3 but got {actual}"
        )


class SubmeshRangeError(MeshFormatError):
    def __init__(self, start: int, count: int, n_faces: int):
        self.start = start
        self.count = count
        self.n_faces = n_faces
        super().__init__(
            f"Submesh triangles [{start}, {start + count}) exceed the {n_faces} faces"
        )


# ─── Microcontroller validation errors ───


class MicrocontrollerValidationError(SwmcError):
    code = "E_INVALID"


class InvalidSizeError(MicrocontrollerValidationError):
    code = "E_INVALID_SIZE"

    def __init__(self, width: int, length: int):
        self.width = width
        self.length = length
        super().__init__(f"Invalid size {width}x{length}, max is 6x6")


class DuplicateIONodeIdError(MicrocontrollerValidationError):
    code = "E_DUPLICATE_IO_NODE_ID"

    def __init__(self, node_id: int):
        self.node_id = node_id
        super().__init__(f"Duplicate IONode id {node_id}")


class MissingBridgeOrderError(MicrocontrollerValidationError):
    code = "E_MISSING_BRIDGE_ORDER"

    def __init__(self, component_id: int):
        self.component_id = component_id
        super().__init__(
            f"Missing IONode component order map entry: component_id={component_id}"
        )


class NodeIdTooHighError(MicrocontrollerValidationError):
    code = "E_NODE_ID_TOO_HIGH"

    def __init__(self, found_id: int, max_id: int):
        self.found_id = found_id
        self.max_id = max_id
        super().__init__(
            f"Node id was greater than id_counter_node {found_id}/{max_id}"
        )


class DuplicateComponentIdError(MicrocontrollerValidationError):
    code = "E_DUPLICATE_COMPONENT_ID"

    def __init__(self, component_id: int):
        self.component_id = component_id
        super().__init__(f"Duplicate Component id {component_id}")


class ComponentIdTooHighError(MicrocontrollerValidationError):
    code = "E_COMPONENT_ID_TOO_HIGH"

    def __init__(self, found_id: int, max_id: int):
        self.found_id = found_id
        self.max_id = max_id
        super().__init__(
            f"Component id was greater than id_counter {found_id}/{max_id}"
        )


class OrphanBridgeOrderError(MicrocontrollerValidationError):
    code = "E_ORPHAN_BRIDGE_ORDER"

    def __init__(self, component_id: int):
        self.component_id = component_id
        super().__init__(
            f"components_bridge order lists {component_id}, "
            f"which belongs to no IONode"
        )


class ConnectionTargetError(SwmcError):
    """Raised by ``Microcontroller.connect`` when the destination slot is missing or hidden."""

    def __init__(self, component_id: int, node_index: int):
        self.component_id = component_id
        self.node_index = node_index
        super().__init__(
            f"No input slot {node_index} on component {component_id}"
        )

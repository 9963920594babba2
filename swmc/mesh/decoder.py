"""Binary ``.mesh`` decoder.

Layout (little-endian)::

    header        8 bytes   6D 65 73 68 07 00 01 00
    n_vertices    u16
    block header  4 bytes   13 00 00 00
    vertices      n_vertices x (3 f32 position, 4 u8 rgba, 3 f32 normal)
    n_indices     u32       multiple of 3
    faces         n_indices / 3 x (3 u16)
    n_submeshes   u16
    submeshes     n_submeshes x
        start     u32       index offset, multiple of 3
        length    u32       index count, nominally a multiple of 3
        padding   2 bytes   zero
        material  u16       0..3
        cull_min  3 f32
        cull_max  3 f32
        unknown   u16
        skip      u16       then skip - 2 further bytes
                            then 14 more bytes

Everything after the last submesh is ignored.
"""

from __future__ import annotations

import logging
from pathlib import Path

from swmc.config import get_settings
from swmc.errors import (
    InvalidBlockHeaderError,
    InvalidFaceCountError,
    InvalidHeaderError,
    InvalidSubmeshMaterialError,
    InvalidSubmeshPositionError,
    InvalidTriangleCountError,
    SubmeshRangeError,
    WrongSubmeshPaddingError,
)
from swmc.mesh.reader import ByteReader
from swmc.schemas.mesh import Color, Face, Material, Mesh, Submesh, Vec3, Vertex

logger = logging.getLogger(__name__)

MESH_HEADER = bytes([0x6D, 0x65, 0x73, 0x68, 0x07, 0x00, 0x01, 0x00])
BLOCK_HEADER = bytes([0x13, 0x00, 0x00, 0x00])
SUBMESH_PADDING = b"\x00\x00"
SUBMESH_TRAILER = 14


def _vec3(reader: ByteReader) -> Vec3:
    x, y, z = reader.read_vec3()
    return Vec3(x=x, y=y, z=z)


def _read_vertex(reader: ByteReader) -> Vertex:
    position = _vec3(reader)
    r, g, b, a = reader.read_rgba()
    normal = _vec3(reader)
    return Vertex(position=position, color=Color(r=r, g=g, b=b, a=a), normal=normal)


def _read_submesh(
    reader: ByteReader, faces: tuple[Face, ...], strict: bool
) -> Submesh:
    start = reader.read_u32()
    if start % 3 != 0:
        raise InvalidSubmeshPositionError(start)
    start //= 3

    length = reader.read_u32()
    if length % 3 != 0:
        if strict:
            raise InvalidTriangleCountError(length)
        logger.warning(
            "Submesh index count %d is not a multiple of 3; truncating to %d triangles",
            length,
            length // 3,
        )
    count = length // 3

    padding = reader.read_bytes(2)
    if padding != SUBMESH_PADDING:
        raise WrongSubmeshPaddingError(padding)

    code = reader.read_u16()
    try:
        material = Material(code)
    except ValueError:
        raise InvalidSubmeshMaterialError(code) from None

    cull_min = _vec3(reader)
    cull_max = _vec3(reader)
    unknown = reader.read_u16()

    skip = reader.read_u16()
    reader.seek_relative(skip - 2)
    reader.seek_relative(SUBMESH_TRAILER)

    if start + count > len(faces):
        raise SubmeshRangeError(start, count, len(faces))

    return Submesh(
        material=material,
        cull_min=cull_min,
        cull_max=cull_max,
        start=start,
        count=count,
        unknown=unknown,
        triangles=faces[start:start + count],
    )


def decode_mesh(data: bytes, *, strict_triangles: bool | None = None) -> Mesh:
    """Decode a ``.mesh`` byte string.

    ``strict_triangles`` rejects submesh index counts that are not a multiple
    of 3 instead of logging them; it defaults to the configured setting.
    """
    if strict_triangles is None:
        strict_triangles = get_settings().strict_submesh_triangles
    reader = ByteReader(data)

    header = reader.read_bytes(len(MESH_HEADER))
    if header != MESH_HEADER:
        raise InvalidHeaderError(MESH_HEADER, header)

    n_vertices = reader.read_u16()
    block_header = reader.read_bytes(len(BLOCK_HEADER))
    if block_header != BLOCK_HEADER:
        raise InvalidBlockHeaderError(BLOCK_HEADER, block_header)

    vertices = tuple(_read_vertex(reader) for _ in range(n_vertices))
    logger.debug("Decoded %d vertices", len(vertices))

    n_indices = reader.read_u32()
    if n_indices % 3 != 0:
        raise InvalidFaceCountError(n_indices)
    faces = tuple(
        Face(indices=(reader.read_u16(), reader.read_u16(), reader.read_u16()))
        for _ in range(n_indices // 3)
    )

    n_submeshes = reader.read_u16()
    submeshes = tuple(
        _read_submesh(reader, faces, strict_triangles) for _ in range(n_submeshes)
    )
    logger.debug(
        "Decoded mesh: %d faces, %d submeshes", len(faces), len(submeshes)
    )
    return Mesh(vertices=vertices, faces=faces, submeshes=submeshes)


def load_mesh(path: str | Path, **kwargs) -> Mesh:
    return decode_mesh(Path(path).read_bytes(), **kwargs)

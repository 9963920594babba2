from __future__ import annotations

from enum import IntEnum

from pydantic import BaseModel, ConfigDict, Field


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class Vec3(_Frozen):
    x: float
    y: float
    z: float


class Color(_Frozen):
    r: int = Field(ge=0, le=255)
    g: int = Field(ge=0, le=255)
    b: int = Field(ge=0, le=255)
    a: int = Field(ge=0, le=255)


class Vertex(_Frozen):
    position: Vec3
    color: Color
    normal: Vec3


class Face(_Frozen):
    indices: tuple[int, int, int]


class Material(IntEnum):
    NORMAL = 0
    GLASS = 1
    EMISSIVE = 2
    UNKNOWN = 3


class Submesh(_Frozen):
    """A material group: a contiguous run of the mesh's triangles.

    ``start`` and ``count`` are in triangles. ``unknown`` is the u16 that
    follows the bounding box; it is not always zero and its meaning is unknown.
    """

    material: Material
    cull_min: Vec3
    cull_max: Vec3
    start: int
    count: int
    unknown: int = 0
    triangles: tuple[Face, ...] = ()


class Mesh(_Frozen):
    vertices: tuple[Vertex, ...] = ()
    faces: tuple[Face, ...] = ()
    submeshes: tuple[Submesh, ...] = ()

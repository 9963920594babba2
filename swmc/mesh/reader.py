"""Little-endian cursor over an in-memory byte buffer."""

from __future__ import annotations

import struct

from swmc.errors import TruncatedMeshError

_U16 = struct.Struct("<H")
_U32 = struct.Struct("<I")
_VEC3 = struct.Struct("<3f")
_RGBA = struct.Struct("<4B")


class ByteReader:
    def __init__(self, data: bytes):
        self.data = bytes(data)
        self.pos = 0

    @property
    def remaining(self) -> int:
        return max(len(self.data) - self.pos, 0)

    def read_bytes(self, n: int) -> bytes:
        """Read ``n`` raw bytes and advance. Raises when fewer remain."""
        if n > self.remaining:
            raise TruncatedMeshError(self.pos, n, self.remaining)
        result = self.data[self.pos:self.pos + n]
        self.pos += n
        return result

    def _unpack(self, fmt: struct.Struct) -> tuple:
        return fmt.unpack(self.read_bytes(fmt.size))

    def read_u16(self) -> int:
        return self._unpack(_U16)[0]

    def read_u32(self) -> int:
        return self._unpack(_U32)[0]

    def read_vec3(self) -> tuple[float, float, float]:
        return self._unpack(_VEC3)

    def read_rgba(self) -> tuple[int, int, int, int]:
        return self._unpack(_RGBA)

    def seek_relative(self, offset: int) -> None:
        """Move the cursor by ``offset`` bytes (negative moves back).

        The cursor may move past the end; the next read then fails. Moving
        before the start is an error.
        """
        target = self.pos + offset
        if target < 0:
            raise TruncatedMeshError(self.pos, offset, self.pos)
        self.pos = target

    def is_at_end(self) -> bool:
        return self.pos >= len(self.data)

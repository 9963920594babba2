from __future__ import annotations

from enum import IntEnum


class SignalType(IntEnum):
    """Signal kinds; the values are the document's IO-node ``type`` codes."""

    ON_OFF = 0
    NUMBER = 1
    POWER = 2  # not available in-game, preserved when read
    FLUID = 3  # not available in-game, preserved when read
    ELECTRIC = 4  # not available in-game, preserved when read
    COMPOSITE = 5
    VIDEO = 6
    AUDIO = 7
    ROPE = 8  # not available in-game, preserved when read


class IONodeMode(IntEnum):
    OUTPUT = 0
    INPUT = 1

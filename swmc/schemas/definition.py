"""Summary of a static component definition file.

Only the identifying attributes are typed. Everything else stays in ``raw``
(the parsed attribute tree), untouched.
"""

from __future__ import annotations

from enum import IntEnum, IntFlag

from pydantic import BaseModel, ConfigDict, Field

from swmc.document.tree import AttrTree


class DefinitionFlags(IntFlag):
    """``@flags`` bit set. Bits without a name are kept as-is."""

    WATER_PROPELLER = 1 << 1
    PARENT = 1 << 6
    CHILD = 1 << 7
    WING = 1 << 15
    SUSPENSION = 1 << 16
    MODERN_WHEEL = 1 << 23
    OLD_RADIO_RX = 1 << 24
    OLD_RADIO_TX = 1 << 25
    RADIO_VIDEO = 1 << 26
    NEW_RADIO_RX = 1 << 28
    HIDDEN = 1 << 29
    MODERN_ROTOR = 1 << 30


class Category(IntEnum):
    BLOCKS = 0
    VEHICLE_CONTROL = 1
    MECHANICS = 2
    PROPULSION = 3
    SPECIALIST_EQUIPMENT = 4
    LOGIC = 5
    DISPLAYS = 6
    SENSORS = 7
    DECORATIVE = 8
    FLUID = 9
    ELECTRIC = 10
    JET_ENGINES = 11
    WEAPONS = 12
    MODULAR_ENGINES = 13
    INDUSTRY = 14
    WINDOWS = 15


class ComponentDefinition(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str
    category: int = 0
    type_code: int = 0
    mass: float = 0.0
    value: int = 0
    flags: DefinitionFlags = DefinitionFlags(0)
    tags: list[str] = Field(default_factory=list)
    mesh_data_name: str | None = None
    raw: AttrTree = Field(default_factory=AttrTree, exclude=True, repr=False)

    def known_category(self) -> Category | None:
        try:
            return Category(self.category)
        except ValueError:
            return None

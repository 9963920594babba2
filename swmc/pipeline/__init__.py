from swmc.pipeline.microcontroller import (
    microcontroller_to_tree,
    microcontroller_from_tree,
    microcontroller_to_xml,
    microcontroller_from_xml,
)
from swmc.pipeline.definition import parse_definition, load_definition

__all__ = [
    "microcontroller_to_tree",
    "microcontroller_from_tree",
    "microcontroller_to_xml",
    "microcontroller_from_xml",
    "parse_definition",
    "load_definition",
]

from swmc.document.tree import AttrTree, TEXT_KEY
from swmc.document.codec import parse_xml, render_xml, render_element
from swmc.document.repair import strip_known_duplicates

__all__ = [
    "AttrTree",
    "TEXT_KEY",
    "parse_xml",
    "render_xml",
    "render_element",
    "strip_known_duplicates",
]

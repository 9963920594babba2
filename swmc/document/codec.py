"""XML text <-> AttrTree codec.

Parsing goes through lxml, which keeps attribute order and repeated child
elements exactly as written. Printing is done here rather than by lxml so the
output matches the game's layout byte for byte: one indent unit per level,
self-closing empty elements, partial escaping, and a fixed header/trailer.

Numbers are printed the way the game prints them: shortest round-trip form,
no trailing ``.0`` and no exponent.
"""

from __future__ import annotations

import logging
import math
import re
from decimal import Decimal

from lxml import etree

from swmc.config import get_settings
from swmc.document.tree import TEXT_KEY, AttrTree, Value
from swmc.errors import DocumentParseError, InvalidNumberError

logger = logging.getLogger(__name__)


# ─── Escaping ───

_ESCAPES: dict[str, dict[str, tuple[str, ...]]] = {
    # level -> context -> characters to escape
    "minimal": {"attr": ("&", "<", '"'), "text": ("&", "<")},
    "partial": {"attr": ("&", "<", ">", '"'), "text": ("&", "<", ">")},
    "full": {"attr": ("&", "<", ">", '"', "'"), "text": ("&", "<", ">", '"', "'")},
}

_ENTITIES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&apos;",
}

# Conformant parsers fold raw line breaks and tabs in attribute values into
# spaces, so they are always written as character references.
_ATTR_WHITESPACE = {"\n": "&#10;", "\r": "&#13;", "\t": "&#9;"}


def escape(text: str, level: str = "partial", context: str = "attr") -> str:
    try:
        chars = _ESCAPES[level][context]
    except KeyError:
        raise ValueError(f"Unknown escape level/context {level!r}/{context!r}")
    out = []
    for ch in text:
        if ch in chars:
            out.append(_ENTITIES[ch])
        elif context == "attr" and ch in _ATTR_WHITESPACE:
            out.append(_ATTR_WHITESPACE[ch])
        else:
            out.append(ch)
    return "".join(out)


# ─── Numbers ───


def format_number(value: float | int) -> str:
    """Format a number in shortest round-trip positional notation."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    text = repr(value)
    if "e" in text or "E" in text:
        text = format(Decimal(text), "f")
    if text.endswith(".0"):
        text = text[:-2]
    return text


def parse_number(text: str, key: str = "", path: str = "") -> float:
    try:
        return float(text)
    except ValueError:
        raise InvalidNumberError(key, text, path) from None


def parse_int(text: str, key: str = "", path: str = "") -> int:
    try:
        return int(text)
    except ValueError:
        raise InvalidNumberError(key, text, path) from None


def parse_bool(text: str, key: str = "", path: str = "") -> bool:
    if text in ("true", "1"):
        return True
    if text in ("false", "0"):
        return False
    raise DocumentParseError(f"{key!r} is not a valid boolean: {text!r}", path)


# ─── Parsing ───

_PARSER = etree.XMLParser(
    remove_comments=True,
    remove_pis=True,
    resolve_entities=False,
    no_network=True,
    huge_tree=True,
)

# Start tags only; a quoted attribute value may contain ``>``.
_START_TAG = re.compile(r"""<[A-Za-z_:][^<>"']*(?:(?:"[^"]*"|'[^']*')[^<>"']*)*>""")
_QUOTED = re.compile(r""""[^"]*"|'[^']*'""")


def _protect_attribute_whitespace(text: str) -> str:
    """Turn raw newlines and tabs inside attribute values into character references.

    The XML parser folds them into spaces otherwise; the game keeps them.
    """

    def quoted(match: re.Match) -> str:
        return "".join(_ATTR_WHITESPACE.get(ch, ch) for ch in match.group(0))

    def start_tag(match: re.Match) -> str:
        return _QUOTED.sub(quoted, match.group(0))

    return _START_TAG.sub(start_tag, text)


def _element_to_tree(element) -> AttrTree:
    tree = AttrTree()
    for name, value in element.attrib.items():
        tree.insert(f"@{name}", value)
    if element.text is not None and element.text.strip():
        tree.insert(TEXT_KEY, element.text)
    for child in element:
        if not isinstance(child.tag, str):
            continue
        tree.insert(child.tag, _element_to_tree(child))
    return tree


def parse_xml(text: str) -> tuple[str, AttrTree]:
    """Parse a document into ``(root_tag, tree)``."""
    try:
        root = etree.fromstring(
            _protect_attribute_whitespace(text).encode("utf-8"), _PARSER
        )
    except etree.XMLSyntaxError as e:
        raise DocumentParseError(f"Malformed XML: {e}") from e
    tree = _element_to_tree(root)
    logger.debug("Parsed <%s> with %d top-level entries", root.tag, len(tree))
    return root.tag, tree


# ─── Printing ───


def _write_element(
    lines: list[str],
    tag: str,
    value: Value,
    level: int,
    unit: str,
    escape_level: str,
) -> None:
    indent = unit * level

    if isinstance(value, str):
        if value:
            lines.append(f"{indent}<{tag}>{escape(value, escape_level, 'text')}</{tag}>")
        else:
            lines.append(f"{indent}<{tag}/>")
        return

    parts = [f"<{tag}"]
    text: str | None = None
    children: list[tuple[str, Value]] = []
    for key, child in value:
        if key.startswith("@"):
            if not isinstance(child, str):
                raise TypeError(f"Attribute {key!r} of <{tag}> must be a string")
            parts.append(f' {key[1:]}="{escape(child, escape_level, "attr")}"')
        elif key == TEXT_KEY:
            text = child if isinstance(child, str) else None
        else:
            children.append((key, child))
    head = "".join(parts)

    if not children:
        if text:
            lines.append(f"{indent}{head}>{escape(text, escape_level, 'text')}</{tag}>")
        else:
            lines.append(f"{indent}{head}/>")
        return

    if text:
        lines.append(f"{indent}{head}>{escape(text, escape_level, 'text')}")
    else:
        lines.append(f"{indent}{head}>")
    for key, child in children:
        _write_element(lines, key, child, level + 1, unit, escape_level)
    lines.append(f"{indent}</{tag}>")


def render_element(
    tag: str,
    tree: Value,
    *,
    indent_char: str | None = None,
    indent_size: int | None = None,
    escape_level: str | None = None,
) -> str:
    """Print one element (and its subtree) without header or trailer."""
    settings = get_settings()
    unit = (indent_char if indent_char is not None else settings.indent_char) * (
        indent_size if indent_size is not None else settings.indent_size
    )
    lines: list[str] = []
    _write_element(
        lines, tag, tree, 0, unit, escape_level or settings.escape
    )
    return "\n".join(lines)


def render_xml(
    tag: str,
    tree: AttrTree,
    *,
    indent_char: str | None = None,
    indent_size: int | None = None,
    escape_level: str | None = None,
) -> str:
    """Print a full document: header line, root element, trailing newlines."""
    settings = get_settings()
    body = render_element(
        tag,
        tree,
        indent_char=indent_char,
        indent_size=indent_size,
        escape_level=escape_level,
    )
    return f"{settings.xml_header}\n{body}" + "\n" * settings.trailing_newlines

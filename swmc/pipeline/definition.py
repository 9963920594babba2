"""Component definition file -> ComponentDefinition summary."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from swmc.document.codec import parse_int, parse_number, parse_xml
from swmc.document.repair import strip_known_duplicates
from swmc.errors import DocumentParseError, MissingAttributeError
from swmc.schemas.definition import ComponentDefinition, DefinitionFlags

logger = logging.getLogger(__name__)

ROOT_TAG = "definition"


def parse_definition(xml: str) -> ComponentDefinition:
    root, tree = parse_xml(strip_known_duplicates(xml))
    if root != ROOT_TAG:
        raise DocumentParseError(f"expected <{ROOT_TAG}>, found <{root}>")

    def required(key: str) -> str:
        value = tree.get(key)
        if not isinstance(value, str):
            raise MissingAttributeError(key, ROOT_TAG)
        return value

    tags = tree.get("@tags")
    try:
        definition = ComponentDefinition(
            name=required("@name"),
            category=parse_int(tree.get("@category", "0"), "@category", ROOT_TAG),
            type_code=parse_int(required("@type"), "@type", ROOT_TAG),
            mass=parse_number(required("@mass"), "@mass", ROOT_TAG),
            value=parse_int(required("@value"), "@value", ROOT_TAG),
            flags=DefinitionFlags(
                parse_int(tree.get("@flags", "0"), "@flags", ROOT_TAG)
            ),
            tags=tags.split(",") if tags is not None else [],
            mesh_data_name=tree.get("@mesh_data_name"),
            raw=tree,
        )
    except ValidationError as e:
        raise DocumentParseError(f"invalid definition: {e}", ROOT_TAG) from e

    logger.debug("Read definition %r (type %d)", definition.name, definition.type_code)
    return definition


def load_definition(path: str | Path) -> ComponentDefinition:
    return parse_definition(Path(path).read_text(encoding="utf-8"))

"""Registries over the node catalogs.

Lookups go by document type code (reading) or by ``kind`` string (the model's
discriminator). Both catalogs are closed: an unknown code is a parse error.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Union

from pydantic import Field

from swmc.errors import UnknownNodeTypeError
from swmc.schemas.bridge import BRIDGE_VARIANTS, BridgeVariant
from swmc.schemas.fields import FieldSpec
from swmc.schemas.nodes import LOGIC_VARIANTS, LogicVariant
from swmc.schemas.slots import SlotSpec
from swmc.schemas.variant import IOSignature, Variant


@dataclass(frozen=True)
class NodeKindSpec:
    type_code: int
    kind: str
    model: type[Variant]

    @property
    def inputs(self) -> tuple[SlotSpec, ...]:
        return self.model.INPUTS

    @property
    def outputs(self) -> tuple[SlotSpec, ...]:
        return self.model.OUTPUTS

    @property
    def fields(self) -> tuple[FieldSpec, ...]:
        return self.model.FIELDS


def _build(variants) -> tuple[dict[int, NodeKindSpec], dict[str, NodeKindSpec]]:
    by_code: dict[int, NodeKindSpec] = {}
    by_kind: dict[str, NodeKindSpec] = {}
    for model in variants:
        kind = model.model_fields["kind"].default
        spec = NodeKindSpec(type_code=model.TYPE_CODE, kind=kind, model=model)
        if spec.type_code in by_code or kind in by_kind:
            raise RuntimeError(f"Duplicate catalog entry {spec.type_code}/{kind}")
        by_code[spec.type_code] = spec
        by_kind[kind] = spec
    return by_code, by_kind


LOGIC_BY_CODE, LOGIC_BY_KIND = _build(LOGIC_VARIANTS)
BRIDGE_BY_CODE, BRIDGE_BY_KIND = _build(BRIDGE_VARIANTS)

AnyLogicVariant = Annotated[Union[LOGIC_VARIANTS], Field(discriminator="kind")]
AnyBridgeVariant = Annotated[Union[BRIDGE_VARIANTS], Field(discriminator="kind")]


def logic_kind(type_code: int | str, path: str = "") -> NodeKindSpec:
    try:
        return LOGIC_BY_CODE[int(type_code)]
    except (KeyError, ValueError):
        raise UnknownNodeTypeError(str(type_code), "component", path) from None


def bridge_kind(type_code: int | str, path: str = "") -> NodeKindSpec:
    try:
        return BRIDGE_BY_CODE[int(type_code)]
    except (KeyError, ValueError):
        raise UnknownNodeTypeError(str(type_code), "bridge component", path) from None


def kind_spec(variant: Variant) -> NodeKindSpec:
    """Catalog entry for a variant instance of either catalog."""
    if isinstance(variant, BridgeVariant):
        return BRIDGE_BY_KIND[variant.kind]
    if isinstance(variant, LogicVariant):
        return LOGIC_BY_KIND[variant.kind]
    raise TypeError(f"Not a catalog variant: {type(variant).__name__}")


def io_signature(variant: Variant | type[Variant]) -> IOSignature:
    """Ordered input and output signal kinds of a node kind."""
    return variant.io_signature()

"""Microcontroller Validation Engine: ordered invariant checks.

Pure Python. Runs on the typed model only.

Checks, in the order they are reported:
  1. Chip size within 1..6 on both axes
  2. IO nodes: unique node ids, bridge id listed in the bridge order,
     node id not above ``id_counter_node``
  3. Logic nodes: unique ids, id not above ``id_counter``
  4. Bridge order lists only bridge ids that belong to an IO node

Each check returns every violation it finds, in model order. The first
violation overall is what ``validate_microcontroller`` raises.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from swmc.errors import (
    ComponentIdTooHighError,
    DuplicateComponentIdError,
    DuplicateIONodeIdError,
    InvalidSizeError,
    MicrocontrollerValidationError,
    MissingBridgeOrderError,
    NodeIdTooHighError,
    OrphanBridgeOrderError,
)

if TYPE_CHECKING:
    from swmc.schemas.microcontroller import Microcontroller

MIN_SIZE = 1
MAX_SIZE = 6


# ═══════════════════════════════════════════════════════════
# Check 1: Chip Size
# ═══════════════════════════════════════════════════════════


def check_size(mc: Microcontroller) -> list[MicrocontrollerValidationError]:
    if not (MIN_SIZE <= mc.width <= MAX_SIZE and MIN_SIZE <= mc.length <= MAX_SIZE):
        return [InvalidSizeError(mc.width, mc.length)]
    return []


# ═══════════════════════════════════════════════════════════
# Check 2: IO Nodes
# ═══════════════════════════════════════════════════════════


def check_io_nodes(mc: Microcontroller) -> list[MicrocontrollerValidationError]:
    """Per IO node: duplicate id, missing bridge order entry, id too high."""
    errors: list[MicrocontrollerValidationError] = []
    seen: set[int] = set()
    order = set(mc.components_bridge_order)
    max_id = mc.id_counter_node or 0

    for io in mc.io:
        node_id = io.design.node_id
        if node_id in seen:
            errors.append(DuplicateIONodeIdError(node_id))
        seen.add(node_id)

        if io.logic.id not in order:
            errors.append(MissingBridgeOrderError(io.logic.id))

        if node_id > max_id:
            errors.append(NodeIdTooHighError(node_id, max_id))

    return errors


# ═══════════════════════════════════════════════════════════
# Check 3: Logic Nodes
# ═══════════════════════════════════════════════════════════


def check_components(mc: Microcontroller) -> list[MicrocontrollerValidationError]:
    errors: list[MicrocontrollerValidationError] = []
    seen: set[int] = set()

    for node in mc.logic_nodes:
        if node.id in seen:
            errors.append(DuplicateComponentIdError(node.id))
        seen.add(node.id)

        if node.id > mc.id_counter:
            errors.append(ComponentIdTooHighError(node.id, mc.id_counter))

    return errors


# ═══════════════════════════════════════════════════════════
# Check 4: Bridge Order
# ═══════════════════════════════════════════════════════════


def check_bridge_order(mc: Microcontroller) -> list[MicrocontrollerValidationError]:
    """Every bridge order entry must name the bridge node of some IO node."""
    bridge_ids = {io.logic.id for io in mc.io}
    return [
        OrphanBridgeOrderError(cid)
        for cid in mc.components_bridge_order
        if cid not in bridge_ids
    ]


# ─── Runner ───

ALL_CHECKS = [
    check_size,
    check_io_nodes,
    check_components,
    check_bridge_order,
]


def collect_violations(
    mc: Microcontroller,
    checks: list | None = None,
) -> list[MicrocontrollerValidationError]:
    """Run all (or selected) checks and return every violation, in order."""
    check_fns = checks if checks is not None else ALL_CHECKS
    violations: list[MicrocontrollerValidationError] = []
    for check_fn in check_fns:
        violations.extend(check_fn(mc))
    return violations


def validate_microcontroller(mc: Microcontroller) -> None:
    """Raise the first violation, if any."""
    for check_fn in ALL_CHECKS:
        errors = check_fn(mc)
        if errors:
            raise errors[0]

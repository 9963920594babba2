"""Unit tests for the Microcontroller Validation Engine."""

import pytest

from swmc.errors import (
    ComponentIdTooHighError,
    DuplicateComponentIdError,
    DuplicateIONodeIdError,
    InvalidSizeError,
    MissingBridgeOrderError,
    NodeIdTooHighError,
    OrphanBridgeOrderError,
)
from swmc.schemas import bridge, nodes
from swmc.schemas.microcontroller import (
    BridgeNode,
    IONode,
    IONodeDesign,
    Microcontroller,
    Node,
)
from swmc.validation.engine import (
    check_bridge_order,
    check_components,
    check_io_nodes,
    check_size,
    collect_violations,
    validate_microcontroller,
)


# ─── Fixtures ───


def _io(node_id: int, bridge_id: int) -> IONode:
    return IONode(
        design=IONodeDesign(node_id=node_id),
        logic=BridgeNode(id=bridge_id, variant=bridge.OnOffOut()),
    )


def _node(node_id: int) -> Node:
    return Node(id=node_id, variant=nodes.Not())


def _mc(
    width: int = 2,
    length: int = 2,
    io: list | None = None,
    logic: list | None = None,
    order: list | None = None,
    id_counter: int = 10,
    id_counter_node: int | None = 10,
) -> Microcontroller:
    io = io or []
    return Microcontroller(
        width=width,
        length=length,
        io=io,
        logic_nodes=logic or [],
        components_bridge_order=(
            order if order is not None else [n.logic.id for n in io]
        ),
        id_counter=id_counter,
        id_counter_node=id_counter_node,
    )


# ═══════════════════════════════════════════════════════════
# Test Check 1: Chip Size
# ═══════════════════════════════════════════════════════════


class TestSize:
    def test_valid(self):
        assert check_size(_mc(1, 6)) == []

    def test_zero(self):
        errors = check_size(_mc(0, 2))
        assert len(errors) == 1
        assert isinstance(errors[0], InvalidSizeError)
        assert (errors[0].width, errors[0].length) == (0, 2)

    def test_too_long(self):
        assert len(check_size(_mc(2, 7))) == 1


# ═══════════════════════════════════════════════════════════
# Test Check 2: IO Nodes
# ═══════════════════════════════════════════════════════════


class TestIONodes:
    def test_valid(self):
        assert check_io_nodes(_mc(io=[_io(1, 1), _io(2, 2)])) == []

    def test_duplicate_node_id(self):
        errors = check_io_nodes(_mc(io=[_io(1, 1), _io(1, 2)]))
        assert len(errors) == 1
        assert isinstance(errors[0], DuplicateIONodeIdError)
        assert errors[0].node_id == 1

    def test_missing_order_entry(self):
        errors = check_io_nodes(_mc(io=[_io(1, 1), _io(2, 2)], order=[1]))
        assert len(errors) == 1
        assert isinstance(errors[0], MissingBridgeOrderError)
        assert errors[0].component_id == 2

    def test_node_id_too_high(self):
        errors = check_io_nodes(_mc(io=[_io(3, 1)], id_counter_node=2))
        assert len(errors) == 1
        assert isinstance(errors[0], NodeIdTooHighError)
        assert (errors[0].found_id, errors[0].max_id) == (3, 2)

    def test_absent_counter_counts_as_zero(self):
        errors = check_io_nodes(_mc(io=[_io(1, 1)], id_counter_node=None))
        assert isinstance(errors[0], NodeIdTooHighError)
        assert errors[0].max_id == 0

    def test_per_node_order(self):
        errors = check_io_nodes(
            _mc(io=[_io(5, 1), _io(5, 2)], order=[1], id_counter_node=4)
        )
        assert [type(e) for e in errors] == [
            NodeIdTooHighError,
            DuplicateIONodeIdError,
            MissingBridgeOrderError,
            NodeIdTooHighError,
        ]


# ═══════════════════════════════════════════════════════════
# Test Check 3: Logic Nodes
# ═══════════════════════════════════════════════════════════


class TestComponents:
    def test_valid(self):
        assert check_components(_mc(logic=[_node(1), _node(2)])) == []

    def test_duplicate_id(self):
        errors = check_components(_mc(logic=[_node(4), _node(4)]))
        assert len(errors) == 1
        assert isinstance(errors[0], DuplicateComponentIdError)
        assert errors[0].component_id == 4

    def test_id_too_high(self):
        errors = check_components(_mc(logic=[_node(11)]))
        assert len(errors) == 1
        assert isinstance(errors[0], ComponentIdTooHighError)
        assert (errors[0].found_id, errors[0].max_id) == (11, 10)
        assert errors[0].code == "E_COMPONENT_ID_TOO_HIGH"


# ═══════════════════════════════════════════════════════════
# Test Check 4: Bridge Order
# ═══════════════════════════════════════════════════════════


class TestBridgeOrder:
    def test_valid(self):
        assert check_bridge_order(_mc(io=[_io(1, 1)])) == []

    def test_orphan_entry(self):
        errors = check_bridge_order(_mc(io=[_io(1, 1)], order=[1, 7]))
        assert len(errors) == 1
        assert isinstance(errors[0], OrphanBridgeOrderError)
        assert errors[0].component_id == 7


# ═══════════════════════════════════════════════════════════
# Test Full Validator
# ═══════════════════════════════════════════════════════════


class TestFullValidator:
    def test_clean_microcontroller_valid(self):
        mc = _mc(io=[_io(1, 1)], logic=[_node(2)])
        assert collect_violations(mc) == []
        validate_microcontroller(mc)

    def test_first_violation_raised(self):
        mc = _mc(width=9, logic=[_node(3), _node(3)])
        with pytest.raises(InvalidSizeError):
            validate_microcontroller(mc)

    def test_collect_keeps_check_order(self):
        mc = _mc(width=9, io=[_io(1, 1)], logic=[_node(3), _node(3)], order=[1, 8])
        codes = [e.code for e in collect_violations(mc)]
        assert codes == [
            "E_INVALID_SIZE",
            "E_DUPLICATE_COMPONENT_ID",
            "E_ORPHAN_BRIDGE_ORDER",
        ]

    def test_selective_checks(self):
        mc = _mc(width=9, logic=[_node(3), _node(3)])
        errors = collect_violations(mc, checks=[check_components])
        assert len(errors) == 1
        assert isinstance(errors[0], DuplicateComponentIdError)

    def test_model_validate_method(self):
        with pytest.raises(MissingBridgeOrderError):
            _mc(io=[_io(1, 1)], order=[]).validate()

"""Unit tests for the node catalogs and the generic object rendering."""

import pytest

from swmc.document.tree import AttrTree
from swmc.errors import DocumentParseError, MissingAttributeError, UnknownNodeTypeError
from swmc.pipeline.microcontroller import parse_bridge_component, parse_component, render_component
from swmc.pipeline.render import (
    parse_object,
    render_field,
    render_object,
    render_slot,
)
from swmc.schemas import bridge, nodes
from swmc.schemas.bridge import BRIDGE_VARIANTS, bridge_for
from swmc.schemas.catalog import (
    BRIDGE_BY_CODE,
    LOGIC_BY_CODE,
    bridge_kind,
    io_signature,
    kind_spec,
    logic_kind,
)
from swmc.schemas.fields import DropdownItem, Position, TextValue
from swmc.schemas.microcontroller import BridgeNode, Node
from swmc.schemas.nodes import LOGIC_VARIANTS
from swmc.schemas.signal import IONodeMode, SignalType
from swmc.schemas.slots import InputSlot, LegacyPayload, OutputSlot, SlotSpec

B = SignalType.ON_OFF
N = SignalType.NUMBER
C = SignalType.COMPOSITE


# ─── Fixtures ───


def _payload(*pairs) -> LegacyPayload:
    return LegacyPayload(attributes=list(pairs))


def _spec(signal=N, **kwargs) -> SlotSpec:
    return SlotSpec("slot", signal, **kwargs)


# ═══════════════════════════════════════════════════════════
# Test Catalog Completeness
# ═══════════════════════════════════════════════════════════


class TestCatalog:
    def test_logic_codes_are_contiguous(self):
        assert sorted(LOGIC_BY_CODE) == list(range(60))

    def test_bridge_codes_are_contiguous(self):
        assert sorted(BRIDGE_BY_CODE) == list(range(10))

    def test_kinds_are_unique(self):
        kinds = [cls.model_fields["kind"].default for cls in LOGIC_VARIANTS]
        assert len(set(kinds)) == len(kinds)

    def test_lookup_by_code(self):
        assert logic_kind(9).model is nodes.Divide
        assert logic_kind("40").model is nodes.CompositeWriteNumber
        assert bridge_kind(3).model is bridge.NumberOut

    def test_unknown_code(self):
        with pytest.raises(UnknownNodeTypeError) as exc:
            logic_kind(60, "c[0]")
        assert exc.value.type_code == "60"
        assert exc.value.path == "c[0]"

    def test_non_numeric_code(self):
        with pytest.raises(UnknownNodeTypeError):
            bridge_kind("abc")

    def test_kind_spec_for_instances(self):
        assert kind_spec(nodes.Lua()).type_code == 56
        assert kind_spec(bridge.VideoIn()).type_code == 6


# ═══════════════════════════════════════════════════════════
# Test IO Signatures
# ═══════════════════════════════════════════════════════════


class TestIOSignature:
    def test_divide(self):
        sig = io_signature(nodes.Divide)
        assert sig.inputs == (N, N)
        assert sig.outputs == (N, B)

    def test_constant_has_no_inputs(self):
        assert io_signature(nodes.ConstantOn()).inputs == ()

    def test_composite_write_has_34_inputs(self):
        sig = nodes.CompositeWriteOnOff.io_signature()
        assert len(sig.inputs) == 34
        assert sig.inputs[0] == C
        assert sig.inputs[1:33] == (B,) * 32
        assert sig.inputs[33] == N

    def test_bridge_signatures(self):
        assert io_signature(bridge.NumberIn).outputs == (N,)
        assert io_signature(bridge.CompositeOut).inputs == (C,)

    def test_node_signature_matches_variant(self):
        node = Node(id=1, variant=nodes.Lua())
        assert node.io_signature() == nodes.Lua.io_signature()


# ═══════════════════════════════════════════════════════════
# Test Variant Construction
# ═══════════════════════════════════════════════════════════


class TestVariants:
    def test_new_variant_has_every_slot_empty(self):
        add = nodes.Add()
        assert add.inputs == [InputSlot(), InputSlot()]
        assert add.outputs == [OutputSlot()]

    def test_named_slot_access(self):
        divide = nodes.Divide()
        divide.set_input("input_b", InputSlot.connected(3, 1))
        assert divide.connections()[1].component_id == 3
        assert divide.input("input_b").connection.node_index == 1
        assert divide.output("div_by_zero") == OutputSlot()
        with pytest.raises(KeyError):
            divide.input("nope")

    def test_wrong_slot_count_rejected(self):
        with pytest.raises(ValueError):
            nodes.Add(inputs=[InputSlot()])

    def test_composite_read_drops_unused_channel_input(self):
        assert nodes.CompositeReadNumber(channel=4).inputs[1] is None
        assert nodes.CompositeReadNumber(channel=-1).inputs[1] == InputSlot()

    def test_composite_write_drops_unused_channels(self):
        write = nodes.CompositeWriteNumber(count=3, offset=2)
        assert [write.channel_input(n) is not None for n in range(1, 6)] == [
            True, True, True, False, False,
        ]
        assert write.inputs[33] is None

    def test_composite_write_variable_offset_keeps_start(self):
        write = nodes.CompositeWriteOnOff(count=0, offset=-1)
        assert write.inputs[33] == InputSlot()
        assert all(slot is None for slot in write.inputs[1:33])

    def test_field_assignment_clears_hidden_inputs(self):
        write = nodes.CompositeWriteNumber(count=3, offset=-1)
        write.inputs[3] = InputSlot.connected(7)
        write.inputs[33] = InputSlot.connected(7)
        write.count = 1
        assert write.inputs[2:4] == [None, None]
        write.offset = 0
        assert write.inputs[33] is None
        assert write.hidden_inputs() == tuple(range(2, 34))

    def test_channel_assignment_clears_variable_input(self):
        read = nodes.CompositeReadOnOff(channel=-1)
        read.inputs[1] = InputSlot.connected(2)
        read.channel = 5
        assert read.inputs[1] is None
        assert read.hidden_inputs() == (1,)

    def test_composite_write_count_above_channels(self):
        write = nodes.CompositeWriteNumber(count=40)
        assert all(slot is not None for slot in write.inputs[1:33])
        assert write.hidden_inputs() == (33,)
        node = Node(id=1, variant=write)
        entry = render_component(node)
        assert entry.get("object").get("@count") == "40"
        assert parse_component(entry) == node

    def test_composite_write_count_is_u8(self):
        assert nodes.CompositeWriteOnOff(count=255).count == 255
        with pytest.raises(ValueError):
            nodes.CompositeWriteOnOff(count=256)

    def test_junction_outputs_mirror(self):
        junction = nodes.NumericalJunction(
            outputs=[OutputSlot(visibility_attr="x"), None]
        )
        assert junction.outputs[1] == junction.outputs[0]
        assert junction.outputs[1] is not junction.outputs[0]

    def test_required_bridge_input_is_restored(self):
        out = bridge.NumberOut(inputs=[None])
        assert out.inputs == [InputSlot()]

    def test_bridge_for(self):
        assert bridge_for(SignalType.VIDEO, IONodeMode.OUTPUT) is bridge.VideoOut
        assert bridge_for(SignalType.ON_OFF, IONodeMode.INPUT) is bridge.OnOffIn
        assert bridge_for(SignalType.POWER, IONodeMode.INPUT) is bridge.NumberIn
        assert bridge_for(SignalType.ROPE, IONodeMode.OUTPUT) is bridge.NumberOut


# ═══════════════════════════════════════════════════════════
# Test Slot Rendering
# ═══════════════════════════════════════════════════════════


class TestRenderSlot:
    def test_empty_slot(self):
        assert render_slot(InputSlot(), _spec()) == AttrTree()

    def test_connection(self):
        tree = render_slot(InputSlot.connected(7, 1), _spec())
        assert tree.items() == [("@component_id", "7"), ("@node_index", "1")]

    def test_zero_node_index_omitted(self):
        tree = render_slot(InputSlot.connected(7), _spec())
        assert tree.items() == [("@component_id", "7")]

    def test_visibility_attr_written_even_when_empty(self):
        tree = render_slot(OutputSlot(visibility_attr=""), _spec())
        assert tree.items() == [("@v", "")]

    def test_default_block_hidden_for_number(self):
        slot = InputSlot(legacy_block=_payload())
        assert render_slot(slot, _spec(N)) == AttrTree()
        assert render_slot(slot, _spec(B)) == AttrTree()

    def test_default_block_kept_for_composite(self):
        slot = InputSlot(legacy_block=_payload())
        assert render_slot(slot, _spec(C)).items() == [("v", AttrTree())]

    def test_default_block_kept_when_always_visible(self):
        slot = OutputSlot(legacy_block=_payload())
        tree = render_slot(slot, _spec(N, always_visible=True))
        assert tree.items() == [("v", AttrTree())]

    def test_non_default_block_always_written(self):
        slot = InputSlot(legacy_block=_payload(("bools", "1"), ("01", "2")))
        tree = render_slot(slot, _spec(N))
        assert tree.items() == [("v", AttrTree([("@bools", "1"), ("@01", "2")]))]

    def test_absent_block_never_written(self):
        assert render_slot(OutputSlot(), _spec(C, always_visible=True)) == AttrTree()


# ═══════════════════════════════════════════════════════════
# Test Field Rendering
# ═══════════════════════════════════════════════════════════


class TestRenderFields:
    def _fields(self, variant) -> AttrTree:
        tree = AttrTree()
        for spec in variant.FIELDS:
            render_field(spec, getattr(variant, spec.name), tree)
        return tree

    def test_default_floats_omitted(self):
        assert self._fields(nodes.Capacitor()) == AttrTree()

    def test_non_default_float(self):
        tree = self._fields(nodes.Capacitor(charge_time=2.5))
        assert tree.items() == [("@ct", "2.5")]

    def test_text_value_omits_zero_value(self):
        tree = self._fields(nodes.Clamp())
        assert tree.items() == [
            ("min", AttrTree([("@text", "0")])),
            ("max", AttrTree([("@text", "1"), ("@value", "1")])),
        ]

    def test_required_text_written_at_default(self):
        tree = self._fields(nodes.TooltipNumber())
        assert tree.items() == [("@l", "number")]

    def test_opaque_written_verbatim(self):
        tree = self._fields(nodes.Function3n(p1="340282346638528860000000000000000000000"))
        assert tree.get("@p1") == "340282346638528860000000000000000000000"
        assert "@p2" not in tree

    def test_bool(self):
        assert self._fields(nodes.PropertyToggle(value=True)).get("@v") == "true"
        assert "@v" not in self._fields(nodes.PropertyToggle())

    def test_dropdown(self):
        dropdown = nodes.PropertyDropdown(
            items=[DropdownItem(label="a"), DropdownItem(label="b", value=TextValue.from_value(2))]
        )
        items = self._fields(dropdown).get("items")
        assert items.items() == [
            ("i", AttrTree([("@l", "a"), ("v", AttrTree([("@text", "0")]))])),
            ("i", AttrTree([("@l", "b"), ("v", AttrTree([("@text", "2"), ("@value", "2")]))])),
        ]

    def test_pulse_mode_none_omitted(self):
        assert self._fields(nodes.Pulse()) == AttrTree()
        assert self._fields(nodes.Pulse(mode=0)).get("@m") == "0"


# ═══════════════════════════════════════════════════════════
# Test Object Rendering
# ═══════════════════════════════════════════════════════════


class TestRenderObject:
    def test_layout_order(self):
        variant = nodes.Add()
        variant.set_input("input_a", InputSlot.connected(1))
        obj = render_object(4, Position(x=0.5, y=-0.25), variant)
        assert obj.items() == [
            ("@id", "4"),
            ("pos", AttrTree([("@x", "0.5"), ("@y", "-0.25")])),
            ("in1", AttrTree([("@component_id", "1")])),
            ("in2", AttrTree()),
            ("out1", AttrTree()),
        ]

    def test_origin_position_omitted(self):
        obj = render_object(1, Position(), nodes.ConstantOn())
        assert obj.keys() == ["@id", "out1"]

    def test_partial_position(self):
        obj = render_object(1, Position(y=2), nodes.ConstantOn())
        assert obj.get("pos") == AttrTree([("@y", "2")])

    def test_fields_after_slots(self):
        obj = render_object(2, Position(), nodes.ConstantNumber(value=TextValue.from_text("2.5")))
        assert obj.keys() == ["@id", "out1", "n"]

    def test_parse_missing_id(self):
        with pytest.raises(MissingAttributeError):
            parse_object(nodes.Add, AttrTree([("in1", AttrTree())]), "object")

    def test_parse_bad_field_value(self):
        tree = AttrTree([("@id", "1"), ("@i", "500"), ("in1", AttrTree())])
        with pytest.raises(DocumentParseError):
            parse_object(nodes.CompositeReadNumber, tree, "object")

    def test_parse_missing_text_value(self):
        tree = AttrTree([("@id", "1"), ("out1", AttrTree()), ("n", AttrTree([("@value", "1")]))])
        with pytest.raises(MissingAttributeError):
            parse_object(nodes.ConstantNumber, tree, "object")

    def test_unknown_keys_are_ignored(self, caplog):
        tree = AttrTree([("@id", "1"), ("@zzz", "1"), ("out1", AttrTree()), ("out9", AttrTree())])
        node_id, _, variant = parse_object(nodes.ConstantOn, tree, "object")
        assert node_id == 1
        assert variant == nodes.ConstantOn()
        assert "@zzz" in caplog.text
        assert "out9" in caplog.text


# ═══════════════════════════════════════════════════════════
# Test Every Kind Reads Back
# ═══════════════════════════════════════════════════════════


class TestEveryKind:
    @pytest.mark.parametrize("model", LOGIC_VARIANTS, ids=lambda m: m.__name__)
    def test_logic_default_reads_back(self, model):
        node = Node(id=3, position=Position(x=1), variant=model())
        assert parse_component(render_component(node)) == node

    @pytest.mark.parametrize("model", BRIDGE_VARIANTS, ids=lambda m: m.__name__)
    def test_bridge_default_reads_back(self, model):
        node = BridgeNode(id=5, variant=model())
        assert parse_bridge_component(render_component(node)) == node

    def test_type_zero_omitted(self):
        entry = render_component(Node(id=1, variant=nodes.Not()))
        assert "@type" not in entry
        assert parse_component(entry).variant == nodes.Not()

    def test_type_written(self):
        entry = render_component(Node(id=1, variant=nodes.Lua(script="x = 1")))
        assert entry.get("@type") == "56"
        assert entry.get("object").get("@script") == "x = 1"

    def test_unknown_component_type(self):
        entry = AttrTree([("@type", "77"), ("object", AttrTree([("@id", "1")]))])
        with pytest.raises(UnknownNodeTypeError):
            parse_component(entry)

"""Unit tests for the per-kind tag corrections."""

from swmc.document.codec import render_element
from swmc.document.tree import AttrTree
from swmc.pipeline.quirks import apply_forward, apply_inverse, has_quirk
from swmc.pipeline.render import render_object
from swmc.schemas import nodes
from swmc.schemas.fields import Position
from swmc.schemas.slots import InputSlot


# ─── Fixtures ───


def _object(variant, node_id: int = 1) -> AttrTree:
    return render_object(node_id, Position(), variant)


def _patched(variant, node_id: int = 1) -> AttrTree:
    return apply_forward(variant, _object(variant, node_id))


# ═══════════════════════════════════════════════════════════
# Test NumericalJunction
# ═══════════════════════════════════════════════════════════


class TestJunction:
    def test_both_outputs_written_as_out1(self):
        obj = _patched(nodes.NumericalJunction())
        assert obj.keys() == ["@id", "in1", "in2", "out1", "out1"]

    def test_printed_form(self):
        junction = nodes.NumericalJunction()
        junction.set_input("pass", InputSlot.connected(4))
        text = render_element("object", _patched(junction))
        assert text == (
            '<object id="1">\n'
            '\t<in1 component_id="4"/>\n'
            "\t<in2/>\n"
            "\t<out1/>\n"
            "\t<out1/>\n"
            "</object>"
        )

    def test_inverse_renames_second_out1(self):
        obj = apply_inverse(21, _patched(nodes.NumericalJunction()))
        assert obj == _object(nodes.NumericalJunction())

    def test_single_out1_is_left_alone(self):
        obj = AttrTree([("@id", "1"), ("out1", AttrTree())])
        assert apply_inverse(21, obj).keys() == ["@id", "out1"]


# ═══════════════════════════════════════════════════════════
# Test CompositeWrite
# ═══════════════════════════════════════════════════════════


class TestCompositeWrite:
    def test_variable_offset_layout(self):
        obj = _patched(nodes.CompositeWriteNumber(count=5, offset=-1))
        assert obj.keys() == [
            "@id", "inc", "in1", "in2", "in3", "in4", "in5", "inoff", "out1",
            "@count", "@offset",
        ]
        assert obj.get("@count") == "5"
        assert obj.get("@offset") == "-1"

    def test_fixed_offset_drops_inoff(self):
        obj = _patched(nodes.CompositeWriteOnOff(count=2, offset=3))
        assert obj.keys() == ["@id", "inc", "in1", "in2", "out1", "@count", "@offset"]

    def test_default_offset_omitted(self):
        obj = _patched(nodes.CompositeWriteOnOff(count=2))
        assert "@offset" not in obj
        assert "inoff" not in obj

    def test_zero_count_keeps_count_attribute(self):
        obj = _patched(nodes.CompositeWriteNumber(count=0))
        assert obj.keys() == ["@id", "inc", "out1", "@count"]
        assert obj.get("@count") == "0"

    def test_all_channels(self):
        obj = _patched(nodes.CompositeWriteNumber(count=32, offset=-1))
        assert obj.count("in32") == 1
        assert "in33" not in obj
        assert obj.index("inoff") == obj.index("in32") + 1

    def test_connections_follow_the_shift(self):
        write = nodes.CompositeWriteNumber(count=2)
        write.inputs[2] = InputSlot.connected(9)
        obj = _patched(write)
        assert obj.get("in2") == AttrTree([("@component_id", "9")])
        assert obj.get("in1") == AttrTree()

    def test_inverse_restores_generic_layout(self):
        write = nodes.CompositeWriteNumber(count=5, offset=-1)
        assert apply_inverse(40, _patched(write)) == _object(write)


# ═══════════════════════════════════════════════════════════
# Test CompositeRead
# ═══════════════════════════════════════════════════════════


class TestCompositeRead:
    def test_variable_channel_moves_in2_after_out1(self):
        obj = _patched(nodes.CompositeReadNumber(channel=-1))
        assert obj.keys() == ["@id", "in1", "out1", "in2", "@i"]

    def test_fixed_channel_has_no_in2(self):
        obj = _patched(nodes.CompositeReadOnOff(channel=3))
        assert obj.keys() == ["@id", "in1", "out1", "@i"]

    def test_inverse_restores_generic_layout(self):
        read = nodes.CompositeReadOnOff(channel=-1)
        assert apply_inverse(29, _patched(read)) == _object(read)


# ═══════════════════════════════════════════════════════════
# Test Unpatched Kinds
# ═══════════════════════════════════════════════════════════


class TestOtherKinds:
    def test_has_quirk(self):
        assert [code for code in range(60) if has_quirk(code)] == [21, 29, 31, 40, 41]

    def test_other_kinds_untouched(self):
        variant = nodes.Divide()
        assert _patched(variant) == _object(variant)
        assert apply_inverse(9, _object(variant)) == _object(variant)

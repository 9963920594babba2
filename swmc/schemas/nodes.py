"""Logic-node variant catalog.

One class per node kind, in type-code order. Slot and field tables follow the
game's tag layout; attributes whose meaning is unknown are kept as opaque
strings (``opaque_attr``) and written back unchanged.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from swmc.schemas.fields import (
    DropdownItem,
    TextValue,
    bool_attr,
    dropdown_child,
    float_attr,
    int_attr,
    opaque_attr,
    text_attr,
    value_child,
)
from swmc.schemas.signal import SignalType
from swmc.schemas.slots import SlotSpec
from swmc.schemas.variant import Variant, slots

B = SignalType.ON_OFF
N = SignalType.NUMBER
C = SignalType.COMPOSITE
V = SignalType.VIDEO
A = SignalType.AUDIO

# Sentinel for "channel / offset comes from a node input".
VARIABLE = -1

COMPOSITE_CHANNELS = 32


class LogicVariant(Variant):
    pass


# ─── Gates ───


class Not(LogicVariant):
    TYPE_CODE = 0
    INPUTS = slots(("input", B))
    OUTPUTS = slots(("out", B))
    kind: Literal["not"] = "not"


class And(LogicVariant):
    TYPE_CODE = 1
    INPUTS = slots(("input_a", B), ("input_b", B))
    OUTPUTS = slots(("out", B))
    kind: Literal["and"] = "and"


class Or(LogicVariant):
    TYPE_CODE = 2
    INPUTS = slots(("input_a", B), ("input_b", B))
    OUTPUTS = slots(("out", B))
    kind: Literal["or"] = "or"


class Xor(LogicVariant):
    TYPE_CODE = 3
    INPUTS = slots(("input_a", B), ("input_b", B))
    OUTPUTS = slots(("out", B))
    kind: Literal["xor"] = "xor"


class Nand(LogicVariant):
    TYPE_CODE = 4
    INPUTS = slots(("input_a", B), ("input_b", B))
    OUTPUTS = slots(("out", B))
    kind: Literal["nand"] = "nand"


class Nor(LogicVariant):
    TYPE_CODE = 5
    INPUTS = slots(("input_a", B), ("input_b", B))
    OUTPUTS = slots(("out", B))
    kind: Literal["nor"] = "nor"


# ─── Arithmetic ───


class Add(LogicVariant):
    TYPE_CODE = 6
    INPUTS = slots(("input_a", N), ("input_b", N))
    OUTPUTS = slots(("out", N))
    kind: Literal["add"] = "add"


class Subtract(LogicVariant):
    TYPE_CODE = 7
    INPUTS = slots(("input_a", N), ("input_b", N))
    OUTPUTS = slots(("out", N))
    kind: Literal["subtract"] = "subtract"


class Multiply(LogicVariant):
    TYPE_CODE = 8
    INPUTS = slots(("input_a", N), ("input_b", N))
    OUTPUTS = slots(("out", N))
    kind: Literal["multiply"] = "multiply"


class Divide(LogicVariant):
    TYPE_CODE = 9
    INPUTS = slots(("input_a", N), ("input_b", N))
    OUTPUTS = slots(("out", N), ("div_by_zero", B))
    kind: Literal["divide"] = "divide"


class Function3n(LogicVariant):
    TYPE_CODE = 10
    INPUTS = slots(("x", N), ("y", N), ("z", N))
    OUTPUTS = slots(("out", N))
    FIELDS = (
        text_attr("expression", "e"),
        # always f32::MAX as an integer string in saved files
        opaque_attr("p1", "p1"),
        opaque_attr("p2", "p2"),
        opaque_attr("p3", "p3"),
    )
    kind: Literal["function_3n"] = "function_3n"
    expression: str = ""
    p1: str | None = None
    p2: str | None = None
    p3: str | None = None


class Clamp(LogicVariant):
    TYPE_CODE = 11
    INPUTS = slots(("input", N))
    OUTPUTS = slots(("out", N))
    FIELDS = (value_child("min"), value_child("max"))
    kind: Literal["clamp"] = "clamp"
    min: TextValue = Field(default_factory=TextValue)
    max: TextValue = Field(default_factory=lambda: TextValue.from_value(1))


class Threshold(LogicVariant):
    TYPE_CODE = 12
    INPUTS = slots(("input", N))
    OUTPUTS = slots(("out", B))
    FIELDS = (value_child("min"), value_child("max"))
    kind: Literal["threshold"] = "threshold"
    min: TextValue = Field(default_factory=TextValue)
    max: TextValue = Field(default_factory=lambda: TextValue.from_value(1))


class MemoryRegister(LogicVariant):
    TYPE_CODE = 13
    INPUTS = slots(("set", B), ("reset", B), ("number", N))
    OUTPUTS = slots(("out", N))
    FIELDS = (value_child("reset_value", "r"), opaque_attr("memory", "memory"))
    kind: Literal["memory_register"] = "memory_register"
    reset_value: TextValue = Field(default_factory=TextValue)
    memory: str | None = None


class Abs(LogicVariant):
    TYPE_CODE = 14
    INPUTS = slots(("input", N))
    OUTPUTS = slots(("out", N))
    kind: Literal["abs"] = "abs"


class ConstantNumber(LogicVariant):
    TYPE_CODE = 15
    OUTPUTS = slots(("out", N))
    FIELDS = (value_child("value", "n"),)
    kind: Literal["constant_number"] = "constant_number"
    value: TextValue = Field(default_factory=TextValue)


class ConstantOn(LogicVariant):
    TYPE_CODE = 16
    OUTPUTS = slots(("out", B))
    kind: Literal["constant_on"] = "constant_on"


class GreaterThan(LogicVariant):
    TYPE_CODE = 17
    INPUTS = slots(("input_a", N), ("input_b", N))
    OUTPUTS = slots(("out", B))
    kind: Literal["greater_than"] = "greater_than"


class LessThan(LogicVariant):
    TYPE_CODE = 18
    INPUTS = slots(("input_a", N), ("input_b", N))
    OUTPUTS = slots(("out", B))
    kind: Literal["less_than"] = "less_than"


# ─── Properties ───


class PropertySlider(LogicVariant):
    TYPE_CODE = 19
    OUTPUTS = slots(("out", N))
    FIELDS = (
        text_attr("name", default="value"),
        value_child("min"),
        value_child("max"),
        value_child("rounding", "int"),
        value_child("value", "v"),
    )
    kind: Literal["property_slider"] = "property_slider"
    name: str = "value"
    min: TextValue = Field(default_factory=TextValue)
    max: TextValue = Field(default_factory=lambda: TextValue.from_value(10))
    rounding: TextValue = Field(default_factory=lambda: TextValue.from_value(1))
    value: TextValue = Field(default_factory=TextValue)


class PropertyDropdown(LogicVariant):
    TYPE_CODE = 20
    OUTPUTS = slots(("out", N))
    FIELDS = (text_attr("name", default="value"), dropdown_child("items"))
    kind: Literal["property_dropdown"] = "property_dropdown"
    name: str = "value"
    items: list[DropdownItem] = Field(default_factory=list)


# ─── Routing ───


class NumericalJunction(LogicVariant):
    """Both outputs are written under the single tag ``out1``."""

    TYPE_CODE = 21
    INPUTS = slots(("pass", N), ("switch", B))
    OUTPUTS = slots(("on_path", N), ("off_path", N))
    kind: Literal["numerical_junction"] = "numerical_junction"

    def normalize(self) -> None:
        super().normalize()
        on_path = self.outputs[0]
        self.outputs[1] = on_path.model_copy(deep=True) if on_path is not None else None


class NumericalSwitchbox(LogicVariant):
    TYPE_CODE = 22
    INPUTS = slots(("on", N), ("off", N), ("switch", B))
    OUTPUTS = slots(("out", N))
    kind: Literal["numerical_switchbox"] = "numerical_switchbox"


class PIDController(LogicVariant):
    TYPE_CODE = 23
    INPUTS = slots(("setpoint", N), ("process_var", N), ("active", B))
    OUTPUTS = slots(("out", N))
    FIELDS = (
        opaque_attr("te", "te"),
        opaque_attr("p2", "p2"),
        opaque_attr("pe", "pe"),
        opaque_attr("pes", "pes"),
        value_child("kp"),
        value_child("ki"),
        value_child("kd"),
    )
    kind: Literal["pid_controller"] = "pid_controller"
    te: str | None = None
    p2: str | None = None
    pe: str | None = None
    pes: str | None = None
    kp: TextValue = Field(default_factory=TextValue)
    ki: TextValue = Field(default_factory=TextValue)
    kd: TextValue = Field(default_factory=TextValue)


class SRLatch(LogicVariant):
    TYPE_CODE = 24
    INPUTS = slots(("set", B), ("reset", B))
    OUTPUTS = slots(("out", B), ("not_out", B))
    FIELDS = (opaque_attr("p1", "p1"),)
    kind: Literal["sr_latch"] = "sr_latch"
    p1: str | None = None


class JKFlipFlop(LogicVariant):
    TYPE_CODE = 25
    INPUTS = slots(("set", B), ("reset", B))
    OUTPUTS = slots(("out", B), ("not_out", B))
    kind: Literal["jk_flip_flop"] = "jk_flip_flop"


class Capacitor(LogicVariant):
    TYPE_CODE = 26
    INPUTS = slots(("charge", B))
    OUTPUTS = slots(("stored", B))
    FIELDS = (
        float_attr("charge_time", "ct", default=1.0),
        float_attr("discharge_time", "dt", default=1.0),
        opaque_attr("c1", "c1"),
        opaque_attr("c2", "c2"),
        opaque_attr("p", "p"),
    )
    kind: Literal["capacitor"] = "capacitor"
    charge_time: float = 1.0
    discharge_time: float = 1.0
    c1: str | None = None
    c2: str | None = None
    p: str | None = None


class Blinker(LogicVariant):
    TYPE_CODE = 27
    INPUTS = slots(("control", B))
    OUTPUTS = slots(("out", B))
    FIELDS = (
        float_attr("on_duration", "on", default=1.0),
        float_attr("off_duration", "off", default=1.0),
        opaque_attr("c", "c"),
    )
    kind: Literal["blinker"] = "blinker"
    on_duration: float = 1.0
    off_duration: float = 1.0
    c: str | None = None


class PushToToggle(LogicVariant):
    TYPE_CODE = 28
    INPUTS = slots(("toggle", B))
    OUTPUTS = slots(("state", B))
    kind: Literal["push_to_toggle"] = "push_to_toggle"


# ─── Composite read/write ───


class _CompositeRead(LogicVariant):
    """``channel == VARIABLE`` reads the channel from the second input."""

    FIELDS = (int_attr("channel", "i"),)
    channel: int = Field(default=0, ge=-128, le=127)

    def hidden_inputs(self) -> tuple[int, ...]:
        return () if self.channel == VARIABLE else (1,)


class CompositeReadOnOff(_CompositeRead):
    TYPE_CODE = 29
    INPUTS = slots(("composite", C), ("variable_channel", N))
    OUTPUTS = slots(("out", B))
    kind: Literal["composite_read_on_off"] = "composite_read_on_off"


class LegacyCompositeWriteOnOff(LogicVariant):
    TYPE_CODE = 30
    INPUTS = slots(("composite", C), ("value", B))
    OUTPUTS = slots(("out", C))
    FIELDS = (int_attr("channel", "i"),)
    kind: Literal["legacy_composite_write_on_off"] = "legacy_composite_write_on_off"
    channel: int = Field(default=0, ge=0, le=255)


class CompositeReadNumber(_CompositeRead):
    TYPE_CODE = 31
    INPUTS = slots(("composite", C), ("variable_channel", N))
    OUTPUTS = slots(("out", N))
    kind: Literal["composite_read_number"] = "composite_read_number"


class LegacyCompositeWriteNumber(LogicVariant):
    TYPE_CODE = 32
    INPUTS = slots(("composite", C), ("value", N))
    OUTPUTS = slots(("out", C))
    FIELDS = (int_attr("channel", "i"),)
    kind: Literal["legacy_composite_write_number"] = "legacy_composite_write_number"
    channel: int = Field(default=0, ge=0, le=255)


class PropertyToggle(LogicVariant):
    TYPE_CODE = 33
    OUTPUTS = slots(("out", B))
    FIELDS = (
        text_attr("name", "n", default="toggle"),
        text_attr("on_label", "on", default="on"),
        text_attr("off_label", "off", default="off"),
        bool_attr("value", "v"),
    )
    kind: Literal["property_toggle"] = "property_toggle"
    name: str = "toggle"
    on_label: str = "on"
    off_label: str = "off"
    value: bool = False


class PropertyNumber(LogicVariant):
    TYPE_CODE = 34
    OUTPUTS = slots(("out", N))
    FIELDS = (text_attr("name", "n", default="number"), value_child("value", "v"))
    kind: Literal["property_number"] = "property_number"
    name: str = "number"
    value: TextValue = Field(default_factory=TextValue)


class Delta(LogicVariant):
    TYPE_CODE = 35
    INPUTS = slots(("input", N))
    OUTPUTS = slots(("out", N))
    FIELDS = (opaque_attr("vp", "vp"), opaque_attr("ip", "ip"))
    kind: Literal["delta"] = "delta"
    vp: str | None = None
    ip: str | None = None


class Function8n(LogicVariant):
    TYPE_CODE = 36
    INPUTS = slots(
        ("x", N), ("y", N), ("z", N), ("w", N), ("a", N), ("b", N), ("c", N), ("d", N)
    )
    OUTPUTS = slots(("out", N))
    FIELDS = (text_attr("expression", "e"),)
    kind: Literal["function_8n"] = "function_8n"
    expression: str = ""


class UpDownCounter(LogicVariant):
    TYPE_CODE = 37
    INPUTS = slots(("up", B), ("down", B), ("reset", B))
    OUTPUTS = slots(("out", N))
    FIELDS = (
        int_attr("mode", "m"),  # 1 = clamp, 0 = disabled
        opaque_attr("initial_state", "is"),
        value_child("reset_value", "r"),
        value_child("increment", "i"),
        value_child("min"),
        value_child("max"),
    )
    kind: Literal["up_down_counter"] = "up_down_counter"
    mode: int = 0
    initial_state: str | None = None
    reset_value: TextValue = Field(default_factory=TextValue)
    increment: TextValue = Field(default_factory=lambda: TextValue.from_value(1))
    min: TextValue = Field(default_factory=TextValue)
    max: TextValue = Field(default_factory=lambda: TextValue.from_value(10))


class Modulo(LogicVariant):
    TYPE_CODE = 38
    INPUTS = slots(("input_a", N), ("input_b", N))
    OUTPUTS = slots(("out", N))
    kind: Literal["modulo"] = "modulo"


class PIDControllerAdvanced(LogicVariant):
    TYPE_CODE = 39
    INPUTS = slots(
        ("setpoint", N), ("process_var", N), ("p", N), ("i", N), ("d", N), ("active", B)
    )
    OUTPUTS = slots(("out", N))
    FIELDS = (
        opaque_attr("te", "te"),
        opaque_attr("p2", "p2"),
        opaque_attr("pe", "pe"),
        opaque_attr("pes", "pes"),
    )
    kind: Literal["pid_controller_advanced"] = "pid_controller_advanced"
    te: str | None = None
    p2: str | None = None
    pe: str | None = None
    pes: str | None = None


def _composite_write_inputs(signal: SignalType) -> tuple[SlotSpec, ...]:
    return (
        SlotSpec("composite", C),
        *(SlotSpec(f"channel_{n}", signal) for n in range(1, COMPOSITE_CHANNELS + 1)),
        SlotSpec("start", N),
    )


class _CompositeWrite(LogicVariant):
    """Writes ``count`` channels starting at ``offset``.

    ``offset == VARIABLE`` takes the start channel from the ``start`` input.
    """

    OUTPUTS = slots(("out", C))
    FIELDS = (int_attr("count", required=True), int_attr("offset"))
    # Counts above COMPOSITE_CHANNELS are kept as written and use every channel.
    count: int = Field(default=1, ge=0, le=0xFF)
    offset: int = Field(default=0, ge=-128, le=127)

    def hidden_inputs(self) -> tuple[int, ...]:
        used = min(self.count, COMPOSITE_CHANNELS)
        unused = tuple(range(used + 1, COMPOSITE_CHANNELS + 1))
        if self.offset != VARIABLE:
            return unused + (COMPOSITE_CHANNELS + 1,)
        return unused

    def channel_input(self, n: int):
        """Input slot for channel ``n`` (1-based)."""
        return self.inputs[n]


class CompositeWriteNumber(_CompositeWrite):
    TYPE_CODE = 40
    INPUTS = _composite_write_inputs(N)
    kind: Literal["composite_write_number"] = "composite_write_number"


class CompositeWriteOnOff(_CompositeWrite):
    TYPE_CODE = 41
    INPUTS = _composite_write_inputs(B)
    kind: Literal["composite_write_on_off"] = "composite_write_on_off"


class Equal(LogicVariant):
    TYPE_CODE = 42
    INPUTS = slots(("input_a", N), ("input_b", N))
    OUTPUTS = slots(("out", B))
    FIELDS = (value_child("epsilon", "e"),)
    kind: Literal["equal"] = "equal"
    epsilon: TextValue = Field(default_factory=TextValue)


# ─── Tooltips ───


class TooltipNumber(LogicVariant):
    TYPE_CODE = 43
    INPUTS = slots(("number", N), ("is_error", B))
    FIELDS = (
        text_attr("label", "l", required=True),
        int_attr("mode", "m"),  # 0 always, 1 if error, 2 if no error
    )
    kind: Literal["tooltip_number"] = "tooltip_number"
    label: str = "number"
    mode: int = 0


class TooltipOnOff(LogicVariant):
    TYPE_CODE = 44
    INPUTS = slots(("display", B))
    FIELDS = (
        text_attr("label", "l", required=True),
        text_attr("on_label", "on", required=True),
        text_attr("off_label", "off", required=True),
        int_attr("mode", "m"),
    )
    kind: Literal["tooltip_on_off"] = "tooltip_on_off"
    label: str = "value"
    on_label: str = "on"
    off_label: str = "off"
    mode: int = 0


# ─── Functions ───


class Function1n(LogicVariant):
    TYPE_CODE = 45
    INPUTS = slots(("input", N))
    OUTPUTS = slots(("out", N))
    FIELDS = (text_attr("expression", "e"),)
    kind: Literal["function_1n"] = "function_1n"
    expression: str = ""


class Function4b(LogicVariant):
    TYPE_CODE = 46
    INPUTS = slots(("x", B), ("y", B), ("z", B), ("w", B))
    OUTPUTS = slots(("out", B))
    FIELDS = (text_attr("expression", "e"),)
    kind: Literal["function_4b"] = "function_4b"
    expression: str = ""


class Function8b(LogicVariant):
    TYPE_CODE = 47
    INPUTS = slots(
        ("x", B), ("y", B), ("z", B), ("w", B), ("a", B), ("b", B), ("c", B), ("d", B)
    )
    OUTPUTS = slots(("out", B))
    FIELDS = (text_attr("expression", "e"),)
    kind: Literal["function_8b"] = "function_8b"
    expression: str = ""


# ─── Timing ───


class Pulse(LogicVariant):
    TYPE_CODE = 48
    INPUTS = slots(("input", B))
    OUTPUTS = slots(("out", B))
    FIELDS = (
        int_attr("mode", "m", default=None),  # None off->on, 0 on->off, 2 always
        opaque_attr("p", "p"),
    )
    kind: Literal["pulse"] = "pulse"
    mode: int | None = None
    p: str | None = None


class _Timer(LogicVariant):
    FIELDS = (
        int_attr("units", "u"),  # 0 seconds, 1 ticks
        opaque_attr("t", "t"),
    )
    units: int = 0
    t: str | None = None


class TimerTON(_Timer):
    TYPE_CODE = 49
    INPUTS = slots(("enable", B), ("duration", N))
    OUTPUTS = slots(("complete", B))
    kind: Literal["timer_ton"] = "timer_ton"


class TimerTOF(_Timer):
    TYPE_CODE = 50
    INPUTS = slots(("enable", B), ("duration", N))
    OUTPUTS = slots(("timing", B))
    kind: Literal["timer_tof"] = "timer_tof"


class TimerRTO(_Timer):
    TYPE_CODE = 51
    INPUTS = slots(("enable", B), ("duration", N), ("reset", B))
    OUTPUTS = slots(("complete", B))
    kind: Literal["timer_rto"] = "timer_rto"


class TimerRTF(_Timer):
    TYPE_CODE = 52
    INPUTS = slots(("enable", B), ("duration", N), ("reset", B))
    OUTPUTS = slots(("timing", B))
    kind: Literal["timer_rtf"] = "timer_rtf"


# ─── Switchboxes, conversion, scripting ───


class CompositeSwitchbox(LogicVariant):
    TYPE_CODE = 53
    INPUTS = slots(("on", C), ("off", C), ("switch", B))
    OUTPUTS = slots(("out", C))
    kind: Literal["composite_switchbox"] = "composite_switchbox"


class NumberToCompositeBinary(LogicVariant):
    TYPE_CODE = 54
    INPUTS = slots(("input", N))
    OUTPUTS = slots(("out", C))
    kind: Literal["number_to_composite_binary"] = "number_to_composite_binary"


class CompositeBinaryToNumber(LogicVariant):
    TYPE_CODE = 55
    INPUTS = slots(("input", C))
    OUTPUTS = slots(("out", N))
    kind: Literal["composite_binary_to_number"] = "composite_binary_to_number"


class Lua(LogicVariant):
    TYPE_CODE = 56
    INPUTS = slots(("data_in", C), ("video_in", V))
    OUTPUTS = slots(("data_out", C), ("video_out", V))
    FIELDS = (text_attr("script", default=None),)
    kind: Literal["lua"] = "lua"
    script: str | None = None


class VideoSwitchbox(LogicVariant):
    TYPE_CODE = 57
    INPUTS = slots(("on", V), ("off", V), ("switch", B))
    OUTPUTS = slots(("out", V))
    kind: Literal["video_switchbox"] = "video_switchbox"


class PropertyText(LogicVariant):
    TYPE_CODE = 58
    FIELDS = (text_attr("name", "n", required=True), text_attr("value", "v"))
    kind: Literal["property_text"] = "property_text"
    name: str = "text"
    value: str = ""


class AudioSwitchbox(LogicVariant):
    TYPE_CODE = 59
    INPUTS = slots(("on", A), ("off", A), ("switch", B))
    OUTPUTS = slots(("out", A))
    kind: Literal["audio_switchbox"] = "audio_switchbox"


LOGIC_VARIANTS: tuple[type[LogicVariant], ...] = (
    Not, And, Or, Xor, Nand, Nor, Add, Subtract, Multiply, Divide,
    Function3n, Clamp, Threshold, MemoryRegister, Abs, ConstantNumber,
    ConstantOn, GreaterThan, LessThan, PropertySlider, PropertyDropdown,
    NumericalJunction, NumericalSwitchbox, PIDController, SRLatch, JKFlipFlop,
    Capacitor, Blinker, PushToToggle, CompositeReadOnOff,
    LegacyCompositeWriteOnOff, CompositeReadNumber, LegacyCompositeWriteNumber,
    PropertyToggle, PropertyNumber, Delta, Function8n, UpDownCounter, Modulo,
    PIDControllerAdvanced, CompositeWriteNumber, CompositeWriteOnOff, Equal,
    TooltipNumber, TooltipOnOff, Function1n, Function4b, Function8b, Pulse,
    TimerTON, TimerTOF, TimerRTO, TimerRTF, CompositeSwitchbox,
    NumberToCompositeBinary, CompositeBinaryToNumber, Lua, VideoSwitchbox,
    PropertyText, AudioSwitchbox,
)

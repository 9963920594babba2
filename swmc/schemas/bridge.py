"""IO-bridge variant catalog.

Every IO node owns one bridge node that links the outside signal to the logic
graph. ``*In`` kinds feed the graph through ``out1``; ``*Out`` kinds read it
through ``in1``. The unused slot of each pair always carries its ``<v>`` block.
"""

from __future__ import annotations

from typing import ClassVar, Literal

from swmc.schemas.signal import IONodeMode, SignalType
from swmc.schemas.slots import SlotSpec
from swmc.schemas.variant import Variant


class BridgeVariant(Variant):
    SIGNAL: ClassVar[SignalType] = SignalType.ON_OFF
    MODE: ClassVar[IONodeMode] = IONodeMode.INPUT


def _input_bridge(signal: SignalType):
    inputs = (SlotSpec("unused_input", signal, always_visible=True),)
    outputs = (SlotSpec("output", signal),)
    return inputs, outputs


def _output_bridge(signal: SignalType):
    inputs = (SlotSpec("input", signal, required=True),)
    outputs = (SlotSpec("unused_output", signal, always_visible=True),)
    return inputs, outputs


class OnOffIn(BridgeVariant):
    TYPE_CODE = 0
    SIGNAL = SignalType.ON_OFF
    MODE = IONodeMode.INPUT
    INPUTS, OUTPUTS = _input_bridge(SignalType.ON_OFF)
    kind: Literal["on_off_in"] = "on_off_in"


class OnOffOut(BridgeVariant):
    TYPE_CODE = 1
    SIGNAL = SignalType.ON_OFF
    MODE = IONodeMode.OUTPUT
    INPUTS, OUTPUTS = _output_bridge(SignalType.ON_OFF)
    kind: Literal["on_off_out"] = "on_off_out"


class NumberIn(BridgeVariant):
    TYPE_CODE = 2
    SIGNAL = SignalType.NUMBER
    MODE = IONodeMode.INPUT
    INPUTS, OUTPUTS = _input_bridge(SignalType.NUMBER)
    kind: Literal["number_in"] = "number_in"


class NumberOut(BridgeVariant):
    TYPE_CODE = 3
    SIGNAL = SignalType.NUMBER
    MODE = IONodeMode.OUTPUT
    INPUTS, OUTPUTS = _output_bridge(SignalType.NUMBER)
    kind: Literal["number_out"] = "number_out"


class CompositeIn(BridgeVariant):
    TYPE_CODE = 4
    SIGNAL = SignalType.COMPOSITE
    MODE = IONodeMode.INPUT
    INPUTS, OUTPUTS = _input_bridge(SignalType.COMPOSITE)
    kind: Literal["composite_in"] = "composite_in"


class CompositeOut(BridgeVariant):
    TYPE_CODE = 5
    SIGNAL = SignalType.COMPOSITE
    MODE = IONodeMode.OUTPUT
    INPUTS, OUTPUTS = _output_bridge(SignalType.COMPOSITE)
    kind: Literal["composite_out"] = "composite_out"


class VideoIn(BridgeVariant):
    TYPE_CODE = 6
    SIGNAL = SignalType.VIDEO
    MODE = IONodeMode.INPUT
    INPUTS, OUTPUTS = _input_bridge(SignalType.VIDEO)
    kind: Literal["video_in"] = "video_in"


class VideoOut(BridgeVariant):
    TYPE_CODE = 7
    SIGNAL = SignalType.VIDEO
    MODE = IONodeMode.OUTPUT
    INPUTS, OUTPUTS = _output_bridge(SignalType.VIDEO)
    kind: Literal["video_out"] = "video_out"


class AudioIn(BridgeVariant):
    TYPE_CODE = 8
    SIGNAL = SignalType.AUDIO
    MODE = IONodeMode.INPUT
    INPUTS, OUTPUTS = _input_bridge(SignalType.AUDIO)
    kind: Literal["audio_in"] = "audio_in"


class AudioOut(BridgeVariant):
    TYPE_CODE = 9
    SIGNAL = SignalType.AUDIO
    MODE = IONodeMode.OUTPUT
    INPUTS, OUTPUTS = _output_bridge(SignalType.AUDIO)
    kind: Literal["audio_out"] = "audio_out"


BRIDGE_VARIANTS: tuple[type[BridgeVariant], ...] = (
    OnOffIn, OnOffOut, NumberIn, NumberOut, CompositeIn,
    CompositeOut, VideoIn, VideoOut, AudioIn, AudioOut,
)


def bridge_for(signal: SignalType, mode: IONodeMode) -> type[BridgeVariant]:
    """Bridge kind for an IO node. Signals with no bridge kind map to Number."""
    for cls in BRIDGE_VARIANTS:
        if cls.SIGNAL == signal and cls.MODE == mode:
            return cls
    return NumberIn if mode == IONodeMode.INPUT else NumberOut

"""
engine/
-------
Sequencing, pacing & recording layer.

    from engine import Sequencer, Stepper, Recorder
"""

from engine.log       import AnimationLog
from engine.sequencer import (
    Sequencer,
    SequencerConfig,
    SequencerState,
    CommandResult,
    Frame,
    SAMPLE_VALUES,
    parse_value,
)
from engine.stepper   import Stepper, StepperState, SPEED_PRESETS
from engine.recorder  import Recorder, RunMetrics

__all__ = [
    "AnimationLog",
    "Sequencer",
    "SequencerConfig",
    "SequencerState",
    "CommandResult",
    "Frame",
    "SAMPLE_VALUES",
    "parse_value",
    "Stepper",
    "StepperState",
    "SPEED_PRESETS",
    "Recorder",
    "RunMetrics",
]

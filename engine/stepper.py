"""
stepper.py — Paced Playback Driver
===================================
The Stepper is the outer driver that turns a Sequencer's pull-based
steps into a timed animation.  The Sequencer never sleeps; the Stepper
decides WHEN to pull the next step, always after the same fixed delay.

State machine:
    IDLE     →  play()   →  PLAYING
    PLAYING  →  pause()  →  PAUSED
    PAUSED   →  play()   →  PLAYING
    any      →  reset()  →  IDLE

Two ways to drive it:
  • tick()  – call periodically from an event loop / timer; advances at
              most one step when the delay has elapsed.
  • run()   – blocking: pull every step of the running animation,
              sleeping the delay between steps.

The browser paces itself through POST /api/step/next; the Stepper is
the driver for non-browser callers (scripts, a terminal demo, tests).
`python main.py --demo` uses it.

Thread safety:
  This class is NOT thread-safe.  Call tick() / run() from a single
  thread (or use an async event loop).
"""

import logging
import time
from enum import Enum
from typing import Callable, List, Optional

from engine.sequencer import Frame, Sequencer

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class StepperState(Enum):
    IDLE    = "idle"
    PAUSED  = "paused"
    PLAYING = "playing"


# ---------------------------------------------------------------------------
# Speed presets (seconds per step)
# ---------------------------------------------------------------------------
SPEED_PRESETS = {
    "slow":   1.2,    # teaching mode
    "medium": 0.8,
    "fast":   0.3,    # demo mode
    "turbo":  0.05,
}

MIN_DELAY = 0.02


# ---------------------------------------------------------------------------
# Stepper
# ---------------------------------------------------------------------------
class Stepper:
    """
    Attributes:
        sequencer : The Sequencer being driven.
        state     : Current StepperState.
        delay     : Seconds between two steps (fixed, never adaptive).
        on_frame  : Optional callback(Frame) fired after every step.
                    The UI hooks its re-render here.
    """

    def __init__(
        self,
        sequencer: Sequencer,
        on_frame: Optional[Callable[[Frame], None]] = None,
        speed: str = "medium",
        clock: Callable[[], float] = time.monotonic,
    ):
        self.sequencer: Sequencer    = sequencer
        self.on_frame                = on_frame
        self.state:     StepperState = StepperState.IDLE
        self.delay:     float        = SPEED_PRESETS["medium"]
        self._clock                  = clock
        self._last_tick: float       = 0.0
        self.set_speed(speed)

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self) -> None:
        self.state      = StepperState.PLAYING
        self._last_tick = self._clock()

    def pause(self) -> None:
        self.state = StepperState.PAUSED

    def toggle_play(self) -> None:
        if self.state == StepperState.PLAYING:
            self.pause()
        else:
            self.play()

    def reset(self) -> None:
        self.state = StepperState.IDLE

    # ------------------------------------------------------------------
    # Tick  (call this from your event loop / timer)
    # ------------------------------------------------------------------
    def tick(self) -> Optional[Frame]:
        """
        Call periodically (e.g. every 50 ms).  If playing, an animation is
        running and the delay has elapsed, applies one step and returns
        its Frame.
        """
        if self.state != StepperState.PLAYING or not self.sequencer.busy:
            return None
        now = self._clock()
        if now - self._last_tick < self.delay:
            return None
        self._last_tick = now
        return self._advance()

    # ------------------------------------------------------------------
    # Blocking driver
    # ------------------------------------------------------------------
    def run(self, sleep: Callable[[float], None] = time.sleep) -> List[Frame]:
        """Play the running animation to completion, sleeping between steps."""
        frames: List[Frame] = []
        self.state = StepperState.PLAYING
        while self.sequencer.busy:
            frame = self._advance()
            if frame is None:
                break
            frames.append(frame)
            if not frame.is_final:
                sleep(self.delay)
        self.state = StepperState.IDLE
        logger.debug("played %d frames at %.2fs/step", len(frames), self.delay)
        return frames

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, preset: str) -> None:
        self.delay = SPEED_PRESETS.get(preset, SPEED_PRESETS["medium"])

    def set_speed_value(self, seconds: float) -> None:
        self.delay = max(MIN_DELAY, seconds)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def is_playing(self) -> bool:
        return self.state == StepperState.PLAYING

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _advance(self) -> Optional[Frame]:
        frame = self.sequencer.advance()
        if frame is not None and self.on_frame:
            self.on_frame(frame)
        return frame

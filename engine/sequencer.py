"""
sequencer.py — Animation Sequencer
===================================
The Sequencer is the ONLY object the outside world talks to.  It owns
the tree, the per-node flag store, the bounded log and at most one
running animation generator, and exposes the inbound commands plus a
pull-based `advance()`.

State machine (per animated operation):
    IDLE       →  insert / search / traverse accepted  →  RUNNING
    RUNNING    →  advance() pulls the final step        →  COMPLETED
    COMPLETED  →  next command accepted                 →  RUNNING
    any but RUNNING →  clear_tree()                     →  IDLE

Busy gate:
  While RUNNING every command is rejected with CommandResult.BUSY —
  not queued, not raised, and nothing is logged.  The gate is instance
  state, so two Sequencers never interfere.

Timing:
  The sequencer never sleeps.  Each advance() is one suspension point;
  engine/stepper.py (or a browser timer, or a test calling drain())
  decides how long to wait between them.

Thread safety:
  This class is NOT thread-safe.  One logical writer at a time; the
  Flask layer serialises requests with a lock.
"""

import logging
import math
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple

from animations import AnimationContext, Step, get_animation
from engine.log import AnimationLog
from tree import BinarySearchTree, FlagStore, TraversalOrder, clear_flags
from tree.layout import LAYOUT, LayoutConfig, layout, viewport_params

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States & command results
# ---------------------------------------------------------------------------
class SequencerState(Enum):
    IDLE      = "idle"
    RUNNING   = "running"
    COMPLETED = "completed"


class CommandResult(Enum):
    ACCEPTED      = "accepted"
    BUSY          = "busy"            # an animation is running
    INVALID_INPUT = "invalid_input"   # non-integer value / unknown order
    EMPTY_TREE    = "empty_tree"      # nothing to search / traverse


SAMPLE_VALUES: Tuple[int, ...] = (50, 30, 70, 20, 40, 60, 80)


@dataclass
class SequencerConfig:
    log_size:       int             = 5
    sample_values:  Tuple[int, ...] = SAMPLE_VALUES
    clear_on_start: bool            = True
    viewport_width: float           = 1200
    layout:         LayoutConfig    = field(default_factory=lambda: LAYOUT)


# ---------------------------------------------------------------------------
# Frame — what a renderer receives after every step
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Frame:
    """
    Attributes:
        step     : The Step just applied.
        snapshot : Tree values, shape, coordinates and flags after the step.
        log      : Log lines after the step (oldest first).
    """

    step:     Step
    snapshot: Dict[str, Any]
    log:      Tuple[str, ...] = ()

    @property
    def is_final(self) -> bool:
        return self.step.is_final

    def to_dict(self) -> dict:
        return {
            "step":     self.step.to_dict(),
            "snapshot": self.snapshot,
            "log":      list(self.log),
        }


_INT_RE = re.compile(r"^[+-]?\d+$")


def parse_value(raw) -> Optional[int]:
    """Strict integer parsing; None for anything that is not a whole number."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str):
        text = raw.strip()
        if _INT_RE.match(text):
            return int(text)
    return None


# ---------------------------------------------------------------------------
# Sequencer
# ---------------------------------------------------------------------------
class Sequencer:
    """
    Attributes:
        tree         : The shared BinarySearchTree.
        flags        : Transient per-node flags (highlighted / visited / result).
        log          : Bounded AnimationLog.
        state        : Current SequencerState.
        current_step : Last Step pulled, or None.
        operation    : Registry key of the running / last animation.
    """

    def __init__(self, config: Optional[SequencerConfig] = None):
        self.config = config or SequencerConfig()
        self.tree   = BinarySearchTree()
        self.flags  = FlagStore()
        self.log    = AnimationLog(self.config.log_size)
        self.state: SequencerState = SequencerState.IDLE
        self.current_step: Optional[Step] = None
        self.operation: Optional[str] = None

        self._generator = None
        self._context: Optional[AnimationContext] = None
        self._viewport = viewport_params(self.config.viewport_width, self.config.layout)
        self._pending_viewport: Optional[Tuple[float, float, float]] = None

    # ------------------------------------------------------------------
    # Inbound commands
    # ------------------------------------------------------------------
    def insert(self, value, clear_first: Optional[bool] = None) -> CommandResult:
        return self.start("insert", value, clear_first)

    def search(self, value, clear_first: Optional[bool] = None) -> CommandResult:
        return self.start("search", value, clear_first)

    def traverse(self, order, clear_first: Optional[bool] = None) -> CommandResult:
        parsed = TraversalOrder.parse(order)
        if parsed is None:
            if self.busy:
                return self._reject("traverse", CommandResult.BUSY)
            return self._reject("traverse", CommandResult.INVALID_INPUT)
        return self.start(parsed.value, None, clear_first)

    def clear_highlights(self) -> CommandResult:
        if self.busy:
            return self._reject("clear_highlights", CommandResult.BUSY)
        clear_flags(self.tree.root, self.flags)
        return CommandResult.ACCEPTED

    def clear_tree(self) -> CommandResult:
        """Discard the tree, its flags and the log."""
        if self.busy:
            return self._reject("clear_tree", CommandResult.BUSY)
        self.tree.clear()
        self.flags.clear()
        self.log.clear()
        self.current_step = None
        self.operation    = None
        self.state        = SequencerState.IDLE
        logger.debug("tree cleared")
        return CommandResult.ACCEPTED

    def load(self, values: Iterable) -> CommandResult:
        """Insert many values at once, without animation.  Non-integers are skipped."""
        if self.busy:
            return self._reject("load", CommandResult.BUSY)
        parsed = [v for v in (parse_value(raw) for raw in values) if v is not None]
        for v in parsed:
            self.tree.insert(v)
        self.relayout()
        logger.debug("loaded %d values, tree size %d", len(parsed), len(self.tree))
        return CommandResult.ACCEPTED

    def load_sample(self) -> CommandResult:
        return self.load(self.config.sample_values)

    def set_viewport(self, width) -> CommandResult:
        """Recompute layout for a new viewport width; deferred while running."""
        try:
            width = float(width)
        except (TypeError, ValueError):
            return self._reject("set_viewport", CommandResult.INVALID_INPUT)
        if not math.isfinite(width) or width <= 0:
            return self._reject("set_viewport", CommandResult.INVALID_INPUT)

        params = viewport_params(width, self.config.layout)
        if self.busy:
            self._pending_viewport = params
        else:
            self._viewport = params
            self.relayout()
        return CommandResult.ACCEPTED

    def start(self, key: str, argument=None, clear_first: Optional[bool] = None) -> CommandResult:
        """Start the animation registered under `key`."""
        if self.busy:
            return self._reject(key, CommandResult.BUSY)

        info = get_animation(key)
        if info is None:
            return self._reject(key, CommandResult.INVALID_INPUT)

        if info.takes_value:
            argument = parse_value(argument)
            if argument is None:
                return self._reject(key, CommandResult.INVALID_INPUT)
            if key != "insert" and self.tree.is_empty:
                return self._reject(key, CommandResult.EMPTY_TREE)
        elif self.tree.is_empty:
            return self._reject(key, CommandResult.EMPTY_TREE)

        if clear_first is None:
            clear_first = self.config.clear_on_start

        self._context = AnimationContext(self.tree, self.flags, self.relayout, clear_first)
        self._context.begin()
        self._generator = info.fn(self._context, argument)
        self.operation    = key
        self.current_step = None
        self.state        = SequencerState.RUNNING
        logger.debug("started %s(%s)", key, "" if argument is None else argument)
        return CommandResult.ACCEPTED

    # ------------------------------------------------------------------
    # Stepping
    # ------------------------------------------------------------------
    def advance(self) -> Optional[Frame]:
        """Apply one step of the running animation; None if nothing is running."""
        if self.state is not SequencerState.RUNNING:
            return None

        try:
            step = next(self._generator)
        except StopIteration:
            self._complete()
            return None

        if step.message:
            self.log.append(step.message)
        self.current_step = step
        if step.is_final:
            # nothing is left glowing; visited / result flags stay as the trail
            self._context.release()
            self._complete()

        return Frame(step=step, snapshot=self.snapshot(), log=tuple(self.log.entries()))

    def drain(self) -> List[Frame]:
        """Run the current animation to completion with no delay."""
        frames: List[Frame] = []
        while self.busy:
            frame = self.advance()
            if frame is not None:
                frames.append(frame)
        return frames

    # ------------------------------------------------------------------
    # Layout & snapshots
    # ------------------------------------------------------------------
    def relayout(self) -> None:
        center_x, root_y, base_spacing = self._viewport
        layout(self.tree.root, center_x, root_y, base_spacing, self.config.layout)

    def snapshot(self) -> Dict[str, Any]:
        nodes = []
        for node in self.tree.nodes():
            entry = node.to_dict()
            entry.update(self.flags.peek(node.value).to_dict())
            nodes.append(entry)
        return {
            "state":        self.state.value,
            "operation":    self.operation,
            "root":         self.tree.root.value if self.tree.root else None,
            "nodes":        nodes,
            "current_node": self.current_step.current_node if self.current_step else None,
            "log":          self.log.entries(),
        }

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def busy(self) -> bool:
        return self.state is SequencerState.RUNNING

    @property
    def viewport(self) -> Tuple[float, float, float]:
        return self._viewport

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _complete(self) -> None:
        self.state      = SequencerState.COMPLETED
        self._generator = None
        self._context   = None
        outcome = self.current_step.outcome if self.current_step else None
        logger.info("%s completed: %s", self.operation, outcome.value if outcome else "no outcome")
        if self._pending_viewport is not None:
            self._viewport, self._pending_viewport = self._pending_viewport, None
            self.relayout()

    def _reject(self, command: str, result: CommandResult) -> CommandResult:
        logger.debug("%s ignored: %s", command, result.value)
        return result

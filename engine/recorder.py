"""
recorder.py — Run Recorder & Metrics
=====================================
Issues one command on a Sequencer, drains it with zero delay and keeps
every Frame, then summarises the run.

Usage:
    rec = Recorder(sequencer)
    metrics = rec.run("search", 60)
    metrics.path            # [50, 70, 60]
    rec.frames[-1].log      # final log lines
    rec.export()            # serialisable snapshot for replay / tests
"""

import logging
import time
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from animations import get_animation
from engine.sequencer import CommandResult, Frame, Sequencer

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Metrics dataclass
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    operation:     str            = ""
    argument:      Any            = None
    result:        str            = ""          # CommandResult value
    outcome:       Optional[str]  = None        # Outcome value of the final step
    path:          List[int]      = field(default_factory=list)   # values in visit order
    nodes_visited: int            = 0
    total_steps:   int            = 0
    wall_time_ms:  float          = 0.0


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        sequencer : The Sequencer commands are issued on.
        frames    : Every Frame of the last run.
        metrics   : RunMetrics of the last run (None before the first).
    """

    def __init__(self, sequencer: Optional[Sequencer] = None):
        self.sequencer: Sequencer           = sequencer or Sequencer()
        self.frames:    List[Frame]         = []
        self.metrics:   Optional[RunMetrics] = None

    def run(self, operation: str, argument=None, clear_first: Optional[bool] = None) -> RunMetrics:
        """Start `operation` and exhaust it.  Unknown operations raise ValueError."""
        if get_animation(operation) is None:
            raise ValueError(f"Unknown animation: {operation}")

        started = time.monotonic()
        result  = self.sequencer.start(operation, argument, clear_first)
        self.frames = self.sequencer.drain() if result is CommandResult.ACCEPTED else []
        wall_ms = (time.monotonic() - started) * 1000

        self.metrics = self._compute_metrics(operation, argument, result, wall_ms)
        logger.debug("recorded %s: %d frames", operation, len(self.frames))
        return self.metrics

    def export(self) -> Dict[str, Any]:
        return {
            "metrics": asdict(self.metrics) if self.metrics else {},
            "frames":  [f.to_dict() for f in self.frames],
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, operation, argument, result: CommandResult, wall_ms: float) -> RunMetrics:
        last = self.frames[-1].step if self.frames else None

        path: List[int] = []
        for frame in self.frames:
            node = frame.step.current_node
            if node is not None and (not path or path[-1] != node):
                path.append(node)

        return RunMetrics(
            operation=operation,
            argument=argument,
            result=result.value,
            outcome=last.outcome.value if last and last.outcome else None,
            path=path,
            nodes_visited=len(set(path)),
            total_steps=len(self.frames),
            wall_time_ms=round(wall_ms, 2),
        )

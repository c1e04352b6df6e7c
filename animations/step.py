"""
step.py — Animation Step Snapshot
==================================
Every animation is a generator that yields Step objects.  Between two
yields the generator mutates the tree / flag store synchronously; the
Step then describes what just happened:

    • Which node the animation is standing on
    • The log line for the decision just made (if any)
    • Which line of pseudocode is executing right now
    • The outcome, on the final step only

Design decisions:
  - Step is a frozen dataclass.  The generator is the only writer of the
    flags; the sequencer / renderer read them only after a yield, so no
    half-applied step is ever visible.
  - Steps carry values, never TreeNode references, so a Step can be
    serialised and kept after the tree changes.
  - Pacing is NOT here.  Every yield is one suspension point; how long
    to wait is the driver's business (engine/stepper.py).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class Outcome(Enum):
    CREATED_ROOT = "created_root"
    INSERTED     = "inserted"
    DUPLICATE    = "duplicate"
    FOUND        = "found"
    NOT_FOUND    = "not_found"
    TRAVERSED    = "traversed"


@dataclass(frozen=True)
class Step:
    """
    Attributes:
        step_number     : 0-based index of this step in the run.
        operation       : Registry key of the animation ("insert", "inorder", …).
        current_node    : Value of the node the animation stands on, or None.
        message         : Log line describing the decision just made, or None.
        pseudocode_line : 0-based index into the animation's PSEUDOCODE.
        outcome         : Set on the final step only.
        overlay         : Free-form extras:
                            • "path"          – values probed so far
                            • "visited_order" – traversal order so far
                            • "value"         – the key being inserted / searched
        is_final        : True on the very last step.
    """

    step_number:     int                = 0
    operation:       str                = ""
    current_node:    Optional[int]      = None
    message:         Optional[str]      = None
    pseudocode_line: int                = 0
    outcome:         Optional[Outcome]  = None
    overlay:         Dict[str, Any]     = field(default_factory=dict)
    is_final:        bool               = False

    def to_dict(self) -> dict:
        return {
            "step_number":     self.step_number,
            "operation":       self.operation,
            "current_node":    self.current_node,
            "message":         self.message,
            "pseudocode_line": self.pseudocode_line,
            "outcome":         self.outcome.value if self.outcome else None,
            "overlay":         dict(self.overlay),
            "is_final":        self.is_final,
        }


# ---------------------------------------------------------------------------
# Convenience builder so animations don't have to spell out every kwarg
# ---------------------------------------------------------------------------
class StepBuilder:
    """
    Mutable scratch-pad that numbers steps for one animation.

    Usage inside an animation generator:
        sb = StepBuilder("search")
        sb.at(50, "60 > 50, go right", line=4)
        yield sb.build()
    """

    def __init__(self, operation: str):
        self.operation = operation
        self.step_no   = 0
        self.overlay: Dict[str, Any] = {}
        self.reset()

    def reset(self):
        self.current_node:    Optional[int] = None
        self.message:         Optional[str] = None
        self.pseudocode_line: int           = 0

    def at(self, node: Optional[int], message: Optional[str] = None, line: int = 0) -> "StepBuilder":
        self.current_node    = node
        self.message         = message
        self.pseudocode_line = line
        return self

    def build(self, outcome: Optional[Outcome] = None) -> Step:
        step = Step(
            step_number=self.step_no,
            operation=self.operation,
            current_node=self.current_node,
            message=self.message,
            pseudocode_line=self.pseudocode_line,
            outcome=outcome,
            overlay={k: list(v) if isinstance(v, list) else v for k, v in self.overlay.items()},
            is_final=outcome is not None,
        )
        self.step_no += 1
        self.reset()
        return step

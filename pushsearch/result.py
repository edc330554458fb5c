from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from pushcore.moves import Step, format_steps


class FailureReason(Enum):
    BUDGET_EXCEEDED = "Search limit exceeded."
    IMMEDIATE_DEADLOCK = "Immediate deadlock detected (corner)."
    NO_SOLUTION = "No solution found."

    @property
    def message(self) -> str:
        return self.value


@dataclass
class SolveResult:
    """Outcome of one solve call.

    Failures still carry nodes_expanded and elapsed_s so a caller can tell a
    budget cut-off from a fast proof of unsolvability.
    """

    success: bool
    nodes_expanded: int
    elapsed_s: float
    min_pushes: Optional[int] = None
    steps: List[Step] = field(default_factory=list)
    reason: Optional[FailureReason] = None

    @property
    def solution(self) -> str:
        return format_steps(self.steps)

    def to_row(self) -> Dict[str, object]:
        return {
            "success": self.success,
            "reason": self.reason.name if self.reason is not None else "",
            "pushes": self.min_pushes if self.min_pushes is not None else -1,
            "moves": len(self.steps),
            "nodes": self.nodes_expanded,
            "runtime": round(self.elapsed_s, 6),
            "solution": self.solution,
        }

"""Domain models for routes, decisions, solver chains and reports.

Responsibilities:
  - Define immutable data carriers for parsed routes, branch decisions,
    solver chain states and aggregate reports.

Inputs/Outputs:
  - BranchDecision and SolverChainState are traced and aggregated by engine layers.

Invariants:
  - Models must be deterministic containers with no behavior beyond rendering.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .enums import ClassifyMode, DecisionStatus, Severity


@dataclass(frozen=True)
class Route:
    domain: str
    action: str
    identifier: str
    severity: Severity

    def to_raw(self, grammar: str = "slash") -> str:
        if grammar == "colon":
            return f"{self.action}:{self.domain}:{self.severity.value}:{self.identifier}"
        return f"{self.domain}/{self.action}/{self.identifier}/{self.severity.value}"

    def __str__(self) -> str:
        return self.to_raw()


@dataclass(frozen=True)
class ClassifyContext:
    attempt: int = 0
    mode: ClassifyMode = ClassifyMode.LIVE
    domain_volume: int = 0
    depth: int = 0


@dataclass(frozen=True)
class BranchDecision:
    route: Route
    status: DecisionStatus
    reason: str
    score: int
    depth: int = 0
    attempt: int = 0


class Phase(Enum):
    A = "A"
    B = "B"


@dataclass(frozen=True)
class SolverChainState:
    seed: Route
    step_index: int
    derived_value: str
    trace: tuple[str, ...]
    phase: Optional[Phase] = None


@dataclass(frozen=True)
class AggregateReport:
    counts: dict[str, int] = field(default_factory=dict)
    total_score: int = 0
    per_domain: dict[str, int] = field(default_factory=dict)
    chain_steps: int = 0
    max_chain_depth: int = 0

"""Batch result payload for a single pipeline run.

Responsibilities:
  - Capture decisions, solver chains and the aggregate report for display/audit.

Inputs/Outputs:
  - Inputs: produced by evaluator.resolve_batch.
  - Outputs: immutable dataclass consumed by app/cli layers.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..domain.models import AggregateReport, BranchDecision, SolverChainState
from ..grammar.parser import ParsedRoute


@dataclass(frozen=True)
class BatchResult:
    parsed: list[ParsedRoute]
    decisions: list[BranchDecision]
    chains: dict[str, list[SolverChainState]]
    report: AggregateReport

    @property
    def malformed_count(self) -> int:
        return sum(1 for item in self.parsed if item.fallback)

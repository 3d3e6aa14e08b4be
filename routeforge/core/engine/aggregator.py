"""Fold decisions and solver chains into summary statistics.

Responsibilities:
  - Count decisions by status (optionally status:reason), sum scores and
    bucket decisions per domain.
  - Summarise score distributions for display.

Invariants:
  - Pure fold; counts always sum to the number of decisions.
  - total_score includes a +1 term per decision.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Sequence, Union

import numpy as np

from ..domain.models import AggregateReport, BranchDecision, SolverChainState


@dataclass(frozen=True)
class ScoreDistribution:
    count: int
    mean: float
    p50: float
    p90: float
    max: float


def _count_key(decision: BranchDecision, compound: bool) -> str:
    if compound:
        return f"{decision.status.value}:{decision.reason}"
    return decision.status.value


ChainInput = Union[SolverChainState, Sequence[SolverChainState]]


def _chain_states(chains: Optional[Iterable[ChainInput]]) -> Iterator[SolverChainState]:
    # Accepts a flat list of states (one solve() result) or a list of chains.
    for item in chains or []:
        if isinstance(item, SolverChainState):
            yield item
        else:
            yield from item


def aggregate(
    decisions: Sequence[BranchDecision],
    chains: Optional[Iterable[ChainInput]] = None,
    compound: bool = False,
) -> AggregateReport:
    counts: Counter[str] = Counter()
    per_domain: Counter[str] = Counter()
    total_score = 0
    for decision in decisions:
        counts[_count_key(decision, compound)] += 1
        per_domain[decision.route.domain] += 1
        total_score += decision.score
    total_score += len(decisions)

    chain_steps = 0
    max_chain_depth = 0
    for state in _chain_states(chains):
        chain_steps += 1
        max_chain_depth = max(max_chain_depth, state.step_index + 1)

    return AggregateReport(
        counts=dict(counts),
        total_score=total_score,
        per_domain=dict(per_domain),
        chain_steps=chain_steps,
        max_chain_depth=max_chain_depth,
    )


def score_distribution(decisions: Sequence[BranchDecision]) -> ScoreDistribution:
    if not decisions:
        return ScoreDistribution(count=0, mean=0.0, p50=0.0, p90=0.0, max=0.0)
    scores = np.asarray([decision.score for decision in decisions], dtype=float)
    return ScoreDistribution(
        count=int(scores.size),
        mean=float(np.mean(scores)),
        p50=float(np.quantile(scores, 0.5)),
        p90=float(np.quantile(scores, 0.9)),
        max=float(np.max(scores)),
    )

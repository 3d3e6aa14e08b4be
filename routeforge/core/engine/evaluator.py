"""Batch route resolution: parse, classify, trace, solve, aggregate.

Responsibilities:
  - Run every raw route of a batch through the parser and a classifier,
    retrying retryable outcomes with attempt + 1.
  - Record every decision in the trace accumulator in input order.
  - Build solver chains per distinct seed and fold everything into a report.

Inputs/Outputs:
  - Inputs: raw route strings, a RouteClassifier and run options.
  - Outputs: BatchResult with decisions, chains and the aggregate report.

Invariants:
  - Data flows one way; the report never feeds back into parsing.
  - Malformed input yields one decision with ROUTE_MALFORMED, never an exception.
"""

from __future__ import annotations

from collections import Counter
from typing import Callable, Iterable, Optional, Protocol

from ..domain.counters import normalize_counter
from ..domain.enums import RETRYABLE_STATUSES, ClassifyMode
from ..domain.models import BranchDecision, ClassifyContext, Route, SolverChainState
from ..grammar.parser import ParsedRoute, parse_route_detailed
from ..grammar.vocabulary import Vocabulary
from .aggregator import aggregate
from .result import BatchResult
from .solver import normalize_depth, solve_many
from .trace import TraceAccumulator

_DEBUG_FN: Callable[[str], None] | None = None


def set_pipeline_debug(fn: Callable[[str], None] | None) -> None:
    global _DEBUG_FN
    _DEBUG_FN = fn


class RouteClassifier(Protocol):
    @property
    def vocabulary(self) -> Vocabulary:
        ...

    def classify(self, route: Route, context: Optional[ClassifyContext] = None) -> BranchDecision:
        ...

    def classify_malformed(self, route: Route, context: Optional[ClassifyContext] = None) -> BranchDecision:
        ...


def _debug_decision(index: int, decision: BranchDecision) -> None:
    if _DEBUG_FN is None:
        return
    _DEBUG_FN(
        "DECISION "
        f"index={index} route={decision.route} attempt={decision.attempt} "
        f"status={decision.status.value} reason={decision.reason} score={decision.score}"
    )


def domain_volumes(parsed: Iterable[ParsedRoute]) -> Counter[str]:
    return Counter(item.route.domain for item in parsed)


def evaluate_route(
    index: int,
    item: ParsedRoute,
    classifier: RouteClassifier,
    attempts: int,
    mode: ClassifyMode,
    domain_volume: int,
) -> list[BranchDecision]:
    if item.fallback:
        if _DEBUG_FN is not None:
            _DEBUG_FN(f"ROUTE_FALLBACK index={index} raw={item.raw!r} grammar={item.grammar}")
        context = ClassifyContext(attempt=0, mode=mode, domain_volume=domain_volume)
        decision = classifier.classify_malformed(item.route, context)
        _debug_decision(index, decision)
        return [decision]

    decisions: list[BranchDecision] = []
    for attempt in range(attempts):
        context = ClassifyContext(attempt=attempt, mode=mode, domain_volume=domain_volume)
        decision = classifier.classify(item.route, context)
        decisions.append(decision)
        _debug_decision(index, decision)
        if decision.status not in RETRYABLE_STATUSES:
            break
    return decisions


def resolve_batch(
    raw_routes: Iterable[object],
    classifier: RouteClassifier,
    attempts: int = 1,
    mode: ClassifyMode = ClassifyMode.LIVE,
    depth: int = 0,
    mutual: bool = False,
    accumulator: Optional[TraceAccumulator] = None,
    grammar: Optional[str] = None,
) -> BatchResult:
    vocabulary = classifier.vocabulary
    parsed = [parse_route_detailed(raw, grammar=grammar, vocabulary=vocabulary) for raw in raw_routes]
    volumes = domain_volumes(parsed)
    max_attempts = max(1, normalize_counter(attempts))

    decisions: list[BranchDecision] = []
    for index, item in enumerate(parsed):
        route_decisions = evaluate_route(
            index,
            item,
            classifier,
            attempts=max_attempts,
            mode=mode,
            domain_volume=volumes[item.route.domain],
        )
        for decision in route_decisions:
            if accumulator is not None:
                accumulator.record(decision)
            decisions.append(decision)

    chains: dict[str, list[SolverChainState]] = {}
    if normalize_depth(depth) > 0:
        seeds = [item.route if item.fallback else item.raw for item in parsed]
        chains = solve_many(seeds, depth, mutual=mutual, vocabulary=vocabulary)

    return BatchResult(
        parsed=parsed,
        decisions=decisions,
        chains=chains,
        report=aggregate(decisions, chains.values()),
    )

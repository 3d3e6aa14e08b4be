"""Rule plumbing shared by the dispatch and flow classifiers.

Responsibilities:
  - Define the Rule signature, RuleSet container and first-match evaluation.
  - Provide the rule families both engines share (blocked command, retry
    ceiling, volume backpressure) parameterised by the engine's status.
  - Build BranchDecision values from a winning Proposal.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional

from routeforge.core.domain.counters import normalize_counter
from routeforge.core.domain.enums import ActionClass, ClassifyMode, DecisionStatus, ReasonCode
from routeforge.core.domain.models import BranchDecision, ClassifyContext, Route
from routeforge.core.grammar.vocabulary import Vocabulary
from .scoring import compute_score
from .types import Proposal

Rule = Callable[[Route, ClassifyContext, Vocabulary], Optional[Proposal]]

ATTEMPT_CEILING = 10
VOLUME_THRESHOLD = 40


@dataclass(frozen=True)
class ModeOverlay:
    when_status: DecisionStatus
    proposal: Proposal


@dataclass(frozen=True)
class RuleSet:
    rules: List[Rule]
    default: Proposal
    mode_overlays: Dict[ClassifyMode, ModeOverlay] = field(default_factory=dict)


def first_match(
    rules: Iterable[Rule], route: Route, context: ClassifyContext, vocabulary: Vocabulary
) -> Optional[Proposal]:
    for rule in rules:
        proposed = rule(route, context, vocabulary)
        if proposed is not None:
            return proposed
    return None


def apply_ruleset(
    route: Route, context: ClassifyContext, ruleset: RuleSet, vocabulary: Vocabulary
) -> Proposal:
    proposal = first_match(ruleset.rules, route, context, vocabulary) or ruleset.default
    overlay = ruleset.mode_overlays.get(context.mode)
    if overlay is not None and proposal.status == overlay.when_status:
        return overlay.proposal
    return proposal


def normalize_mode(value: object) -> ClassifyMode:
    if isinstance(value, ClassifyMode):
        return value
    try:
        return ClassifyMode(value)
    except ValueError:
        return ClassifyMode.LIVE


def normalize_context(context: Optional[ClassifyContext]) -> ClassifyContext:
    if context is None:
        return ClassifyContext()
    mode = normalize_mode(context.mode)
    return ClassifyContext(
        attempt=normalize_counter(context.attempt),
        mode=mode,
        domain_volume=normalize_counter(context.domain_volume),
        depth=normalize_counter(context.depth),
    )


def build_decision(route: Route, context: ClassifyContext, proposal: Proposal) -> BranchDecision:
    return BranchDecision(
        route=route,
        status=proposal.status,
        reason=proposal.reason.value,
        score=compute_score(route, context.attempt, proposal.status),
        depth=context.depth,
        attempt=context.attempt,
    )


def blocked_command_rule(status: DecisionStatus) -> Rule:
    def rule_blocked_command(route: Route, context: ClassifyContext, vocabulary: Vocabulary) -> Optional[Proposal]:
        if vocabulary.action_class(route.action) == ActionClass.BLOCKED:
            return Proposal(status=status, reason=ReasonCode.BLOCKED_COMMAND)
        return None

    return rule_blocked_command


def attempt_ceiling_rule(status: DecisionStatus) -> Rule:
    def rule_attempt_ceiling(route: Route, context: ClassifyContext, vocabulary: Vocabulary) -> Optional[Proposal]:
        if context.attempt > ATTEMPT_CEILING:
            return Proposal(status=status, reason=ReasonCode.RETRY_BUDGET_EXHAUSTED)
        return None

    return rule_attempt_ceiling


def volume_rule(status: DecisionStatus) -> Rule:
    def rule_volume(route: Route, context: ClassifyContext, vocabulary: Vocabulary) -> Optional[Proposal]:
        if context.domain_volume > VOLUME_THRESHOLD:
            return Proposal(status=status, reason=ReasonCode.VOLUME_EXCEEDED)
        return None

    return rule_volume


class RuleBasedClassifier:
    """Evaluates a RuleSet top to bottom; the first matching rule wins."""

    engine_id = ""
    malformed_status: DecisionStatus

    def __init__(self, ruleset: RuleSet, vocabulary: Vocabulary) -> None:
        self._ruleset = ruleset
        self._vocabulary = vocabulary

    @property
    def vocabulary(self) -> Vocabulary:
        return self._vocabulary

    def classify(self, route: Route, context: Optional[ClassifyContext] = None) -> BranchDecision:
        ctx = normalize_context(context)
        proposal = apply_ruleset(route, ctx, self._ruleset, self._vocabulary)
        return build_decision(route, ctx, proposal)

    def classify_malformed(self, route: Route, context: Optional[ClassifyContext] = None) -> BranchDecision:
        ctx = normalize_context(context)
        proposal = Proposal(status=self.malformed_status, reason=ReasonCode.ROUTE_MALFORMED)
        return build_decision(route, ctx, proposal)

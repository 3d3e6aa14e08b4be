"""Rules for the flow classifier.

Responsibilities:
  - Map a parsed route to stable/warning/escalate/abort/resolved.
Key definitions:
  - rule_parity: per-action modulo checks read from the vocabulary's
    parity groups; each group's modulus is its own contract.
"""

from __future__ import annotations

from typing import Optional

from routeforge.core.domain.enums import ActionClass, FlowStatus, ReasonCode, Severity, severity_rank
from routeforge.core.domain.models import ClassifyContext, Route
from routeforge.core.grammar.vocabulary import Vocabulary
from ..types import Proposal

CRITICAL_ESCALATION_ATTEMPT = 5
IDENTIFIER_LENGTH_THRESHOLD = 24


def rule_risk_threshold(route: Route, context: ClassifyContext, vocabulary: Vocabulary) -> Optional[Proposal]:
    if severity_rank(route.severity) >= severity_rank(Severity.EMERGENCY):
        return Proposal(status=FlowStatus.ABORT, reason=ReasonCode.RISK_THRESHOLD)
    return None


def rule_severity_escalation(route: Route, context: ClassifyContext, vocabulary: Vocabulary) -> Optional[Proposal]:
    if severity_rank(route.severity) >= severity_rank(Severity.CRITICAL):
        return Proposal(status=FlowStatus.ESCALATE, reason=ReasonCode.SEVERITY_ESCALATION)
    if vocabulary.has_escalation_keyword(route.identifier):
        return Proposal(status=FlowStatus.ESCALATE, reason=ReasonCode.KEYWORD_ESCALATION)
    return None


def rule_parity(route: Route, context: ClassifyContext, vocabulary: Vocabulary) -> Optional[Proposal]:
    group = vocabulary.parity_group(route.action)
    if group is None:
        return None
    if context.attempt % group.modulus == 0:
        return Proposal(status=FlowStatus.WARNING, reason=ReasonCode.PARITY_WARNING)
    if group.resolve_otherwise:
        return Proposal(status=FlowStatus.RESOLVED, reason=ReasonCode.PARITY_RESOLVED)
    return None


def rule_critical_action(route: Route, context: ClassifyContext, vocabulary: Vocabulary) -> Optional[Proposal]:
    if vocabulary.action_class(route.action) != ActionClass.CRITICAL:
        return None
    if context.attempt > CRITICAL_ESCALATION_ATTEMPT:
        return Proposal(status=FlowStatus.ESCALATE, reason=ReasonCode.CRITICAL_ACTION)
    return Proposal(status=FlowStatus.WARNING, reason=ReasonCode.CRITICAL_ACTION)


def rule_passive_action(route: Route, context: ClassifyContext, vocabulary: Vocabulary) -> Optional[Proposal]:
    if vocabulary.action_class(route.action) == ActionClass.DEFERRED:
        return Proposal(status=FlowStatus.RESOLVED, reason=ReasonCode.PASSIVE_ACTION)
    return None


def rule_identifier_overflow(route: Route, context: ClassifyContext, vocabulary: Vocabulary) -> Optional[Proposal]:
    if len(route.identifier) > IDENTIFIER_LENGTH_THRESHOLD:
        return Proposal(status=FlowStatus.WARNING, reason=ReasonCode.IDENTIFIER_OVERFLOW)
    return None

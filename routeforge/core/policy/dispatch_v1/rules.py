"""Rules for the dispatch classifier.

Responsibilities:
  - Map a parsed route to accepted/rejected/rerouted/deferred.
Must not:
  - Look at other routes; batch volume arrives through the context.
Key definitions:
  - rule_reroute_action, rule_severity_escalation, rule_parity_reroute,
    rule_system_domain_accept, rule_deferred_action,
    rule_reconcile_parity, rule_critical_action.
"""

from __future__ import annotations

from typing import Optional

from routeforge.core.domain.enums import ActionClass, DispatchStatus, DomainClass, ReasonCode, Severity, severity_rank
from routeforge.core.domain.models import ClassifyContext, Route
from routeforge.core.grammar.vocabulary import Vocabulary
from ..types import Proposal

PARITY_MODULUS = 4


def rule_reroute_action(route: Route, context: ClassifyContext, vocabulary: Vocabulary) -> Optional[Proposal]:
    if vocabulary.action_class(route.action) == ActionClass.REROUTE:
        return Proposal(status=DispatchStatus.REROUTED, reason=ReasonCode.REROUTE_ACTION)
    return None


def rule_severity_escalation(route: Route, context: ClassifyContext, vocabulary: Vocabulary) -> Optional[Proposal]:
    if severity_rank(route.severity) >= severity_rank(Severity.CRITICAL):
        return Proposal(status=DispatchStatus.REROUTED, reason=ReasonCode.SEVERITY_ESCALATION)
    if vocabulary.has_escalation_keyword(route.identifier):
        return Proposal(status=DispatchStatus.REROUTED, reason=ReasonCode.KEYWORD_ESCALATION)
    return None


def rule_parity_reroute(route: Route, context: ClassifyContext, vocabulary: Vocabulary) -> Optional[Proposal]:
    if context.attempt > 0 and context.attempt % PARITY_MODULUS == 0:
        return Proposal(status=DispatchStatus.REROUTED, reason=ReasonCode.PARITY_REROUTE)
    return None


def rule_system_domain_accept(route: Route, context: ClassifyContext, vocabulary: Vocabulary) -> Optional[Proposal]:
    # Deferred-eligible work on a system-class domain is dispatched directly.
    if vocabulary.action_class(route.action) != ActionClass.DEFERRED:
        return None
    if vocabulary.domain_class(route.domain) == DomainClass.SYSTEM:
        return Proposal(status=DispatchStatus.ACCEPTED, reason=ReasonCode.SYSTEM_DOMAIN_ACCEPT)
    return None


def rule_deferred_action(route: Route, context: ClassifyContext, vocabulary: Vocabulary) -> Optional[Proposal]:
    if vocabulary.action_class(route.action) == ActionClass.DEFERRED:
        return Proposal(status=DispatchStatus.DEFERRED, reason=ReasonCode.DEFERRED_ACTION)
    return None


def rule_reconcile_parity(route: Route, context: ClassifyContext, vocabulary: Vocabulary) -> Optional[Proposal]:
    if route.action in vocabulary.reconcile_actions and len(route.identifier) % 2 == 1:
        return Proposal(status=DispatchStatus.DEFERRED, reason=ReasonCode.RECONCILE_PARITY)
    return None


def rule_critical_action(route: Route, context: ClassifyContext, vocabulary: Vocabulary) -> Optional[Proposal]:
    if vocabulary.action_class(route.action) == ActionClass.CRITICAL:
        return Proposal(status=DispatchStatus.ACCEPTED, reason=ReasonCode.CRITICAL_ACTION)
    return None

from __future__ import annotations

from typing import Optional

from routeforge.core.domain.enums import ClassifyMode, DispatchStatus, ReasonCode
from routeforge.core.grammar.vocabulary import Vocabulary, default_vocabulary
from ..rules_common import (
    ModeOverlay,
    RuleBasedClassifier,
    RuleSet,
    attempt_ceiling_rule,
    blocked_command_rule,
    volume_rule,
)
from ..types import Proposal
from .rules import (
    rule_critical_action,
    rule_deferred_action,
    rule_parity_reroute,
    rule_reconcile_parity,
    rule_reroute_action,
    rule_severity_escalation,
    rule_system_domain_accept,
)


def build_ruleset_dispatch_v1() -> RuleSet:
    # Order is precedence: command blocks, then budget and backpressure.
    rules = [
        blocked_command_rule(DispatchStatus.REJECTED),
        attempt_ceiling_rule(DispatchStatus.REJECTED),
        volume_rule(DispatchStatus.REJECTED),
        rule_reroute_action,
        rule_severity_escalation,
        rule_parity_reroute,
        rule_system_domain_accept,
        rule_deferred_action,
        rule_reconcile_parity,
        rule_critical_action,
    ]
    return RuleSet(
        rules=rules,
        default=Proposal(status=DispatchStatus.ACCEPTED, reason=ReasonCode.DEFAULT_ACCEPT),
        mode_overlays={
            ClassifyMode.DRY_RUN: ModeOverlay(
                when_status=DispatchStatus.ACCEPTED,
                proposal=Proposal(status=DispatchStatus.DEFERRED, reason=ReasonCode.DRY_RUN_CAPTURE),
            ),
        },
    )


class DispatchClassifierV1(RuleBasedClassifier):
    engine_id = "dispatch"
    malformed_status = DispatchStatus.ERRORED

    def __init__(self, ruleset: Optional[RuleSet] = None, vocabulary: Optional[Vocabulary] = None) -> None:
        super().__init__(ruleset or build_ruleset_dispatch_v1(), vocabulary or default_vocabulary())

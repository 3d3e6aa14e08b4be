from __future__ import annotations

from typing import Optional

from routeforge.core.domain.enums import ClassifyMode, FlowStatus, ReasonCode
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
    rule_identifier_overflow,
    rule_parity,
    rule_passive_action,
    rule_risk_threshold,
    rule_severity_escalation,
)


def build_ruleset_flow_v1() -> RuleSet:
    rules = [
        blocked_command_rule(FlowStatus.ABORT),
        attempt_ceiling_rule(FlowStatus.ABORT),
        volume_rule(FlowStatus.ABORT),
        rule_risk_threshold,
        rule_severity_escalation,
        rule_parity,
        rule_critical_action,
        rule_passive_action,
        rule_identifier_overflow,
    ]
    return RuleSet(
        rules=rules,
        default=Proposal(status=FlowStatus.STABLE, reason=ReasonCode.DEFAULT_STABLE),
        mode_overlays={
            ClassifyMode.DIAGNOSTIC: ModeOverlay(
                when_status=FlowStatus.STABLE,
                proposal=Proposal(status=FlowStatus.WARNING, reason=ReasonCode.DIAGNOSTIC_PROBE),
            ),
        },
    )


class FlowClassifierV1(RuleBasedClassifier):
    engine_id = "flow"
    malformed_status = FlowStatus.ABORT

    def __init__(self, ruleset: Optional[RuleSet] = None, vocabulary: Optional[Vocabulary] = None) -> None:
        super().__init__(ruleset or build_ruleset_flow_v1(), vocabulary or default_vocabulary())

"""Domain enums for route classification and reasoning.

Responsibilities:
  - Define Severity, decision statuses and ReasonCode identifiers.
  - Provide stable reason categories and audit metadata.

Invariants:
  - Enum values must remain stable for traces and audits.
  - ReasonCode metadata must be complete and deterministic.
"""

from __future__ import annotations

from enum import Enum


class Severity(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"
    EMERGENCY = "emergency"


# Ordered lowest first; weights are powers of two.
SEVERITY_ORDER: tuple[Severity, ...] = (
    Severity.LOW,
    Severity.MEDIUM,
    Severity.HIGH,
    Severity.CRITICAL,
    Severity.EMERGENCY,
)

SEVERITY_WEIGHT: dict[Severity, int] = {
    Severity.LOW: 1,
    Severity.MEDIUM: 2,
    Severity.HIGH: 4,
    Severity.CRITICAL: 8,
    Severity.EMERGENCY: 16,
}


def severity_rank(severity: Severity) -> int:
    return SEVERITY_ORDER.index(severity)


class DispatchStatus(Enum):
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    REROUTED = "rerouted"
    DEFERRED = "deferred"
    ERRORED = "errored"


class FlowStatus(Enum):
    STABLE = "stable"
    WARNING = "warning"
    ESCALATE = "escalate"
    ABORT = "abort"
    RESOLVED = "resolved"


DecisionStatus = DispatchStatus | FlowStatus

# Terminal rejections carry a zero score.
TERMINAL_REJECTIONS: frozenset[DecisionStatus] = frozenset(
    {DispatchStatus.REJECTED, DispatchStatus.ERRORED, FlowStatus.ABORT}
)

# Statuses a batch run retries with attempt + 1.
RETRYABLE_STATUSES: frozenset[DecisionStatus] = frozenset(
    {
        DispatchStatus.REROUTED,
        DispatchStatus.DEFERRED,
        FlowStatus.WARNING,
        FlowStatus.ESCALATE,
    }
)


class ClassifyMode(Enum):
    LIVE = "live"
    DRY_RUN = "dry_run"
    DIAGNOSTIC = "diagnostic"


class ActionClass(Enum):
    BLOCKED = "blocked"
    CRITICAL = "critical"
    DEFERRED = "deferred"
    REROUTE = "reroute"
    NORMAL = "normal"


class DomainClass(Enum):
    SYSTEM = "system"
    NETWORK = "network"
    SERVICE = "service"


class ReasonCategory(Enum):
    POLICY = "POLICY"
    ESCALATION = "ESCALATION"
    PARITY = "PARITY"
    INFO = "INFO"


# Stable identifiers for decision reasoning; value is the persisted code.
class ReasonCode(Enum):
    BLOCKED_COMMAND = "BLOCKED_COMMAND"
    RETRY_BUDGET_EXHAUSTED = "RETRY_BUDGET_EXHAUSTED"
    VOLUME_EXCEEDED = "VOLUME_EXCEEDED"
    ROUTE_MALFORMED = "ROUTE_MALFORMED"
    REROUTE_ACTION = "REROUTE_ACTION"
    RISK_THRESHOLD = "RISK_THRESHOLD"
    SEVERITY_ESCALATION = "SEVERITY_ESCALATION"
    KEYWORD_ESCALATION = "KEYWORD_ESCALATION"
    PARITY_REROUTE = "PARITY_REROUTE"
    PARITY_WARNING = "PARITY_WARNING"
    PARITY_RESOLVED = "PARITY_RESOLVED"
    DEFERRED_ACTION = "DEFERRED_ACTION"
    SYSTEM_DOMAIN_ACCEPT = "SYSTEM_DOMAIN_ACCEPT"
    PASSIVE_ACTION = "PASSIVE_ACTION"
    RECONCILE_PARITY = "RECONCILE_PARITY"
    CRITICAL_ACTION = "CRITICAL_ACTION"
    IDENTIFIER_OVERFLOW = "IDENTIFIER_OVERFLOW"
    DRY_RUN_CAPTURE = "DRY_RUN_CAPTURE"
    DIAGNOSTIC_PROBE = "DIAGNOSTIC_PROBE"
    DEFAULT_ACCEPT = "DEFAULT_ACCEPT"
    DEFAULT_STABLE = "DEFAULT_STABLE"


# UI/audit metadata keyed by reason code.
REASON_METADATA: dict[ReasonCode, dict[str, object]] = {
    ReasonCode.BLOCKED_COMMAND: {
        "category": ReasonCategory.POLICY,
        "message": "Blocked-command rule: action is never dispatched.",
    },
    ReasonCode.RETRY_BUDGET_EXHAUSTED: {
        "category": ReasonCategory.POLICY,
        "message": "Attempt counter exceeded the retry ceiling.",
    },
    ReasonCode.VOLUME_EXCEEDED: {
        "category": ReasonCategory.POLICY,
        "message": "Too many candidate routes for the domain in this batch.",
    },
    ReasonCode.ROUTE_MALFORMED: {
        "category": ReasonCategory.POLICY,
        "message": "Raw route did not match the grammar; fallback route used.",
    },
    ReasonCode.REROUTE_ACTION: {
        "category": ReasonCategory.INFO,
        "message": "Action is handled by rerouting to an isolated path.",
    },
    ReasonCode.RISK_THRESHOLD: {
        "category": ReasonCategory.ESCALATION,
        "message": "Severity is above the abort risk threshold.",
    },
    ReasonCode.SEVERITY_ESCALATION: {
        "category": ReasonCategory.ESCALATION,
        "message": "Severity upgraded the outcome.",
    },
    ReasonCode.KEYWORD_ESCALATION: {
        "category": ReasonCategory.ESCALATION,
        "message": "Identifier contains an escalation keyword.",
    },
    ReasonCode.PARITY_REROUTE: {
        "category": ReasonCategory.PARITY,
        "message": "Attempt parity selected the reroute branch.",
    },
    ReasonCode.PARITY_WARNING: {
        "category": ReasonCategory.PARITY,
        "message": "Attempt parity selected the warning branch.",
    },
    ReasonCode.PARITY_RESOLVED: {
        "category": ReasonCategory.PARITY,
        "message": "Attempt parity selected the resolved branch.",
    },
    ReasonCode.DEFERRED_ACTION: {
        "category": ReasonCategory.INFO,
        "message": "Action is eligible for deferred handling.",
    },
    ReasonCode.SYSTEM_DOMAIN_ACCEPT: {
        "category": ReasonCategory.POLICY,
        "message": "Deferred-eligible action on a system domain is dispatched directly.",
    },
    ReasonCode.PASSIVE_ACTION: {
        "category": ReasonCategory.INFO,
        "message": "Passive action resolves without intervention.",
    },
    ReasonCode.RECONCILE_PARITY: {
        "category": ReasonCategory.PARITY,
        "message": "Reconcile deferred for an odd-length identifier.",
    },
    ReasonCode.CRITICAL_ACTION: {
        "category": ReasonCategory.ESCALATION,
        "message": "Critical action received a boosted status.",
    },
    ReasonCode.IDENTIFIER_OVERFLOW: {
        "category": ReasonCategory.INFO,
        "message": "Identifier is longer than the length threshold.",
    },
    ReasonCode.DRY_RUN_CAPTURE: {
        "category": ReasonCategory.INFO,
        "message": "Dry run captured the route instead of dispatching it.",
    },
    ReasonCode.DIAGNOSTIC_PROBE: {
        "category": ReasonCategory.INFO,
        "message": "Diagnostic mode flags otherwise stable routes.",
    },
    ReasonCode.DEFAULT_ACCEPT: {
        "category": ReasonCategory.INFO,
        "message": "No rule matched; route accepted.",
    },
    ReasonCode.DEFAULT_STABLE: {
        "category": ReasonCategory.INFO,
        "message": "No rule matched; route is stable.",
    },
}


def describe_reason(label: str) -> str:
    reason = reason_from_label(label)
    if reason is None:
        return ""
    return str(REASON_METADATA[reason]["message"])


def reason_from_label(label: str) -> ReasonCode | None:
    if not label:
        return None
    try:
        return ReasonCode(label)
    except ValueError:
        return None


_missing = [rc for rc in ReasonCode if rc not in REASON_METADATA]
if _missing:
    raise RuntimeError(f"Missing REASON_METADATA for: {[m.value for m in _missing]}")

_extra = [k for k in REASON_METADATA.keys() if k not in set(ReasonCode)]
if _extra:
    raise RuntimeError(f"Extra REASON_METADATA keys: {[e.value for e in _extra]}")

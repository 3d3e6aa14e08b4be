"""Tests for reason code metadata and label lookups."""

from __future__ import annotations

from routeforge.core.domain.enums import (
    REASON_METADATA,
    SEVERITY_ORDER,
    SEVERITY_WEIGHT,
    ReasonCategory,
    ReasonCode,
    describe_reason,
    reason_from_label,
    severity_rank,
)


def test_every_reason_has_category_and_message() -> None:
    for reason in ReasonCode:
        meta = REASON_METADATA[reason]
        assert isinstance(meta["category"], ReasonCategory)
        assert meta["message"]


def test_reason_from_label_accepts_persisted_value() -> None:
    assert reason_from_label("BLOCKED_COMMAND") == ReasonCode.BLOCKED_COMMAND
    assert reason_from_label("") is None
    assert reason_from_label("NOT_A_REASON") is None


def test_describe_reason_unknown_is_empty() -> None:
    assert "Blocked-command" in describe_reason("BLOCKED_COMMAND")
    assert describe_reason("NOPE") == ""


def test_severity_weights_are_powers_of_two_in_order() -> None:
    weights = [SEVERITY_WEIGHT[severity] for severity in SEVERITY_ORDER]
    assert weights == [1, 2, 4, 8, 16]
    assert [severity_rank(severity) for severity in SEVERITY_ORDER] == [0, 1, 2, 3, 4]

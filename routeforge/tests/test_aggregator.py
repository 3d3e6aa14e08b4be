"""Tests for aggregate reports and score distributions."""

from __future__ import annotations

import pytest

from routeforge.core.domain.enums import DispatchStatus, Severity
from routeforge.core.domain.models import AggregateReport, BranchDecision, Route
from routeforge.core.engine.aggregator import aggregate, score_distribution
from routeforge.core.engine.solver import solve
from routeforge.core.grammar.parser import parse_route
from routeforge.core.policy.dispatch_v1.policy import DispatchClassifierV1


ROUTES = [
    "incident/discover/id-1/critical",
    "incident/shutdown/id-2/low",
    "mesh/rollback/x/low",
    "mesh/notify/n-1/medium",
    "mesh/rollback/y/low",
]


def _decisions():
    classifier = DispatchClassifierV1()
    return [classifier.classify(parse_route(raw)) for raw in ROUTES]


def test_aggregate_empty():
    report = aggregate([])
    assert report == AggregateReport(counts={}, total_score=0, per_domain={})
    assert report.counts == {}
    assert report.total_score == 0
    assert report.per_domain == {}


def test_aggregate_counts_scores_and_domains():
    decisions = _decisions()
    report = aggregate(decisions)
    assert sum(report.counts.values()) == len(decisions)
    assert report.counts == {"rerouted": 1, "rejected": 1, "accepted": 2, "deferred": 1}
    assert report.total_score == sum(decision.score for decision in decisions) + len(decisions)
    assert report.per_domain == {"incident": 2, "mesh": 3}


def test_aggregate_compound_keys():
    report = aggregate(_decisions(), compound=True)
    assert report.counts["rejected:BLOCKED_COMMAND"] == 1
    assert report.counts["accepted:DEFAULT_ACCEPT"] == 2
    assert sum(report.counts.values()) == len(ROUTES)


def test_aggregate_includes_chain_statistics():
    chains = [solve("mesh/rollback/x/low", 3), solve("incident/discover/id-1/critical", 5)]
    report = aggregate(_decisions(), chains)
    assert report.chain_steps == 8
    assert report.max_chain_depth == 5


def test_aggregate_accepts_a_single_solved_chain():
    report = aggregate(_decisions(), solve("mesh/rollback/x/low", 3))
    assert report.chain_steps == 3
    assert report.max_chain_depth == 3
    assert sum(report.counts.values()) == len(ROUTES)


def test_aggregate_chains_only():
    report = aggregate([], solve("incident/discover/id-1/critical", 5))
    assert report.counts == {}
    assert report.total_score == 0
    assert report.chain_steps == 5
    assert report.max_chain_depth == 5


def test_score_distribution():
    route = Route(domain="mesh", action="rollback", identifier="x", severity=Severity.LOW)
    decisions = [
        BranchDecision(route=route, status=DispatchStatus.ACCEPTED, reason="DEFAULT_ACCEPT", score=score)
        for score in (1, 2, 3, 4)
    ]
    dist = score_distribution(decisions)
    assert dist.count == 4
    assert dist.mean == pytest.approx(2.5)
    assert dist.p50 == pytest.approx(2.5)
    assert dist.p90 == pytest.approx(3.7)
    assert dist.max == pytest.approx(4.0)


def test_score_distribution_empty():
    dist = score_distribution([])
    assert (dist.count, dist.mean, dist.p50, dist.p90, dist.max) == (0, 0.0, 0.0, 0.0, 0.0)

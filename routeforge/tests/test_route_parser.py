"""Tests for route parsing, grammar detection and fallback substitution."""

from __future__ import annotations

import pytest

from routeforge.core.domain.enums import Severity
from routeforge.core.domain.models import Route
from routeforge.core.grammar.parser import fallback_route, parse_route, parse_route_detailed
from routeforge.core.grammar.vocabulary import default_vocabulary


SLASH_FALLBACK = Route(domain="recovery", action="assess", identifier="fallback", severity=Severity.LOW)
COLON_FALLBACK = Route(domain="incident", action="boot", identifier="root", severity=Severity.LOW)


def test_parse_slash_route():
    route = parse_route("incident/discover/id-1/critical")
    assert route == Route(domain="incident", action="discover", identifier="id-1", severity=Severity.CRITICAL)


def test_parse_slash_route_with_leading_delimiter():
    assert parse_route("/incident/discover/id-1/critical") == parse_route("incident/discover/id-1/critical")


def test_parse_colon_route_uses_default_identifier():
    route = parse_route("boot:incident:low")
    assert route == COLON_FALLBACK


def test_parse_colon_route_with_identifier():
    route = parse_route("rollback:mesh:high:svc-9")
    assert route == Route(domain="mesh", action="rollback", identifier="svc-9", severity=Severity.HIGH)


def test_not_a_route_returns_fallback():
    parsed = parse_route_detailed("not-a-route")
    assert parsed.fallback is True
    assert parsed.grammar == "slash"
    assert parsed.route == SLASH_FALLBACK


@pytest.mark.parametrize(
    "raw",
    ["", "a/b", "a/b/c/d/e", "incident//id/low", "/", "   ", "💥☃∞"],
)
def test_malformed_slash_input_is_absorbed(raw):
    assert parse_route(raw) == SLASH_FALLBACK


def test_malformed_colon_input_uses_colon_fallback():
    parsed = parse_route_detailed("a:b")
    assert parsed.fallback is True
    assert parsed.route == COLON_FALLBACK


@pytest.mark.parametrize("raw", [None, 42, 3.5, b"incident/discover/x/low", ["a"]])
def test_non_string_input_is_absorbed(raw):
    assert parse_route(raw) == SLASH_FALLBACK


def test_unknown_members_are_coerced_to_defaults():
    parsed = parse_route_detailed("nowhere/explode/x/catastrophic")
    assert parsed.fallback is False
    assert parsed.route == Route(domain="recovery", action="assess", identifier="x", severity=Severity.LOW)
    assert parsed.coerced == ("domain", "action", "severity")


def test_garbage_unicode_fields_still_parse_to_closed_vocabulary():
    vocab = default_vocabulary()
    route = parse_route("💥/☃/é/∞")
    assert route.domain in vocab.domains
    assert route.action in vocab.actions
    assert route.severity in vocab.severities
    assert route.identifier == "é"


def test_case_and_whitespace_are_normalised():
    parsed = parse_route_detailed(" INCIDENT / Discover / id-7 / HIGH ")
    assert parsed.route == Route(domain="incident", action="discover", identifier="id-7", severity=Severity.HIGH)
    assert parsed.coerced == ()


def test_empty_identifier_uses_default():
    parsed = parse_route_detailed("incident/discover//low")
    assert parsed.route.identifier == "root"
    assert parsed.coerced == ("identifier",)


def test_forced_grammar_mismatch_falls_back_for_that_grammar():
    assert parse_route("incident/discover/id-1/critical", grammar="colon") == COLON_FALLBACK


def test_unknown_grammar_name_is_a_configuration_error():
    with pytest.raises(ValueError):
        parse_route("incident/discover/id-1/critical", grammar="pipe")


def test_route_renders_back_to_both_grammars():
    route = parse_route("incident/discover/id-1/critical")
    assert route.to_raw() == "incident/discover/id-1/critical"
    assert route.to_raw("colon") == "discover:incident:critical:id-1"
    assert parse_route(route.to_raw("colon")) == route


def test_route_value_passes_through_unchanged():
    route = parse_route("mesh/rollback/x/low")
    assert parse_route(route) is route


def test_fallback_route_helper():
    assert fallback_route() == SLASH_FALLBACK
    assert fallback_route("colon") == COLON_FALLBACK


def test_colon_route_with_slash_in_identifier():
    parsed = parse_route_detailed("boot:incident:low:a/b")
    assert parsed.fallback is False
    assert parsed.grammar == "colon"
    assert parsed.route == Route(domain="incident", action="boot", identifier="a/b", severity=Severity.LOW)


def test_slash_route_with_colon_in_identifier():
    parsed = parse_route_detailed("incident/discover/id:1/low")
    assert parsed.grammar == "slash"
    assert parsed.route.identifier == "id:1"

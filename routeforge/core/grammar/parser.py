"""Route parser: raw route strings to typed Route values.

Responsibilities:
  - Split a raw route on its grammar delimiter and validate the field count.
  - Substitute the grammar fallback route for malformed input.
  - Coerce unknown enumeration members to vocabulary defaults.
Must not:
  - Raise for any input; malformed routes are absorbed, never propagated.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from routeforge.core.domain.models import Route
from .grammars import RouteGrammar, detect_grammar, get_grammar, split_raw
from .vocabulary import Vocabulary, default_vocabulary


@dataclass(frozen=True)
class ParsedRoute:
    raw: str
    route: Route
    grammar: str
    fallback: bool
    coerced: tuple[str, ...]


def _split_fields(raw: str, grammar: RouteGrammar) -> Optional[dict[str, str]]:
    parts = split_raw(raw, grammar)
    if len(parts) < grammar.min_fields or len(parts) > len(grammar.fields):
        return None
    fields = dict(zip(grammar.fields, parts))
    for name in ("domain", "action", "severity"):
        if not fields.get(name):
            return None
    return fields


def _build_route(fields: dict[str, str], vocabulary: Vocabulary) -> tuple[Route, tuple[str, ...]]:
    coerced: list[str] = []

    domain_raw = fields["domain"].lower()
    domain = vocabulary.coerce_domain(domain_raw)
    if domain != domain_raw:
        coerced.append("domain")

    action_raw = fields["action"].lower()
    action = vocabulary.coerce_action(action_raw)
    if action != action_raw:
        coerced.append("action")

    severity_raw = fields["severity"].lower()
    severity = vocabulary.coerce_severity(severity_raw)
    if severity.value != severity_raw:
        coerced.append("severity")

    identifier = fields.get("identifier", "")
    if not identifier:
        identifier = vocabulary.default_identifier
        coerced.append("identifier")

    route = Route(domain=domain, action=action, identifier=identifier, severity=severity)
    return route, tuple(coerced)


def _fallback(raw: str, grammar: RouteGrammar, vocabulary: Vocabulary) -> ParsedRoute:
    fields = _split_fields(grammar.fallback, grammar)
    assert fields is not None, f"fallback route does not match grammar {grammar.name}"
    route, _ = _build_route(fields, vocabulary)
    return ParsedRoute(raw=raw, route=route, grammar=grammar.name, fallback=True, coerced=())


def parse_route_detailed(
    raw: object,
    grammar: Optional[str] = None,
    vocabulary: Optional[Vocabulary] = None,
) -> ParsedRoute:
    vocab = vocabulary or default_vocabulary()
    if isinstance(raw, Route):
        return ParsedRoute(raw=raw.to_raw(), route=raw, grammar="slash", fallback=False, coerced=())
    if not isinstance(raw, str):
        selected = get_grammar(grammar) if grammar else detect_grammar("")
        return _fallback(repr(raw), selected, vocab)

    selected = get_grammar(grammar) if grammar else detect_grammar(raw)
    fields = _split_fields(raw, selected)
    if fields is None:
        return _fallback(raw, selected, vocab)

    route, coerced = _build_route(fields, vocab)
    return ParsedRoute(raw=raw, route=route, grammar=selected.name, fallback=False, coerced=coerced)


def parse_route(
    raw: object,
    grammar: Optional[str] = None,
    vocabulary: Optional[Vocabulary] = None,
) -> Route:
    return parse_route_detailed(raw, grammar=grammar, vocabulary=vocabulary).route


def fallback_route(grammar: str = "slash", vocabulary: Optional[Vocabulary] = None) -> Route:
    vocab = vocabulary or default_vocabulary()
    return _fallback("", get_grammar(grammar), vocab).route

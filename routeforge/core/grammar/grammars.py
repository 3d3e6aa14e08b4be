"""Route string grammars.

Key definitions:
  - SLASH_GRAMMAR: domain/action/identifier/severity, optional leading '/'.
  - COLON_GRAMMAR: action:domain:severity[:identifier].
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RouteGrammar:
    name: str
    delimiter: str
    fields: tuple[str, ...]
    min_fields: int
    fallback: str


SLASH_GRAMMAR = RouteGrammar(
    name="slash",
    delimiter="/",
    fields=("domain", "action", "identifier", "severity"),
    min_fields=4,
    fallback="/recovery/assess/fallback/low",
)

COLON_GRAMMAR = RouteGrammar(
    name="colon",
    delimiter=":",
    fields=("action", "domain", "severity", "identifier"),
    min_fields=3,
    fallback="boot:incident:low",
)

GRAMMARS: dict[str, RouteGrammar] = {
    SLASH_GRAMMAR.name: SLASH_GRAMMAR,
    COLON_GRAMMAR.name: COLON_GRAMMAR,
}


def get_grammar(name: str) -> RouteGrammar:
    if name not in GRAMMARS:
        raise ValueError(f"Unknown route grammar: {name}")
    return GRAMMARS[name]


def split_raw(raw: str, grammar: RouteGrammar) -> list[str]:
    text = raw.strip()
    if grammar.delimiter == "/" and text.startswith("/"):
        text = text[1:]
    return [part.strip() for part in text.split(grammar.delimiter)]


def fits(raw: str, grammar: RouteGrammar) -> bool:
    if grammar.delimiter not in raw:
        return False
    count = len(split_raw(raw, grammar))
    return grammar.min_fields <= count <= len(grammar.fields)


def detect_grammar(raw: str) -> RouteGrammar:
    # Prefer the grammar whose field count matches; an identifier may
    # contain the other grammar's delimiter.
    for grammar in (SLASH_GRAMMAR, COLON_GRAMMAR):
        if fits(raw, grammar):
            return grammar
    if SLASH_GRAMMAR.delimiter in raw:
        return SLASH_GRAMMAR
    if COLON_GRAMMAR.delimiter in raw:
        return COLON_GRAMMAR
    return SLASH_GRAMMAR

"""Route vocabularies: closed enumerations loaded from package JSON.

Responsibilities:
  - Load and validate domain/action/severity vocabularies and bucket mappings.
  - Coerce unknown members to the documented default member.

Invariants:
  - Every default and every bucket member belongs to its vocabulary.
  - Coercion is total over strings; lookups never see values outside the set.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

from routeforge.core.domain.enums import ActionClass, DomainClass, Severity

DEFAULT_VOCABULARY = "default"


@dataclass(frozen=True)
class ParityGroup:
    """Actions whose outcome alternates on attempt % modulus."""

    actions: frozenset[str]
    modulus: int
    resolve_otherwise: bool = False


@dataclass(frozen=True)
class Vocabulary:
    name: str
    description: str
    domains: tuple[str, ...]
    actions: tuple[str, ...]
    severities: tuple[Severity, ...]
    default_domain: str
    default_action: str
    default_severity: Severity
    default_identifier: str
    blocked_actions: frozenset[str]
    critical_actions: frozenset[str]
    deferred_actions: frozenset[str]
    reroute_actions: frozenset[str]
    reconcile_actions: frozenset[str]
    parity_groups: tuple[ParityGroup, ...]
    escalation_keywords: tuple[str, ...]
    domain_classes: dict[str, DomainClass]

    def coerce_domain(self, value: str) -> str:
        return value if value in self.domains else self.default_domain

    def coerce_action(self, value: str) -> str:
        return value if value in self.actions else self.default_action

    def coerce_severity(self, value: str) -> Severity:
        for severity in self.severities:
            if severity.value == value:
                return severity
        return self.default_severity

    def action_class(self, action: str) -> ActionClass:
        if action in self.blocked_actions:
            return ActionClass.BLOCKED
        if action in self.reroute_actions:
            return ActionClass.REROUTE
        if action in self.critical_actions:
            return ActionClass.CRITICAL
        if action in self.deferred_actions:
            return ActionClass.DEFERRED
        return ActionClass.NORMAL

    def domain_class(self, domain: str) -> DomainClass:
        return self.domain_classes.get(domain, DomainClass.SYSTEM)

    def parity_group(self, action: str) -> Optional[ParityGroup]:
        for group in self.parity_groups:
            if action in group.actions:
                return group
        return None

    def has_escalation_keyword(self, text: str) -> bool:
        lowered = text.lower()
        return any(keyword in lowered for keyword in self.escalation_keywords)


def _vocab_dir() -> Path:
    return Path(__file__).resolve().parent / "vocab"


def _require(payload: dict[str, Any], key: str, expected_type: type) -> Any:
    if key not in payload:
        raise ValueError(f"Missing required field '{key}' in vocabulary")
    value = payload[key]
    if expected_type is list:
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            raise ValueError(f"Field '{key}' must be a list of strings")
        return [item.strip().lower() for item in value]
    if expected_type is dict:
        if not isinstance(value, dict):
            raise ValueError(f"Field '{key}' must be an object")
        return value
    if not isinstance(value, expected_type):
        raise ValueError(f"Field '{key}' must be {expected_type.__name__}")
    if expected_type is str:
        return value.strip().lower()
    return value


def _require_members(key: str, values: list[str], allowed: tuple[str, ...]) -> None:
    unknown = [value for value in values if value not in allowed]
    if unknown:
        raise ValueError(f"Field '{key}' has values outside the vocabulary: {unknown}")


def _parse_severities(values: list[str]) -> tuple[Severity, ...]:
    severities: list[Severity] = []
    for value in values:
        try:
            severities.append(Severity(value))
        except ValueError:
            raise ValueError(f"Unknown severity '{value}' in vocabulary") from None
    if not severities:
        raise ValueError("Field 'severities' must not be empty")
    return tuple(severities)


def _parse_domain_classes(raw: dict[str, Any], domains: tuple[str, ...]) -> dict[str, DomainClass]:
    mapping: dict[str, DomainClass] = {}
    for class_name, members in raw.items():
        try:
            domain_class = DomainClass(class_name)
        except ValueError:
            raise ValueError(f"Unknown domain class '{class_name}' in vocabulary") from None
        if not isinstance(members, list):
            raise ValueError(f"Domain class '{class_name}' must list domains")
        cleaned = [str(member).strip().lower() for member in members]
        _require_members(f"domain_classes.{class_name}", cleaned, domains)
        for member in cleaned:
            mapping[member] = domain_class
    return mapping


def _parse_parity_groups(payload: dict[str, Any], actions: tuple[str, ...]) -> tuple[ParityGroup, ...]:
    if "parity_groups" not in payload:
        raise ValueError("Missing required field 'parity_groups' in vocabulary")
    raw = payload["parity_groups"]
    if not isinstance(raw, list):
        raise ValueError("Field 'parity_groups' must be a list")

    groups: list[ParityGroup] = []
    seen: set[str] = set()
    for index, entry in enumerate(raw):
        if not isinstance(entry, dict):
            raise ValueError(f"parity_groups[{index}] must be an object")
        members = _require(entry, "actions", list)
        _require_members(f"parity_groups[{index}].actions", members, actions)
        overlap = seen.intersection(members)
        if overlap:
            raise ValueError(f"parity_groups[{index}] repeats actions: {sorted(overlap)}")
        seen.update(members)

        modulus = entry.get("modulus")
        if isinstance(modulus, bool) or not isinstance(modulus, int) or modulus < 2:
            raise ValueError(f"parity_groups[{index}].modulus must be an integer >= 2")
        resolve_otherwise = entry.get("resolve_otherwise", False)
        if not isinstance(resolve_otherwise, bool):
            raise ValueError(f"parity_groups[{index}].resolve_otherwise must be a boolean")

        groups.append(ParityGroup(actions=frozenset(members), modulus=modulus, resolve_otherwise=resolve_otherwise))
    return tuple(groups)


def vocabulary_from_payload(payload: dict[str, Any]) -> Vocabulary:
    if not isinstance(payload, dict):
        raise ValueError("Vocabulary must be a JSON object")

    domains = tuple(_require(payload, "domains", list))
    actions = tuple(_require(payload, "actions", list))
    if not domains or not actions:
        raise ValueError("Vocabulary must define at least one domain and one action")
    severities = _parse_severities(_require(payload, "severities", list))

    default_domain = _require(payload, "default_domain", str)
    default_action = _require(payload, "default_action", str)
    _require_members("default_domain", [default_domain], domains)
    _require_members("default_action", [default_action], actions)

    default_severity_raw = _require(payload, "default_severity", str)
    default_severity: Optional[Severity] = None
    for severity in severities:
        if severity.value == default_severity_raw:
            default_severity = severity
    if default_severity is None:
        raise ValueError(f"Field 'default_severity' has values outside the vocabulary: {default_severity_raw}")

    default_identifier = _require(payload, "default_identifier", str)
    if not default_identifier:
        raise ValueError("Field 'default_identifier' must be non-empty")

    buckets: dict[str, frozenset[str]] = {}
    for key in (
        "blocked_actions",
        "critical_actions",
        "deferred_actions",
        "reroute_actions",
        "reconcile_actions",
    ):
        values = _require(payload, key, list)
        _require_members(key, values, actions)
        buckets[key] = frozenset(values)

    return Vocabulary(
        name=_require(payload, "name", str),
        description=str(payload.get("description", "")),
        domains=domains,
        actions=actions,
        severities=severities,
        default_domain=default_domain,
        default_action=default_action,
        default_severity=default_severity,
        default_identifier=default_identifier,
        blocked_actions=buckets["blocked_actions"],
        critical_actions=buckets["critical_actions"],
        deferred_actions=buckets["deferred_actions"],
        reroute_actions=buckets["reroute_actions"],
        reconcile_actions=buckets["reconcile_actions"],
        parity_groups=_parse_parity_groups(payload, actions),
        escalation_keywords=tuple(_require(payload, "escalation_keywords", list)),
        domain_classes=_parse_domain_classes(_require(payload, "domain_classes", dict), domains),
    )


def load_vocabulary(name: str = DEFAULT_VOCABULARY, vocab_dir: Optional[Path] = None) -> Vocabulary:
    base = vocab_dir if vocab_dir is not None else _vocab_dir()
    path = base / f"{name}.json"
    if not path.exists():
        raise ValueError(f"Unknown route vocabulary: {name}")

    payload = json.loads(path.read_text(encoding="utf-8"))
    vocabulary = vocabulary_from_payload(payload)
    if vocabulary.name != name:
        raise ValueError(f"name mismatch: requested '{name}', vocabulary has '{vocabulary.name}'")
    return vocabulary


@lru_cache(maxsize=None)
def default_vocabulary() -> Vocabulary:
    return load_vocabulary(DEFAULT_VOCABULARY)

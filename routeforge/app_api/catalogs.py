"""Route catalog sources.

Responsibilities:
  - Supply lists of raw route strings to the batch pipeline.
Must not:
  - Parse or validate routes; malformed lines are the parser's concern.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

from routeforge.core.domain.enums import Severity
from routeforge.core.grammar.vocabulary import Vocabulary


class StaticRouteCatalog:
    def __init__(self, routes: Iterable[str]) -> None:
        self._routes = list(routes)

    def list_routes(self) -> list[str]:
        return list(self._routes)


class FileRouteCatalog:
    """One route per line; blank lines and '#' comments are skipped."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    def list_routes(self) -> list[str]:
        if not self._path.exists():
            raise ValueError(f"Route catalog not found: {self._path}")
        routes: list[str] = []
        for line in self._path.read_text(encoding="utf-8").splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            routes.append(stripped)
        return routes


def build_vocabulary_catalog(
    vocabulary: Vocabulary,
    domains: Optional[Iterable[str]] = None,
    actions: Optional[Iterable[str]] = None,
    severity: Optional[Severity] = None,
) -> StaticRouteCatalog:
    selected_domains = list(domains) if domains is not None else list(vocabulary.domains)
    selected_actions = list(actions) if actions is not None else list(vocabulary.actions)
    level = severity or vocabulary.default_severity
    routes = [
        f"{domain}/{action}/{domain}-{action}/{level.value}"
        for domain in selected_domains
        for action in selected_actions
    ]
    return StaticRouteCatalog(routes)

"""Construct a fully wired app instance for running a route batch.

Responsibilities:
  - Assemble vocabulary, classifier and route catalog based on config.
Must not:
  - Implement parsing/classification logic; composition only.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

from routeforge.app_api.catalogs import FileRouteCatalog, StaticRouteCatalog, build_vocabulary_catalog
from routeforge.app_api.dto import BatchSpec
from routeforge.app_api.facade import RouteForgeApplication
from routeforge.app_api.ports import RouteCatalog
from routeforge.core.grammar.vocabulary import DEFAULT_VOCABULARY, load_vocabulary
from routeforge.core.policy.factory import default_classifier_factory


def build_routeforge_app(
    spec: BatchSpec,
    routes: Optional[Iterable[str]] = None,
    routes_file: Optional[Path] = None,
    vocabulary_name: str = DEFAULT_VOCABULARY,
) -> RouteForgeApplication:
    """
    Composition root: build and wire the classifier and route catalog
    and return the application facade.
    """
    spec.validate()
    vocabulary = load_vocabulary(vocabulary_name)
    classifier = default_classifier_factory.create(spec.engine_id, spec.engine_version, vocabulary)

    catalog: RouteCatalog
    if routes is not None and routes_file is not None:
        raise ValueError("use either routes or routes_file, not both")
    if routes is not None:
        catalog = StaticRouteCatalog(routes)
    elif routes_file is not None:
        catalog = FileRouteCatalog(routes_file)
    else:
        catalog = build_vocabulary_catalog(vocabulary)

    return RouteForgeApplication(classifier=classifier, catalog=catalog, spec=spec)

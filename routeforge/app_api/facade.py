from __future__ import annotations

from typing import Optional

from routeforge.core.engine.evaluator import RouteClassifier, resolve_batch
from routeforge.core.engine.result import BatchResult
from routeforge.core.engine.trace import TraceAccumulator
from .dto import BatchSpec
from .ports import RouteCatalog


class RouteForgeApplication:
    def __init__(
        self,
        classifier: RouteClassifier,
        catalog: RouteCatalog,
        spec: BatchSpec,
        accumulator: Optional[TraceAccumulator] = None,
    ) -> None:
        spec.validate()
        self._classifier = classifier
        self._catalog = catalog
        self._spec = spec
        self._accumulator = accumulator or TraceAccumulator()

    @property
    def accumulator(self) -> TraceAccumulator:
        return self._accumulator

    def run_batch(self) -> BatchResult:
        routes = self._catalog.list_routes()
        return resolve_batch(
            routes,
            self._classifier,
            attempts=self._spec.attempts,
            mode=self._spec.classify_mode,
            depth=self._spec.depth,
            mutual=self._spec.mutual,
            accumulator=self._accumulator,
            grammar=self._spec.grammar,
        )

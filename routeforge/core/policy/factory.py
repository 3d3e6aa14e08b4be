from __future__ import annotations

from typing import Callable, Dict, List, Optional, Tuple

from routeforge.core.engine.evaluator import RouteClassifier
from routeforge.core.grammar.vocabulary import Vocabulary
from routeforge.core.policy.dispatch_v1.policy import DispatchClassifierV1
from routeforge.core.policy.flow_v1.policy import FlowClassifierV1

ClassifierBuilder = Callable[[Optional[Vocabulary]], RouteClassifier]


class ClassifierFactory:
    def __init__(self) -> None:
        self._registry: Dict[Tuple[str, str], ClassifierBuilder] = {}

    def register(self, engine_id: str, engine_version: str, builder: ClassifierBuilder) -> None:
        self._registry[(engine_id, engine_version)] = builder

    def create(
        self, engine_id: str, engine_version: str, vocabulary: Optional[Vocabulary] = None
    ) -> RouteClassifier:
        key = (engine_id, engine_version)
        if key not in self._registry:
            raise ValueError(f"Unknown engine_id/version: {engine_id}:{engine_version}")
        return self._registry[key](vocabulary)

    def available(self) -> List[Tuple[str, str]]:
        return sorted(self._registry)


default_classifier_factory = ClassifierFactory()
default_classifier_factory.register("dispatch", "v1", lambda vocab: DispatchClassifierV1(vocabulary=vocab))
default_classifier_factory.register("flow", "v1", lambda vocab: FlowClassifierV1(vocabulary=vocab))

__all__ = ["ClassifierFactory", "default_classifier_factory"]

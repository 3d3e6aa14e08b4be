"""Trace accumulator for branch decisions.

Responsibilities:
  - Hold the running list of BranchDecisions for a batch.
  - Expose append/read/clear only; snapshots preserve insertion order.

Invariants:
  - No deduplication: a route may appear once per retry attempt.
  - Appends are serialised so classification may run on worker threads.
"""

from __future__ import annotations

import threading

from ..domain.models import BranchDecision, Route


class TraceAccumulator:
    def __init__(self) -> None:
        self._decisions: list[BranchDecision] = []
        self._lock = threading.Lock()

    def record(self, decision: BranchDecision) -> None:
        with self._lock:
            self._decisions.append(decision)

    def snapshot(self) -> list[BranchDecision]:
        with self._lock:
            return list(self._decisions)

    def clear(self) -> None:
        with self._lock:
            self._decisions.clear()

    def by_route(self, route: Route) -> list[BranchDecision]:
        return [decision for decision in self.snapshot() if decision.route == route]

    def __len__(self) -> int:
        with self._lock:
            return len(self._decisions)

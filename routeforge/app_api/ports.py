"""Port definitions for app-level dependencies.

Responsibilities:
  - Define interface contracts for route catalog sources.
Must not:
  - Implement logic; interfaces only.
"""

from __future__ import annotations

from typing import Protocol


class RouteCatalog(Protocol):
    def list_routes(self) -> list[str]:
        ...

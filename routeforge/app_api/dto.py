"""DTO definitions for app-level data exchange.

Responsibilities:
  - Define stable, typed structures for batch run inputs.
Must not:
  - Implement business logic.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from routeforge.core.domain.enums import ClassifyMode

EngineId = Literal["dispatch", "flow"]
GrammarName = Literal["slash", "colon"]


@dataclass(frozen=True)
class BatchSpec:
    engine_id: EngineId = "dispatch"
    engine_version: str = "v1"
    attempts: int = 1
    mode: str = ClassifyMode.LIVE.value
    depth: int = 0
    mutual: bool = False
    grammar: Optional[GrammarName] = None

    def validate(self) -> None:
        if self.engine_id not in ("dispatch", "flow"):
            raise ValueError("engine_id must be 'dispatch' or 'flow'")

        if not self.engine_version.strip():
            raise ValueError("engine_version must be non-empty")

        if self.attempts < 1:
            raise ValueError("attempts must be >= 1")

        if self.depth < 0:
            raise ValueError("depth must be >= 0")

        if self.grammar is not None and self.grammar not in ("slash", "colon"):
            raise ValueError("grammar must be 'slash' or 'colon'")

        try:
            ClassifyMode(self.mode)
        except ValueError:
            raise ValueError(f"unsupported mode: {self.mode}") from None

    @property
    def classify_mode(self) -> ClassifyMode:
        return ClassifyMode(self.mode)

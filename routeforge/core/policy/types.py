"""Shared type definitions for classifier rules.

Responsibilities:
  - Define the Proposal dataclass used to carry a status + reason.
Must not:
  - Implement logic; data-only types for rule evaluation.
"""

from __future__ import annotations

from dataclasses import dataclass

from routeforge.core.domain.enums import DecisionStatus, ReasonCode


@dataclass(frozen=True)
class Proposal:
    status: DecisionStatus
    reason: ReasonCode

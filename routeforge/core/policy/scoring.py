"""Decision scoring.

Score is a pure function of field lengths, attempt number and the
severity weight table. Terminal rejections score 0.
"""

from __future__ import annotations

from routeforge.core.domain.enums import SEVERITY_WEIGHT, TERMINAL_REJECTIONS, DecisionStatus
from routeforge.core.domain.models import Route

ATTEMPT_WEIGHT = 2
LENGTH_MODULUS = 10


def compute_score(route: Route, attempt: int, status: DecisionStatus) -> int:
    if status in TERMINAL_REJECTIONS:
        return 0
    length_term = (len(route.domain) + len(route.action) + len(route.identifier)) % LENGTH_MODULUS
    return SEVERITY_WEIGHT[route.severity] + ATTEMPT_WEIGHT * attempt + length_term

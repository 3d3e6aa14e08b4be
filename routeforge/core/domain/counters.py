"""Counter normalisation shared by the classifier and the solver chain.

Invariants:
  - Non-finite, negative, boolean and non-numeric counters normalise to 0.
  - Any real number type counts, including numpy scalars.
"""

from __future__ import annotations

import math
import numbers


def normalize_counter(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return 0
    if not math.isfinite(float(value)):
        return 0
    if value < 0:
        return 0
    return int(value)


def clamp_counter(value: object, ceiling: int) -> int:
    return min(normalize_counter(value), ceiling)

"""Bounded solver chains derived from a seed route.

Responsibilities:
  - Build exactly clamp(depth, 0, DEPTH_CEILING) derived states per seed.
  - Provide the two-phase variant alternating A-steps and B-steps.

Invariants:
  - Iterative construction; no input-dependent recursion.
  - state[i].trace has i + 1 entries and extends state[i - 1].trace.
"""

from __future__ import annotations

from typing import Iterable, Optional, Union

from ..domain.counters import clamp_counter
from ..domain.models import Phase, Route, SolverChainState
from ..grammar.parser import parse_route
from ..grammar.vocabulary import Vocabulary

DEPTH_CEILING = 24

PHASE_DELIMITERS: dict[Phase, str] = {
    Phase.A: ":",
    Phase.B: "/",
}

Seed = Union[str, Route]


def normalize_depth(depth: object) -> int:
    return clamp_counter(depth, DEPTH_CEILING)


def _seed_text(seed: Seed) -> str:
    if isinstance(seed, Route):
        return seed.to_raw()
    if isinstance(seed, str):
        return seed
    return ""


def _derive(prev: SolverChainState, index: int, phase: Optional[Phase]) -> SolverChainState:
    delimiter = PHASE_DELIMITERS[phase] if phase is not None else PHASE_DELIMITERS[Phase.A]
    value = f"{prev.derived_value}{delimiter}{index}"
    return SolverChainState(
        seed=prev.seed,
        step_index=index,
        derived_value=value,
        trace=prev.trace + (value,),
        phase=phase,
    )


def _build_chain(seed: Seed, depth: object, mutual: bool, vocabulary: Optional[Vocabulary]) -> list[SolverChainState]:
    steps = normalize_depth(depth)
    if steps == 0:
        return []

    text = _seed_text(seed)
    route = parse_route(seed, vocabulary=vocabulary)
    first = SolverChainState(
        seed=route,
        step_index=0,
        derived_value=text,
        trace=(text,),
        phase=Phase.A if mutual else None,
    )
    states = [first]
    phase = first.phase
    for index in range(1, steps):
        if mutual:
            phase = Phase.B if phase == Phase.A else Phase.A
        states.append(_derive(states[-1], index, phase))
    return states


def solve(seed: Seed, depth: object, vocabulary: Optional[Vocabulary] = None) -> list[SolverChainState]:
    return _build_chain(seed, depth, mutual=False, vocabulary=vocabulary)


def solve_mutual(seed: Seed, depth: object, vocabulary: Optional[Vocabulary] = None) -> list[SolverChainState]:
    """Two-phase chain: even steps run phase A (':i'), odd steps phase B ('/i')."""
    return _build_chain(seed, depth, mutual=True, vocabulary=vocabulary)


def solve_many(
    seeds: Iterable[Seed],
    depth: object,
    mutual: bool = False,
    vocabulary: Optional[Vocabulary] = None,
) -> dict[str, list[SolverChainState]]:
    chains: dict[str, list[SolverChainState]] = {}
    for seed in seeds:
        key = _seed_text(seed)
        if key in chains:
            continue
        chains[key] = _build_chain(seed, depth, mutual=mutual, vocabulary=vocabulary)
    return chains

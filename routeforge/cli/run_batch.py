"""Classify a batch of routes and print an aggregate summary.

Purpose:
  - Parse, classify, trace and (optionally) solve a batch of route strings.
Inputs:
  - Routes from --routes, --routes-file, or the full vocabulary catalog.
Outputs:
  - SUMMARY key=value lines on stdout; --print adds one line per decision.
Example:
  - PYTHONPATH=. python3 routeforge/cli/run_batch.py --engine flow --routes "incident/discover/id-1/critical"
Debug:
  - --debug / --debug-limit control diagnostic output volume.
"""

from __future__ import annotations

import argparse
from pathlib import Path

from routeforge.app_api.dto import BatchSpec
from routeforge.app_api.factories import build_routeforge_app
from routeforge.cli._debug_utils import _dbg, _debug_enabled, _debug_window, format_counts
from routeforge.core.domain.enums import ClassifyMode, describe_reason
from routeforge.core.engine.aggregator import aggregate, score_distribution
from routeforge.core.engine.evaluator import set_pipeline_debug
from routeforge.core.grammar.vocabulary import DEFAULT_VOCABULARY


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Classify a batch of routes")
    parser.add_argument("--engine", default="dispatch", choices=["dispatch", "flow"], help="Classifier engine id")
    parser.add_argument("--engine-version", default="v1", help="Classifier engine version")
    parser.add_argument("--routes", help="Comma-separated raw routes")
    parser.add_argument("--routes-file", help="File with one route per line")
    parser.add_argument("--vocabulary", default=DEFAULT_VOCABULARY, help="Route vocabulary name")
    parser.add_argument("--grammar", choices=["slash", "colon"], default=None, help="Force a route grammar")
    parser.add_argument("--attempts", type=int, default=1, help="Max attempts per route")
    parser.add_argument("--mode", default=ClassifyMode.LIVE.value, choices=[m.value for m in ClassifyMode])
    parser.add_argument("--depth", type=int, default=0, help="Solver chain depth (0 disables chains)")
    parser.add_argument("--mutual", action="store_true", help="Use the two-phase solver chain")
    parser.add_argument("--compound", action="store_true", help="Count by status:reason")
    parser.add_argument("--print", action="store_true", dest="print_rows", help="Print one line per decision")
    parser.add_argument("--debug", action="store_true", help="Enable debug output")
    parser.add_argument("--debug-limit", type=int, default=25, help="Max items to show in debug lists (0 = no limit)")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    if args.routes is not None and args.routes_file is not None:
        raise SystemExit("ERROR: use either --routes OR --routes-file")

    routes = None
    if args.routes is not None:
        routes = [item.strip() for item in args.routes.split(",") if item.strip()]
    routes_file = Path(args.routes_file) if args.routes_file else None

    spec = BatchSpec(
        engine_id=args.engine,
        engine_version=args.engine_version,
        attempts=args.attempts,
        mode=args.mode,
        depth=args.depth,
        mutual=args.mutual,
        grammar=args.grammar,
    )
    try:
        app = build_routeforge_app(spec, routes=routes, routes_file=routes_file, vocabulary_name=args.vocabulary)
        if _debug_enabled(args):
            set_pipeline_debug(lambda msg: _dbg(args, msg))
        try:
            result = app.run_batch()
        finally:
            set_pipeline_debug(None)
    except ValueError as exc:
        print(f"SUMMARY status=ERROR message={exc}")
        raise SystemExit(2)

    report = result.report
    if args.compound:
        report = aggregate(result.decisions, result.chains.values(), compound=True)

    if args.print_rows:
        for decision in result.decisions:
            print(
                f"{decision.route} attempt={decision.attempt} status={decision.status.value} "
                f"reason={decision.reason} score={decision.score} message={describe_reason(decision.reason)}"
            )

    if _debug_enabled(args):
        malformed = [item.raw for item in result.parsed if item.fallback]
        head, tail = _debug_window(args, malformed)
        _dbg(args, f"malformed_head={head}")
        if tail:
            _dbg(args, f"malformed_tail={tail}")
        chain_head, _ = _debug_window(args, list(result.chains.items()))
        for seed, chain in chain_head:
            last = chain[-1].derived_value if chain else ""
            _dbg(args, f"CHAIN seed={seed} steps={len(chain)} last={last}")

    dist = score_distribution(result.decisions)
    print(f"SUMMARY engine={args.engine}:{args.engine_version} mode={args.mode}")
    print(f"SUMMARY routes={len(result.parsed)} malformed={result.malformed_count}")
    print(f"SUMMARY decisions={len(result.decisions)} trace={len(app.accumulator)}")
    print(f"SUMMARY counts={format_counts(report.counts)}")
    print(f"SUMMARY per_domain={format_counts(report.per_domain)}")
    print(f"SUMMARY total_score={report.total_score}")
    print(f"SUMMARY score_mean={dist.mean:.2f} score_p50={dist.p50:.2f} score_p90={dist.p90:.2f} score_max={dist.max:.0f}")
    print(f"SUMMARY chain_steps={report.chain_steps} max_chain_depth={report.max_chain_depth}")


if __name__ == "__main__":
    main()

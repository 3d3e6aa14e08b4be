"""Tests for batch spec validation and app composition."""

from __future__ import annotations

import pytest

from routeforge.app_api.dto import BatchSpec
from routeforge.app_api.factories import build_routeforge_app
from routeforge.core.domain.enums import ClassifyMode, FlowStatus


@pytest.mark.parametrize(
    "kwargs",
    [
        {"engine_id": "pipeline"},
        {"engine_version": " "},
        {"attempts": 0},
        {"depth": -1},
        {"mode": "rehearsal"},
        {"grammar": "pipe"},
    ],
)
def test_batch_spec_validate_rejects(kwargs):
    with pytest.raises(ValueError):
        BatchSpec(**kwargs).validate()


def test_batch_spec_defaults_are_valid():
    spec = BatchSpec()
    spec.validate()
    assert spec.classify_mode == ClassifyMode.LIVE


def test_unknown_engine_version_raises():
    with pytest.raises(ValueError):
        build_routeforge_app(BatchSpec(engine_version="v9"), routes=[])


def test_routes_and_routes_file_are_exclusive(tmp_path):
    with pytest.raises(ValueError):
        build_routeforge_app(BatchSpec(), routes=["a/b/c/low"], routes_file=tmp_path / "r.txt")


def test_run_batch_with_static_routes():
    spec = BatchSpec(engine_id="flow", attempts=2, depth=3)
    app = build_routeforge_app(spec, routes=["incident/discover/id-1/critical", "mesh/rollback/x/low"])
    result = app.run_batch()
    assert [d.status for d in result.decisions] == [FlowStatus.ESCALATE, FlowStatus.ESCALATE, FlowStatus.STABLE]
    assert len(app.accumulator) == 3
    assert result.report.chain_steps == 6


def test_run_batch_from_file(tmp_path):
    path = tmp_path / "routes.txt"
    path.write_text("boot:incident:low\nnope\n", encoding="utf-8")
    app = build_routeforge_app(BatchSpec(), routes_file=path)
    result = app.run_batch()
    assert result.report.counts == {"accepted": 1, "errored": 1}


def test_run_batch_full_vocabulary_catalog():
    app = build_routeforge_app(BatchSpec())
    result = app.run_batch()
    assert result.malformed_count == 0
    assert sum(result.report.counts.values()) == len(result.decisions)

"""Tests for the batch CLI."""

from __future__ import annotations

import sys

import pytest


def test_run_batch_prints_summary(capsys, monkeypatch):
    from routeforge.cli import run_batch as mod

    monkeypatch.setattr(
        sys,
        "argv",
        ["run_batch.py", "--routes", "incident/discover/id-1/critical,garbage", "--depth", "3"],
    )
    mod.main()

    out = capsys.readouterr().out
    assert "SUMMARY engine=dispatch:v1 mode=live" in out
    assert "SUMMARY routes=2 malformed=1" in out
    assert "SUMMARY decisions=2 trace=2" in out
    assert "SUMMARY counts=errored:1,rerouted:1" in out
    assert "SUMMARY per_domain=incident:1,recovery:1" in out
    assert "SUMMARY chain_steps=6 max_chain_depth=3" in out


def test_run_batch_print_and_compound(capsys, monkeypatch):
    from routeforge.cli import run_batch as mod

    monkeypatch.setattr(
        sys,
        "argv",
        ["run_batch.py", "--engine", "flow", "--routes", "mesh/shutdown/x/low", "--print", "--compound"],
    )
    mod.main()

    out = capsys.readouterr().out
    assert "mesh/shutdown/x/low attempt=0 status=abort reason=BLOCKED_COMMAND score=0" in out
    assert "SUMMARY counts=abort:BLOCKED_COMMAND:1" in out


def test_run_batch_debug_output(capsys, monkeypatch):
    from routeforge.cli import run_batch as mod

    monkeypatch.setattr(sys, "argv", ["run_batch.py", "--routes", "mesh/rollback/x/low,bad", "--debug"])
    mod.main()

    out = capsys.readouterr().out
    assert "[debug] DECISION index=0" in out
    assert "[debug] ROUTE_FALLBACK index=1" in out
    assert "[debug] malformed_head=['bad']" in out


def test_run_batch_unknown_engine_version(capsys, monkeypatch):
    from routeforge.cli import run_batch as mod

    monkeypatch.setattr(sys, "argv", ["run_batch.py", "--engine-version", "v9", "--routes", "mesh/rollback/x/low"])
    with pytest.raises(SystemExit) as exc:
        mod.main()
    assert exc.value.code == 2
    assert "SUMMARY status=ERROR" in capsys.readouterr().out


def test_run_batch_rejects_both_route_sources(monkeypatch, tmp_path):
    from routeforge.cli import run_batch as mod

    monkeypatch.setattr(
        sys,
        "argv",
        ["run_batch.py", "--routes", "a/b/c/low", "--routes-file", str(tmp_path / "r.txt")],
    )
    with pytest.raises(SystemExit):
        mod.main()

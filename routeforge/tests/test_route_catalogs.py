"""Tests for route catalog sources."""

from __future__ import annotations

import pytest

from routeforge.app_api.catalogs import FileRouteCatalog, StaticRouteCatalog, build_vocabulary_catalog
from routeforge.core.domain.enums import Severity
from routeforge.core.grammar.vocabulary import default_vocabulary


def test_static_catalog_returns_copy():
    catalog = StaticRouteCatalog(["a/b/c/low"])
    routes = catalog.list_routes()
    routes.append("x")
    assert catalog.list_routes() == ["a/b/c/low"]


def test_file_catalog_skips_comments_and_blanks(tmp_path):
    path = tmp_path / "routes.txt"
    path.write_text("# header\n\nincident/discover/id-1/critical\n  mesh/rollback/x/low  \n# tail\n", encoding="utf-8")
    assert FileRouteCatalog(path).list_routes() == ["incident/discover/id-1/critical", "mesh/rollback/x/low"]


def test_file_catalog_missing_file(tmp_path):
    with pytest.raises(ValueError):
        FileRouteCatalog(tmp_path / "missing.txt").list_routes()


def test_vocabulary_catalog_selection():
    catalog = build_vocabulary_catalog(default_vocabulary(), domains=["mesh"], actions=["boot", "drain"], severity=Severity.HIGH)
    assert catalog.list_routes() == ["mesh/boot/mesh-boot/high", "mesh/drain/mesh-drain/high"]


def test_vocabulary_catalog_covers_every_combination():
    vocab = default_vocabulary()
    routes = build_vocabulary_catalog(vocab).list_routes()
    assert len(routes) == len(vocab.domains) * len(vocab.actions)
    assert all(route.endswith("/low") for route in routes)

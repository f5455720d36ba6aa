"""Tests for sitebrief.generator."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from sitebrief.constants import ARTIFACT_FILENAMES, DEFAULT_ARTIFACTS
from sitebrief.generator import ArtifactGenerator
from sitebrief.renderers import NarrativeOptions
from tests._fixtures.graph_builder import GraphBuilder


def test_render_all_produces_every_artifact(storefront) -> None:
    rendered = ArtifactGenerator().render_all(storefront)

    assert list(rendered) == list(DEFAULT_ARTIFACTS)
    assert rendered["full_context"].startswith("# Website Context Map: Test Store")
    assert rendered["quick_reference"].startswith("# Quick Reference: Test Store")
    assert "Home (/)" in rendered["tree_structure"]
    assert rendered["mermaid"].startswith("graph TD")
    assert rendered["dot"].startswith('digraph "Test Store"')
    assert 'id="stat-pages">5<' in rendered["tree_map"]
    document = json.loads(rendered["context_json"])
    assert [node["id"] for node in document["nodes"]] == [node.id for node in storefront.nodes]


def test_render_all_respects_selection_and_options(storefront) -> None:
    generator = ArtifactGenerator(narrative_options=NarrativeOptions(include_auth=False))

    rendered = generator.render_all(storefront, ["mermaid", "full_context"])

    assert list(rendered) == ["full_context", "mermaid"]
    assert "## Authentication" not in rendered["full_context"]


def test_render_all_uses_configured_root(storefront) -> None:
    rendered = ArtifactGenerator(root_id="cart").render_all(storefront, ["tree_structure"])

    assert "Shopping Cart (/cart)\n└── Checkout (/checkout)" in rendered["tree_structure"]


def test_render_all_rejects_unknown_artifacts(storefront) -> None:
    with pytest.raises(ValueError):
        ArtifactGenerator().render_all(storefront, ["full_context", "pdf"])


def test_render_all_without_pages(graph_builder: GraphBuilder) -> None:
    graph_builder.component("banner", "Banner")

    rendered = ArtifactGenerator().render_all(graph_builder.build())

    assert "(no pages to traverse)" in rendered["tree_structure"]
    assert 'id="stat-pages">0<' in rendered["tree_map"]


def test_write_all_writes_files(storefront, tmp_path: Path) -> None:
    output_dir = tmp_path / "out"

    written = ArtifactGenerator().write_all(storefront, output_dir)

    assert [path.name for path in written] == [ARTIFACT_FILENAMES[name] for name in DEFAULT_ARTIFACTS]
    assert (output_dir / "quick-reference.md").read_text(encoding="utf-8").startswith("# Quick Reference")
    assert (output_dir / "graph.dot").read_text(encoding="utf-8").endswith("}\n")


def test_render_all_is_deterministic(storefront) -> None:
    generator = ArtifactGenerator()

    assert generator.render_all(storefront) == generator.render_all(storefront)

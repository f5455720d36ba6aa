from __future__ import annotations

from pathlib import Path

import pytest

from sitebrief.models import Graph
from tests._fixtures.graph_builder import GraphBuilder, build_storefront


@pytest.fixture
def graph_builder(tmp_path: Path) -> GraphBuilder:
    """Provide a reusable graph builder rooted at the pytest tmp_path."""
    return GraphBuilder(tmp_path)


@pytest.fixture
def storefront_builder(graph_builder: GraphBuilder) -> GraphBuilder:
    """Builder pre-populated with the sample shop graph."""
    return build_storefront(graph_builder)


@pytest.fixture
def storefront(storefront_builder: GraphBuilder) -> Graph:
    return storefront_builder.build()

"""Self-contained HTML map with expandable page and component records."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ..models import Graph, Node, NodeKind
from ..traversal import NavigationTree, TraversalEngine
from .base import Renderer

_TEMPLATE_NAME = "tree_map.html.j2"


@dataclass(frozen=True)
class Connection:
    destination: str
    trigger: str
    kind: str


@dataclass(frozen=True)
class NodeRecord:
    """Template-ready view of a single node."""

    id: str
    name: str
    kind: str
    protected: bool
    route: Optional[str]
    description: str
    elements: Tuple[Tuple[str, str], ...]
    product_count: int
    depth: Optional[int]
    appears_on: Tuple[str, ...]
    connections: Tuple[Connection, ...]


class InteractiveMapRenderer(Renderer):
    """Renders the ``tree-map.html`` document through a Jinja2 template.

    Pages reachable from the entry point are listed in navigation-tree order;
    unreachable pages follow in declaration order. The tree only orders the
    records, it never hides any.
    """

    name = "interactive_map"

    def __init__(
        self,
        templates_dir: Path | None = None,
        *,
        engine: TraversalEngine | None = None,
    ) -> None:
        self.templates_dir = templates_dir
        self.engine = engine or TraversalEngine()
        self._env = self._create_env(templates_dir)

    def render(self, graph: Graph, tree: Optional[NavigationTree] = None) -> str:
        if tree is None and graph.pages:
            tree = self.engine.build_tree(graph)

        pages = self._ordered_pages(graph, tree)
        template = self._env.get_template(_TEMPLATE_NAME)
        return (
            template.render(
                metadata=graph.metadata,
                stats=self.summarise(graph),
                pages=[self._record(graph, node, tree) for node in pages],
                components=[self._record(graph, node, tree) for node in graph.components],
            ).rstrip()
            + "\n"
        )

    @staticmethod
    def summarise(graph: Graph) -> Dict[str, int]:
        """Summary counters aggregated directly from the graph."""
        return {
            "pages": len(graph.nodes_of_kind(NodeKind.PAGE)),
            "components": len(graph.nodes_of_kind(NodeKind.COMPONENT)),
            "edges": len(graph.edges),
            "protected_pages": sum(1 for page in graph.pages if page.requires_auth),
        }

    @staticmethod
    def _ordered_pages(graph: Graph, tree: Optional[NavigationTree]) -> List[Node]:
        if tree is None:
            return list(graph.pages)
        ordered: List[Node] = []
        for node_id in tree.order:
            node = graph.find_node(node_id)
            if node is not None:
                ordered.append(node)
        ordered.extend(page for page in graph.pages if page.id not in tree)
        return ordered

    @staticmethod
    def _record(graph: Graph, node: Node, tree: Optional[NavigationTree]) -> NodeRecord:
        connections: List[Connection] = []
        for edge in graph.edges_from(node.id):
            destination = graph.node(edge.target)
            connections.append(
                Connection(destination=destination.name, trigger=edge.trigger, kind=edge.kind.value)
            )

        entry = tree.get(node.id) if tree is not None else None
        is_page = node.kind is NodeKind.PAGE
        return NodeRecord(
            id=node.id,
            name=node.name,
            kind=node.kind.value,
            protected=is_page and node.requires_auth,
            route=node.route if is_page else None,
            description=node.description,
            elements=tuple((element.description, element.type) for element in node.elements),
            product_count=len(node.products) if is_page else 0,
            depth=entry.depth if entry is not None else None,
            appears_on=() if is_page else node.appears_on,
            connections=tuple(connections),
        )

    @staticmethod
    def _create_env(templates_dir: Path | None) -> Environment:
        directories: List[str] = []
        if templates_dir:
            directories.append(str(templates_dir))
        default_dir = str(Path(__file__).resolve().parent.parent / "templates")
        if default_dir not in directories:
            directories.append(default_dir)
        loader = FileSystemLoader(directories)
        return Environment(
            loader=loader,
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
            keep_trailing_newline=False,
        )


__all__ = ["Connection", "InteractiveMapRenderer", "NodeRecord"]

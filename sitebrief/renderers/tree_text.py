"""ASCII navigation tree followed by flat page and component listings."""

from __future__ import annotations

from typing import List, Optional, Tuple

from ..errors import NoRootFoundError
from ..models import Graph, NodeKind
from ..traversal import NavigationTree, TraversalEngine
from .base import Renderer, join_ids, yes_no

_RULE_WIDTH = 80
_BRANCH = "├── "
_LAST_BRANCH = "└── "
_PIPE = "│   "
_SPACE = "    "


class TreeTextRenderer(Renderer):
    """Renders a navigation tree as indented text with box-drawing connectors."""

    name = "tree"

    def __init__(self, engine: TraversalEngine | None = None) -> None:
        self.engine = engine or TraversalEngine()

    def render(self, graph: Graph, tree: Optional[NavigationTree] = None) -> str:
        if tree is None and graph.pages:
            tree = self.engine.build_tree(graph)

        lines: List[str] = [
            "=" * _RULE_WIDTH,
            f"Website Context Tree: {graph.metadata.name}",
            "=" * _RULE_WIDTH,
            "",
            f"Base URL: {graph.metadata.base_url}",
            f"Version: {graph.metadata.version}",
            "",
            "Website Structure Tree:",
            "-" * _RULE_WIDTH,
            "",
        ]
        if tree is None:
            lines.append("(no pages to traverse)")
        else:
            lines.extend(self.render_tree(graph, tree))

        lines.extend(["", "", "All Pages:", "-" * _RULE_WIDTH])
        for page in graph.pages:
            lines.append("")
            lines.append(f"📄 {page.name}")
            lines.append(f"   Route: {page.route}")
            lines.append(f"   Auth Required: {yes_no(page.requires_auth)}")
            if page.elements:
                lines.append(f"   Elements: {len(page.elements)}")
            if page.products:
                lines.append(f"   Products: {len(page.products)}")

        lines.extend(["", "", "Global Components:", "-" * _RULE_WIDTH])
        for component in graph.components:
            lines.append("")
            lines.append(f"🧩 {component.name}")
            lines.append(f"   Description: {component.description}")
            lines.append(f"   Appears On: {join_ids(component.appears_on)}")
        return "\n".join(lines) + "\n"

    def render_tree(self, graph: Graph, tree: NavigationTree) -> List[str]:
        """Return one line per tree node, connectors reflecting sibling position."""
        lines: List[str] = []
        # (node id, prefix for its own line, prefix inherited by its children)
        stack: List[Tuple[str, str, str]] = [(tree.root_id, "", "")]
        while stack:
            node_id, line_prefix, child_prefix = stack.pop()
            node = graph.find_node(node_id)
            if node is None or node.kind is not NodeKind.PAGE:
                raise NoRootFoundError(
                    f"Navigation tree references '{node_id}', which is not a page in this graph",
                    root_id=tree.root_id,
                )
            lines.append(f"{line_prefix}{node.name} ({node.route})")
            children = tree.children_of(node_id)
            for index in range(len(children) - 1, -1, -1):
                is_last = index == len(children) - 1
                connector = _LAST_BRANCH if is_last else _BRANCH
                continuation = _SPACE if is_last else _PIPE
                stack.append((children[index], child_prefix + connector, child_prefix + continuation))
        return lines


__all__ = ["TreeTextRenderer"]

"""Rooted, cycle-free navigation trees over a site graph."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from .errors import NoRootFoundError
from .logging import get_logger
from .models import Edge, EdgeKind, Graph, NodeKind, Page


@dataclass(frozen=True)
class TreeEntry:
    """Position of a single page inside a navigation tree."""

    node_id: str
    depth: int
    parent_id: Optional[str]
    children: Tuple[str, ...]


@dataclass(frozen=True)
class NavigationTree:
    """Spanning tree of the pages reachable from ``root_id`` via navigation edges.

    ``pruned`` lists the navigation edges that were not followed because their
    target had already been reached by an earlier path or is not a page.
    """

    root_id: str
    entries: Mapping[str, TreeEntry]
    order: Tuple[str, ...]
    pruned: Tuple[Edge, ...] = ()

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.order)

    def __getitem__(self, node_id: str) -> TreeEntry:
        return self.entries[node_id]

    def get(self, node_id: str) -> Optional[TreeEntry]:
        return self.entries.get(node_id)

    def children_of(self, node_id: str) -> Tuple[str, ...]:
        entry = self.entries.get(node_id)
        return entry.children if entry else ()


class TraversalEngine:
    """Builds navigation trees with a depth-first, first-path-wins walk."""

    def __init__(self) -> None:
        self.logger = get_logger("traversal")

    def resolve_root(self, graph: Graph) -> str:
        """Pick the default root: declared entry point, then first public page, then first page."""
        pages: Tuple[Page, ...] = graph.pages
        if not pages:
            raise NoRootFoundError("Site graph contains no pages to use as a navigation root")
        for page in pages:
            if page.user_flow is not None and page.user_flow.entry_point:
                return page.id
        for page in pages:
            if not page.requires_auth:
                return page.id
        return pages[0].id

    def build_tree(self, graph: Graph, root_id: Optional[str] = None) -> NavigationTree:
        """Walk navigation edges from ``root_id`` (or the resolved default root)."""
        if root_id is None:
            root_id = self.resolve_root(graph)
        else:
            root = graph.find_node(root_id)
            if root is None or root.kind is not NodeKind.PAGE:
                raise NoRootFoundError(
                    f"Navigation root '{root_id}' is not a page in the site graph", root_id=root_id
                )

        depths: Dict[str, int] = {root_id: 0}
        parents: Dict[str, Optional[str]] = {root_id: None}
        children: Dict[str, List[str]] = {root_id: []}
        order: List[str] = [root_id]
        pruned: List[Edge] = []
        visited = {root_id}

        # Stack of edge iterators; pages are visited in recursive pre-order.
        stack: List[Tuple[str, Iterator[Edge]]] = [
            (root_id, iter(graph.edges_from(root_id, EdgeKind.NAVIGATION)))
        ]
        while stack:
            current, pending = stack[-1]
            edge = next(pending, None)
            if edge is None:
                stack.pop()
                continue
            target = edge.target
            if target in visited:
                pruned.append(edge)
                continue
            visited.add(target)
            node = graph.find_node(target)
            if node is None or node.kind is not NodeKind.PAGE:
                pruned.append(edge)
                continue
            depths[target] = depths[current] + 1
            parents[target] = current
            children[target] = []
            children[current].append(target)
            order.append(target)
            stack.append((target, iter(graph.edges_from(target, EdgeKind.NAVIGATION))))

        if pruned:
            self.logger.debug(
                "Navigation tree rooted at %s dropped %d edge(s): %s",
                root_id,
                len(pruned),
                ", ".join(f"{edge.source}->{edge.target}" for edge in pruned),
            )

        entries = {
            node_id: TreeEntry(
                node_id=node_id,
                depth=depths[node_id],
                parent_id=parents[node_id],
                children=tuple(children[node_id]),
            )
            for node_id in order
        }
        return NavigationTree(
            root_id=root_id,
            entries=MappingProxyType(entries),
            order=tuple(order),
            pruned=tuple(pruned),
        )


__all__ = ["NavigationTree", "TraversalEngine", "TreeEntry"]

"""Mermaid flowchart and Graphviz DOT encodings of the site graph."""

from __future__ import annotations

import re
from typing import Dict, List

from ..models import EdgeKind, Graph, NodeKind
from .base import Renderer

_MERMAID_ID = re.compile(r"[^A-Za-z0-9_-]")
_MERMAID_RESERVED = {"end", "graph", "subgraph", "class", "classdef", "style", "click"}

_MERMAID_CLASSES = (
    "    classDef component fill:#e1f5ff,stroke:#01579b,stroke-width:2px",
    "    classDef publicPage fill:#c8e6c9,stroke:#2e7d32,stroke-width:2px",
    "    classDef protectedPage fill:#fff3e0,stroke:#e65100,stroke-width:2px",
)

NOTATIONS = ("mermaid", "dot")


class DiagramRenderer(Renderer):
    """Produces two independent diagram encodings from the same graph."""

    name = "diagram"

    def render(self, graph: Graph, notation: str = "mermaid") -> str:
        if notation == "mermaid":
            return self.render_flowchart(graph)
        if notation == "dot":
            return self.render_digraph(graph)
        raise ValueError(f"Unknown diagram notation '{notation}' (expected one of: {', '.join(NOTATIONS)})")

    def render_flowchart(self, graph: Graph) -> str:
        """Mermaid ``graph TD``: shapes keyed on kind/auth, solid vs dotted connectors."""
        lines: List[str] = ["graph TD", f"    %% {_mermaid_comment(graph.metadata.name)} Website Graph", ""]
        ids = _mermaid_ids(graph)

        for node in graph.nodes:
            node_id = ids[node.id]
            if node.kind is NodeKind.PAGE:
                label = _mermaid_label(f"{node.name}<br/>{node.route}")
                if node.requires_auth:
                    lines.append(f'    {node_id}[/"{label}"/]')
                else:
                    lines.append(f'    {node_id}[("{label}")]')
            else:
                lines.append(f'    {node_id}["{_mermaid_label(node.name)}"]:::component')

        if graph.edges:
            lines.append("")
        for edge in graph.edges:
            connector = "-->" if edge.kind is EdgeKind.NAVIGATION else "-.->"
            lines.append(f"    {ids[edge.source]} {connector} {ids[edge.target]}")

        lines.append("")
        lines.extend(_MERMAID_CLASSES)
        for page in graph.pages:
            css_class = "protectedPage" if page.requires_auth else "publicPage"
            lines.append(f"    class {ids[page.id]} {css_class}")
        return "\n".join(lines) + "\n"

    def render_digraph(self, graph: Graph) -> str:
        """Graphviz ``digraph``: fill colour keyed on kind/auth, edge style keyed on kind."""
        title = graph.metadata.name or "site"
        lines: List[str] = [
            f'digraph "{_dot_escape(title)}" {{',
            "    rankdir=LR;",
            "    node [shape=box, style=rounded];",
            "",
        ]
        for node in graph.nodes:
            if node.kind is NodeKind.PAGE:
                color = "orange" if node.requires_auth else "lightgreen"
                label = f"{_dot_escape(node.name)}\\n{_dot_escape(node.route)}"
            else:
                color = "lightblue"
                label = _dot_escape(node.name)
            lines.append(
                f'    "{_dot_escape(node.id)}" [label="{label}", fillcolor="{color}", style="filled,rounded"];'
            )

        lines.append("")
        for edge in graph.edges:
            style = "solid" if edge.kind is EdgeKind.NAVIGATION else "dashed"
            lines.append(
                f'    "{_dot_escape(edge.source)}" -> "{_dot_escape(edge.target)}" '
                f'[style="{style}", label="{_dot_escape(edge.trigger)}"];'
            )
        lines.append("}")
        return "\n".join(lines) + "\n"


def _mermaid_id(node_id: str) -> str:
    cleaned = _MERMAID_ID.sub("_", node_id)
    if cleaned.lower() in _MERMAID_RESERVED:
        cleaned = f"{cleaned}_"
    return cleaned


def _mermaid_ids(graph: Graph) -> Dict[str, str]:
    """Map every node id to a distinct Mermaid id, suffixing ``_2``, ``_3`` on collisions."""
    ids: Dict[str, str] = {}
    taken: set[str] = set()
    for node in graph.nodes:
        base = _mermaid_id(node.id)
        candidate = base
        counter = 2
        while candidate in taken:
            candidate = f"{base}_{counter}"
            counter += 1
        taken.add(candidate)
        ids[node.id] = candidate
    return ids


def _mermaid_label(text: str) -> str:
    return text.replace('"', "#quot;")


def _mermaid_comment(text: str) -> str:
    return " ".join(text.split())


def _dot_escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


__all__ = ["DiagramRenderer", "NOTATIONS"]

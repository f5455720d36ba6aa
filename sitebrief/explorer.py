"""Human-oriented views for inspecting a site graph from the command line."""

from __future__ import annotations

from typing import List

from .models import EdgeKind, Graph, NodeKind

_RULE = "=" * 80
_THIN_RULE = "-" * 80


class GraphExplorer:
    """Formats whole-graph, per-page and per-path summaries as plain text."""

    def __init__(self, graph: Graph) -> None:
        self.graph = graph

    def describe_graph(self) -> str:
        graph = self.graph
        lines: List[str] = [
            _RULE,
            "FULL WEBSITE GRAPH STRUCTURE",
            _RULE,
            "",
            f"Website: {graph.metadata.name}",
            f"Base URL: {graph.metadata.base_url}",
            f"Version: {graph.metadata.version}",
            "",
            "NODES:",
            _THIN_RULE,
        ]
        for number, node in enumerate(graph.nodes, start=1):
            lines.append("")
            lines.append(f"{number}. [{node.kind.value.upper()}] {node.name} (ID: {node.id})")
            if node.kind is NodeKind.PAGE:
                lines.append(f"   Route: {node.route}")
            lines.append(f"   Description: {node.description}")
            if node.kind is NodeKind.PAGE:
                lines.append(f"   Requires Auth: {str(node.requires_auth).lower()}")
            if node.elements:
                lines.append(f"   Elements: {len(node.elements)}")
                for index, element in enumerate(node.elements, start=1):
                    lines.append(f"     {index}. {element.description} ({element.type})")
                    if element.selector:
                        lines.append(f"        Selector: {element.selector}")

        lines.extend(["", "", "EDGES (Navigation & Interactions):", _THIN_RULE])
        for number, edge in enumerate(graph.edges, start=1):
            source = self.graph.node(edge.source)
            target = self.graph.node(edge.target)
            lines.append("")
            lines.append(f"{number}. {source.name} -> {target.name}")
            lines.append(f"   Type: {edge.kind.value}")
            lines.append(f"   Trigger: {edge.trigger}")
            lines.append(f"   Description: {edge.description}")

        auth = graph.authentication
        if auth is not None:
            lines.extend(["", "", "AUTHENTICATION:", _THIN_RULE])
            lines.append(f"Required: {str(auth.required).lower()}")
            lines.append(f"Public Pages: {', '.join(auth.public_pages)}")
            lines.append(f"Protected Pages: {', '.join(auth.protected_pages)}")
            if auth.default_credentials is not None:
                lines.append("Default Credentials:")
                lines.append(f"  Username: {auth.default_credentials.username}")
                lines.append(f"  Password: {auth.default_credentials.password}")
        return "\n".join(lines) + "\n"

    def list_pages(self) -> str:
        lines: List[str] = [_RULE, "AVAILABLE PAGES", _RULE, ""]
        for number, page in enumerate(self.graph.pages, start=1):
            lines.append(f"{number}. {page.name}")
            lines.append(f"   ID: {page.id}")
            lines.append(f"   Route: {page.route}")
            lines.append(f"   Auth Required: {'Yes' if page.requires_auth else 'No'}")
            lines.append("")
        return "\n".join(lines)

    def describe_page(self, node_id: str) -> str:
        node = self.graph.node(node_id)
        lines: List[str] = [_RULE, f"PAGE DETAILS: {node.name}", _RULE, "", f"Type: {node.kind.value}"]
        if node.kind is NodeKind.PAGE:
            lines.append(f"Route: {node.route}")
        lines.append(f"Description: {node.description}")
        if node.kind is NodeKind.PAGE:
            lines.append(f"Requires Auth: {'Yes' if node.requires_auth else 'No'}")
            components = [
                component.name for component in self.graph.components if node.id in component.appears_on
            ]
            if components:
                lines.append("")
                lines.append(f"Components: {', '.join(components)}")
        else:
            lines.append(f"Appears On: {', '.join(node.appears_on)}")

        if node.elements:
            lines.append("")
            lines.append(f"Elements ({len(node.elements)}):")
            for index, element in enumerate(node.elements, start=1):
                lines.append("")
                lines.append(f"  {index}. {element.description}")
                lines.append(f"     Type: {element.type}")
                if element.selector:
                    lines.append(f"     Selector: {element.selector}")
                if element.placeholder:
                    lines.append(f"     Placeholder: {element.placeholder}")
                if element.text:
                    lines.append(f"     Text: {element.text}")

        if node.kind is NodeKind.PAGE and node.products:
            lines.append("")
            lines.append(f"Products ({len(node.products)}):")
            for index, product in enumerate(node.products, start=1):
                lines.append(f"  {index}. {product.name} - {product.price} ({product.category})")

        if node.kind is NodeKind.PAGE and node.user_flow is not None:
            flow = node.user_flow
            lines.append("")
            lines.append("User Flow:")
            if flow.entry_point:
                lines.append("  Entry Point: Yes")
            if flow.next_steps:
                lines.append(f"  Next Steps: {', '.join(flow.next_steps)}")
            if flow.actions:
                lines.append("  Actions:")
                for index, action in enumerate(flow.actions, start=1):
                    lines.append(f"    {index}. {action}")
        return "\n".join(lines) + "\n"

    def describe_paths(self, node_id: str) -> str:
        node = self.graph.node(node_id)
        lines: List[str] = [_RULE, f"NAVIGATION PATHS FROM: {node.name}", _RULE, ""]
        paths = self.graph.edges_from(node_id, EdgeKind.NAVIGATION)
        if not paths:
            lines.append("No navigation paths found from this page.")
            return "\n".join(lines) + "\n"
        for number, edge in enumerate(paths, start=1):
            target = self.graph.node(edge.target)
            location = f" ({target.route})" if target.kind is NodeKind.PAGE else ""
            lines.append(f"{number}. {edge.description}")
            lines.append(f"   -> Navigate to: {target.name}{location}")
            lines.append(f"   Trigger: {edge.trigger}")
            lines.append("")
        return "\n".join(lines)


__all__ = ["GraphExplorer"]

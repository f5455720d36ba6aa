"""Full prose briefing describing every page, component, and navigation path."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from ..models import Authentication, EdgeKind, Graph, NodeKind
from ..postproc.lint import BriefingLinter
from .base import Renderer, join_ids, product_categories, yes_no


@dataclass(frozen=True)
class NarrativeOptions:
    """Optional sections of the narrative briefing."""

    include_auth: bool = True
    include_components: bool = True
    include_flows: bool = True


class NarrativeRenderer(Renderer):
    """Renders the complete website context map handed to browser agents."""

    name = "narrative"

    def __init__(self, linter: BriefingLinter | None = None) -> None:
        self.linter = linter or BriefingLinter()

    def render(self, graph: Graph, options: NarrativeOptions | None = None) -> str:
        options = options or NarrativeOptions()
        lines: List[str] = [
            f"# Website Context Map: {graph.metadata.name}",
            "",
            f"Base URL: {graph.metadata.base_url}",
            f"Version: {graph.metadata.version}",
            "",
        ]
        lines.extend(self._pages(graph))
        if options.include_components:
            lines.extend(self._components(graph))
        lines.extend(self._navigation(graph))
        if options.include_auth and graph.authentication is not None:
            lines.extend(self._authentication(graph.authentication))
        if options.include_flows and graph.common_patterns:
            lines.extend(self._flows(graph))
        return self.linter.lint("\n".join(lines))

    def _pages(self, graph: Graph) -> List[str]:
        lines = ["## Pages Structure", ""]
        for page in graph.pages:
            lines.append(f"### {page.name} ({page.route})")
            lines.append(f"- **Description**: {page.description}")
            lines.append(f"- **Requires Auth**: {yes_no(page.requires_auth)}")
            if page.elements:
                lines.append("- **Key Elements**:")
                for element in page.elements:
                    lines.append(f"  - {element.description} ({element.type})")
                    if element.selector:
                        lines.append(f"    - Selector: `{element.selector}`")
            if page.products:
                lines.append(f"- **Products Available**: {len(page.products)} items")
                categories = product_categories(page.products)
                if categories:
                    lines.append(f"  - Categories: {', '.join(categories)}")
            if page.user_flow is not None and page.user_flow.next_steps:
                lines.append(f"- **Navigation Options**: {', '.join(page.user_flow.next_steps)}")
            lines.append("")
        return lines

    def _components(self, graph: Graph) -> List[str]:
        lines = ["## Global Components", ""]
        for component in graph.components:
            lines.append(f"### {component.name}")
            lines.append(f"- **Description**: {component.description}")
            if component.appears_on:
                lines.append(f"- **Appears On**: {', '.join(component.appears_on)}")
            if component.position:
                lines.append(f"- **Position**: {component.position}")
            if component.elements:
                lines.append("- **Key Elements**:")
                for element in component.elements:
                    lines.append(f"  - {element.description}")
                    if element.selector:
                        lines.append(f"    - Selector: `{element.selector}`")
            lines.append("")
        return lines

    def _navigation(self, graph: Graph) -> List[str]:
        lines = ["## Navigation Flow", ""]
        for node in graph.nodes:
            edges = graph.edges_from(node.id, EdgeKind.NAVIGATION)
            if not edges:
                continue
            lines.append(f"**From {node.name}**:")
            for edge in edges:
                destination = graph.node(edge.target)
                lines.append(f"- {edge.description or edge.trigger or f'Go to {destination.name}'}")
                if destination.kind is NodeKind.PAGE:
                    lines.append(f"  - Route: {destination.route}")
                else:
                    lines.append(f"  - Component: {destination.name}")
            lines.append("")
        return lines

    @staticmethod
    def _authentication(auth: Authentication) -> List[str]:
        lines = [
            "## Authentication",
            "",
            f"- **Required**: {yes_no(auth.required)}",
            f"- **Public Pages**: {join_ids(auth.public_pages)}",
            f"- **Protected Pages**: {join_ids(auth.protected_pages)}",
        ]
        if auth.default_credentials is not None:
            lines.append("- **Default Credentials**:")
            lines.append(f"  - Username: {auth.default_credentials.username}")
            lines.append(f"  - Password: {auth.default_credentials.password}")
        lines.append("")
        return lines

    def _flows(self, graph: Graph) -> List[str]:
        lines = ["## Common User Flows", ""]
        for pattern in graph.common_patterns:
            lines.append(f"### {pattern.name}")
            for number, step in enumerate(pattern.steps, start=1):
                lines.append(f"{number}. {step}")
            lines.append("")
        return lines


__all__ = ["NarrativeOptions", "NarrativeRenderer"]
